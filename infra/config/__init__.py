"""
Configuration management for smartmd.

Two layers:
- Environment (.env supported): storage root, encryption key, log level
- Library config: {storage_root}/config.yaml with endpoints and retry policy

Usage:
    from infra.config import Config, LibraryConfigManager

    manager = LibraryConfigManager(Config.storage_root)
    lib_config = manager.load()
    glm = lib_config.get_provider("glm")
"""

from .schemas import (
    ProviderConfig,
    KeyPoolConfig,
    DefaultsConfig,
    LibraryConfig,
    OPENAI_CHAT,
    ANTHROPIC_MESSAGES,
    resolve_env_vars,
)

from .library_config import (
    LibraryConfigManager,
    load_library_config,
)

from .settings import Config, AppConfig


__all__ = [
    # Environment
    "Config",
    "AppConfig",
    # Schemas
    "ProviderConfig",
    "KeyPoolConfig",
    "DefaultsConfig",
    "LibraryConfig",
    "OPENAI_CHAT",
    "ANTHROPIC_MESSAGES",
    "resolve_env_vars",
    # Library config
    "LibraryConfigManager",
    "load_library_config",
]
