"""
Library configuration loading and management.

The library config is stored at {storage_root}/config.yaml and contains:
- Vision endpoint definitions per key provider
- Key pool cooldown and retry policy
- Default conversion settings
"""

import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

from .schemas import LibraryConfig


CONFIG_FILENAME = "config.yaml"


class LibraryConfigManager:
    """
    Reads and writes {storage_root}/config.yaml.

    Usage:
        manager = LibraryConfigManager(storage_root)
        config = manager.load()                              # LibraryConfig
        manager.set_value("keypool.cooldown_seconds", 30)    # validate + save
    """

    def __init__(self, storage_root: Path):
        self.storage_root = Path(storage_root).expanduser().resolve()
        self.config_path = self.storage_root / CONFIG_FILENAME

    def exists(self) -> bool:
        return self.config_path.exists()

    def load(self) -> LibraryConfig:
        """Load config.yaml, or the built-in defaults when there is none."""
        if not self.config_path.exists():
            return LibraryConfig.with_defaults()

        with open(self.config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        return LibraryConfig.model_validate(data)

    def save(self, config: LibraryConfig) -> None:
        self.storage_root.mkdir(parents=True, exist_ok=True)
        data = config.model_dump(exclude_none=True)

        fd, temp_path = tempfile.mkstemp(dir=self.storage_root, prefix=f"{CONFIG_FILENAME}.tmp")
        try:
            with os.fdopen(fd, "w") as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            os.replace(temp_path, self.config_path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def update(self, changes: dict) -> LibraryConfig:
        """
        Merge ``changes`` over the current config, validate, and save.

        Nested dicts merge key by key; any other value replaces what was
        there. Raises pydantic's ValidationError (a ValueError) and leaves
        the file untouched if the result is invalid.
        """
        merged = _merge(self.load().model_dump(), changes)
        config = LibraryConfig.model_validate(merged)
        self.save(config)
        return config

    def set_value(self, key: str, value: Any) -> LibraryConfig:
        """
        Set one field addressed by a dotted path, e.g. ``providers.glm.model``.

        Only existing fields can be set, except under a provider's ``extra``
        payload, which accepts any name.
        """
        parts = key.split(".")
        if len(parts) < 2 or not all(parts):
            raise ValueError(f"'{key}' is not a field; use a dotted path like 'keypool.max_attempts'")

        node = self.load().model_dump()
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                raise ValueError(f"Unknown config key: {key}")
            node = child
        if parts[-1] not in node and parts[-2] != "extra":
            raise ValueError(f"Unknown config key: {key}")

        changes: dict = {parts[-1]: value}
        for part in reversed(parts[:-1]):
            changes = {part: changes}
        return self.update(changes)


def _merge(base: dict, changes: dict) -> dict:
    merged = dict(base)
    for key, value in changes.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_library_config(storage_root: Path) -> LibraryConfig:
    return LibraryConfigManager(storage_root).load()
