"""
Configuration schemas for smartmd.

Defines the structure of the library configuration file.
All config is stored in ~/Documents/smartmd/ (or SMARTMD_STORAGE_ROOT).
"""

from typing import Dict, Optional, Any
from pydantic import BaseModel, Field, field_validator
import os
import re


OPENAI_CHAT = "openai-chat"
ANTHROPIC_MESSAGES = "anthropic-messages"
PROVIDER_TYPES = (OPENAI_CHAT, ANTHROPIC_MESSAGES)


class ProviderConfig(BaseModel):
    """Configuration for a remote vision endpoint (one per key provider tag)."""
    type: str = Field(..., description="Request dialect: openai-chat, anthropic-messages")
    endpoint: str = Field(..., description="Full URL of the chat/messages endpoint (${ENV_VAR} allowed)")
    model: str = Field(..., description="Vision model identifier")
    temperature: float = Field(0.1, description="Sampling temperature")
    top_p: Optional[float] = Field(None, description="Top-p sampling")
    max_tokens: int = Field(4096, description="Maximum tokens in response")
    timeout: float = Field(120.0, description="Per-request timeout in seconds")
    max_dimension: int = Field(2048, description="Larger page images are downscaled to this")
    anthropic_version: str = Field("2023-06-01", description="anthropic-version header (anthropic-messages only)")
    extra: Dict[str, Any] = Field(default_factory=dict, description="Extra body fields sent verbatim")

    @field_validator('type')
    @classmethod
    def validate_type(cls, v: str) -> str:
        if v not in PROVIDER_TYPES:
            raise ValueError(
                f"Unknown provider type: '{v}'. Available types: {', '.join(PROVIDER_TYPES)}"
            )
        return v

    def resolved_endpoint(self) -> str:
        return resolve_env_vars(self.endpoint)


class KeyPoolConfig(BaseModel):
    """Retry and cooldown policy for the key pool."""
    cooldown_seconds: float = Field(60.0, description="Cooldown after a 429 response")
    wait_seconds: float = Field(5.0, description="Single wait when no key is available")
    max_attempts: int = Field(6, description="Conversion attempts per page")
    max_failures: int = Field(3, description="Non-rate-limit failures per page before giving up")

    @field_validator('max_attempts', 'max_failures')
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v


class DefaultsConfig(BaseModel):
    """Default settings for conversions."""
    provider: str = Field(
        default="glm",
        description="Key provider used when --provider is not given"
    )
    dpi: int = Field(
        default=150,
        description="Page rendering resolution"
    )


class LibraryConfig(BaseModel):
    """
    Library-level configuration.

    Stored at: {storage_root}/config.yaml
    """
    providers: Dict[str, ProviderConfig] = Field(
        default_factory=dict,
        description="Vision endpoint per key provider tag"
    )
    keypool: KeyPoolConfig = Field(
        default_factory=KeyPoolConfig,
        description="Cooldown and retry policy"
    )
    defaults: DefaultsConfig = Field(
        default_factory=DefaultsConfig,
        description="Default conversion settings"
    )

    def get_provider(self, name: str) -> Optional[ProviderConfig]:
        return self.providers.get(name)

    @classmethod
    def with_defaults(cls) -> "LibraryConfig":
        """Create a config with the three supported endpoints."""
        return cls(
            providers={
                "glm": ProviderConfig(
                    type=OPENAI_CHAT,
                    endpoint="https://open.bigmodel.cn/api/paas/v4/chat/completions",
                    model="glm-4v",
                    temperature=0.1,
                    top_p=0.7,
                    max_tokens=1024,
                ),
                "openai": ProviderConfig(
                    type=OPENAI_CHAT,
                    endpoint="https://api.openai.com/v1/chat/completions",
                    model="gpt-4o",
                    temperature=0.0,
                    max_tokens=4096,
                ),
                "claude": ProviderConfig(
                    type=ANTHROPIC_MESSAGES,
                    endpoint="https://api.anthropic.com/v1/messages",
                    model="claude-3-5-sonnet-20240620",
                    temperature=0.0,
                    max_tokens=4096,
                ),
            },
            keypool=KeyPoolConfig(),
            defaults=DefaultsConfig(),
        )


def resolve_env_vars(value: str) -> str:
    """
    Resolve ${ENV_VAR} references in a string.

    Examples:
        "${GLM_ENDPOINT}" -> actual value from environment
        "literal-value" -> "literal-value"
        "${MISSING_VAR}" -> "" (empty string if not set)
    """
    if not isinstance(value, str):
        return value

    pattern = r'\$\{([^}]+)\}'

    def replace(match):
        var_name = match.group(1)
        return os.environ.get(var_name, "")

    return re.sub(pattern, replace, value)
