"""Credential records held by the key pool."""

from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Any, Dict, Optional


class Provider(str, Enum):
    """Remote vision endpoint families a credential can be valid for."""
    GLM = "glm"
    OPENAI = "openai"
    CLAUDE = "claude"

    @classmethod
    def parse(cls, value) -> "Provider":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown provider: '{value}'. Available: {choices}")


@dataclass
class Credential:
    id: str
    secret: str  # Fernet token, never the raw key
    provider: Provider
    label: Optional[str] = None
    active: bool = True
    cooldown_until: Optional[float] = None  # epoch seconds

    def in_cooldown(self, now: float) -> bool:
        return self.cooldown_until is not None and self.cooldown_until > now

    def is_eligible(self, provider: Provider, now: float) -> bool:
        return (
            self.provider == provider
            and self.active
            and not self.in_cooldown(now)
        )

    def cooldown_remaining(self, now: float) -> float:
        if not self.in_cooldown(now):
            return 0.0
        return self.cooldown_until - now

    def copy(self) -> "Credential":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["provider"] = self.provider.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credential":
        return cls(
            id=data["id"],
            secret=data["secret"],
            provider=Provider.parse(data["provider"]),
            label=data.get("label"),
            active=bool(data.get("active", True)),
            cooldown_until=data.get("cooldown_until"),
        )


@dataclass(frozen=True)
class SelectedCredential:
    """A credential picked for one request, with its secret decrypted.

    Lives only for the duration of a single conversion attempt.
    """
    id: str
    provider: Provider
    secret: str
    label: Optional[str] = None

    def __repr__(self) -> str:
        return f"SelectedCredential(id={self.id!r}, provider={self.provider.value!r}, label={self.label!r})"
