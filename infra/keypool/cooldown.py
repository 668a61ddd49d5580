import logging

from infra.keypool.store import CredentialStore

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN_SECONDS = 60.0


class CooldownRecorder:
    """Puts a rate-limited credential on a fixed cooldown window."""

    def __init__(self, store: CredentialStore, cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS):
        self.store = store
        self.cooldown_seconds = cooldown_seconds

    def mark_rate_limited(self, credential_id: str):
        self.store.set_cooldown(credential_id, self.cooldown_seconds)
        logger.warning(
            "Key %s rate limited, cooling down for %.0fs. Switching...",
            credential_id,
            self.cooldown_seconds,
        )
