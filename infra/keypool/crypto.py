"""
Symmetric encryption for stored API keys.

Keys are kept as Fernet tokens in keys.json. The Fernet key itself comes
from deployment configuration (SMARTMD_SECRET_KEY). This only protects
against casual inspection of the state file, not against someone who can
read both the file and the environment.
"""

import logging

from cryptography.fernet import Fernet, InvalidToken

from infra.errors import SecretDecryptionError

logger = logging.getLogger(__name__)


def generate_key() -> str:
    return Fernet.generate_key().decode("utf-8")


class SecretCipher:
    def __init__(self, key: str):
        if not key:
            raise ValueError(
                "An encryption key is required. Set SMARTMD_SECRET_KEY "
                "(generate one with 'smartmd init')."
            )
        try:
            self._fernet = Fernet(key.encode("utf-8") if isinstance(key, str) else key)
        except (ValueError, TypeError) as e:
            raise ValueError(f"Invalid encryption key: {e}") from e

    def encrypt(self, secret: str) -> str:
        if not secret:
            return ""
        return self._fernet.encrypt(secret.encode("utf-8")).decode("utf-8")

    def decrypt(self, token: str) -> str:
        if not token:
            return ""
        try:
            return self._fernet.decrypt(token.encode("utf-8")).decode("utf-8")
        except InvalidToken as e:
            logger.error("Failed to decrypt stored key (wrong SMARTMD_SECRET_KEY?)")
            raise SecretDecryptionError(
                "Stored key could not be decrypted with the configured secret key"
            ) from e
