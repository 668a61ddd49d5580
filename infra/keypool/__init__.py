"""
API key pool.

- models.py: Credential records and provider tags
- crypto.py: Fernet encryption of stored keys
- store.py: CredentialStore, the single owner of all records
- selector.py: round-robin selection over eligible keys
- cooldown.py: rate-limit cooldown bookkeeping
"""

from .models import Credential, Provider, SelectedCredential
from .crypto import SecretCipher, generate_key
from .store import CredentialStore
from .selector import CredentialSelector
from .cooldown import CooldownRecorder, DEFAULT_COOLDOWN_SECONDS

__all__ = [
    'Credential',
    'Provider',
    'SelectedCredential',
    'SecretCipher',
    'generate_key',
    'CredentialStore',
    'CredentialSelector',
    'CooldownRecorder',
    'DEFAULT_COOLDOWN_SECONDS',
]
