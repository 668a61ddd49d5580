import json
import logging
import os
import tempfile
import threading
import time
import uuid
from pathlib import Path
from typing import Callable, Dict, List, Optional, Any

from infra.keypool.crypto import SecretCipher
from infra.keypool.models import Credential, Provider

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Owns every Credential record in the pool.

    Each public method is a single mutation point guarded by one lock. It
    re-reads the state file first, so a store opened by another process
    (the CLI next to a running conversion) never overwrites or hides newer
    changes, then persists the whole collection before releasing the lock.
    Passing ``state_file=None`` keeps the pool in memory only.

    Usage:
        store = CredentialStore(cipher, state_file=root / "keys.json")
        cred = store.add("sk-...", Provider.GLM)
        store.set_cooldown(cred.id, 60)
    """

    STATE_VERSION = "1.0"
    STATE_FILENAME = "keys.json"

    def __init__(
        self,
        cipher: SecretCipher,
        state_file: Optional[Path] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.cipher = cipher
        self.state_file = Path(state_file) if state_file else None
        self.clock = clock

        self._lock = threading.RLock()
        self._credentials: List[Credential] = self._load()

    def _load(self) -> List[Credential]:
        if self.state_file is None or not self.state_file.exists():
            return []

        with open(self.state_file, "r") as f:
            state = json.load(f)

        if state.get("version") != self.STATE_VERSION:
            raise ValueError(
                f"Unsupported key pool state version {state.get('version')!r} in {self.state_file}"
            )

        credentials = [Credential.from_dict(item) for item in state.get("keys", [])]
        logger.debug("Loaded %d credential(s) from %s", len(credentials), self.state_file)
        return credentials

    def _save(self):
        if self.state_file is None:
            return

        self.state_file.parent.mkdir(parents=True, exist_ok=True)
        state = {
            "version": self.STATE_VERSION,
            "keys": [c.to_dict() for c in self._credentials],
        }

        fd, temp_path = tempfile.mkstemp(
            dir=self.state_file.parent,
            prefix=f"{self.state_file.name}.tmp"
        )
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(state, f, indent=2)
            os.replace(temp_path, self.state_file)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def _refresh(self):
        """Reload from disk. Caller holds the lock."""
        if self.state_file is not None:
            self._credentials = self._load()

    def _find(self, credential_id: str) -> Optional[Credential]:
        for credential in self._credentials:
            if credential.id == credential_id:
                return credential
        return None

    def add(self, secret: str, provider) -> Credential:
        provider = Provider.parse(provider)
        if not secret or not secret.strip():
            raise ValueError("API key must not be empty")

        with self._lock:
            self._refresh()
            ordinal = sum(1 for c in self._credentials if c.provider == provider) + 1
            credential = Credential(
                id=uuid.uuid4().hex,
                secret=self.cipher.encrypt(secret.strip()),
                provider=provider,
                label=f"{provider.value.upper()} Key {ordinal}",
                active=True,
                cooldown_until=None,
            )
            self._credentials.append(credential)
            self._save()

        logger.info("Added %s (%s)", credential.label, credential.id)
        return credential.copy()

    def remove(self, credential_id: str):
        with self._lock:
            self._refresh()
            before = len(self._credentials)
            self._credentials = [c for c in self._credentials if c.id != credential_id]
            if len(self._credentials) != before:
                self._save()
                logger.info("Removed key %s", credential_id)

    def toggle(self, credential_id: str):
        with self._lock:
            self._refresh()
            credential = self._find(credential_id)
            if credential is None:
                return
            credential.active = not credential.active
            self._save()
        logger.info("Key %s is now %s", credential_id, "active" if credential.active else "disabled")

    def set_cooldown(self, credential_id: str, duration_seconds: float):
        with self._lock:
            self._refresh()
            credential = self._find(credential_id)
            if credential is None:
                return
            credential.cooldown_until = self.clock() + duration_seconds
            self._save()

    def clear_cooldown(self, credential_id: str):
        with self._lock:
            self._refresh()
            credential = self._find(credential_id)
            if credential is None or credential.cooldown_until is None:
                return
            credential.cooldown_until = None
            self._save()

    def list(self) -> List[Credential]:
        with self._lock:
            self._refresh()
            return [c.copy() for c in self._credentials]

    def get(self, credential_id: str) -> Optional[Credential]:
        with self._lock:
            self._refresh()
            credential = self._find(credential_id)
            return credential.copy() if credential else None

    def eligible(self, provider) -> List[Credential]:
        """Credentials usable right now for ``provider``, in insertion order."""
        provider = Provider.parse(provider)
        with self._lock:
            self._refresh()
            now = self.clock()
            return [c.copy() for c in self._credentials if c.is_eligible(provider, now)]

    def reveal(self, credential_id: str) -> str:
        with self._lock:
            self._refresh()
            credential = self._find(credential_id)
            if credential is None:
                raise KeyError(credential_id)
            token = credential.secret
        return self.cipher.decrypt(token)

    def status(self, provider=None) -> List[Dict[str, Any]]:
        """Per-key rows for the key status monitor."""
        wanted = Provider.parse(provider) if provider is not None else None
        with self._lock:
            self._refresh()
            now = self.clock()
            rows = []
            for c in self._credentials:
                if wanted is not None and c.provider != wanted:
                    continue
                rows.append({
                    "id": c.id,
                    "label": c.label,
                    "provider": c.provider.value,
                    "active": c.active,
                    "cooling_down": c.in_cooldown(now),
                    "cooldown_remaining_seconds": round(c.cooldown_remaining(now), 1),
                    "eligible": c.active and not c.in_cooldown(now),
                })
            return rows
