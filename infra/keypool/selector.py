import logging
import threading
from typing import Dict, List, Optional

from infra.keypool.models import Credential, Provider, SelectedCredential
from infra.keypool.store import CredentialStore

logger = logging.getLogger(__name__)


class CredentialSelector:
    """
    Round-robin selection over the eligible credentials of one provider.

    Remembers the id of the last credential handed out per provider and
    advances to the next eligible one after it in insertion order, wrapping
    around. Because the position is an id rather than a numeric index,
    credentials entering or leaving cooldown between calls do not cause the
    rotation to skip or repeat a key.
    """

    def __init__(self, store: CredentialStore):
        self.store = store
        self._lock = threading.Lock()
        self._last_selected: Dict[Provider, str] = {}

    def has_eligible(self, provider) -> bool:
        return len(self.store.eligible(provider)) > 0

    def select_next(self, provider) -> Optional[SelectedCredential]:
        provider = Provider.parse(provider)

        with self._lock:
            credentials = self.store.list()
            now = self.store.clock()
            eligible = [c for c in credentials if c.is_eligible(provider, now)]

            if not eligible:
                logger.debug("No eligible %s keys (%d in pool)", provider.value, len(credentials))
                return None

            chosen = self._next_after(
                credentials,
                eligible,
                self._last_selected.get(provider)
            )
            self._last_selected[provider] = chosen.id

        logger.debug("Selected %s (%s)", chosen.label, chosen.id)
        return SelectedCredential(
            id=chosen.id,
            provider=chosen.provider,
            secret=self.store.cipher.decrypt(chosen.secret),
            label=chosen.label,
        )

    def reset(self):
        with self._lock:
            self._last_selected.clear()

    @staticmethod
    def _next_after(
        credentials: List[Credential],
        eligible: List[Credential],
        last_id: Optional[str]
    ) -> Credential:
        if last_id is None:
            return eligible[0]

        order = {c.id: idx for idx, c in enumerate(credentials)}
        last_pos = order.get(last_id)
        if last_pos is None:
            # Last key was removed from the pool
            return eligible[0]

        for credential in eligible:
            if order[credential.id] > last_pos:
                return credential
        return eligible[0]
