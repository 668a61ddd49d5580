import sys
from typing import Optional

from infra.keypool import CredentialStore
from cli.helpers import open_key_store


def resolve_key_id(store: CredentialStore, key_id: str) -> Optional[str]:
    """Accept a full ID or a unique prefix of one."""
    ids = [c.id for c in store.list()]
    if key_id in ids:
        return key_id

    matches = [i for i in ids if i.startswith(key_id)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        print(f"❌ Ambiguous key ID prefix: {key_id} ({len(matches)} matches)")
        sys.exit(1)
    return None


def cmd_remove(args):
    store = open_key_store()
    key_id = resolve_key_id(store, args.key_id)

    if key_id is None:
        print(f"○ Key not found: {args.key_id} (nothing to remove)")
        return

    label = store.get(key_id).label
    store.remove(key_id)
    print(f"✅ Removed {label} ({key_id})")


def cmd_toggle(args):
    store = open_key_store()
    key_id = resolve_key_id(store, args.key_id)

    if key_id is None:
        print(f"❌ Key not found: {args.key_id}")
        sys.exit(1)

    store.toggle(key_id)
    credential = store.get(key_id)
    state = "enabled" if credential.active else "disabled"
    print(f"✅ {credential.label} is now {state}")
