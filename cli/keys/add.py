import getpass
import sys

from cli.helpers import open_key_store, parse_provider


def cmd_add(args):
    provider = parse_provider(args.provider)

    secret = args.key
    if not secret:
        try:
            secret = getpass.getpass(f"{provider.value.upper()} API key: ")
        except EOFError:
            print("\n❌ Cancelled (no input)")
            sys.exit(1)

    store = open_key_store()
    try:
        credential = store.add(secret, provider)
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print(f"✅ Added {credential.label}")
    print(f"   ID: {credential.id}")
