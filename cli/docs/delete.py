import sys

from cli.helpers import open_document_store


def cmd_delete(args):
    store = open_document_store()
    document = store.get(args.doc_id)

    if document is None:
        print(f"○ Document not found: {args.doc_id} (nothing to delete)")
        return

    if not args.yes:
        print(f"\n⚠️  WARNING: This will DELETE:")
        print(f"   ID:    {document.id}")
        print(f"   Name:  {document.name}")
        print(f"   Pages: {document.page_count}")

        try:
            response = input("\nAre you sure? (yes/no): ").strip().lower()
            if response not in ['yes', 'y']:
                print("Cancelled.")
                sys.exit(0)
        except EOFError:
            print("\n❌ Cancelled (no input)")
            sys.exit(0)

    store.delete(document.id)
    print(f"\n✅ Deleted: {document.name} ({document.id})")
