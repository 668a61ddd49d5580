import json

from cli.helpers import open_document_store


def cmd_list(args):
    documents = open_document_store().list()

    if args.json:
        data = [
            doc.model_dump(mode='json', exclude={'content'})
            for doc in documents
        ]
        print(json.dumps(data, indent=2))
        return

    if not documents:
        print("No documents yet. Use 'smartmd convert <pdf>' to create one.")
        return

    print(f"\n📄 Documents ({len(documents)})\n")
    print(f"{'ID':<34} {'Name':<30} {'Pages':<7} {'Errors':<7} {'Updated'}")
    print("-" * 100)

    for doc in documents:
        updated = doc.updated_at.astimezone().strftime("%Y-%m-%d %H:%M")
        errors = str(len(doc.failed_pages)) if doc.failed_pages else "-"
        print(f"{doc.id:<34} {doc.name[:28]:<30} {doc.page_count:<7} {errors:<7} {updated}")
    print()
