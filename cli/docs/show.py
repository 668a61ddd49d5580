import sys
from pathlib import Path

from cli.helpers import open_document_store


def _load_or_exit(doc_id: str):
    document = open_document_store().get(doc_id)
    if document is None:
        print(f"❌ Document not found: {doc_id}")
        sys.exit(1)
    return document


def cmd_show(args):
    document = _load_or_exit(args.doc_id)
    print(document.content.lstrip("\n"))


def cmd_export(args):
    document = _load_or_exit(args.doc_id)
    output = Path(args.output) if args.output else Path(f"{document.name}.md")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document.content.lstrip("\n"), encoding="utf-8")
    print(f"✅ Exported {document.name} to {output}")
