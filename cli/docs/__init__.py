from cli.docs.list import cmd_list
from cli.docs.show import cmd_show, cmd_export
from cli.docs.delete import cmd_delete


def setup_parser(subparsers):
    """Setup docs command parser."""
    docs_parser = subparsers.add_parser('docs', help='Converted document commands')
    docs_subparsers = docs_parser.add_subparsers(dest='docs_command', help='Docs command')
    docs_subparsers.required = True

    list_parser = docs_subparsers.add_parser('list', help='List documents, most recent first')
    list_parser.add_argument('--json', action='store_true', help='Output as JSON')
    list_parser.set_defaults(func=cmd_list)

    show_parser = docs_subparsers.add_parser('show', help='Print a document as Markdown')
    show_parser.add_argument('doc_id', help='Document ID')
    show_parser.set_defaults(func=cmd_show)

    export_parser = docs_subparsers.add_parser('export', help='Write a document to a Markdown file')
    export_parser.add_argument('doc_id', help='Document ID')
    export_parser.add_argument('-o', '--output', help='Output file (default: <name>.md)')
    export_parser.set_defaults(func=cmd_export)

    delete_parser = docs_subparsers.add_parser('delete', help='Delete a document')
    delete_parser.add_argument('doc_id', help='Document ID')
    delete_parser.add_argument('-y', '--yes', action='store_true', help='Skip confirmation')
    delete_parser.set_defaults(func=cmd_delete)


__all__ = ['cmd_list', 'cmd_show', 'cmd_export', 'cmd_delete', 'setup_parser']
