from cli.keys.add import cmd_add
from cli.keys.list import cmd_list
from cli.keys.manage import cmd_remove, cmd_toggle
from cli.keys.status import cmd_status


def setup_parser(subparsers):
    """Setup keys command parser."""
    keys_parser = subparsers.add_parser('keys', help='API key pool commands')
    keys_subparsers = keys_parser.add_subparsers(dest='keys_command', help='Keys command')
    keys_subparsers.required = True

    add_parser = keys_subparsers.add_parser('add', help='Add an API key to the pool')
    add_parser.add_argument('provider', help='Key provider (glm, openai, claude)')
    add_parser.add_argument('--key', help='API key value (prompted for when omitted)')
    add_parser.set_defaults(func=cmd_add)

    list_parser = keys_subparsers.add_parser('list', help='List pooled keys')
    list_parser.add_argument('--json', action='store_true', help='Output as JSON')
    list_parser.set_defaults(func=cmd_list)

    remove_parser = keys_subparsers.add_parser('remove', help='Remove a key from the pool')
    remove_parser.add_argument('key_id', help='Key ID (or unique prefix)')
    remove_parser.set_defaults(func=cmd_remove)

    toggle_parser = keys_subparsers.add_parser('toggle', help='Enable or disable a key')
    toggle_parser.add_argument('key_id', help='Key ID (or unique prefix)')
    toggle_parser.set_defaults(func=cmd_toggle)

    status_parser = keys_subparsers.add_parser('status', help='Show key availability and cooldowns')
    status_parser.add_argument('--provider', help='Only show keys for this provider')
    status_parser.set_defaults(func=cmd_status)


__all__ = ['cmd_add', 'cmd_list', 'cmd_remove', 'cmd_toggle', 'cmd_status', 'setup_parser']
