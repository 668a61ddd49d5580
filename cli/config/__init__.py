"""
Config CLI commands.

Commands for initializing, inspecting and editing the library configuration.
"""

from cli.config.init import cmd_init
from cli.config.show import cmd_config_show
from cli.config.set import cmd_config_set


def setup_parser(subparsers):
    """Setup config command parser."""
    # smartmd init
    init_parser = subparsers.add_parser(
        'init',
        help='Initialize library configuration'
    )
    init_parser.add_argument(
        '--force',
        action='store_true',
        help='Overwrite existing config'
    )
    init_parser.set_defaults(func=cmd_init)

    # smartmd config ...
    config_parser = subparsers.add_parser(
        'config',
        help='Inspect or change library configuration'
    )
    config_subparsers = config_parser.add_subparsers(
        dest='config_command',
        help='Config command'
    )
    config_subparsers.required = True

    # smartmd config show
    show_parser = config_subparsers.add_parser(
        'show',
        help='Show library configuration'
    )
    show_parser.add_argument(
        '--json',
        action='store_true',
        help='Output as JSON'
    )
    show_parser.set_defaults(func=cmd_config_show)

    # smartmd config set <key> <value>
    set_parser = config_subparsers.add_parser(
        'set',
        help='Set a configuration value'
    )
    set_parser.add_argument(
        'key',
        help='Dotted config key (e.g. keypool.cooldown_seconds, providers.glm.model)'
    )
    set_parser.add_argument(
        'value',
        help='Value to set (parsed as YAML: 30, 0.7, true, [a, b])'
    )
    set_parser.set_defaults(func=cmd_config_set)


__all__ = [
    'setup_parser',
    'cmd_init',
    'cmd_config_show',
    'cmd_config_set',
]
