"""
smartmd config set command - Change one library configuration value.
"""

import yaml

from infra.config import LibraryConfigManager
from infra.config import Config


def cmd_config_set(args):
    """Set a configuration value."""
    manager = LibraryConfigManager(Config.storage_root)

    if not manager.exists():
        print(f"✗ No config found at: {manager.config_path}")
        print("  Run 'smartmd init' to create one")
        return

    value = parse_value(args.value)

    try:
        config = manager.set_value(args.key, value)
    except ValueError as e:
        print(f"✗ Failed to set {args.key}: {e}")
        return

    current = config.model_dump()
    for part in args.key.split('.'):
        current = current[part]
    print(f"✓ Set {args.key} = {current!r}")


def parse_value(value: str):
    """
    Read a command-line value as a YAML scalar or flow collection.

    "30" -> 30, "0.7" -> 0.7, "false" -> False, "[a, b]" -> ['a', 'b'].
    Anything that is not valid YAML is kept as the raw string.
    """
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError:
        return value
    return value if parsed is None else parsed
