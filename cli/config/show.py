"""
smartmd config show command - Display library configuration.
"""

import json

from infra.config import LibraryConfigManager
from infra.config import Config


def cmd_config_show(args):
    """Show library configuration."""
    manager = LibraryConfigManager(Config.storage_root)

    if not manager.exists():
        print(f"○ No config file at: {manager.config_path} (using built-in defaults)")
        print("  Run 'smartmd init' to create one")

    config = manager.load()

    if args.json:
        data = config.model_dump()
        data['storage_root'] = str(Config.storage_root)
        data['secret_key_set'] = bool(Config.secret_key)
        print(json.dumps(data, indent=2, default=str))
        return

    print(f"\n📋 Library Configuration")
    print(f"   Path: {manager.config_path}")
    print(f"   Storage root: {Config.storage_root}")
    print(f"   Secret key: {'configured' if Config.secret_key else 'not set'}\n")

    print("Providers:")
    for name, provider in config.providers.items():
        print(f"  {name}: type={provider.type} model={provider.model}")
        print(f"    endpoint={provider.endpoint} timeout={provider.timeout:.0f}s max_tokens={provider.max_tokens}")

    policy = config.keypool
    print("\nKey pool:")
    print(f"  cooldown_seconds: {policy.cooldown_seconds:.0f}")
    print(f"  wait_seconds: {policy.wait_seconds:.0f}")
    print(f"  max_attempts: {policy.max_attempts}")
    print(f"  max_failures: {policy.max_failures}")

    print("\nDefaults:")
    print(f"  provider: {config.defaults.provider}")
    print(f"  dpi: {config.defaults.dpi}")
    print()
