"""
smartmd init command - Initialize library configuration.
"""

from infra.config import LibraryConfigManager, LibraryConfig
from infra.config import Config
from infra.keypool import generate_key


def cmd_init(args):
    """Initialize library configuration."""
    storage_root = Config.storage_root
    manager = LibraryConfigManager(storage_root)

    if manager.exists() and not args.force:
        print(f"✗ Config already exists at: {manager.config_path}")
        print("  Use --force to overwrite")
        return

    config = LibraryConfig.with_defaults()
    manager.save(config)
    print(f"✓ Created config at: {manager.config_path}")

    print("\nConfiguration summary:")
    print(f"  Storage root: {storage_root}")
    print(f"  Default provider: {config.defaults.provider}")
    print(f"  Render DPI: {config.defaults.dpi}")
    print(f"  Cooldown after rate limit: {config.keypool.cooldown_seconds:.0f}s")

    print("\nProviders:")
    for name, provider in config.providers.items():
        print(f"  {name}: {provider.type} ({provider.model})")

    if not Config.secret_key:
        print("\nSMARTMD_SECRET_KEY is not set. Stored API keys are encrypted with it.")
        print("Add this line to your .env (keep it private, losing it makes stored keys unreadable):")
        print(f"\n  SMARTMD_SECRET_KEY={generate_key()}\n")
