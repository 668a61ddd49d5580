import json

from rich.console import Console
from rich.table import Table

from cli.helpers import open_key_store


def cmd_list(args):
    store = open_key_store()
    credentials = store.list()

    if args.json:
        # Secrets stay out of the listing, even encrypted
        data = [
            {
                'id': c.id,
                'label': c.label,
                'provider': c.provider.value,
                'active': c.active,
                'cooldown_until': c.cooldown_until,
            }
            for c in credentials
        ]
        print(json.dumps(data, indent=2))
        return

    if not credentials:
        print("No API keys in pool. Use 'smartmd keys add <provider>' to add one.")
        return

    table = Table(title=f"🔑 API Keys ({len(credentials)})")
    table.add_column("ID", style="dim")
    table.add_column("Label")
    table.add_column("Provider")
    table.add_column("Active", justify="center")

    for c in credentials:
        table.add_row(c.id[:12], c.label or "-", c.provider.value, "✓" if c.active else "○")

    Console().print(table)
