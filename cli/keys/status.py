from rich.console import Console
from rich.table import Table

from cli.helpers import open_key_store, parse_provider, format_remaining


def cmd_status(args):
    store = open_key_store()
    provider = parse_provider(args.provider) if args.provider else None
    rows = store.status(provider)

    if not rows:
        print("No API keys in pool.")
        return

    table = Table(title="🔑 Key Status")
    table.add_column("Label")
    table.add_column("Provider")
    table.add_column("State")
    table.add_column("Cooldown", justify="right")

    for row in rows:
        if not row['active']:
            state = "[dim]disabled[/dim]"
        elif row['cooling_down']:
            state = "[yellow]cooling down[/yellow]"
        else:
            state = "[green]available[/green]"

        table.add_row(
            row['label'] or row['id'][:12],
            row['provider'],
            state,
            format_remaining(row['cooldown_remaining_seconds']),
        )

    Console().print(table)

    available = sum(1 for row in rows if row['eligible'])
    print(f"\n{available}/{len(rows)} key(s) available")
