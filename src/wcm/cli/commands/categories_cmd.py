# ABOUTME: The `wcm categories` command listing the admissible category labels.
# ABOUTME: Shows the categories table exactly as the category resolver will see it.

import click
from rich.console import Console
from rich.table import Table

from wcm.baserow.client import BaserowError
from wcm.cli import services


@click.command("categories")
@click.pass_context
def categories(ctx: click.Context) -> None:
    """List the categories available in the Baserow categories table."""
    console = Console()
    config = services.load_command_config(ctx, console, baserow_only=True)
    client = services.create_baserow_client(config)

    try:
        category_set = client.fetch_categories()
    except BaserowError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    if not len(category_set):
        console.print("[yellow]No categories found in Baserow table.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold")
    table.add_column("Description")
    for label in category_set:
        table.add_row(str(label.id), label.name, label.description or "")

    console.print(table)
    console.print(f"\n[dim]{len(category_set)} categories[/dim]")
