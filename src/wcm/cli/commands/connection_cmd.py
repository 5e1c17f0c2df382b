# ABOUTME: The `wcm test-connection` command for checking Baserow access.
# ABOUTME: Reads one row of the categories table to verify the token and table id.

import click
from rich.console import Console

from wcm.baserow.client import AuthenticationError, BaserowError, TableNotFoundError
from wcm.cli import services


@click.command("test-connection")
@click.pass_context
def test_connection(ctx: click.Context) -> None:
    """Verify connectivity to the Baserow database."""
    console = Console()
    config = services.load_command_config(ctx, console, baserow_only=True)
    client = services.create_baserow_client(config)

    console.print(f"Testing Baserow connection to {config.baserow.base_url}...")
    try:
        client.test_connection()
    except AuthenticationError as exc:
        console.print("[red]Authentication failed[/red] - check your API token")
        raise SystemExit(1) from exc
    except TableNotFoundError as exc:
        console.print(
            f"[red]Categories table {config.baserow.categories_table_id} not found[/red]"
            " - check your table ID"
        )
        raise SystemExit(1) from exc
    except BaserowError as exc:
        console.print(f"[red]Connection failed:[/red] {exc}")
        raise SystemExit(1) from exc

    console.print("[green]Baserow connection successful![/green]")
