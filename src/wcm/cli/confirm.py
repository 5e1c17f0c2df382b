# ABOUTME: Confirmation gate shown before anything is written to Baserow.
# ABOUTME: Renders the composed record and proceeds only on an explicit yes.

import click
from rich.console import Console
from rich.table import Table

from wcm.core.record import MediaRecord

_AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


def is_affirmative(answer: str) -> bool:
    """Whether a confirmation answer means yes. Empty input means no."""
    return answer.strip().lower() in _AFFIRMATIVE_ANSWERS


def render_record(record: MediaRecord, console: Console) -> None:
    """Print the full record as a two-column table."""
    table = Table(title="New media entry", show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Title", record.title)
    table.add_row("Author", record.author or "[dim]unknown[/dim]")
    table.add_row("ISBN", record.isbn or "[dim]none[/dim]")
    table.add_row("Media Type", record.media_type.label)
    table.add_row("Categories", ", ".join(label.name for label in record.categories))
    table.add_row("Cover", record.cover_url or "[dim]none[/dim]")
    table.add_row("Synopsis", record.description)

    console.print(table)


class ConfirmationGate:
    """Show a record and ask whether to add it."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def __call__(self, record: MediaRecord) -> bool:
        render_record(record, self._console)
        answer = click.prompt(
            "Add this book to Baserow? [y/N]", type=str, default="", show_default=False
        )
        return is_affirmative(answer)
