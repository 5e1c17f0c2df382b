# ABOUTME: The `wcm add` command: look up a book, enrich it, confirm, and write it to Baserow.
# ABOUTME: Accepts --isbn or --title/--author, plus --ebook to record the media type.

import logging

import click
from rich.console import Console

from wcm.baserow.client import BaserowError
from wcm.cli import services
from wcm.cli.confirm import ConfirmationGate
from wcm.cli.selection import SelectionAborted, SelectionSession
from wcm.config import ConfigError
from wcm.core.categories import CategoryResolutionError, CategoryResolver
from wcm.core.pipeline import AddBookPipeline
from wcm.core.record import MediaType
from wcm.core.synopsis import SynopsisGenerator
from wcm.llm.backend import TextBackendError
from wcm.metadata.aggregator import NoBookDataError
from wcm.metadata.types import InvalidQueryError, SearchQuery

logger = logging.getLogger(__name__)

_RUN_ERRORS = (
    NoBookDataError,
    CategoryResolutionError,
    TextBackendError,
    BaserowError,
    ConfigError,
)


@click.command("add")
@click.option("--isbn", default=None, help="Add book by ISBN.")
@click.option("--title", default=None, help="Book title (requires --author).")
@click.option("--author", default=None, help="Book author (requires --title).")
@click.option(
    "--ebook",
    is_flag=True,
    default=False,
    help="Record the book as an ebook (default: physical copy).",
)
@click.pass_context
def add(
    ctx: click.Context,
    isbn: str | None,
    title: str | None,
    author: str | None,
    ebook: bool,
) -> None:
    """Add a book to the Baserow library by ISBN or by title and author."""
    console = Console()

    try:
        query = SearchQuery.from_input(isbn=isbn, title=title, author=author)
    except InvalidQueryError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    config = services.load_command_config(ctx, console)
    media_type = MediaType.EBOOK if ebook else MediaType.PHYSICAL

    console.print(f"Adding book by {query.describe()}")

    try:
        baserow = services.create_baserow_client(config)
        backend = services.create_text_backend(config)
        pipeline = AddBookPipeline(
            aggregator=services.create_aggregator(config),
            baserow=baserow,
            category_resolver=CategoryResolver(
                backend, max_attempts=config.app.category_attempts
            ),
            synopsis_generator=SynopsisGenerator(
                backend,
                min_words=config.app.min_synopsis_words,
                target_words=config.app.target_synopsis_words,
            ),
            writer=services.create_writer(config, baserow),
            select_fn=SelectionSession(
                console=console,
                max_results=config.app.max_search_results,
                preview_chars=config.app.description_preview_chars,
            ).select,
            confirm_fn=ConfirmationGate(console),
        )
        result = pipeline.run(query, media_type)
    except SelectionAborted as exc:
        console.print(f"[yellow]{exc}[/yellow]")
        raise SystemExit(1) from exc
    except _RUN_ERRORS as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    if result.write_result is None:
        console.print("[yellow]Book not added.[/yellow]")
        return

    write_result = result.write_result
    console.print(
        f"[green]Added:[/green] {result.record.title} (row {write_result.row_id})"
    )
    if write_result.partial:
        console.print(
            f"[yellow]Warning:[/yellow] row {write_result.row_id} was created but the cover "
            f"could not be attached: {write_result.attach_error}"
        )
