# ABOUTME: Interactive ambiguity resolution when a search returns several books.
# ABOUTME: Shows a bounded, numbered Rich table and prompts once for a single choice.

import click
from rich.console import Console
from rich.table import Table

from wcm.metadata.candidate import BookCandidate


class SelectionAborted(Exception):
    """Raised when the user cancels or makes an invalid selection."""


def truncate(text: str | None, limit: int) -> str:
    """Shorten text to at most `limit` characters plus an ellipsis."""
    if not text:
        return "-"
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."


class SelectionSession:
    """Prompt the user to pick one of several candidates.

    Only the first max_results candidates are shown and selectable.
    """

    def __init__(
        self,
        *,
        console: Console | None = None,
        max_results: int = 5,
        preview_chars: int = 200,
    ) -> None:
        self._console = console or Console()
        self._max_results = max_results
        self._preview_chars = preview_chars

    def select(self, candidates: list[BookCandidate]) -> BookCandidate:
        """Return the chosen candidate.

        Raises:
            SelectionAborted: If there is nothing to choose from, the user
                cancels, or the answer is not a listed number.
        """
        if not candidates:
            raise SelectionAborted("No books to choose from.")
        if len(candidates) == 1:
            return candidates[0]

        shown = candidates[: self._max_results]
        self._console.print(
            f"\nFound {len(candidates)} books (showing top {len(shown)}):"
        )

        table = Table(title="Candidates")
        table.add_column("#", style="bold", width=3)
        table.add_column("Title")
        table.add_column("Author")
        table.add_column("Year")
        table.add_column("Source", style="dim")
        table.add_column("Description")

        for i, candidate in enumerate(shown, start=1):
            table.add_row(
                str(i),
                candidate.title,
                candidate.author or "Unknown Author",
                candidate.year or "-",
                candidate.source,
                truncate(candidate.description, self._preview_chars),
            )

        self._console.print(table)

        choice = click.prompt(
            f"Select a book [1-{len(shown)}]  [c] Cancel", type=str, default="1"
        ).strip()

        if choice.lower() == "c":
            raise SelectionAborted("No book selected.")
        try:
            idx = int(choice) - 1
        except ValueError:
            raise SelectionAborted(f"Invalid selection: {choice}") from None
        if not 0 <= idx < len(shown):
            raise SelectionAborted(f"Invalid selection: {choice}")
        return shown[idx]
