# ABOUTME: Search request types for the book source lookup.
# ABOUTME: SearchQuery is the canonical, immutable form of the CLI's ISBN or title/author input.

import re
from dataclasses import dataclass

_ISBN_STRIP_RE = re.compile(r"[\s-]")
_ISBN_RE = re.compile(r"^(\d{9}[\dX]|\d{13})$")


class InvalidQueryError(ValueError):
    """Raised when CLI input cannot be turned into a SearchQuery."""


def normalize_isbn(isbn: str) -> str:
    """Strip hyphens and spaces from an ISBN and upper-case a trailing check letter."""
    return _ISBN_STRIP_RE.sub("", isbn).upper()


@dataclass(frozen=True)
class SearchQuery:
    """A book lookup request: either an ISBN, or a title and author pair."""

    isbn: str | None = None
    title: str | None = None
    author: str | None = None

    def __post_init__(self) -> None:
        if self.isbn is not None:
            if self.title is not None or self.author is not None:
                raise InvalidQueryError("Provide either an ISBN or a title and author, not both")
            if not _ISBN_RE.match(self.isbn):
                raise InvalidQueryError(f"Not a valid ISBN-10 or ISBN-13: {self.isbn}")
        elif not self.title or not self.author:
            raise InvalidQueryError("Provide either --isbn OR both --title and --author")

    @classmethod
    def from_input(
        cls, isbn: str | None = None, title: str | None = None, author: str | None = None
    ) -> "SearchQuery":
        """Build a query from raw CLI values, normalizing the ISBN and blank strings."""
        title = title.strip() if title and title.strip() else None
        author = author.strip() if author and author.strip() else None
        if isbn is not None and isbn.strip():
            return cls(isbn=normalize_isbn(isbn), title=title, author=author)
        return cls(title=title, author=author)

    @property
    def is_isbn(self) -> bool:
        return self.isbn is not None

    def describe(self) -> str:
        """Human-readable form of the query for messages."""
        if self.isbn is not None:
            return f"ISBN {self.isbn}"
        return f"title: '{self.title}', author: '{self.author}'"
