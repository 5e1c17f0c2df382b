# ABOUTME: BookSource protocol defining the contract for book data sources.
# ABOUTME: Google Books and Open Library implement this; the aggregator chains them.

from typing import Protocol, runtime_checkable

from wcm.metadata.candidate import BookCandidate


class SourceUnavailableError(Exception):
    """Raised when a book source cannot be reached or returns unparseable data."""


@runtime_checkable
class BookSource(Protocol):
    """Protocol for book lookup services.

    Implementations return candidates in the source's own ranking order,
    an empty list when nothing matched, and raise SourceUnavailableError
    on network, HTTP status, or parse failures.
    """

    @property
    def name(self) -> str: ...

    def search_by_isbn(self, isbn: str) -> list[BookCandidate]: ...

    def search_by_title_author(self, title: str, author: str) -> list[BookCandidate]: ...
