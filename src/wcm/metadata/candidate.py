# ABOUTME: BookCandidate is one search hit from a book data source.
# ABOUTME: Immutable; enrichment produces a new candidate rather than mutating the original.

from dataclasses import dataclass, field
from enum import Enum


class Provenance(str, Enum):
    """Where a candidate's data came from."""

    PRIMARY = "primary"
    FALLBACK = "fallback"
    WEB_ENRICHMENT = "web-enrichment"


@dataclass(frozen=True)
class BookCandidate:
    """A candidate book record from an external source.

    Produced by a BookSource and never mutated afterwards. The aggregator
    sets provenance; web enrichment returns a copy with the description
    filled in and provenance set to WEB_ENRICHMENT.
    """

    title: str
    authors: tuple[str, ...] = ()
    description: str | None = None
    identifiers: dict[str, str] = field(default_factory=dict)
    cover_url: str | None = None
    publisher: str | None = None
    published_date: str | None = None
    page_count: int | None = None
    subjects: tuple[str, ...] = ()
    source: str = ""
    provenance: Provenance = Provenance.PRIMARY

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(self.authors) if self.authors else ""

    @property
    def isbn(self) -> str | None:
        """Best available ISBN, preferring ISBN-13."""
        return self.identifiers.get("isbn_13") or self.identifiers.get("isbn_10")

    @property
    def year(self) -> str | None:
        """Four-digit publication year, if the published date has one."""
        if self.published_date and self.published_date[:4].isdigit():
            return self.published_date[:4]
        return None
