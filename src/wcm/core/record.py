# ABOUTME: MediaRecord, the composed book entry written to the Baserow media table.
# ABOUTME: compose_record merges the chosen candidate, categories, synopsis, and media type.

from dataclasses import dataclass
from enum import Enum

from wcm.baserow.mapping import CategoryLabel
from wcm.metadata.candidate import BookCandidate

MIN_CATEGORIES = 3
MAX_CATEGORIES = 5


class MediaType(str, Enum):
    """How the book is held: an ebook or a physical copy."""

    EBOOK = "ebook"
    PHYSICAL = "physical"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class MediaRecord:
    """A fully composed media entry, ready for confirmation and writing."""

    title: str
    authors: tuple[str, ...]
    description: str
    categories: tuple[CategoryLabel, ...]
    media_type: MediaType
    isbn: str | None = None
    cover_url: str | None = None

    def __post_init__(self) -> None:
        if not MIN_CATEGORIES <= len(self.categories) <= MAX_CATEGORIES:
            msg = (
                f"a media record needs {MIN_CATEGORIES}-{MAX_CATEGORIES} categories, "
                f"got {len(self.categories)}"
            )
            raise ValueError(msg)

    @property
    def author(self) -> str:
        return ", ".join(self.authors) if self.authors else ""


def compose_record(
    candidate: BookCandidate,
    categories: tuple[CategoryLabel, ...],
    description: str,
    media_type: MediaType,
) -> MediaRecord:
    """Merge upstream outputs into a MediaRecord."""
    return MediaRecord(
        title=candidate.title,
        authors=candidate.authors,
        description=description,
        categories=categories,
        media_type=media_type,
        isbn=candidate.isbn,
        cover_url=candidate.cover_url,
    )
