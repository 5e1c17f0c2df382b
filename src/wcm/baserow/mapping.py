# ABOUTME: Mapping between Baserow table rows and wcm domain types.
# ABOUTME: Parses category rows into a CategorySet and builds field-name payloads for media rows.

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wcm.core.record import MediaRecord

logger = logging.getLogger(__name__)

# Media table field names, addressed with user_field_names=true.
FIELD_TITLE = "Title"
FIELD_AUTHOR = "Author"
FIELD_ISBN = "ISBN"
FIELD_SYNOPSIS = "Synopsis"
FIELD_CATEGORY = "Category"
FIELD_MEDIA_TYPE = "Media Type"
FIELD_READ = "Read"
FIELD_COVER = "Cover"

# Columns that may hold a category's display name, in lookup order.
_NAME_FIELDS = ("Name", "name", "Category", "category")
_DESCRIPTION_FIELDS = ("Description", "description")


@dataclass(frozen=True)
class CategoryLabel:
    """One admissible category: the Baserow row id and its display name."""

    id: int
    name: str
    description: str | None = None


@dataclass(frozen=True)
class CategorySet:
    """The fixed set of category labels fetched from the categories table.

    Keyed by row id; names are looked up exactly (no case folding), so a
    label that is not spelled as stored is not a member.
    """

    labels: dict[int, CategoryLabel] = field(default_factory=dict)

    @classmethod
    def from_labels(cls, labels: list[CategoryLabel]) -> "CategorySet":
        by_id: dict[int, CategoryLabel] = {}
        seen_names: set[str] = set()
        for label in labels:
            if label.name in seen_names:
                logger.warning("Duplicate category name %r (row %d) ignored", label.name, label.id)
                continue
            seen_names.add(label.name)
            by_id[label.id] = label
        return cls(labels=by_id)

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[CategoryLabel]:
        return iter(self.labels.values())

    def __contains__(self, item: object) -> bool:
        if isinstance(item, CategoryLabel):
            return self.labels.get(item.id) == item
        if isinstance(item, str):
            return self.by_name(item) is not None
        return False

    @property
    def names(self) -> list[str]:
        return [label.name for label in self.labels.values()]

    def by_name(self, name: str) -> CategoryLabel | None:
        """Return the label with exactly this name, or None."""
        for label in self.labels.values():
            if label.name == name:
                return label
        return None


def _first_string(row: dict[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = row.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def parse_category_rows(rows: list[dict[str, Any]]) -> CategorySet:
    """Build a CategorySet from category table rows.

    Rows without an id or a recognizable name column are skipped.
    """
    labels: list[CategoryLabel] = []
    for row in rows:
        row_id = row.get("id")
        name = _first_string(row, _NAME_FIELDS)
        if not isinstance(row_id, int) or name is None:
            logger.warning("Skipping category row without id or name: %r", row)
            continue
        labels.append(
            CategoryLabel(id=row_id, name=name, description=_first_string(row, _DESCRIPTION_FIELDS))
        )
    return CategorySet.from_labels(labels)


def record_to_row(record: "MediaRecord", media_type_options: dict[str, int]) -> dict[str, Any]:
    """Build the field-name payload for creating a media row.

    The Media Type single-select gets the configured option id when one
    exists for the record's media type, otherwise the option's value text.
    The cover is not part of the create payload; it is attached afterwards.
    """
    option_id = media_type_options.get(record.media_type.value)
    media_type: int | str = option_id if option_id is not None else record.media_type.label

    return {
        FIELD_TITLE: record.title,
        FIELD_AUTHOR: ", ".join(record.authors),
        FIELD_ISBN: record.isbn or "",
        FIELD_SYNOPSIS: record.description,
        FIELD_CATEGORY: [label.id for label in record.categories],
        FIELD_MEDIA_TYPE: media_type,
        FIELD_READ: False,
    }


def cover_payload(file_name: str) -> dict[str, Any]:
    """Field payload attaching an uploaded user file to the Cover field."""
    return {FIELD_COVER: [{"name": file_name}]}
