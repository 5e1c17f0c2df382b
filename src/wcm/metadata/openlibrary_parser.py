# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Converts search docs into BookCandidate instances and extracts works descriptions.

from typing import Any

from wcm.metadata.candidate import BookCandidate
from wcm.metadata.googlebooks_parser import full_title

_COVERS_BASE_URL = "https://covers.openlibrary.org/b/id"


def build_cover_url(cover_id: int, size: str = "L") -> str:
    """Build an Open Library cover image URL for a cover id.

    Args:
        cover_id: The `cover_i` value from a search doc.
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    return f"{_COVERS_BASE_URL}/{cover_id}-{size}.jpg"


def parse_works_response(data: dict[str, Any]) -> str | None:
    """Extract the description from an Open Library Works response.

    Handles the OL quirk where description can be either a plain string
    or a dict with {"type": ..., "value": "actual text"}.
    """
    desc = data.get("description")
    if desc is None:
        return None
    if isinstance(desc, str):
        return desc or None
    if isinstance(desc, dict):
        return desc.get("value") or None
    return None


def _pick_isbns(isbns: list[str]) -> dict[str, str]:
    identifiers: dict[str, str] = {}
    for isbn in isbns:
        if len(isbn) == 13 and "isbn_13" not in identifiers:
            identifiers["isbn_13"] = isbn
        elif len(isbn) == 10 and "isbn_10" not in identifiers:
            identifiers["isbn_10"] = isbn
    return identifiers


def _latest_year(doc: dict[str, Any]) -> str | None:
    years = doc.get("publish_year") or []
    if years:
        return str(max(years))
    if doc.get("first_publish_year"):
        return str(doc["first_publish_year"])
    dates = doc.get("publish_date") or []
    return dates[0] if dates else None


def parse_search_doc(
    doc: dict[str, Any], *, description: str | None = None, isbn: str | None = None
) -> BookCandidate:
    """Parse one Open Library search doc into a BookCandidate.

    Search docs carry no description; pass one fetched from the works
    endpoint, otherwise the doc's first sentence is used. When the search
    was by ISBN, pass it so the candidate reports the ISBN that was asked
    for rather than an arbitrary edition's.
    """
    identifiers = _pick_isbns(doc.get("isbn", []))
    if isbn:
        identifiers["isbn_13" if len(isbn) == 13 else "isbn_10"] = isbn
    if doc.get("key"):
        identifiers["openlibrary_work"] = doc["key"]

    if description is None:
        first_sentence = doc.get("first_sentence") or []
        description = first_sentence[0] if first_sentence else None

    publishers = doc.get("publisher", [])
    cover_id = doc.get("cover_i")

    return BookCandidate(
        title=full_title(doc["title"], doc.get("subtitle")),
        authors=tuple(doc.get("author_name", [])),
        description=description,
        identifiers=identifiers,
        cover_url=build_cover_url(cover_id) if cover_id else None,
        publisher=publishers[0] if publishers else None,
        published_date=_latest_year(doc),
        page_count=doc.get("number_of_pages_median"),
        subjects=tuple(doc.get("subject", [])[:10]),
        source="openlibrary",
    )
