# ABOUTME: Parsing functions for Google Books API JSON responses.
# ABOUTME: Converts volume items into BookCandidate instances.

from typing import Any

from wcm.metadata.candidate import BookCandidate

# Largest first.
_IMAGE_LINK_PREFERENCE = (
    "extraLarge",
    "large",
    "medium",
    "small",
    "thumbnail",
    "smallThumbnail",
)


def full_title(title: str, subtitle: str | None) -> str:
    """Join a title and optional subtitle as 'Title: Subtitle'."""
    return f"{title}: {subtitle}" if subtitle else title


def best_cover_url(image_links: dict[str, str] | None) -> str | None:
    """Pick the largest available cover image, upgraded to https."""
    if not image_links:
        return None
    for key in _IMAGE_LINK_PREFERENCE:
        url = image_links.get(key)
        if url:
            if url.startswith("http://"):
                url = "https://" + url[len("http://"):]
            return url
    return None


def parse_volume(item: dict[str, Any]) -> BookCandidate:
    """Parse a single Google Books volume into a BookCandidate."""
    info = item["volumeInfo"]

    identifiers: dict[str, str] = {}
    for entry in info.get("industryIdentifiers", []):
        id_type = entry.get("type")
        value = entry.get("identifier")
        if id_type == "ISBN_13" and value:
            identifiers["isbn_13"] = value
        elif id_type == "ISBN_10" and value:
            identifiers["isbn_10"] = value
    if item.get("id"):
        identifiers["google_books"] = item["id"]

    return BookCandidate(
        title=full_title(info["title"], info.get("subtitle")),
        authors=tuple(info.get("authors", [])),
        description=info.get("description") or None,
        identifiers=identifiers,
        cover_url=best_cover_url(info.get("imageLinks")),
        publisher=info.get("publisher"),
        published_date=info.get("publishedDate"),
        page_count=info.get("pageCount"),
        subjects=tuple(info.get("categories", [])),
        source="googlebooks",
    )


def parse_volumes_response(data: dict[str, Any]) -> list[BookCandidate]:
    """Parse a Google Books /volumes response.

    A response with totalItems == 0 has no "items" key at all; that is an
    empty result, not an error.
    """
    return [parse_volume(item) for item in data.get("items", [])]
