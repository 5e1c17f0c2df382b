# ABOUTME: Open Library book source implementation.
# ABOUTME: Fallback source: searches openlibrary.org by ISBN or title/author and fetches work descriptions.

import logging
from typing import Any

from wcm.config import OpenLibraryConfig
from wcm.http import ApiRequestError, HttpClient
from wcm.metadata.candidate import BookCandidate
from wcm.metadata.openlibrary_parser import parse_search_doc, parse_works_response
from wcm.metadata.provider import SourceUnavailableError

logger = logging.getLogger(__name__)

_SEARCH_LIMIT = 10
_ENRICH_DESCRIPTION_LIMIT = 3


class OpenLibrarySource:
    """Book source backed by the Open Library search API.

    Uses dependency-injected HttpClient for testability.
    """

    def __init__(self, http_client: HttpClient, config: OpenLibraryConfig) -> None:
        self._http = http_client
        self._base_url = config.base_url.rstrip("/")

    @property
    def name(self) -> str:
        return "openlibrary"

    def search_by_isbn(self, isbn: str) -> list[BookCandidate]:
        return self._search({"isbn": isbn}, isbn=isbn)

    def search_by_title_author(self, title: str, author: str) -> list[BookCandidate]:
        return self._search({"title": title, "author": author})

    def _search(self, params: dict[str, str], isbn: str | None = None) -> list[BookCandidate]:
        params = {**params, "limit": str(_SEARCH_LIMIT)}
        logger.info("Querying Open Library: %s", params)
        try:
            data: Any = self._http.get(f"{self._base_url}/search.json", params=params)
        except ApiRequestError as exc:
            raise SourceUnavailableError(f"Open Library API error: {exc}") from exc

        try:
            docs = data.get("docs", [])
            candidates = []
            for index, doc in enumerate(docs):
                description = None
                if index < _ENRICH_DESCRIPTION_LIMIT:
                    description = self._fetch_description(doc.get("key"))
                candidates.append(parse_search_doc(doc, description=description, isbn=isbn))
        except (KeyError, TypeError, AttributeError) as exc:
            raise SourceUnavailableError(
                f"Unexpected Open Library response shape: {exc!r}"
            ) from exc
        return candidates

    def _fetch_description(self, works_key: str | None) -> str | None:
        """Fetch a description from the works endpoint; None on any failure."""
        if not works_key:
            return None
        try:
            works_data = self._http.get(f"{self._base_url}{works_key}.json")
        except ApiRequestError as exc:
            logger.debug("Works lookup failed for %s: %s", works_key, exc)
            return None
        if not isinstance(works_data, dict):
            return None
        return parse_works_response(works_data)
