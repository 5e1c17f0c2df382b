# ABOUTME: Google Books book source implementation.
# ABOUTME: Primary source: searches the volumes endpoint by ISBN or by intitle/inauthor query.

import logging
from typing import Any

from wcm.config import GoogleBooksConfig, is_placeholder
from wcm.http import ApiRequestError, HttpClient
from wcm.metadata.candidate import BookCandidate
from wcm.metadata.googlebooks_parser import parse_volumes_response
from wcm.metadata.provider import SourceUnavailableError

logger = logging.getLogger(__name__)


class GoogleBooksSource:
    """Book source backed by the Google Books volumes API.

    The API key is optional; anonymous requests work with a lower quota.
    """

    def __init__(self, http_client: HttpClient, config: GoogleBooksConfig) -> None:
        self._http = http_client
        self._base_url = config.base_url.rstrip("/")
        self._api_key = None if is_placeholder(config.api_key) else config.api_key

    @property
    def name(self) -> str:
        return "googlebooks"

    def search_by_isbn(self, isbn: str) -> list[BookCandidate]:
        return self._search(f"isbn:{isbn}")

    def search_by_title_author(self, title: str, author: str) -> list[BookCandidate]:
        return self._search(f'intitle:"{title}" inauthor:"{author}"')

    def _search(self, query: str) -> list[BookCandidate]:
        params = {"q": query}
        if self._api_key:
            params["key"] = self._api_key

        logger.info("Querying Google Books: %s", query)
        try:
            data: Any = self._http.get(f"{self._base_url}/volumes", params=params)
        except ApiRequestError as exc:
            raise SourceUnavailableError(f"Google Books API error: {exc}") from exc

        try:
            return parse_volumes_response(data)
        except (KeyError, TypeError, AttributeError) as exc:
            raise SourceUnavailableError(
                f"Unexpected Google Books response shape: {exc!r}"
            ) from exc
