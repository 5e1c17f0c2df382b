# ABOUTME: Unit tests for the Google Books source and its response parser.
# ABOUTME: Uses FakeHttpClient with canned /volumes responses.

import pytest

from wcm.config import GoogleBooksConfig
from wcm.http import ApiRequestError
from wcm.metadata.googlebooks import GoogleBooksSource
from wcm.metadata.googlebooks_parser import best_cover_url, full_title, parse_volumes_response
from wcm.metadata.provider import BookSource, SourceUnavailableError
from tests.fixtures.fake_http import FakeHttpClient
from tests.fixtures.googlebooks_responses import (
    LOTR_DESCRIPTION,
    VOLUMES_RESPONSE_EMPTY,
    VOLUMES_RESPONSE_MALFORMED,
    VOLUMES_RESPONSE_MULTIPLE,
    VOLUMES_RESPONSE_SINGLE,
)


def _source(response: object, api_key: str = "") -> tuple[GoogleBooksSource, FakeHttpClient]:
    http = FakeHttpClient({"/volumes": response})
    return GoogleBooksSource(http, GoogleBooksConfig(api_key=api_key)), http


class TestParser:
    def test_full_title_joins_subtitle(self) -> None:
        assert full_title("Dune", "Deluxe Edition") == "Dune: Deluxe Edition"
        assert full_title("Dune", None) == "Dune"

    def test_best_cover_prefers_largest_and_https(self) -> None:
        links = {"thumbnail": "http://x/thumb", "medium": "http://x/medium"}
        assert best_cover_url(links) == "https://x/medium"

    def test_best_cover_none_without_links(self) -> None:
        assert best_cover_url(None) is None
        assert best_cover_url({}) is None

    def test_parse_single_volume(self) -> None:
        [candidate] = parse_volumes_response(VOLUMES_RESPONSE_SINGLE)
        assert candidate.title == "The Lord of the Rings"
        assert candidate.authors == ("J.R.R. Tolkien",)
        assert candidate.isbn == "9780345391803"
        assert candidate.identifiers["isbn_10"] == "0345391802"
        assert candidate.identifiers["google_books"] == "yl4dILkcqm4C"
        assert candidate.description == LOTR_DESCRIPTION
        assert candidate.cover_url is not None
        assert candidate.cover_url.startswith("https://")
        assert candidate.year == "1986"
        assert candidate.page_count == 1216
        assert candidate.source == "googlebooks"

    def test_parse_keeps_result_order(self) -> None:
        candidates = parse_volumes_response(VOLUMES_RESPONSE_MULTIPLE)
        assert [c.title for c in candidates] == ["Dune", "Dune: Deluxe Edition", "Dune Messiah"]
        assert candidates[1].cover_url == "https://books.google.com/large"
        assert candidates[2].description is None

    def test_parse_empty_response(self) -> None:
        assert parse_volumes_response(VOLUMES_RESPONSE_EMPTY) == []


class TestGoogleBooksSource:
    """Tests for GoogleBooksSource."""

    def test_satisfies_protocol(self) -> None:
        source, _ = _source(VOLUMES_RESPONSE_EMPTY)
        assert isinstance(source, BookSource)
        assert source.name == "googlebooks"

    def test_search_by_isbn_query(self) -> None:
        source, http = _source(VOLUMES_RESPONSE_SINGLE)
        results = source.search_by_isbn("9780345391803")
        assert len(results) == 1
        assert http.requests[0]["params"] == {"q": "isbn:9780345391803"}

    def test_search_by_title_author_query(self) -> None:
        source, http = _source(VOLUMES_RESPONSE_MULTIPLE)
        results = source.search_by_title_author("Dune", "Frank Herbert")
        assert len(results) == 3
        assert http.requests[0]["params"]["q"] == 'intitle:"Dune" inauthor:"Frank Herbert"'

    def test_api_key_sent_when_configured(self) -> None:
        source, http = _source(VOLUMES_RESPONSE_EMPTY, api_key="real-key")
        source.search_by_isbn("9780345391803")
        assert http.requests[0]["params"]["key"] == "real-key"

    def test_placeholder_key_not_sent(self) -> None:
        source, http = _source(VOLUMES_RESPONSE_EMPTY, api_key="your_google_books_api_key")
        source.search_by_isbn("9780345391803")
        assert "key" not in http.requests[0]["params"]

    def test_empty_result_is_not_an_error(self) -> None:
        source, _ = _source(VOLUMES_RESPONSE_EMPTY)
        assert source.search_by_isbn("9780000000000") == []

    def test_http_error_becomes_source_unavailable(self) -> None:
        source, _ = _source(ApiRequestError("HTTP 503", status_code=503))
        with pytest.raises(SourceUnavailableError, match="Google Books"):
            source.search_by_isbn("9780345391803")

    def test_malformed_response_becomes_source_unavailable(self) -> None:
        source, _ = _source(VOLUMES_RESPONSE_MALFORMED)
        with pytest.raises(SourceUnavailableError, match="response shape"):
            source.search_by_isbn("9780345391803")
