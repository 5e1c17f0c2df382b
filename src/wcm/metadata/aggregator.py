# ABOUTME: Chains the primary and fallback book sources and applies optional web enrichment.
# ABOUTME: A failed or empty primary lookup triggers exactly one fallback lookup; no retries.

import dataclasses
import logging

from wcm.metadata.candidate import BookCandidate, Provenance
from wcm.metadata.provider import BookSource, SourceUnavailableError
from wcm.metadata.types import SearchQuery
from wcm.metadata.websearch import WebSearchClient

logger = logging.getLogger(__name__)


class NoBookDataError(Exception):
    """Raised when every book source failed or returned nothing."""


def _lookup(source: BookSource, query: SearchQuery) -> list[BookCandidate]:
    if query.isbn is not None:
        return source.search_by_isbn(query.isbn)
    assert query.title is not None and query.author is not None
    return source.search_by_title_author(query.title, query.author)


class BookSourceAggregator:
    """Resolve a SearchQuery to candidates using a primary and a fallback source."""

    def __init__(
        self,
        primary: BookSource,
        fallback: BookSource,
        *,
        web_search: WebSearchClient | None = None,
    ) -> None:
        self._primary = primary
        self._fallback = fallback
        self._web_search = web_search

    def find(self, query: SearchQuery) -> list[BookCandidate]:
        """Return a non-empty ordered list of candidates for the query.

        The fallback source is consulted only when the primary source
        raised SourceUnavailableError or returned no results.

        Raises:
            NoBookDataError: If both sources failed or returned nothing.
        """
        try:
            candidates = _lookup(self._primary, query)
        except SourceUnavailableError as exc:
            logger.warning("%s failed: %s, trying %s", self._primary.name, exc, self._fallback.name)
        else:
            if candidates:
                return candidates
            logger.info("No results from %s, trying %s", self._primary.name, self._fallback.name)

        try:
            candidates = _lookup(self._fallback, query)
        except SourceUnavailableError as exc:
            raise NoBookDataError(
                f"No book data for {query.describe()}: "
                f"{self._primary.name} and {self._fallback.name} unavailable ({exc})"
            ) from exc

        if not candidates:
            raise NoBookDataError(
                f"No books found for {query.describe()} in either "
                f"{self._primary.name} or {self._fallback.name}"
            )
        return [dataclasses.replace(c, provenance=Provenance.FALLBACK) for c in candidates]

    def enrich(self, candidate: BookCandidate) -> BookCandidate:
        """Fill a missing description from the web search.

        Returns the candidate unchanged when it already has a description,
        web search is disabled, or the search found nothing.
        """
        if candidate.description or self._web_search is None:
            return candidate

        results = self._web_search.search_book_info(candidate.title, candidate.author)
        snippets = [r.snippet for r in results if r.snippet]
        if not snippets:
            logger.info("Web search found nothing for %s", candidate.title)
            return candidate

        logger.info("Filled description for %s from web search", candidate.title)
        return dataclasses.replace(
            candidate,
            description="\n\n".join(snippets),
            provenance=Provenance.WEB_ENRICHMENT,
        )
