# ABOUTME: Web search enrichment via the DuckDuckGo instant answer API.
# ABOUTME: Looks up descriptive text for an already-identified book; never finds new candidates.

import logging
from dataclasses import dataclass
from typing import Any

from wcm.http import ApiRequestError, HttpClient

logger = logging.getLogger(__name__)

_DDG_URL = "https://api.duckduckgo.com/"
_RELATED_TOPIC_LIMIT = 3


@dataclass(frozen=True)
class WebResult:
    """One snippet of text returned by the web search."""

    title: str
    url: str
    snippet: str


class WebSearchClient:
    """Client for the DuckDuckGo instant answer API (no key required)."""

    def __init__(self, http_client: HttpClient, *, base_url: str = _DDG_URL) -> None:
        self._http = http_client
        self._base_url = base_url

    def search_book_info(self, title: str, author: str) -> list[WebResult]:
        """Search for synopsis text about a book.

        Returns the abstract if there is one, otherwise up to three related topics.
        Returns an empty list on request failure or when nothing was found.
        """
        params = {
            "q": f"{title} by {author} book synopsis",
            "format": "json",
            "no_html": "1",
            "no_redirect": "1",
            "skip_disambig": "1",
        }
        try:
            data: Any = self._http.get(self._base_url, params=params)
        except ApiRequestError as exc:
            logger.warning("Web search failed for %s: %s", title, exc)
            return []
        if not isinstance(data, dict):
            return []
        return parse_instant_answer(data, title)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def parse_instant_answer(data: dict[str, Any], title: str) -> list[WebResult]:
    """Parse a DuckDuckGo instant answer response into WebResults.

    The abstract, when present, is the only result. Related topics often
    describe other works with the same name, so they are used only when
    there is no abstract.
    """
    abstract = _text(data.get("AbstractText"))
    if abstract:
        source = _text(data.get("AbstractSource")) or "Web"
        return [
            WebResult(
                title=f"{title} - {source}",
                url=_text(data.get("AbstractURL")),
                snippet=abstract,
            )
        ]

    topics = data.get("RelatedTopics")
    if not isinstance(topics, list):
        return []

    results: list[WebResult] = []
    for topic in topics:
        if len(results) >= _RELATED_TOPIC_LIMIT:
            break
        # Grouped topics have "Topics" instead of "Text"; skip them.
        text = _text(topic.get("Text")) if isinstance(topic, dict) else ""
        if not text:
            continue
        results.append(
            WebResult(title=f"Related: {title}", url=_text(topic.get("FirstURL")), snippet=text)
        )
    return results
