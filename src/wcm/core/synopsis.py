# ABOUTME: Synopsis generation for books whose sourced description is too short.
# ABOUTME: Descriptions at or above the word threshold are used verbatim with no backend call.

import logging
import re

from wcm.core.categories import format_book_info
from wcm.llm.backend import TextBackend, TextBackendError
from wcm.metadata.candidate import BookCandidate

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^\s*(?:\*\*\s*synopsis\s*:?\s*\*\*|synopsis\s*:)\s*", re.IGNORECASE)

_PROMPT_TEMPLATE = """Based on the book information provided, write a comprehensive synopsis of approximately {target_words} words.

BOOK INFORMATION:
{book_info}

INSTRUCTIONS:
1. Write a clear, engaging synopsis that captures the book's essence
2. Include main themes, plot elements (without major spoilers), and key characters
3. Target length: approximately {target_words} words
4. Write in an informative yet engaging style suitable for a library catalog
5. Focus on what makes this book unique and interesting to potential readers

SYNOPSIS:"""


def word_count(text: str | None) -> int:
    return len(text.split()) if text else 0


def build_synopsis_prompt(book_info: str, target_words: int) -> str:
    return _PROMPT_TEMPLATE.format(book_info=book_info, target_words=target_words)


def clean_synopsis(text: str) -> str:
    """Strip a leading 'Synopsis:' or '**Synopsis**' heading from backend output."""
    return _HEADING_RE.sub("", text.strip(), count=1).strip()


class SynopsisGenerator:
    """Produce the description stored with a record."""

    def __init__(
        self, backend: TextBackend, *, min_words: int = 50, target_words: int = 150
    ) -> None:
        self._backend = backend
        self._min_words = min_words
        self._target_words = target_words

    def needs_synopsis(self, description: str | None) -> bool:
        return word_count(description) < self._min_words

    def describe(self, candidate: BookCandidate) -> str:
        """Return the candidate's description, or a generated synopsis if it is too short.

        Raises:
            TextBackendError: If the backend fails or returns empty text.
        """
        if not self.needs_synopsis(candidate.description):
            assert candidate.description is not None
            return candidate.description

        logger.info(
            "Description has %d words (< %d), generating synopsis",
            word_count(candidate.description),
            self._min_words,
        )
        prompt = build_synopsis_prompt(format_book_info(candidate), self._target_words)
        synopsis = clean_synopsis(self._backend.generate(prompt))
        if not synopsis:
            raise TextBackendError("Text backend returned an empty synopsis")
        return synopsis
