# ABOUTME: Category resolution: asks the text backend to pick 3-5 labels from the Baserow set.
# ABOUTME: Responses naming any label outside the fetched set, or the wrong count, are rejected.

import logging
import re

from wcm.baserow.mapping import CategoryLabel, CategorySet
from wcm.core.record import MAX_CATEGORIES, MIN_CATEGORIES
from wcm.llm.backend import TextBackend
from wcm.metadata.candidate import BookCandidate

logger = logging.getLogger(__name__)

_SPLIT_RE = re.compile(r"[,\n]")
# Leading list markers a model may add: "-", "*", "•", "1.", "2)"
_BULLET_RE = re.compile(r"^(?:[-*•]|\d+[.)])\s*")
_QUOTES = "\"'`"

_PROMPT_TEMPLATE = """You are a librarian helping to categorize books. Based on the book information provided, select {min_count}-{max_count} categories that best describe this book.

BOOK INFORMATION:
{book_info}

AVAILABLE CATEGORIES (you MUST choose ONLY from these exact categories):
{category_list}

INSTRUCTIONS:
1. Select {min_count}-{max_count} categories from the list above that best fit this book
2. Consider genre, subject matter, target audience, and content type
3. Return ONLY the category names, separated by commas
4. Use the exact category names as listed above
5. Do not create new categories or modify existing ones

RESPONSE FORMAT: Category1, Category2, Category3"""


class CategoryResponseError(Exception):
    """Raised when a backend response violates the category contract."""


class CategoryResolutionError(Exception):
    """Raised when no valid category selection could be obtained."""


def format_book_info(candidate: BookCandidate, description: str | None = None) -> str:
    """Render the book facts used in LLM prompts."""
    lines = [f"Title: {candidate.title}", f"Author(s): {candidate.author or 'Unknown'}"]
    if candidate.publisher:
        lines.append(f"Publisher: {candidate.publisher}")
    if candidate.published_date:
        lines.append(f"Published: {candidate.published_date}")
    if candidate.subjects:
        lines.append(f"Subjects: {', '.join(candidate.subjects)}")
    text = description if description is not None else candidate.description
    lines.append(f"Description: {text or 'Not available'}")
    return "\n".join(lines)


def build_category_prompt(book_info: str, categories: CategorySet) -> str:
    """Build the selection prompt embedding the verbatim label names."""
    category_list = "\n".join(f"- {name}" for name in categories.names)
    return _PROMPT_TEMPLATE.format(
        book_info=book_info,
        category_list=category_list,
        min_count=MIN_CATEGORIES,
        max_count=MAX_CATEGORIES,
    )


def _clean(token: str) -> str:
    token = _BULLET_RE.sub("", token.strip())
    return token.strip().strip(_QUOTES).strip()


def parse_category_response(response: str, categories: CategorySet) -> tuple[CategoryLabel, ...]:
    """Parse a comma- or newline-separated label list and validate it.

    Each name must match a label in `categories` exactly. Repeated names
    count once.

    Raises:
        CategoryResponseError: On an unknown label or a count outside 3-5.
    """
    selected: list[CategoryLabel] = []
    unknown: list[str] = []
    for token in _SPLIT_RE.split(response):
        name = _clean(token)
        if not name:
            continue
        label = categories.by_name(name)
        if label is None:
            unknown.append(name)
        elif label not in selected:
            selected.append(label)

    if unknown:
        raise CategoryResponseError(
            f"Response names categories outside the allowed set: {', '.join(unknown)}"
        )
    if not MIN_CATEGORIES <= len(selected) <= MAX_CATEGORIES:
        raise CategoryResponseError(
            f"Expected {MIN_CATEGORIES}-{MAX_CATEGORIES} categories, got {len(selected)}"
        )
    return tuple(selected)


class CategoryResolver:
    """Choose categories for a book with a text backend, constrained to a CategorySet."""

    def __init__(self, backend: TextBackend, *, max_attempts: int = 2) -> None:
        self._backend = backend
        self._max_attempts = max_attempts

    def resolve(
        self, candidate: BookCandidate, categories: CategorySet
    ) -> tuple[CategoryLabel, ...]:
        """Return 3-5 labels from `categories` for the candidate.

        The same prompt is re-sent after an invalid response, up to
        max_attempts calls in total.

        Raises:
            CategoryResolutionError: If the set is empty or every attempt
                produced an invalid response.
            TextBackendError: If the backend call itself fails.
        """
        if len(categories) < MIN_CATEGORIES:
            raise CategoryResolutionError(
                f"Categories table has {len(categories)} usable labels; "
                f"at least {MIN_CATEGORIES} are needed"
            )

        prompt = build_category_prompt(format_book_info(candidate), categories)
        last_error: CategoryResponseError | None = None
        for attempt in range(1, self._max_attempts + 1):
            response = self._backend.generate(prompt)
            try:
                return parse_category_response(response, categories)
            except CategoryResponseError as exc:
                logger.warning(
                    "Invalid category response (attempt %d/%d): %s",
                    attempt,
                    self._max_attempts,
                    exc,
                )
                last_error = exc

        raise CategoryResolutionError(
            f"No valid category selection after {self._max_attempts} attempt(s): {last_error}"
        )
