# ABOUTME: The add-book pipeline: lookup, selection, categories, synopsis, confirmation, write.
# ABOUTME: Interactive steps are injected as callables so the sequence is testable without a terminal.

import logging
from collections.abc import Callable
from dataclasses import dataclass

from wcm.baserow.client import BaserowClient
from wcm.core.categories import CategoryResolver
from wcm.core.record import MediaRecord, MediaType, compose_record
from wcm.core.synopsis import SynopsisGenerator
from wcm.core.writer import DestinationWriter, WriteResult
from wcm.metadata.aggregator import BookSourceAggregator
from wcm.metadata.candidate import BookCandidate
from wcm.metadata.types import SearchQuery

logger = logging.getLogger(__name__)

SelectFn = Callable[[list[BookCandidate]], BookCandidate]
ConfirmFn = Callable[[MediaRecord], bool]


@dataclass
class AddResult:
    """Outcome of one add-book invocation.

    write_result is None when the user declined at the confirmation gate.
    """

    record: MediaRecord
    write_result: WriteResult | None

    @property
    def added(self) -> bool:
        return self.write_result is not None


class AddBookPipeline:
    """Run the add-book steps in order, one call at a time.

    Any exception from a step ends the run; nothing is written unless
    confirm_fn returns True.
    """

    def __init__(
        self,
        *,
        aggregator: BookSourceAggregator,
        baserow: BaserowClient,
        category_resolver: CategoryResolver,
        synopsis_generator: SynopsisGenerator,
        writer: DestinationWriter,
        select_fn: SelectFn,
        confirm_fn: ConfirmFn,
    ) -> None:
        self._aggregator = aggregator
        self._baserow = baserow
        self._categories = category_resolver
        self._synopsis = synopsis_generator
        self._writer = writer
        self._select = select_fn
        self._confirm = confirm_fn

    def run(self, query: SearchQuery, media_type: MediaType) -> AddResult:
        logger.info("Looking up %s", query.describe())
        candidates = self._aggregator.find(query)
        candidate = candidates[0] if len(candidates) == 1 else self._select(candidates)

        candidate = self._aggregator.enrich(candidate)

        category_set = self._baserow.fetch_categories()
        categories = self._categories.resolve(candidate, category_set)
        logger.info("Selected categories: %s", ", ".join(c.name for c in categories))

        description = self._synopsis.describe(candidate)

        record = compose_record(candidate, categories, description, media_type)
        if not self._confirm(record):
            logger.info("User declined; nothing written")
            return AddResult(record=record, write_result=None)

        return AddResult(record=record, write_result=self._writer.write(record))
