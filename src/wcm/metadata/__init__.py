# ABOUTME: Book metadata package: search queries, candidates, sources, and the aggregator.
# ABOUTME: Exports the types that flow from the CLI input to the ambiguity resolver.

from wcm.metadata.aggregator import BookSourceAggregator, NoBookDataError
from wcm.metadata.candidate import BookCandidate, Provenance
from wcm.metadata.provider import BookSource, SourceUnavailableError
from wcm.metadata.types import InvalidQueryError, SearchQuery

__all__ = [
    "BookCandidate",
    "BookSource",
    "BookSourceAggregator",
    "InvalidQueryError",
    "NoBookDataError",
    "Provenance",
    "SearchQuery",
    "SourceUnavailableError",
]
