"""Search module: parallel provider search, normalization and ranking."""
from .ranker import max_score, normalize_scores, rank_results
from .searcher import (
    ALL_PROVIDER_NAMES,
    aggregate,
    aggregate_with_outcomes,
    build_connectors,
    merge_outcomes,
    search_providers_parallel,
)

__all__ = [
    "ALL_PROVIDER_NAMES",
    "aggregate",
    "aggregate_with_outcomes",
    "build_connectors",
    "merge_outcomes",
    "search_providers_parallel",
    "max_score",
    "normalize_scores",
    "rank_results",
]
