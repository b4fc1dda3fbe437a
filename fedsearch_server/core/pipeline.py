"""
Request pipeline: query building, federated search, and ranking for one query.

Flow:
1. Split the raw query into terms
2. Expand every term concurrently and build the boolean query string
3. Search every provider concurrently
4. Normalize scores and sort
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import SearchConfig, load_config
from .error import EmptyQueryError
from .preprocessor import Expander, build_query_string, expand_terms, split_terms
from ..models.schema import ProviderOutcome, ResultRecord, SearchResponse, build_response
from ..retrievers.base import Connector
from ..search.searcher import aggregate_with_outcomes, build_connectors

logger = logging.getLogger(__name__)


def _check_query(raw_query: Optional[str]) -> str:
    if raw_query is None or raw_query == "":
        raise EmptyQueryError()
    return raw_query


async def expand_query(
    raw_query: str,
    *,
    config: SearchConfig,
    expander: Optional[Expander] = None,
) -> Dict[str, Any]:
    """
    Phase 1 only: terms, their synonyms, and the resulting query string.
    """
    terms = split_terms(raw_query)
    expansions = await expand_terms(terms, expander, config)
    return {
        "query": raw_query,
        "terms": terms,
        "expansions": dict(zip(terms, expansions)),
        "query_string": build_query_string(terms, expansions),
    }


class SearchPipeline:
    """
    Query pipeline bound to one configuration and one connector list.

    Built once at startup; every request reuses the same settings and
    connectors.
    """

    def __init__(
        self,
        config: SearchConfig,
        connectors: Optional[Sequence[Connector]] = None,
        expander: Optional[Expander] = None,
    ) -> None:
        self.config = config
        if connectors is None:
            connectors = build_connectors(config)
        self.connectors: Tuple[Connector, ...] = tuple(connectors)
        self.expander = expander

    @classmethod
    def from_env(cls, expander: Optional[Expander] = None) -> "SearchPipeline":
        """
        Build a pipeline from environment settings.

        Raises:
            ConfigurationError: if the environment is incomplete
        """
        return cls(load_config(), expander=expander)

    async def expand_query(self, raw_query: str) -> Dict[str, Any]:
        return await expand_query(raw_query, config=self.config, expander=self.expander)

    async def _run(self, raw_query: Optional[str]) -> Tuple[str, List[ResultRecord], List[ProviderOutcome]]:
        raw_query = _check_query(raw_query)
        expanded = await self.expand_query(raw_query)
        query_string = expanded["query_string"]
        if not query_string:
            logger.info("Final query string is empty. No provider requests will be made.")
            return "", [], []

        logger.info(f'Original query: "{raw_query}"')
        logger.info(f'Final query string for providers: "{query_string}"')

        ranked, outcomes = await aggregate_with_outcomes(query_string, self.connectors)
        logger.info(f"Returning {len(ranked)} results from {len(outcomes)} providers")
        return query_string, ranked, outcomes

    async def handle_search(self, raw_query: Optional[str]) -> List[ResultRecord]:
        """
        Answer one query with a single ranked list across all providers.

        Returns:
            Records sorted by normalized_score, possibly empty

        Raises:
            EmptyQueryError: if raw_query is None or ""
        """
        _query_string, ranked, _outcomes = await self._run(raw_query)
        return ranked

    async def search_report(self, raw_query: Optional[str]) -> SearchResponse:
        """
        Same as handle_search, plus the query string used, per-provider hit
        counts and per-provider errors.
        """
        query_string, ranked, outcomes = await self._run(raw_query)
        return build_response(
            query=raw_query,
            query_used=query_string,
            results=ranked,
            outcomes=outcomes,
        )


async def handle_search(
    raw_query: Optional[str],
    *,
    config: SearchConfig,
    connectors: Optional[Sequence[Connector]] = None,
    expander: Optional[Expander] = None,
) -> List[ResultRecord]:
    """
    One-off form of SearchPipeline.handle_search.

    Args:
        raw_query: The user's query text
        config: Startup configuration
        connectors: Providers to search (Europeana and PLOS if None)
        expander: Synonym lookup (DataMuse if None)
    """
    return await SearchPipeline(config, connectors, expander).handle_search(raw_query)


async def search_report(
    raw_query: Optional[str],
    *,
    config: SearchConfig,
    connectors: Optional[Sequence[Connector]] = None,
    expander: Optional[Expander] = None,
) -> SearchResponse:
    """One-off form of SearchPipeline.search_report."""
    return await SearchPipeline(config, connectors, expander).search_report(raw_query)
