"""
Search execution module: parallel provider searching and result aggregation.
"""
import asyncio
import logging
from typing import List, Optional, Sequence, Tuple

from ..core.config import SearchConfig
from ..core.error import log_error
from ..models.schema import ProviderOutcome, ResultRecord
from ..retrievers.base import Connector
from ..retrievers.europeana import EuropeanaConnector
from ..retrievers.plos import PLOSConnector
from .ranker import normalize_scores, rank_results

logger = logging.getLogger(__name__)

# Providers searched by default, in declaration order
ALL_PROVIDER_NAMES: List[str] = [
    "europeana",
    "plos",
]


def _get_connector(provider_name: str, config: SearchConfig) -> Optional[Connector]:
    """
    Get connector instance for provider name.

    Returns:
        Connector instance or None if not available
    """
    if provider_name == "europeana":
        return EuropeanaConnector(config)
    elif provider_name == "plos":
        return PLOSConnector(config)
    return None


def build_connectors(config: SearchConfig, provider_names: Optional[Sequence[str]] = None) -> List[Connector]:
    """
    Build the ordered connector list used for every request.

    An explicit empty `provider_names` yields no connectors.
    """
    connectors: List[Connector] = []
    if provider_names is None:
        provider_names = ALL_PROVIDER_NAMES
    for provider_name in provider_names:
        connector = _get_connector(provider_name, config)
        if connector is None:
            logger.warning(f"Connector not available for {provider_name}")
            continue
        connectors.append(connector)
    return connectors


async def _search_single_provider(connector: Connector, query_string: str) -> ProviderOutcome:
    """
    Search a single provider in the default executor.

    Connectors are not supposed to raise; if one does anyway, the exception
    is turned into a Failure for that provider only.
    """
    name = getattr(connector, "name", type(connector).__name__)
    try:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, connector.search, query_string)
    except Exception as e:
        log_error(e, logger, context={"provider": name, "stage": "search"})
        return ProviderOutcome.failure(name, str(e) or type(e).__name__)


async def search_providers_parallel(
    query_string: str,
    connectors: Sequence[Connector],
) -> List[ProviderOutcome]:
    """
    Search every provider concurrently and wait for all of them.

    Returns:
        One outcome per connector, in connector order
    """
    if not connectors:
        return []
    tasks = [_search_single_provider(c, query_string) for c in connectors]
    return list(await asyncio.gather(*tasks))


def merge_outcomes(outcomes: Sequence[ProviderOutcome]) -> List[ResultRecord]:
    """
    Concatenate records of successful outcomes in connector order.
    Failed outcomes were already logged by their connector.
    """
    merged: List[ResultRecord] = []
    for outcome in outcomes:
        if outcome.ok:
            merged.extend(outcome.records)
    return merged


async def aggregate_with_outcomes(
    query_string: str,
    connectors: Sequence[Connector],
) -> Tuple[List[ResultRecord], List[ProviderOutcome]]:
    """
    Fan out, normalize and rank; also return the per-provider outcomes.
    """
    if not query_string:
        logger.info("Final query string is empty, no provider will be contacted.")
        return [], []

    outcomes = await search_providers_parallel(query_string, connectors)
    merged = merge_outcomes(outcomes)
    ranked = rank_results(normalize_scores(merged))

    failed = [o.provider for o in outcomes if not o.ok]
    if failed:
        logger.warning(f"{len(failed)}/{len(outcomes)} providers failed: {', '.join(failed)}")
    return ranked, outcomes


async def aggregate(query_string: str, connectors: Sequence[Connector]) -> List[ResultRecord]:
    """
    Run every connector, then return one list sorted by normalized score.

    Args:
        query_string: Boolean query built from the user's terms
        connectors: Providers to search, in declaration order

    Returns:
        Records from all successful providers; [] if the query is empty
        or every provider failed
    """
    ranked, _outcomes = await aggregate_with_outcomes(query_string, connectors)
    return ranked
