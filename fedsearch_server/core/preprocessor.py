"""
Preprocessing module: term splitting, synonym expansion, and boolean query construction.
"""
import asyncio
import logging
from typing import Callable, Iterable, List, Optional

from .config import SearchConfig, load_config
from .error import log_error
from .lexicon_client import expand_term

logger = logging.getLogger(__name__)

# expander(term, config) -> synonyms; blocking, run in the default executor
Expander = Callable[[str, SearchConfig], List[str]]


def split_terms(raw_query: str) -> List[str]:
    """Split on any whitespace, dropping empty tokens."""
    if not raw_query:
        return []
    return raw_query.split()


def _dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            out.append(item)
    return out


def build_query_group(term: str, synonyms: Optional[Iterable[str]] = None) -> str:
    """
    Render one term group.

    Returns the bare term when it has no distinct synonyms, otherwise
    `(term OR syn1 OR syn2 ...)` in first-seen order.
    """
    members = _dedupe([term, *(synonyms or [])])
    if len(members) > 1:
        return f"({' OR '.join(members)})"
    return term


def build_query_string(terms: List[str], expansions: List[List[str]]) -> str:
    """
    Join the groups of every term with AND, keeping term order.

    Args:
        terms: Terms in query order
        expansions: Synonyms per term, aligned with `terms`

    Returns:
        Boolean query string, or "" when there are no terms
    """
    if len(expansions) != len(terms):
        raise ValueError(f"got {len(expansions)} expansions for {len(terms)} terms")
    groups = [build_query_group(term, synonyms) for term, synonyms in zip(terms, expansions)]
    return " AND ".join(groups)


async def _expand_single_term(term: str, expander: Expander, config: SearchConfig) -> List[str]:
    try:
        loop = asyncio.get_running_loop()
        synonyms = await loop.run_in_executor(None, expander, term, config)
        return list(synonyms or [])
    except Exception as e:
        log_error(e, logger, context={"term": term, "stage": "expansion"}, level="WARNING")
        return []


async def expand_terms(
    terms: List[str],
    expander: Optional[Expander] = None,
    config: Optional[SearchConfig] = None,
) -> List[List[str]]:
    """
    Expand all terms concurrently and wait for every one of them.

    When `config` is None the settings are loaded from the environment.

    Returns:
        Synonym lists aligned with `terms`; a failed term maps to []

    Raises:
        ConfigurationError: if `config` is None and the environment is incomplete
    """
    if not terms:
        return []
    if config is None:
        config = load_config()
    expander = expander or expand_term
    tasks = [_expand_single_term(term, expander, config) for term in terms]
    return list(await asyncio.gather(*tasks))


async def build_query(
    raw_query: str,
    expander: Optional[Expander] = None,
    config: Optional[SearchConfig] = None,
) -> str:
    """
    Turn a raw user query into the boolean query sent to providers.

    Example:
        "cat dog" with {"cat": ["feline"], "dog": []} -> "(cat OR feline) AND dog"
    """
    terms = split_terms(raw_query)
    if not terms:
        return ""
    expansions = await expand_terms(terms, expander, config)
    return build_query_string(terms, expansions)
