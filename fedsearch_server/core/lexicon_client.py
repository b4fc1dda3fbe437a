import logging
from typing import Any, List, Optional

import requests

from .config import SearchConfig
from .error import ErrorType, FedSearchError, log_error

logger = logging.getLogger(__name__)


def _words_from_payload(payload: Any) -> List[str]:
    """
    Pull the `word` fields out of a DataMuse response, keeping service order.
    """
    if not isinstance(payload, list):
        raise FedSearchError(
            f"expected a list of words, got {type(payload).__name__}",
            error_type=ErrorType.SCHEMA_DRIFT,
        )
    seen = set()
    words: List[str] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        word = item.get("word")
        if not isinstance(word, str):
            continue
        word = word.strip()
        if word and word not in seen:
            seen.add(word)
            words.append(word)
    return words


def expand_term(term: str, config: SearchConfig, session: Optional[requests.Session] = None) -> List[str]:
    """
    Ask DataMuse for words meaning the same as `term` ("ml" query).

    Returns at most `config.datamuse_max` words. Any failure (network,
    timeout, HTTP status, bad payload) is logged and yields an empty list;
    this function never raises and never retries.
    """
    http = session or requests
    params = {"ml": term, "max": config.datamuse_max}
    try:
        resp = http.get(config.datamuse_url, params=params, timeout=config.expansion_timeout)
        resp.raise_for_status()
        words = _words_from_payload(resp.json())
    except (requests.RequestException, ValueError, FedSearchError) as exc:
        log_error(exc, logger, context={"term": term, "stage": "expansion"}, level="WARNING")
        return []
    return words[: config.datamuse_max]
