"""
Base connector classes and protocol definitions.
"""
import json
import logging
import math
from typing import Any, Dict, List, Optional, Protocol

import requests

from ..core.config import SearchConfig
from ..core.error import ErrorType, FedSearchError, log_error
from ..models.schema import ProviderOutcome, ResultRecord, normalize_record

logger = logging.getLogger(__name__)

_MAX_BODY_CHARS = 2000


class Connector(Protocol):
    """
    Protocol defining the interface for content provider connectors.
    """
    name: str

    def search(self, query_string: str) -> ProviderOutcome:
        ...


class BaseConnector:
    """
    Base class for connectors with the shared HTTP request/response cycle.

    Subclasses set `name` and `url`, and implement `build_params`,
    `extract_items` and `to_record`.
    """

    name: str = "provider"

    def __init__(self, config: SearchConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        # plain requests.get by default; connectors are shared across requests
        self.session = session or requests

    @property
    def url(self) -> str:
        raise NotImplementedError

    @property
    def timeout(self) -> float:
        return self.config.provider_timeout

    def build_params(self, query_string: str) -> Dict[str, Any]:
        raise NotImplementedError

    def extract_items(self, payload: Any) -> Optional[List[Dict[str, Any]]]:
        """
        Return the raw items of a response, or None when the payload does
        not have the expected shape.
        """
        raise NotImplementedError

    def to_record(self, item: Dict[str, Any]) -> ResultRecord:
        raise NotImplementedError

    @staticmethod
    def _coerce_score(value: Any) -> float:
        """
        Best-effort coercion of a provider score to a non-negative float.

        - None / bool / non-numeric strings -> 0.0
        - negative, NaN or infinite values -> 0.0
        """
        if value is None or isinstance(value, bool):
            return 0.0
        if isinstance(value, (int, float)):
            score = float(value)
        elif isinstance(value, str):
            try:
                score = float(value.strip())
            except ValueError:
                return 0.0
        else:
            return 0.0
        if math.isnan(score) or math.isinf(score) or score < 0:
            return 0.0
        return score

    @staticmethod
    def _first_text(value: Any) -> Optional[str]:
        """Providers send some text fields as a list; take the first string."""
        if isinstance(value, str):
            return value
        if isinstance(value, (list, tuple)):
            for v in value:
                if isinstance(v, str) and v.strip():
                    return v
        return None

    @staticmethod
    def _truncate(text: Optional[str]) -> Optional[str]:
        if text is None:
            return None
        if len(text) > _MAX_BODY_CHARS:
            return text[:_MAX_BODY_CHARS] + "..."
        return text

    def _log_unexpected_payload(self, payload: Any) -> None:
        try:
            dumped = json.dumps(payload, indent=2, ensure_ascii=False)
        except (TypeError, ValueError):
            dumped = repr(payload)
        drift = FedSearchError(
            "unexpected payload, treating as zero results",
            error_type=ErrorType.SCHEMA_DRIFT,
            details={"payload": dumped},
        )
        log_error(drift, logger, context={"provider": self.name, "payload": dumped}, level="WARNING")

    def search(self, query_string: str) -> ProviderOutcome:
        """
        Run one search against the provider.

        Never raises: transport errors and non-2xx responses become a
        Failure outcome, unexpected payloads become an empty Success.
        """
        try:
            resp = self.session.get(self.url, params=self.build_params(query_string), timeout=self.timeout)
        except requests.RequestException as exc:
            log_error(exc, logger, context={"provider": self.name, "stage": "request"})
            return ProviderOutcome.failure(self.name, str(exc))

        if not 200 <= resp.status_code < 300:
            body = self._truncate(resp.text)
            reason = resp.reason or f"HTTP {resp.status_code}"
            log_error(
                requests.HTTPError(f"{resp.status_code} {reason}", response=resp),
                logger,
                context={"provider": self.name, "status": resp.status_code, "body": body},
            )
            return ProviderOutcome.failure(
                self.name,
                reason,
                status_code=resp.status_code,
                body=body,
            )

        try:
            payload = resp.json()
        except ValueError:
            self._log_unexpected_payload(self._truncate(resp.text))
            return ProviderOutcome.success(self.name, [])

        items = self.extract_items(payload)
        if items is None:
            self._log_unexpected_payload(payload)
            return ProviderOutcome.success(self.name, [])

        records: List[ResultRecord] = []
        for item in items:
            if not isinstance(item, dict):
                logger.debug(f"{self.name}: skipping non-object item {item!r}")
                continue
            records.append(self.to_record(item))
        logger.info(f"{self.name} found {len(records)} items.")
        return ProviderOutcome.success(self.name, records)

    def _record(self, *, title: Optional[str], link: Optional[str], score: Any) -> ResultRecord:
        return normalize_record(
            title=title,
            source=self.name,
            link=link,
            original_relevance_score=self._coerce_score(score),
        )
