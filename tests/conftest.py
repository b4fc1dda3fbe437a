import json
from typing import Any, Dict, List, Optional

import pytest
import requests

from fedsearch_server.core.config import SearchConfig
from fedsearch_server.models.schema import ProviderOutcome, normalize_record


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload: Any = None, status_code: int = 200, text: Optional[str] = None, reason: str = ""):
        self._payload = payload
        self.status_code = status_code
        self.reason = reason or ("OK" if status_code < 400 else "Error")
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} {self.reason}", response=self)


class FakeSession:
    """Records GET calls and replays a response or raises an exception."""

    def __init__(self, response: Any):
        self.response = response
        self.calls: List[Dict[str, Any]] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class FakeConnector:
    """Connector returning a fixed outcome; counts calls."""

    def __init__(self, name: str, scores: Optional[List[float]] = None, outcome: Optional[ProviderOutcome] = None):
        self.name = name
        self.calls: List[str] = []
        if outcome is None:
            records = [
                normalize_record(
                    title=f"{name}-{i}",
                    source=name,
                    link=f"https://example.org/{name}/{i}",
                    original_relevance_score=s,
                )
                for i, s in enumerate(scores or [])
            ]
            outcome = ProviderOutcome.success(name, records)
        self.outcome = outcome

    def search(self, query_string: str) -> ProviderOutcome:
        self.calls.append(query_string)
        return self.outcome


class FailingConnector(FakeConnector):
    def __init__(self, name: str, status_code: Optional[int] = 503):
        super().__init__(
            name,
            outcome=ProviderOutcome.failure(name, "Service Unavailable", status_code=status_code, body="down"),
        )


class RaisingConnector(FakeConnector):
    def search(self, query_string: str) -> ProviderOutcome:
        self.calls.append(query_string)
        raise RuntimeError("connector bug")


def make_expander(table: Dict[str, List[str]]):
    calls: List[str] = []

    def expander(term: str, config: SearchConfig) -> List[str]:
        calls.append(term)
        return table.get(term, [])

    expander.calls = calls
    return expander


@pytest.fixture
def config() -> SearchConfig:
    return SearchConfig(
        europeana_api_key="test-key",
        datamuse_url="https://datamuse.test/words",
        europeana_url="https://europeana.test/search.json",
        plos_url="https://plos.test/search",
        expansion_timeout=2.0,
        provider_timeout=3.0,
    )
