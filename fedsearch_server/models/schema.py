from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TypedDict

from ..core.config import PLACEHOLDER_LINK, PLACEHOLDER_TITLE


class ResultRecord(TypedDict):
    title: str
    source: str
    link: str
    original_relevance_score: float
    normalized_score: Optional[float]


class SearchResponse(TypedDict):
    query: str
    query_used: str
    n_found: int
    by_source: Dict[str, int]
    errors: Dict[str, str]
    results: List[ResultRecord]


@dataclass(frozen=True)
class ProviderOutcome:
    """
    Result of one connector call: Success(records) or Failure(error detail).

    Build instances with :meth:`success` or :meth:`failure`.
    """
    provider: str
    records: List[ResultRecord] = field(default_factory=list)
    error: Optional[str] = None
    status_code: Optional[int] = None
    body: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, provider: str, records: List[ResultRecord]) -> "ProviderOutcome":
        return cls(provider=provider, records=list(records))

    @classmethod
    def failure(
        cls,
        provider: str,
        error: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> "ProviderOutcome":
        return cls(provider=provider, error=error or "unknown error", status_code=status_code, body=body)

    def describe_error(self) -> str:
        """One-line error summary for reports; empty for successes."""
        if self.ok:
            return ""
        if self.status_code is not None:
            return f"HTTP {self.status_code}: {self.error}"
        return self.error or ""


def normalize_record(
    *,
    title: Optional[str] = None,
    source: str,
    link: Optional[str] = None,
    original_relevance_score: float = 0.0,
) -> ResultRecord:
    """
    Build a ResultRecord with placeholders for missing title/link.

    normalized_score stays None until the ranker sets it.
    """
    title = (title or "").strip() if isinstance(title, str) else ""
    link = (link or "").strip() if isinstance(link, str) else ""
    return {
        "title": title or PLACEHOLDER_TITLE,
        "source": source,
        "link": link or PLACEHOLDER_LINK,
        "original_relevance_score": original_relevance_score,
        "normalized_score": None,
    }


def build_response(
    *,
    query: str,
    query_used: str,
    results: List[ResultRecord],
    outcomes: List[ProviderOutcome],
) -> SearchResponse:
    by_source: Dict[str, int] = {}
    errors: Dict[str, str] = {}
    for outcome in outcomes:
        by_source[outcome.provider] = len(outcome.records)
        if not outcome.ok:
            errors[outcome.provider] = outcome.describe_error()
    return {
        "query": query,
        "query_used": query_used,
        "n_found": len(results),
        "by_source": by_source,
        "errors": errors,
        "results": results,
    }


def record_to_dict(record: ResultRecord) -> Dict[str, Any]:
    """Wire form of a record, fields in contract order."""
    return {
        "title": record["title"],
        "source": record["source"],
        "link": record["link"],
        "original_relevance_score": record["original_relevance_score"],
        "normalized_score": record["normalized_score"],
    }
