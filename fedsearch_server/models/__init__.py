"""Models module: data schemas and types."""
from .schema import (
    ProviderOutcome,
    ResultRecord,
    SearchResponse,
    build_response,
    normalize_record,
    record_to_dict,
)

__all__ = [
    "ProviderOutcome",
    "ResultRecord",
    "SearchResponse",
    "build_response",
    "normalize_record",
    "record_to_dict",
]
