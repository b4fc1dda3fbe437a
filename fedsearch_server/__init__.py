"""Federated Search Server - synonym-expanded search across several content providers."""
from .core import (
    ConfigurationError,
    EmptyQueryError,
    SearchConfig,
    SearchPipeline,
    build_query,
    handle_search,
    load_config,
    search_report,
)
from .search import aggregate, build_connectors

__all__ = [
    "ConfigurationError",
    "EmptyQueryError",
    "SearchConfig",
    "SearchPipeline",
    "aggregate",
    "build_connectors",
    "build_query",
    "handle_search",
    "load_config",
    "search_report",
]
