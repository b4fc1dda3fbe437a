"""Core module: configuration, logging, errors, query building, and the request pipeline."""
from .config import (
    DATAMUSE_API_URL,
    EUROPEANA_API_URL,
    PLACEHOLDER_LINK,
    PLACEHOLDER_TITLE,
    PLOS_API_URL,
    SearchConfig,
    load_config,
    load_env,
)
from .error import (
    ConfigurationError,
    EmptyQueryError,
    ErrorType,
    FedSearchError,
    classify_error,
    log_error,
)
from .logger import dated_log_file, setup_logger
from .lexicon_client import expand_term
from .preprocessor import (
    build_query,
    build_query_group,
    build_query_string,
    expand_terms,
    split_terms,
)
from .pipeline import SearchPipeline, expand_query, handle_search, search_report

__all__ = [
    # Config
    "DATAMUSE_API_URL",
    "EUROPEANA_API_URL",
    "PLOS_API_URL",
    "PLACEHOLDER_LINK",
    "PLACEHOLDER_TITLE",
    "SearchConfig",
    "load_config",
    "load_env",
    # Error handling
    "ConfigurationError",
    "EmptyQueryError",
    "ErrorType",
    "FedSearchError",
    "classify_error",
    "log_error",
    # Logging
    "dated_log_file",
    "setup_logger",
    # Query building
    "expand_term",
    "build_query",
    "build_query_group",
    "build_query_string",
    "expand_terms",
    "split_terms",
    # Pipeline
    "SearchPipeline",
    "expand_query",
    "handle_search",
    "search_report",
]
