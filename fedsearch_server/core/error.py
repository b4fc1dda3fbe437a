"""
Error management module.
"""
import logging
import traceback
from enum import Enum
from typing import Any, Dict, Optional

import requests


class ErrorType(Enum):
    """Error classification types."""
    INVALID_QUERY = "invalid_query"
    NETWORK_ERROR = "network_error"
    HTTP_ERROR = "http_error"
    SCHEMA_DRIFT = "schema_drift"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class FedSearchError(Exception):
    """Base exception for federated search errors."""

    def __init__(self, message: str, error_type: ErrorType = ErrorType.UNKNOWN, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error_type": self.error_type.value,
            "message": str(self),
            "details": self.details,
        }


class EmptyQueryError(FedSearchError):
    """Raised when the caller supplies no query at all."""

    def __init__(self, message: str = "empty query", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_type=ErrorType.INVALID_QUERY, details=details)


class ConfigurationError(FedSearchError):
    """Raised at startup when mandatory settings are missing or malformed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_type=ErrorType.CONFIGURATION, details=details)


def classify_error(error: Exception) -> ErrorType:
    """
    Classify error type from exception.

    Args:
        error: Exception instance

    Returns:
        ErrorType enum value
    """
    if isinstance(error, FedSearchError):
        return error.error_type

    if isinstance(error, requests.HTTPError):
        return ErrorType.HTTP_ERROR

    if isinstance(error, (requests.ConnectionError, requests.Timeout)):
        return ErrorType.NETWORK_ERROR

    # requests' JSONDecodeError is both a RequestException and a ValueError
    if isinstance(error, (ValueError, KeyError, TypeError)):
        return ErrorType.SCHEMA_DRIFT

    if isinstance(error, requests.RequestException):
        return ErrorType.NETWORK_ERROR

    return ErrorType.UNKNOWN


def log_error(
    error: Exception,
    logger: Optional[logging.Logger] = None,
    context: Optional[Dict[str, Any]] = None,
    level: str = "ERROR",
) -> Dict[str, Any]:
    """
    Log error with context and return error info.

    Args:
        error: Exception instance
        logger: Logger instance (if None, uses the package logger)
        context: Additional context information
        level: Logging level

    Returns:
        Dictionary with error information
    """
    if logger is None:
        logger = logging.getLogger("fedsearch_server")

    error_type = classify_error(error)
    error_info = {
        "error_type": error_type.value,
        "error_class": type(error).__name__,
        "message": str(error),
        "context": context or {},
    }

    message = f"[{error_type.value}] {type(error).__name__}: {error}"
    if context:
        message += " (" + ", ".join(f"{k}={v!r}" for k, v in context.items()) + ")"

    log_method = getattr(logger, level.lower(), logger.error)
    log_method(message, extra={"error_info": error_info, "context": context})

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Traceback:\n{traceback.format_exc()}")

    return error_info
