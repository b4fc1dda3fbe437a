"""
Retrievers module: provider-specific connector implementations.
"""
from .base import BaseConnector, Connector
from .europeana import EuropeanaConnector
from .plos import PLOSConnector

__all__ = [
    "BaseConnector",
    "Connector",
    "EuropeanaConnector",
    "PLOSConnector",
]
