"""Adapter-specific exceptions."""

from __future__ import annotations

from cinesift.exceptions import CineSiftError


class AdapterError(CineSiftError):
    """Base exception for adapter errors."""


class SearchEngineError(AdapterError):
    """Raised when a round trip to the search engine fails.

    Covers transport failures, timeouts and query syntax rejections.
    Adapters never retry; retry policy belongs to the caller.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConnectionError(SearchEngineError):
    """Raised when the adapter cannot reach the search backend."""


class SearchTimeoutError(SearchEngineError):
    """Raised when the search backend does not answer before the deadline."""


class QueryError(SearchEngineError):
    """Raised when the search backend rejects or fails a query."""


class DocumentNotFoundError(AdapterError):
    """Raised when a requested document does not exist."""


class ConfigurationError(AdapterError):
    """Raised when adapter configuration is invalid."""
