"""Base search adapter — Abstract interface for search engine connectors.

A search backend must implement this interface to serve compiled queries.
The adapter is responsible for:
  1. Executing a compiled query with an offset/limit window
  2. Fetching individual documents by key
  3. Reporting health status

Materializing payloads into typed records is not the adapter's job; it
returns raw hits and leaves conversion to the result materializer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field, model_validator


class AdapterHealth(BaseModel):
    """Health status of a search adapter."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class Hit(BaseModel):
    """One raw record returned by the search engine."""

    id: str = Field(description="Document key in the engine")
    payload: str | bytes | dict[str, Any] = Field(description="Serialized record (JSON text, bytes or mapping)")


class SearchResult(BaseModel):
    """Raw hits for one query window plus the total match count.

    ``hits`` is truncated to the requested window and keeps the engine's
    order; ``total`` counts every match.
    """

    hits: list[Hit] = Field(default_factory=list, description="Hits in engine order")
    total: int = Field(default=0, ge=0, description="Total number of matching documents")
    took_ms: int = Field(default=0, description="Round-trip time in ms")

    @model_validator(mode="after")
    def _total_covers_hits(self) -> SearchResult:
        if self.total < len(self.hits):
            raise ValueError(f"total ({self.total}) is smaller than the number of hits ({len(self.hits)})")
        return self


class SearchAdapter(ABC):
    """Abstract base class for search engine adapters.

    All adapters must implement:
      - execute(): Run a compiled query over an offset/limit window
      - fetch_document(): Retrieve a single document by key
      - health_check(): Report adapter health status

    Adapters hold no per-request state and may serve concurrent calls.
    Connections are created in ``initialize()`` and released in
    ``shutdown()``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique adapter name (e.g., 'redisearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the adapter (connections, pools, etc.).

        Called once during application startup.
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Gracefully shut down the adapter and release its connections."""

    @abstractmethod
    async def execute(self, query: str, offset: int, limit: int) -> SearchResult:
        """Execute a compiled query against the backend.

        Issues exactly one round trip and never retries.

        Args:
            query: Compiled query string. ``""`` matches every document.
            offset: Number of matches to skip (``>= 0``).
            limit: Maximum number of hits to return (``> 0``).

        Returns:
            The raw hits for the window and the total match count.

        Raises:
            ValueError: If ``offset`` or ``limit`` is out of range.
            SearchEngineError: On transport failure, timeout or query rejection.
        """

    @abstractmethod
    async def fetch_document(self, doc_id: str) -> Hit:
        """Retrieve a single document by its key.

        Raises:
            DocumentNotFoundError: If the document does not exist.
            SearchEngineError: On transport failure.
        """

    @abstractmethod
    async def health_check(self) -> AdapterHealth:
        """Check the health of the search backend."""

    @staticmethod
    def check_window(offset: int, limit: int) -> None:
        """Validate an offset/limit window before a round trip."""
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        if limit <= 0:
            raise ValueError(f"limit must be > 0, got {limit}")
