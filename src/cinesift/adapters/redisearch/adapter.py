"""RediSearch adapter — Executes compiled queries with ``FT.SEARCH``.

Talks to Redis Stack through ``redis.asyncio`` and the search commands
bundled with ``redis-py``. Each call to :meth:`RediSearchAdapter.execute`
is exactly one ``FT.SEARCH <index> <query> LIMIT <offset> <limit>`` round
trip, bounded by a deadline.

Usage::

    adapter = RediSearchAdapter(
        url="redis://localhost:6379",
        index="cinesift.movie-idx",
    )
    await adapter.initialize()
    result = await adapter.execute("@genre:{Drama}", offset=0, limit=20)
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import UTC, datetime
from typing import Any, Literal

import redis.asyncio as aioredis
from redis.commands.search.query import Query
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError, ResponseError
from redis.exceptions import TimeoutError as RedisTimeoutError

from cinesift.adapters.base.adapter import AdapterHealth, Hit, SearchAdapter, SearchResult
from cinesift.adapters.base.exceptions import (
    ConfigurationError,
    ConnectionError,
    DocumentNotFoundError,
    QueryError,
    SearchTimeoutError,
)

logger = logging.getLogger(__name__)

MATCH_ALL = "*"

# Document attributes set by redis-py that are not part of the record
_RESERVED_ATTRS = frozenset({"id", "payload"})


class RediSearchAdapter(SearchAdapter):
    """Search adapter for RediSearch.

    Supports JSON documents (the ``$`` root is returned as one JSON string
    per hit) and hash documents (fields are returned as a mapping).

    Args:
        url: Redis connection URL, e.g. ``"redis://localhost:6379/0"``.
        index: Name of the search index to query.
        storage: ``"json"`` for RedisJSON documents or ``"hash"`` for hashes.
        timeout: Per-call deadline in seconds.
        client: Pre-built ``redis.asyncio.Redis`` client; created from
            ``url`` when omitted.
        **kwargs: Extra keyword arguments passed to ``redis.asyncio.from_url``.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379",
        index: str = "cinesift.movie-idx",
        storage: Literal["json", "hash"] = "json",
        timeout: float = 5.0,
        client: aioredis.Redis | None = None,
        **kwargs: Any,
    ) -> None:
        if storage not in ("json", "hash"):
            raise ConfigurationError(f"Unsupported storage type '{storage}', expected 'json' or 'hash'")
        if timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {timeout}")
        self._url = url
        self._index = index
        self._storage = storage
        self._timeout = timeout
        self._extra_kwargs = kwargs
        self._client: aioredis.Redis | None = client

    @property
    def name(self) -> str:
        return "redisearch"

    @property
    def index(self) -> str:
        return self._index

    async def initialize(self) -> None:
        """Create the Redis client if needed and verify the connection."""
        if self._client is None:
            self._client = aioredis.from_url(self._url, decode_responses=True, **self._extra_kwargs)

        try:
            await asyncio.wait_for(self._client.ping(), timeout=self._timeout)
            logger.info("Connected to RediSearch at %s (index: %s)", self._url, self._index)
        except (RedisError, TimeoutError) as e:
            raise ConnectionError(f"Failed to connect to Redis: {e}", cause=e) from e

    async def shutdown(self) -> None:
        """Close the Redis client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Search ───────────────────────────────────────────────────────────

    async def execute(self, query: str, offset: int, limit: int) -> SearchResult:
        """Run ``FT.SEARCH`` for one offset/limit window.

        An empty query string is sent as ``*`` (match all). Cancelling the
        awaiting task aborts the in-flight call and nothing is returned.
        """
        self.check_window(offset, limit)
        if not self._client:
            raise ConnectionError("RediSearch client not initialized.")

        search_query = Query(query or MATCH_ALL).paging(offset, limit)

        try:
            start = time.monotonic()
            raw = await asyncio.wait_for(
                self._client.ft(self._index).search(search_query),
                timeout=self._timeout,
            )
            took_ms = int((time.monotonic() - start) * 1000)
        except TimeoutError as e:
            raise SearchTimeoutError(
                f"RediSearch query timed out after {self._timeout}s: {query!r}",
                cause=e,
            ) from e
        except RedisTimeoutError as e:
            raise SearchTimeoutError(f"RediSearch query timed out: {e}", cause=e) from e
        except RedisConnectionError as e:
            raise ConnectionError(f"Lost connection to Redis: {e}", cause=e) from e
        except ResponseError as e:
            raise QueryError(f"RediSearch rejected query {query!r}: {e}", cause=e) from e
        except RedisError as e:
            raise QueryError(f"RediSearch query failed: {e}", cause=e) from e

        hits = [self._to_hit(doc) for doc in raw.docs]
        logger.debug("FT.SEARCH %s %r LIMIT %d %d -> %d/%d", self._index, query, offset, limit, len(hits), raw.total)
        return SearchResult(hits=hits, total=max(raw.total, len(hits)), took_ms=took_ms)

    async def fetch_document(self, doc_id: str) -> Hit:
        """Retrieve a single document by its Redis key."""
        if not self._client:
            raise ConnectionError("RediSearch client not initialized.")

        try:
            if self._storage == "json":
                doc = await asyncio.wait_for(self._client.json().get(doc_id), timeout=self._timeout)
            else:
                doc = await asyncio.wait_for(self._client.hgetall(doc_id), timeout=self._timeout)
        except TimeoutError as e:
            raise SearchTimeoutError(f"Fetching '{doc_id}' timed out after {self._timeout}s", cause=e) from e
        except RedisError as e:
            raise QueryError(f"Failed to fetch document from Redis: {e}", cause=e) from e

        if not doc:
            raise DocumentNotFoundError(f"Document '{doc_id}' not found.")
        return Hit(id=doc_id, payload=doc)

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> AdapterHealth:
        """Ping Redis and read the index document count."""
        if not self._client:
            return AdapterHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            await self._client.ping()
            info = await self._client.ft(self._index).info()
            latency_ms = int((time.monotonic() - start) * 1000)
            return AdapterHealth(
                status="healthy",
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Index: {self._index}, docs: {info.get('num_docs', 'unknown')}",
            )
        except ResponseError as e:
            return AdapterHealth(
                status="degraded",
                last_check=datetime.now(UTC).isoformat(),
                message=f"Index '{self._index}' unavailable: {e}",
            )
        except Exception as e:
            return AdapterHealth(status="unhealthy", message=str(e))

    # ── Helpers ──────────────────────────────────────────────────────────

    @staticmethod
    def _to_hit(doc: Any) -> Hit:
        """Convert a ``redis.commands.search.document.Document`` to a :class:`Hit`.

        JSON indexes return the whole record under ``$`` (or ``json`` when
        aliased); hash indexes return one attribute per field.
        """
        fields = {k: v for k, v in vars(doc).items() if k not in _RESERVED_ATTRS}
        for key in ("$", "json"):
            if key in fields:
                return Hit(id=str(doc.id), payload=fields[key])
        return Hit(id=str(doc.id), payload=fields)

