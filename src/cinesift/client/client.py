"""CineSift Python SDK — Async and sync clients for the CineSift REST API.

Usage::

    # Async
    async with AsyncCineSiftClient("http://localhost:8080") as client:
        page = await client.search_by_actors(["Chris Evans", "Scarlett Johansson"])

    # Sync (wraps async client internally)
    client = CineSiftClient("http://localhost:8080")
    page = client.search("Avengers")
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine, Iterable
from typing import Any, TypeVar, cast

import httpx

_T = TypeVar("_T")

# ═══════════════════════════════════════════════════════════════════════════════
# Response types (lightweight dicts — avoids coupling to server models)
# ═══════════════════════════════════════════════════════════════════════════════

MoviePage = dict[str, Any]
"""Page response dict (mirrors ``PageResult[Movie]`` JSON)."""

MovieRecord = dict[str, Any]
"""Single movie dict (mirrors ``Movie`` JSON)."""


# ═══════════════════════════════════════════════════════════════════════════════
# Async client
# ═══════════════════════════════════════════════════════════════════════════════


class AsyncCineSiftClient:
    """Async Python client for the CineSift API.

    Args:
        base_url: CineSift server URL, e.g. ``"http://localhost:8080"``.
        timeout: Request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.

    Example::

        async with AsyncCineSiftClient("http://localhost:8080") as client:
            page = await client.search_by_genres(["Action", "Adventure"], operator="NOT")
            for movie in page["items"]:
                print(movie["title"])
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            **httpx_kwargs,
        )

    async def __aenter__(self) -> AsyncCineSiftClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        resp = await self._client.get(path, params=params)
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    # ── Health ──

    async def health(self) -> dict[str, Any]:
        """Check server health."""
        return await self._get("/v1/health")

    async def adapter_health(self) -> dict[str, Any]:
        """Check adapter health."""
        return await self._get("/v1/health/adapters")

    # ── Movies ──

    async def get_movie(self, movie_id: str) -> MovieRecord:
        """Fetch one movie by id or full key."""
        return await self._get(f"/v1/movies/id/{movie_id}")

    async def search(self, query: str, *, page: int = 0, size: int = 0) -> MoviePage:
        """Free-text search."""
        return await self._get("/v1/movies/search", {"query": query, "page": page, "size": size})

    async def search_by_actors(
        self,
        actors: Iterable[str],
        *,
        operator: str | None = None,
        page: int = 0,
        size: int = 0,
    ) -> MoviePage:
        """Movies featuring the given actors (``operator``: AND, OR or NOT)."""
        params: dict[str, Any] = {"actors": ",".join(actors), "page": page, "size": size}
        if operator:
            params["operator"] = operator
        return await self._get("/v1/movies/actors", params)

    async def search_by_genres(
        self,
        genres: Iterable[str],
        *,
        operator: str | None = None,
        page: int = 0,
        size: int = 0,
    ) -> MoviePage:
        """Movies in the given genres (``operator``: AND, OR or NOT)."""
        params: dict[str, Any] = {"genres": ",".join(genres), "page": page, "size": size}
        if operator:
            params["operator"] = operator
        return await self._get("/v1/movies/genre", params)

    async def search_by_year(self, year: int, *, page: int = 0, size: int = 0) -> MoviePage:
        """Movies released in ``year``."""
        return await self._get(f"/v1/movies/year/{year}", {"page": page, "size": size})

    async def search_by_year_between(self, lower: int, upper: int, *, page: int = 0, size: int = 0) -> MoviePage:
        """Movies released between ``lower`` and ``upper``."""
        return await self._get(f"/v1/movies/years/{lower}/{upper}", {"page": page, "size": size})

    async def advanced_search(self, query_filter: dict[str, Any], *, page: int = 0, size: int = 0) -> MoviePage:
        """Advanced search with a ``MovieQueryFilter`` body (camelCase keys).

        Args:
            query_filter: Filter body, e.g.
                ``{"genericCriteria": "Avengers", "actors": "Chris Evans", "releaseYearGTE": 2005}``.
        """
        resp = await self._client.post(
            "/v1/movies/advanced/search",
            json=query_filter,
            params={"page": page, "size": size},
        )
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())


# ═══════════════════════════════════════════════════════════════════════════════
# Sync client (wraps AsyncCineSiftClient)
# ═══════════════════════════════════════════════════════════════════════════════


class CineSiftClient:
    """Synchronous Python client for the CineSift API.

    Wraps :class:`AsyncCineSiftClient` using ``asyncio.run``; every call
    opens and closes its own connection.

    Args:
        base_url: CineSift server URL.
        timeout: Request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._httpx_kwargs = httpx_kwargs

    def _run(self, coro: Coroutine[Any, Any, _T]) -> _T:
        """Run an async coroutine synchronously."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop and loop.is_running():
            # Already inside an event loop (e.g. Jupyter): run in a worker thread
            import concurrent.futures

            with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
                return pool.submit(asyncio.run, coro).result()
        return asyncio.run(coro)

    def _make_client(self) -> AsyncCineSiftClient:
        return AsyncCineSiftClient(
            self._base_url,
            timeout=self._timeout,
            **self._httpx_kwargs,
        )

    def _call(self, method: str, *args: Any, **kwargs: Any) -> Any:
        async def _invoke() -> Any:
            async with self._make_client() as c:
                return await getattr(c, method)(*args, **kwargs)

        return self._run(_invoke())

    def health(self) -> dict[str, Any]:
        """Check server health."""
        return cast(dict[str, Any], self._call("health"))

    def adapter_health(self) -> dict[str, Any]:
        """Check adapter health."""
        return cast(dict[str, Any], self._call("adapter_health"))

    def get_movie(self, movie_id: str) -> MovieRecord:
        """Fetch one movie by id or full key."""
        return cast(MovieRecord, self._call("get_movie", movie_id))

    def search(self, query: str, *, page: int = 0, size: int = 0) -> MoviePage:
        """Free-text search."""
        return cast(MoviePage, self._call("search", query, page=page, size=size))

    def search_by_actors(
        self, actors: Iterable[str], *, operator: str | None = None, page: int = 0, size: int = 0
    ) -> MoviePage:
        """Movies featuring the given actors."""
        return cast(MoviePage, self._call("search_by_actors", list(actors), operator=operator, page=page, size=size))

    def search_by_genres(
        self, genres: Iterable[str], *, operator: str | None = None, page: int = 0, size: int = 0
    ) -> MoviePage:
        """Movies in the given genres."""
        return cast(MoviePage, self._call("search_by_genres", list(genres), operator=operator, page=page, size=size))

    def search_by_year(self, year: int, *, page: int = 0, size: int = 0) -> MoviePage:
        """Movies released in ``year``."""
        return cast(MoviePage, self._call("search_by_year", year, page=page, size=size))

    def search_by_year_between(self, lower: int, upper: int, *, page: int = 0, size: int = 0) -> MoviePage:
        """Movies released between ``lower`` and ``upper``."""
        return cast(MoviePage, self._call("search_by_year_between", lower, upper, page=page, size=size))

    def advanced_search(self, query_filter: dict[str, Any], *, page: int = 0, size: int = 0) -> MoviePage:
        """Advanced search with a ``MovieQueryFilter`` body."""
        return cast(MoviePage, self._call("advanced_search", query_filter, page=page, size=size))
