"""CineSift Engine — Orchestrates one search from criteria to page.

Pipeline:
  FilterCriteria → [QueryCompiler] → query string
                 → [Pager]         → offset / limit
                 → [SearchAdapter] → raw hits + total
                 → [Materializer]  → Movie records
                 → [Pager]         → PageResult[Movie]

The engine owns its collaborators and wires them explicitly from
settings; it holds no per-request state.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import TYPE_CHECKING

from cinesift.adapters.base.adapter import SearchAdapter
from cinesift.adapters.base.exceptions import ConnectionError
from cinesift.adapters.base.registry import AdapterNotFoundError, AdapterRegistry
from cinesift.core.materializer import ResultMaterializer
from cinesift.core.pager import Pager
from cinesift.models.criteria import FilterCriteria, Operator, RangeCriterion, SetCriterion
from cinesift.models.filter import MovieQueryFilter
from cinesift.models.movie import Movie
from cinesift.models.page import PageRequest, PageResult
from cinesift.query.compiler import QueryCompiler
from cinesift.query.registry import FieldRegistry

if TYPE_CHECKING:
    from cinesift.config.settings import Settings

logger = logging.getLogger(__name__)

ADAPTER_NAME = "redisearch"


class CineSiftEngine:
    """Core orchestrator for movie searches.

    Attributes:
        settings: Application configuration.
        registry: Field registry shared by every compilation.
        compiler: Criteria-to-query compiler.
        pager: Page normalization and assembly.
        materializer: Hit-to-``Movie`` conversion.
        adapter_registry: Registry of search adapters.
    """

    def __init__(self, settings: Settings, registry: FieldRegistry | None = None) -> None:
        self.settings = settings
        self.registry = registry or FieldRegistry.movies()
        self.compiler = QueryCompiler(
            self.registry,
            bounded_upper_first=settings.query.bounded_upper_first,
        )
        self.pager = Pager(
            default_size=settings.pagination.default_size,
            max_size=settings.pagination.max_size,
        )
        self.materializer: ResultMaterializer[Movie] = ResultMaterializer(Movie, id_field="movieId")
        self.adapter_registry = AdapterRegistry()

    async def initialize(self) -> None:
        """Register and connect the RediSearch adapter.

        A connection failure is logged and leaves the engine without an
        adapter; searches then fail with ``ConnectionError`` until restart.
        """
        redis_cfg = self.settings.redis
        if not redis_cfg.enabled:
            logger.info("RediSearch adapter is disabled, skipping")
            return

        try:
            await self.adapter_registry.connect(
                ADAPTER_NAME,
                url=redis_cfg.url,
                index=redis_cfg.index,
                storage=redis_cfg.storage,
                timeout=redis_cfg.timeout,
            )
        except Exception:
            logger.warning("Failed to initialise adapter '%s'", ADAPTER_NAME, exc_info=True)

        logger.info("CineSift engine initialized")

    async def shutdown(self) -> None:
        """Gracefully shut down all components."""
        await self.adapter_registry.close()
        logger.info("CineSift engine shut down")

    @property
    def adapter(self) -> SearchAdapter:
        try:
            return self.adapter_registry.get(ADAPTER_NAME)
        except AdapterNotFoundError as e:
            raise ConnectionError(f"Search adapter '{ADAPTER_NAME}' is not available", cause=e) from e

    # ──────────────────────────────────────────────────────────────────────
    # Pipeline
    # ──────────────────────────────────────────────────────────────────────

    async def search(self, criteria: FilterCriteria, page_request: PageRequest) -> PageResult[Movie]:
        """Compile, execute and materialize one page of results.

        Raises:
            UnknownFieldError: If a criterion names an unregistered field.
            UnsupportedCriterionError: If a criterion does not fit its field.
            SearchEngineError: If the engine round trip fails.
            DeserializationError: If any hit on the page is malformed.
        """
        query = self.compiler.compile(criteria)
        logger.info("Using query string: '%s'", query)

        start = time.monotonic()
        result = await self.adapter.execute(query, page_request.offset, page_request.size)
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info("RediSearch query took %d ms (engine %d ms)", elapsed_ms, result.took_ms)

        movies = self.materializer.materialize(result.hits)
        logger.info("Found %d movies, returning %d", result.total, len(movies))
        return self.pager.assemble(movies, page_request, result.total)

    async def advanced_search(self, query_filter: MovieQueryFilter, page: int, size: int) -> PageResult[Movie]:
        """Search with an advanced filter body."""
        logger.info("Using movie filter: %s", query_filter.model_dump(exclude_none=True))
        return await self.search(query_filter.to_criteria(), self.pager.request(page, size))

    async def search_by_collection(
        self,
        field: str,
        values: Iterable[str],
        operator: Operator,
        page: int,
        size: int,
    ) -> PageResult[Movie]:
        """Search one set-valued field, e.g. movies with all of several actors."""
        criterion = SetCriterion(field=field, values=list(values), operator=operator)
        logger.info(
            "Searching for movies by %s (%s): %s",
            field,
            operator.value,
            sorted(criterion.values),
        )
        return await self.search(FilterCriteria(sets=[criterion]), self.pager.request(page, size))

    async def search_text(self, query: str, page: int, size: int) -> PageResult[Movie]:
        """Free-text relevance search."""
        logger.info("Searching for movies by generic criteria: '%s'", query)
        return await self.search(FilterCriteria(text=query), self.pager.request(page, size))

    async def search_by_year(self, year: int, page: int, size: int) -> PageResult[Movie]:
        """Movies released in exactly ``year``."""
        logger.info("Searching for movies by year: %d", year)
        criteria = FilterCriteria(ranges=[RangeCriterion(field="year", lower=year, upper=year)])
        return await self.search(criteria, self.pager.request(page, size))

    async def search_by_year_between(self, lower: int, upper: int, page: int, size: int) -> PageResult[Movie]:
        """Movies released between ``lower`` and ``upper``."""
        logger.info("Searching for movies released between %d and %d", lower, upper)
        criteria = FilterCriteria(ranges=[RangeCriterion(field="year", lower=lower, upper=upper)])
        return await self.search(criteria, self.pager.request(page, size))

    # ──────────────────────────────────────────────────────────────────────
    # Single document
    # ──────────────────────────────────────────────────────────────────────

    def movie_key(self, movie_id: str) -> str:
        """Qualify ``movie_id`` with the key prefix unless it already carries it."""
        prefix = self.settings.redis.key_prefix
        if prefix and prefix.lower() not in movie_id.lower():
            return f"{prefix}{movie_id}"
        return movie_id

    async def get_movie(self, movie_id: str) -> Movie:
        """Fetch one movie by id or full key.

        Raises:
            DocumentNotFoundError: If no document exists under the key.
            DeserializationError: If the stored document is malformed.
        """
        hit = await self.adapter.fetch_document(self.movie_key(movie_id))
        return self.materializer.materialize_one(hit)
