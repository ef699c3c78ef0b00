"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from cinesift import __version__
from cinesift.adapters.base.exceptions import DocumentNotFoundError, SearchEngineError, SearchTimeoutError
from cinesift.api.deps import set_engine
from cinesift.api.v1.router import router as v1_router
from cinesift.config.settings import Settings
from cinesift.core.engine import CineSiftEngine
from cinesift.exceptions import (
    DeserializationError,
    InvalidPaginationError,
    UnknownFieldError,
    UnsupportedCriterionError,
)
from cinesift.observability.logging import setup_logging

logger = logging.getLogger(__name__)

# Starlette resolves handlers along the exception MRO, so subclasses
# listed here take precedence over their bases.
_ERROR_STATUS: dict[type[Exception], int] = {
    UnknownFieldError: 400,
    UnsupportedCriterionError: 400,
    InvalidPaginationError: 400,
    ValidationError: 422,
    DocumentNotFoundError: 404,
    DeserializationError: 500,
    SearchEngineError: 502,
    SearchTimeoutError: 504,
}


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        # Auto-detect cinesift-config.yaml if present
        yaml_path = Path("cinesift-config.yaml")
        if yaml_path.exists():
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    setup_logging(settings.observability)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        logger.info("Starting CineSift v%s", __version__)

        engine = CineSiftEngine(settings)
        await engine.initialize()
        set_engine(engine)

        app.state.settings = settings
        app.state.engine = engine

        logger.info("CineSift is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down CineSift...")
        await engine.shutdown()
        set_engine(None)
        logger.info("CineSift shutdown complete")

    app = FastAPI(
        title="CineSift",
        description=(
            "Movie search over RediSearch — compiles structured filters "
            "(free text, actor/genre sets, numeric ranges) into one query and "
            "returns paginated, typed results."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for exc_type, status_code in _ERROR_STATUS.items():
        app.add_exception_handler(exc_type, _error_handler(status_code))

    app.include_router(v1_router, prefix="/v1")

    return app


def _error_handler(status_code: int) -> Callable[[Request, Exception], JSONResponse]:
    def handler(request: Request, exc: Exception) -> JSONResponse:
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        body: dict[str, object] = {"error": type(exc).__name__, "detail": str(exc)}
        if isinstance(exc, ValidationError):
            body["detail"] = exc.errors(include_url=False, include_context=False, include_input=False)
        if isinstance(exc, DeserializationError):
            body["hit_id"] = exc.hit_id
        return JSONResponse(status_code=status_code, content=body)

    return handler
