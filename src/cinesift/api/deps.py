"""API dependencies — Engine access and shared query parameters."""

from __future__ import annotations

from typing import NamedTuple

from fastapi import Query

from cinesift.core.engine import CineSiftEngine
from cinesift.models.criteria import Operator

# Set during application lifespan
_engine: CineSiftEngine | None = None


def set_engine(engine: CineSiftEngine | None) -> None:
    global _engine
    _engine = engine


def get_engine() -> CineSiftEngine:
    """Return the running engine.

    Raises:
        RuntimeError: If the application lifespan has not started yet.
    """
    if _engine is None:
        raise RuntimeError("CineSift engine not initialized. Is the server running?")
    return _engine


class PageParams(NamedTuple):
    """Raw ``page``/``size`` query parameters, normalized later by the engine's pager."""

    page: int
    size: int


def page_params(
    page: int = Query(default=0, description="Zero-based page index"),
    size: int = Query(default=0, description="Page size (<= 0 uses the default size)"),
) -> PageParams:
    # Negative pages are rejected by the pager with a 400, not by FastAPI with a 422
    return PageParams(page=page, size=size)


def operator_param(
    operator: str | None = Query(default=None, description="AND (default), OR or NOT; case-insensitive"),
) -> Operator:
    """Parse the set operator; missing or unknown names fall back to AND."""
    return Operator.from_string(operator) or Operator.AND
