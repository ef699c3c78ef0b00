"""API v1 Router — Movie search and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from cinesift.api.v1.endpoints.health import router as health_router
from cinesift.api.v1.endpoints.movies import router as movies_router

router = APIRouter(tags=["v1"])
router.include_router(movies_router)
router.include_router(health_router)
