"""Health endpoints — Service liveness and search backend status."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from cinesift import __version__
from cinesift.adapters.base.adapter import AdapterHealth
from cinesift.api.deps import get_engine
from cinesift.core.engine import ADAPTER_NAME, CineSiftEngine

router = APIRouter(prefix="/health")


class HealthResponse(BaseModel):
    """Service status.

    ``status`` is ``"degraded"`` while the search adapter is not connected;
    movie endpoints answer 502 until it is.
    """

    status: str = Field(description="'healthy' or 'degraded'")
    version: str = Field(description="CineSift server version")
    service: str = Field(default="cinesift")
    index: str = Field(description="Search index queried by the engine")
    registered_fields: list[str] = Field(description="Fields accepted in filter criteria")
    active_adapters: list[str] = Field(description="Connected search adapters")


class AdapterHealthResponse(BaseModel):
    adapters: dict[str, AdapterHealth] = Field(description="Health of each connected adapter, by name")


@router.get("", response_model=HealthResponse, summary="Service Health")
async def health_check(engine: CineSiftEngine = Depends(get_engine)) -> HealthResponse:
    """Report service status without touching the search backend."""
    registry = engine.adapter_registry
    return HealthResponse(
        status="healthy" if ADAPTER_NAME in registry else "degraded",
        version=__version__,
        index=engine.settings.redis.index,
        registered_fields=engine.registry.names,
        active_adapters=registry.active_adapters,
    )


@router.get("/adapters", response_model=AdapterHealthResponse, summary="Search Backend Health")
async def adapter_health(engine: CineSiftEngine = Depends(get_engine)) -> AdapterHealthResponse:
    """Ping every connected adapter and read its index size."""
    return AdapterHealthResponse(adapters=await engine.adapter_registry.health())
