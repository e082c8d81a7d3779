"""Health check endpoint — Service and search engine status."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from docsearch import __version__
from docsearch.adapters.base.adapter import AdapterHealth
from docsearch.api.deps import get_engine
from docsearch.core.engine import DocSearchEngine

router = APIRouter()


class HealthResponse(BaseModel):
    """System health check response."""

    status: str = Field(description="Overall status, mirrors the engine status")
    version: str = Field(description="docsearch server version")
    service: str = Field(description="Service name ('docsearch')")
    updates_allowed: bool = Field(description="Whether data-modifying requests are accepted")
    engine: AdapterHealth = Field(description="Search engine health")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="System Health Check",
    description="Returns service version, read-only state and search engine health.",
)
async def health_check(
    engine: DocSearchEngine = Depends(get_engine),
) -> HealthResponse:
    engine_health = await engine.adapter.health_check()
    return HealthResponse(
        status=engine_health.status,
        version=__version__,
        service="docsearch",
        updates_allowed=engine.settings.updates_allowed,
        engine=engine_health,
    )
