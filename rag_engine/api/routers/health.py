"""
Health check API endpoints.

Routes: GET /health, GET /health/resources

Dependencies: rag_engine.api.deps
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from rag_engine.api.deps import ServiceCache, get_service_cache


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


class ResourceHealthResponse(HealthResponse):
    """Resource check response with memory pressure."""

    pressure: str
    usage_ratio: float


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/resources", response_model=ResourceHealthResponse)
async def health_check_resources(
    cache: ServiceCache = Depends(get_service_cache),
) -> ResourceHealthResponse:
    """Memory pressure as seen by the resource governor."""
    governor = cache.governor
    pressure = governor.pressure()
    return ResourceHealthResponse(
        status="healthy" if pressure.value != "critical" else "degraded",
        message=f"Memory pressure {pressure.value}",
        pressure=pressure.value,
        usage_ratio=round(governor.usage_ratio(), 4),
    )
