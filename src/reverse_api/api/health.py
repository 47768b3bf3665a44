"""Liveness probe endpoint."""

from fastapi import APIRouter

from reverse_api.schemas.reverse import HealthResponse

health_router = APIRouter(tags=["health"])


@health_router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Report that the process is serving requests."""
    return HealthResponse()
