"""Pydantic v2 schemas for the reverse geocoding and health endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class ReverseGeocodeResponse(BaseModel):
    """Response for GET /reverse."""

    geometries: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Boundary records containing the point, projected to the requested fields",
    )


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: str = "ok"
