"""Reverse geocoding endpoint."""

from fastapi import APIRouter, Depends, Query

from reverse_api.core.database import BoundaryDataset
from reverse_api.core.dependencies import get_dataset
from reverse_api.lib.reverse import build_request
from reverse_api.schemas.common import ErrorResponse
from reverse_api.schemas.reverse import ReverseGeocodeResponse
from reverse_api.services.reverse_service import reverse_geocode

reverse_router = APIRouter(tags=["reverse"])


@reverse_router.get(
    "/reverse",
    response_model=ReverseGeocodeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid coordinates or field selection"},
        500: {"model": ErrorResponse, "description": "Dataset query failed"},
    },
)
async def reverse(
    lon: str | None = Query(None, description="WGS84 longitude, -180 to 180"),  # noqa: B008
    lat: str | None = Query(None, description="WGS84 latitude, -90 to 90"),  # noqa: B008
    fields: str | None = Query(  # noqa: B008
        None,
        description="Comma-separated columns to return, or * for all columns including geometry",
    ),
    dataset: BoundaryDataset = Depends(get_dataset),  # noqa: B008
) -> ReverseGeocodeResponse:
    """Return every administrative boundary that contains the given point.

    Parameters are accepted as raw strings and validated here so that
    failures use the ``{"error", "message"}`` response shape.
    """
    request = build_request(lon, lat, fields, dataset.columns)
    geometries = await reverse_geocode(dataset, request)
    return ReverseGeocodeResponse(geometries=geometries)
