"""Reverse geocoding service: runs the spatial query and shapes rows for JSON."""

import base64
import math
from typing import Any

from fastapi.encoders import jsonable_encoder
from loguru import logger

from reverse_api.core.database import BoundaryDataset
from reverse_api.lib.reverse import ReverseGeocodeRequest, build_reverse_query


def _encode_binary(value: bytes | bytearray) -> str:
    return base64.b64encode(bytes(value)).decode("ascii")


def _encode_float(value: float) -> float | None:
    return value if math.isfinite(value) else None


_ROW_ENCODERS: dict[Any, Any] = {
    bytes: _encode_binary,
    bytearray: _encode_binary,
    float: _encode_float,
}


def encode_rows(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Convert engine rows into JSON-compatible dicts.

    Binary values (geometry blobs) become base64 strings and non-finite
    floats become None.  Everything else follows ``jsonable_encoder``.

    Args:
        rows: Rows as returned by the dataset.

    Returns:
        JSON-compatible rows with keys unchanged.
    """
    return jsonable_encoder(rows, custom_encoder=_ROW_ENCODERS)


async def reverse_geocode(dataset: BoundaryDataset, request: ReverseGeocodeRequest) -> list[dict[str, Any]]:
    """Find every boundary record that properly contains the requested point.

    All matches are returned in engine order, so a point can yield several
    overlapping administrative levels.

    Args:
        dataset: The open boundary dataset.
        request: Validated reverse geocoding request.

    Returns:
        JSON-compatible rows projected to the requested columns.

    Raises:
        DatasetQueryError: If the engine fails to execute the query.
    """
    sql, params = build_reverse_query(request, dataset.path)
    rows = await dataset.fetch_rows(sql, params)
    logger.bind(
        json_output=True,
        lon=request.longitude,
        lat=request.latitude,
        matches=len(rows),
    ).debug("Reverse geocode matched {} boundaries", len(rows))
    return encode_rows(rows)
