"""SQL builders for the boundary dataset.

Coordinates and the dataset path are always bound as parameters.  Only
the projection clause, built from whitelisted column names, is
interpolated.
"""

from pathlib import Path
from typing import Any

from reverse_api.lib.reverse.validation import GEOMETRY_COLUMN, ReverseGeocodeRequest

BBOX_COLUMN = "geometry_bbox"

SCHEMA_QUERY = "SELECT * FROM read_parquet(?) LIMIT 0"

_REVERSE_QUERY = f"""
SELECT {{projection}}
FROM read_parquet(?)
WHERE (
  {BBOX_COLUMN}.xmin <= ? AND
  {BBOX_COLUMN}.xmax >= ? AND
  {BBOX_COLUMN}.ymin <= ? AND
  {BBOX_COLUMN}.ymax >= ?
)
AND ST_ContainsProperly({GEOMETRY_COLUMN}, ST_Point(?, ?))
"""


def build_reverse_query(request: ReverseGeocodeRequest, dataset_path: Path | str) -> tuple[str, list[Any]]:
    """Build the point-in-polygon query for a validated request.

    The bounding-box test prunes most rows before the exact
    ``ST_ContainsProperly`` test, which excludes points lying on a
    polygon's boundary.

    Args:
        request: Validated reverse geocoding request.
        dataset_path: Path to the Parquet dataset.

    Returns:
        Tuple of (sql, params).
    """
    lon = request.longitude
    lat = request.latitude
    sql = _REVERSE_QUERY.format(projection=request.projection.to_sql())
    params: list[Any] = [str(dataset_path), lon, lon, lat, lat, lon, lat]
    return sql, params
