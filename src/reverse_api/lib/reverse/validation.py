"""Coordinate and field-selection validation for reverse geocoding.

The ``fields`` parameter is interpolated into the query as identifiers,
so every requested name must be a member of the column whitelist loaded
from the dataset schema before a projection is built.
"""

import math
import re
from collections.abc import Set
from dataclasses import dataclass

from reverse_api.lib.reverse.errors import ReverseGeocodeValidationError, ValidationErrorKind

GEOMETRY_COLUMN = "geometry"
ALL_FIELDS_TOKEN = "*"

LON_MIN, LON_MAX = -180.0, 180.0
LAT_MIN, LAT_MAX = -90.0, 90.0

_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class Projection:
    """Resolved output column selection.

    Attributes:
        columns: Explicit column names in caller order.  Empty means a
            wildcard projection.
        include_geometry: For wildcard projections, whether the geometry
            column is kept.
    """

    columns: tuple[str, ...] = ()
    include_geometry: bool = False

    def to_sql(self) -> str:
        """Render the projection clause."""
        if self.columns:
            return ", ".join(quote_identifier(column) for column in self.columns)
        if self.include_geometry:
            return "*"
        return f"* EXCLUDE ({GEOMETRY_COLUMN})"


DEFAULT_PROJECTION = Projection()
ALL_COLUMNS_PROJECTION = Projection(include_geometry=True)


@dataclass(frozen=True)
class ReverseGeocodeRequest:
    """A validated reverse geocoding request."""

    longitude: float
    latitude: float
    projection: Projection = DEFAULT_PROJECTION


def quote_identifier(name: str) -> str:
    """Quote a column name as a SQL identifier."""
    return '"' + name.replace('"', '""') + '"'


def _require(name: str, raw: str | None) -> str:
    if raw is None or not raw.strip():
        raise ReverseGeocodeValidationError(
            ValidationErrorKind.MISSING_PARAMETER,
            f"{name} query parameter is required",
        )
    return raw.strip()


def _parse_number(name: str, text: str) -> float:
    # ASCII decimal only; float() also takes "1_0", "inf" and non-ASCII digits
    value = float(text) if _DECIMAL_PATTERN.fullmatch(text) else math.nan
    if not math.isfinite(value):
        raise ReverseGeocodeValidationError(
            ValidationErrorKind.INVALID_PARAMETER,
            f"{name} must be a valid number",
        )
    return value


def _check_range(name: str, value: float, minimum: float, maximum: float) -> None:
    if not (minimum <= value <= maximum):
        raise ReverseGeocodeValidationError(
            ValidationErrorKind.INVALID_COORDINATE,
            f"{name} must be between {minimum:g} and {maximum:g}",
        )


def parse_fields(fields: str | None) -> list[str]:
    """Split a comma-separated field list, trimming and dropping empty tokens."""
    if fields is None or not fields.strip():
        return []
    return [token.strip() for token in fields.split(",") if token.strip()]


def resolve_projection(fields: str | None, valid_columns: Set[str]) -> Projection:
    """Resolve the ``fields`` parameter against the column whitelist.

    Args:
        fields: Raw ``fields`` query parameter, or None.
        valid_columns: Column names present in the dataset.

    Returns:
        The projection to query with.

    Raises:
        ReverseGeocodeValidationError: If a requested field is not a dataset column.
    """
    tokens = parse_fields(fields)
    if not tokens:
        return DEFAULT_PROJECTION
    if tokens == [ALL_FIELDS_TOKEN]:
        return ALL_COLUMNS_PROJECTION

    for token in tokens:
        if token not in valid_columns:
            raise ReverseGeocodeValidationError(
                ValidationErrorKind.INVALID_FIELD,
                f"Field '{token}' does not exist in the data source.",
            )
    return Projection(columns=tuple(tokens))


def build_request(
    lon: str | None,
    lat: str | None,
    fields: str | None,
    valid_columns: Set[str],
) -> ReverseGeocodeRequest:
    """Validate raw query parameters into a ReverseGeocodeRequest.

    Checks run in a fixed order (presence, numeric parse, range, fields)
    and the first failure is raised.

    Args:
        lon: Raw longitude parameter.
        lat: Raw latitude parameter.
        fields: Raw comma-separated field list, ``*``, or None.
        valid_columns: Column whitelist from the dataset schema.

    Returns:
        The validated request.

    Raises:
        ReverseGeocodeValidationError: On the first failed check.
    """
    lon_text = _require("lon", lon)
    lat_text = _require("lat", lat)

    longitude = _parse_number("lon", lon_text)
    latitude = _parse_number("lat", lat_text)

    _check_range("lon", longitude, LON_MIN, LON_MAX)
    _check_range("lat", latitude, LAT_MIN, LAT_MAX)

    return ReverseGeocodeRequest(
        longitude=longitude,
        latitude=latitude,
        projection=resolve_projection(fields, valid_columns),
    )
