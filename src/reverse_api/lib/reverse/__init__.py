"""Reverse geocoding library — request validation and query construction.

Public API:
    - build_request: Validate raw query parameters into a request
    - resolve_projection: Resolve a field list against the column whitelist
    - build_reverse_query: Build the parameterized point-in-polygon query
    - ReverseGeocodeRequest: Validated request value object
    - Projection: Resolved output column selection
    - ReverseGeocodeValidationError: Client input error with a stable kind
    - ValidationErrorKind: Error kind enum
"""

from reverse_api.lib.reverse.errors import ReverseGeocodeValidationError, ValidationErrorKind
from reverse_api.lib.reverse.query import BBOX_COLUMN, SCHEMA_QUERY, build_reverse_query
from reverse_api.lib.reverse.validation import (
    ALL_COLUMNS_PROJECTION,
    DEFAULT_PROJECTION,
    GEOMETRY_COLUMN,
    Projection,
    ReverseGeocodeRequest,
    build_request,
    parse_fields,
    quote_identifier,
    resolve_projection,
)

__all__ = [
    "ALL_COLUMNS_PROJECTION",
    "BBOX_COLUMN",
    "DEFAULT_PROJECTION",
    "GEOMETRY_COLUMN",
    "SCHEMA_QUERY",
    "Projection",
    "ReverseGeocodeRequest",
    "ReverseGeocodeValidationError",
    "ValidationErrorKind",
    "build_request",
    "build_reverse_query",
    "parse_fields",
    "quote_identifier",
    "resolve_projection",
]
