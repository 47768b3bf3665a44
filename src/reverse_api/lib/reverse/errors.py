"""Validation error taxonomy for reverse geocoding requests."""

from enum import StrEnum


class ValidationErrorKind(StrEnum):
    """Stable, machine-readable error kinds returned to clients."""

    MISSING_PARAMETER = "Missing required parameter"
    INVALID_PARAMETER = "Invalid parameter"
    INVALID_COORDINATE = "Invalid coordinate"
    INVALID_FIELD = "Invalid field name"


class ReverseGeocodeValidationError(Exception):
    """Raised when a reverse geocoding request fails input validation.

    Args:
        kind: The error kind reported in the ``error`` field.
        message: Human-readable description reported in the ``message`` field.
    """

    def __init__(self, kind: ValidationErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(f"{kind}: {message}")
