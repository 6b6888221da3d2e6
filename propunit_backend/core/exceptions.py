"""
Custom exception classes for consistent error handling across all modules.
"""

from typing import Any


class PropUnitException(Exception):
    """Base exception for all PropUnit related errors."""

    status_code = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(PropUnitException):
    """Raised when request data validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ):
        if field:
            full_message = f"Validation error for field '{field}': {message}"
        else:
            full_message = message
        super().__init__(full_message, details)
        self.field = field
        self.value = value


class NotFoundError(PropUnitException):
    """Raised when a resource is not found."""

    status_code = 404

    def __init__(
        self, message: str = "Resource not found", details: dict[str, Any] | None = None
    ):
        super().__init__(message, details)


class PatternRegistrationError(PropUnitException):
    """Raised when a numbering pattern definition is incomplete.

    This is a programming error and surfaces when the pattern catalog is
    built, never while serving a request.
    """

    status_code = 500

    def __init__(
        self,
        pattern_id: str,
        missing: list[str],
        details: dict[str, Any] | None = None,
    ):
        message = (
            f"Pattern '{pattern_id}' is missing required operation(s): "
            f"{', '.join(missing)}"
        )
        super().__init__(message, details)
        self.pattern_id = pattern_id
        self.missing = missing
