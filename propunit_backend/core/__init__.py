"""Core infrastructure for PropUnit backend."""

from .exceptions import (
    NotFoundError,
    PatternRegistrationError,
    PropUnitException,
    ValidationError,
)
from .utils import generate_code, sanitize_string, utc_now

__all__ = [
    "PropUnitException",
    "ValidationError",
    "NotFoundError",
    "PatternRegistrationError",
    "generate_code",
    "sanitize_string",
    "utc_now",
]
