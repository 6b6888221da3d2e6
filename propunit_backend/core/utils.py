"""Common utilities for PropUnit backend."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def sanitize_string(value: str | None, max_length: int | None = 255) -> str | None:
    """Sanitize a string value by stripping whitespace and truncating.

    With `max_length=None` the value is only stripped.
    """
    if value is None:
        return None
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        return value[:max_length]
    return value


def generate_code(prefix: str, number: int, padding: int = 3) -> str:
    """Generate a prefixed unit code like Unit-001."""
    return f"{prefix}-{str(number).zfill(padding)}"
