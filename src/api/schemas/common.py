"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Single error response."""

    error_code: str
    msg: str
    details: Any | None = None


class FieldError(BaseModel):
    """One failed request field."""

    msg: str
    param: str
    location: str


class ValidationErrorResponse(BaseModel):
    """Every failed field of a request, reported together."""

    error_code: str
    errors: list[FieldError]


class MessageResponse(BaseModel):
    """Simple message response."""

    msg: str


def require_present(value: Any, message: str) -> Any:
    """Reject ``None`` and blank strings with ``message``; trim strings."""
    if value is None:
        raise ValueError(message)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError(message)
    return value


def strip_or_none(value: Any) -> Any:
    """Trim strings and turn blank ones into ``None``."""
    if isinstance(value, str):
        return value.strip() or None
    return value
