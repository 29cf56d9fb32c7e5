"""Common HTTP error response models for OpenAPI documentation.

These models help FastAPI generate proper OpenAPI schema for authentication errors.
"""

from typing import Any

from pydantic import BaseModel


class HTTPErrorResponse(BaseModel):
    """Standard error body."""

    message: str
    errors: list[dict[str, Any]] | None = None


# Common response definitions for route decorators
AUTH_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {
        "model": HTTPErrorResponse,
        "description": "Not authenticated - missing or expired session",
    },
}

ADMIN_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {
        "model": HTTPErrorResponse,
        "description": "Not authenticated - missing or expired session",
    },
    403: {
        "model": HTTPErrorResponse,
        "description": "Not authorized - administrator role required",
    },
}

NOT_FOUND_RESPONSE: dict[int | str, dict[str, Any]] = {
    404: {"model": HTTPErrorResponse, "description": "Record not found"},
}

VALIDATION_RESPONSE: dict[int | str, dict[str, Any]] = {
    400: {"model": HTTPErrorResponse, "description": "Validation error or conflict"},
}
