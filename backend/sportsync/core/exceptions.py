"""Custom exceptions for the application.

Each exception carries the HTTP status it maps to; the API layer renders
them as ``{"message": ..., "errors": ...}``.
"""

from typing import Any


class SportSyncError(Exception):
    """Base exception for the application."""

    status_code = 500

    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ConflictError(SportSyncError):
    """Write would violate a uniqueness rule (email, username, favorite)."""

    status_code = 400


class DuplicateFavoriteError(ConflictError):
    """Match is already in the user's favorites."""

    def __init__(self, message: str = "Match is already in favorites", details: Any = None):
        super().__init__(message, details)


class AuthenticationError(SportSyncError):
    """Caller is not authenticated."""

    status_code = 401


class AuthorizationError(SportSyncError):
    """Caller is authenticated but lacks the required role."""

    status_code = 403


class NotFoundError(SportSyncError):
    """Referenced record does not exist."""

    status_code = 404


class UpstreamError(SportSyncError):
    """Error fetching data from an external source."""

    status_code = 502
