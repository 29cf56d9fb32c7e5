"""Session-cookie authentication."""

from sportsync.auth.dependencies import (
    AdminUser,
    CurrentUser,
    OptionalUser,
    get_optional_user,
    require_admin,
    require_auth,
)
from sportsync.auth.responses import (
    ADMIN_RESPONSES,
    AUTH_RESPONSES,
    NOT_FOUND_RESPONSE,
    VALIDATION_RESPONSE,
    HTTPErrorResponse,
)
from sportsync.auth.sessions import SessionStore

__all__ = [
    "get_optional_user",
    "require_auth",
    "require_admin",
    "CurrentUser",
    "AdminUser",
    "OptionalUser",
    "SessionStore",
    "HTTPErrorResponse",
    "AUTH_RESPONSES",
    "ADMIN_RESPONSES",
    "NOT_FOUND_RESPONSE",
    "VALIDATION_RESPONSE",
]
