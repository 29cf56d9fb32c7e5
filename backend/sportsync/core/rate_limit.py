"""Rate limiting for the credential endpoints.

Callers with a live session are bucketed per user, everything else per
client address. The session cookie is only trusted once the app's session
store resolves it. Limits are kept in process memory, which matches the
single-process deployment.
"""

import logging

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from sportsync.core.config import Settings

logger = logging.getLogger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Extract the rate limit key from a request."""
    context = getattr(request.app.state, "context", None)
    if context is not None:
        token = request.cookies.get(context.settings.session_cookie_name)
        user_id = context.sessions.resolve(token)
        if user_id is not None:
            return f"user:{user_id}"
    return get_remote_address(request)


limiter = Limiter(key_func=get_rate_limit_key, storage_uri="memory://", enabled=False)

# Filled from the app's Settings by configure_limiter
RATE_LIMITS = {
    "auth": Settings.model_fields["rate_limit_auth"].default,
}


def auth_limit() -> str:
    return RATE_LIMITS["auth"]


def configure_limiter(settings: Settings) -> Limiter:
    """Apply the app's rate limit settings to the shared limiter."""
    limiter.enabled = settings.rate_limit_enabled
    RATE_LIMITS["auth"] = settings.rate_limit_auth
    if not settings.rate_limit_enabled:
        logger.info("Rate limiting disabled")
    return limiter
