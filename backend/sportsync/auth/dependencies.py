"""FastAPI dependencies for authentication.

Provides typed dependencies for route protection:
- CurrentUser: Any logged-in user
- AdminUser: Admin users only
- OptionalUser: Optional authentication (may be None)

The session cookie only carries an opaque token; the user record is
re-fetched from storage on every request so role changes and deletions
take effect immediately.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request

from sportsync.core.context import Context
from sportsync.core.exceptions import AuthenticationError, AuthorizationError
from sportsync.schemas import User

logger = logging.getLogger(__name__)


async def get_optional_user(request: Request, context: Context) -> User | None:
    """Resolve the session cookie to a user, or None when anonymous."""
    token = request.cookies.get(context.settings.session_cookie_name)
    user_id = context.sessions.resolve(token)
    if user_id is None:
        return None

    user = await context.storage.get_user(user_id)
    if user is None:
        # Account was deleted while the session was live
        context.sessions.destroy(token)
        logger.debug(f"Dropped session for deleted user {user_id}")
    return user


async def require_auth(user: Annotated[User | None, Depends(get_optional_user)]) -> User:
    """Require an authenticated caller."""
    if user is None:
        raise AuthenticationError("Not authenticated")
    return user


async def require_admin(user: Annotated[User, Depends(require_auth)]) -> User:
    """Require an authenticated admin."""
    if user.role != "admin":
        raise AuthorizationError("Not authorized")
    return user


# Type aliases for cleaner route signatures
CurrentUser = Annotated[User, Depends(require_auth)]
AdminUser = Annotated[User, Depends(require_admin)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]
