"""User profile endpoints."""

import logging

from fastapi import APIRouter, Response
from pydantic import Field

from sportsync.api.routes.auth import clear_session_cookie
from sportsync.api.schemas import MessageResponse, UserResponse
from sportsync.auth import AUTH_RESPONSES, VALIDATION_RESPONSE, CurrentUser
from sportsync.core.context import Context
from sportsync.core.exceptions import NotFoundError
from sportsync.core.security import hash_password
from sportsync.schemas import EMAIL_PATTERN, PartialUpdate, SportType, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


class ProfileUpdateRequest(PartialUpdate):
    """Profile fields a user may change. ``role`` is not among them."""

    required_fields = frozenset({"username", "email", "password"})

    username: str | None = Field(None, min_length=3, max_length=50)
    email: str | None = Field(None, pattern=EMAIL_PATTERN, max_length=255)
    password: str | None = Field(None, min_length=6, max_length=72)
    favorite_sport: SportType | None = None
    favorite_team: str | None = Field(None, max_length=100)


@router.put(
    "/profile",
    response_model=UserResponse,
    responses={**AUTH_RESPONSES, **VALIDATION_RESPONSE},
)
async def update_profile(
    body: ProfileUpdateRequest,
    user: CurrentUser,
    context: Context,
) -> UserResponse:
    """Partially update the caller's profile.

    Username and email stay unique across other users; a new password is
    re-hashed before it is stored.
    """
    changes = body.model_dump(exclude_unset=True)
    if changes.get("password"):
        changes["password"] = hash_password(
            changes["password"], rounds=context.settings.bcrypt_rounds
        )

    updated = await context.storage.update_user(user.id, UserUpdate(**changes))
    if updated is None:
        raise NotFoundError("User not found")

    logger.info(f"User {user.id} updated profile fields: {sorted(changes)}")
    return UserResponse(user=updated.to_public())


@router.delete("/account", response_model=MessageResponse, responses=AUTH_RESPONSES)
async def delete_account(
    response: Response,
    user: CurrentUser,
    context: Context,
) -> MessageResponse:
    """Delete the caller's account and end all of their sessions."""
    if not await context.storage.delete_user(user.id):
        raise NotFoundError("User not found")

    ended = context.sessions.destroy_user(user.id)
    clear_session_cookie(response, context.settings)

    logger.info(f"User {user.id} deleted account ({ended} sessions ended)")
    return MessageResponse(message="Account successfully deleted")
