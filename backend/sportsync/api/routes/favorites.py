"""User favorite match endpoints."""

import logging

from fastapi import APIRouter, status
from pydantic import Field

from sportsync.api.schemas import FavoriteListResponse, FavoriteResponse, MessageResponse
from sportsync.auth import AUTH_RESPONSES, NOT_FOUND_RESPONSE, VALIDATION_RESPONSE, CurrentUser
from sportsync.core.context import Context
from sportsync.core.exceptions import NotFoundError
from sportsync.schemas import CamelModel, FavoriteCreate

logger = logging.getLogger(__name__)

router = APIRouter()


class FavoriteRequest(CamelModel):
    """Match to favorite. The owner is always the caller."""

    match_id: int = Field(..., gt=0)


@router.get("", response_model=FavoriteListResponse, responses=AUTH_RESPONSES)
async def list_favorites(user: CurrentUser, context: Context) -> FavoriteListResponse:
    """The caller's favorites, each with its match."""
    favorites = await context.storage.get_favorites_by_user_id(user.id)
    return FavoriteListResponse(favorites=favorites)


@router.post(
    "",
    response_model=FavoriteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**AUTH_RESPONSES, **NOT_FOUND_RESPONSE, **VALIDATION_RESPONSE},
)
async def add_favorite(
    body: FavoriteRequest,
    user: CurrentUser,
    context: Context,
) -> FavoriteResponse:
    """Favorite a match. A second add of the same match is rejected."""
    if await context.storage.get_match(body.match_id) is None:
        raise NotFoundError("Match not found")

    favorite = await context.storage.add_favorite(
        FavoriteCreate(user_id=user.id, match_id=body.match_id)
    )
    logger.info(f"User {user.id} favorited match {body.match_id}")
    return FavoriteResponse(favorite=favorite)


@router.delete(
    "/{match_id}",
    response_model=MessageResponse,
    responses={**AUTH_RESPONSES, **NOT_FOUND_RESPONSE},
)
async def remove_favorite(match_id: int, user: CurrentUser, context: Context) -> MessageResponse:
    """Remove a match from the caller's favorites."""
    if not await context.storage.remove_favorite(user.id, match_id):
        raise NotFoundError("Favorite not found")
    return MessageResponse(message="Favorite successfully removed")
