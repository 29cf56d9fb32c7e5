"""Admin endpoints.

Match management, stored news curation and the feedback inbox.
"""

import logging

from fastapi import APIRouter, status

from sportsync.api.schemas import (
    ArticleResponse,
    FeedbackListResponse,
    MatchResponse,
    MessageResponse,
)
from sportsync.auth import ADMIN_RESPONSES, NOT_FOUND_RESPONSE, AdminUser
from sportsync.core.context import Context
from sportsync.core.exceptions import NotFoundError
from sportsync.schemas import MatchCreate, MatchUpdate, NewsArticleCreate

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Matches
# ============================================================================


@router.post(
    "/matches",
    response_model=MatchResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ADMIN_RESPONSES,
)
async def create_match(body: MatchCreate, admin: AdminUser, context: Context) -> MatchResponse:
    """Create a match."""
    match = await context.storage.create_match(body)
    logger.info(f"Admin {admin.id} created match {match.id}: {match.team1} vs {match.team2}")
    return MatchResponse(match=match)


@router.put(
    "/matches/{match_id}",
    response_model=MatchResponse,
    responses={**ADMIN_RESPONSES, **NOT_FOUND_RESPONSE},
)
async def update_match(
    match_id: int,
    body: MatchUpdate,
    admin: AdminUser,
    context: Context,
) -> MatchResponse:
    """Update scores, status, clock or details of a match."""
    match = await context.storage.update_match(match_id, body)
    if match is None:
        raise NotFoundError("Match not found")
    logger.info(f"Admin {admin.id} updated match {match_id}")
    return MatchResponse(match=match)


@router.delete(
    "/matches/{match_id}",
    response_model=MessageResponse,
    responses={**ADMIN_RESPONSES, **NOT_FOUND_RESPONSE},
)
async def delete_match(match_id: int, admin: AdminUser, context: Context) -> MessageResponse:
    """Delete a match and every favorite referencing it."""
    if not await context.storage.delete_match(match_id):
        raise NotFoundError("Match not found")
    logger.info(f"Admin {admin.id} deleted match {match_id}")
    return MessageResponse(message="Match successfully deleted")


# ============================================================================
# Feedback
# ============================================================================


@router.get("/feedback", response_model=FeedbackListResponse, responses=ADMIN_RESPONSES)
async def list_feedback(admin: AdminUser, context: Context) -> FeedbackListResponse:
    """All feedback, newest first."""
    return FeedbackListResponse(feedback=await context.storage.get_feedback())


# ============================================================================
# News
# ============================================================================


@router.post(
    "/news",
    response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ADMIN_RESPONSES,
)
async def create_article(
    body: NewsArticleCreate,
    admin: AdminUser,
    context: Context,
) -> ArticleResponse:
    """Store a news article."""
    article = await context.storage.create_news_article(body)
    logger.info(f"Admin {admin.id} published article {article.id}")
    return ArticleResponse(article=article)


@router.delete(
    "/news/{article_id}",
    response_model=MessageResponse,
    responses={**ADMIN_RESPONSES, **NOT_FOUND_RESPONSE},
)
async def delete_article(article_id: int, admin: AdminUser, context: Context) -> MessageResponse:
    """Delete a stored news article."""
    if not await context.storage.delete_news_article(article_id):
        raise NotFoundError("Article not found")
    return MessageResponse(message="Article successfully deleted")
