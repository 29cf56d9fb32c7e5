"""Shared API response envelopes.

Every success body wraps its payload under a named key (``{"user": ...}``,
``{"matches": [...]}``) so clients can extend responses without breaking.
"""

from typing import Any

from pydantic import BaseModel

from sportsync.schemas import (
    Favorite,
    FavoriteWithMatch,
    Feedback,
    Match,
    NewsArticle,
    Notification,
    PublicUser,
)


class MessageResponse(BaseModel):
    message: str


class UserResponse(BaseModel):
    user: PublicUser


class MatchResponse(BaseModel):
    match: Match


class MatchListResponse(BaseModel):
    matches: list[Match]


class FavoriteResponse(BaseModel):
    favorite: Favorite


class FavoriteListResponse(BaseModel):
    favorites: list[FavoriteWithMatch]


class NotificationResponse(BaseModel):
    notification: Notification


class NotificationListResponse(BaseModel):
    notifications: list[Notification]


class FeedbackResponse(BaseModel):
    feedback: Feedback


class FeedbackListResponse(BaseModel):
    feedback: list[Feedback]


class ArticleResponse(BaseModel):
    article: NewsArticle


class ArticleListResponse(BaseModel):
    articles: list[NewsArticle]


class ExternalArticleListResponse(BaseModel):
    """Articles passed through from the upstream news API."""

    articles: list[dict[str, Any]]
