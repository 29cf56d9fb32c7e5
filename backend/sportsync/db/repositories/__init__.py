"""Repository layer for database operations.

This module implements the Repository Pattern with Unit of Work for
clean separation of data access logic from business logic.

Usage:
    from sportsync.db.repositories import get_uow

    async with get_uow(session_factory) as uow:
        matches = await uow.matches.get_filtered(status="live")
        await uow.favorites.create(user_id=1, match_id=matches[0].id)
        await uow.commit()
"""

from sportsync.db.repositories.base import BaseRepository
from sportsync.db.repositories.match_repository import MatchRepository, NewsArticleRepository
from sportsync.db.repositories.unit_of_work import UnitOfWork, get_uow
from sportsync.db.repositories.user_repository import (
    FavoriteRepository,
    FeedbackRepository,
    NotificationRepository,
    UserRepository,
)

__all__ = [
    # Base
    "BaseRepository",
    # Repositories
    "FavoriteRepository",
    "FeedbackRepository",
    "MatchRepository",
    "NewsArticleRepository",
    "NotificationRepository",
    "UserRepository",
    # Unit of Work
    "UnitOfWork",
    "get_uow",
]
