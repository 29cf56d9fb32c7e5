"""Unit of Work pattern for transaction management.

Provides a single entry point for all repository operations with
automatic transaction handling.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sportsync.db.repositories.match_repository import MatchRepository, NewsArticleRepository
from sportsync.db.repositories.user_repository import (
    FavoriteRepository,
    FeedbackRepository,
    NotificationRepository,
    UserRepository,
)


class UnitOfWork:
    """Unit of Work for managing database transactions.

    Usage:
        async with UnitOfWork(session) as uow:
            user = await uow.users.get_by_id(1)
            await uow.favorites.create(user_id=user.id, match_id=3)
            await uow.commit()

    The UoW provides access to all repositories and handles commit/rollback.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._users: UserRepository | None = None
        self._matches: MatchRepository | None = None
        self._favorites: FavoriteRepository | None = None
        self._notifications: NotificationRepository | None = None
        self._feedback: FeedbackRepository | None = None
        self._news: NewsArticleRepository | None = None

    @property
    def users(self) -> UserRepository:
        if self._users is None:
            self._users = UserRepository(self._session)
        return self._users

    @property
    def matches(self) -> MatchRepository:
        if self._matches is None:
            self._matches = MatchRepository(self._session)
        return self._matches

    @property
    def favorites(self) -> FavoriteRepository:
        if self._favorites is None:
            self._favorites = FavoriteRepository(self._session)
        return self._favorites

    @property
    def notifications(self) -> NotificationRepository:
        if self._notifications is None:
            self._notifications = NotificationRepository(self._session)
        return self._notifications

    @property
    def feedback(self) -> FeedbackRepository:
        if self._feedback is None:
            self._feedback = FeedbackRepository(self._session)
        return self._feedback

    @property
    def news(self) -> NewsArticleRepository:
        if self._news is None:
            self._news = NewsArticleRepository(self._session)
        return self._news

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the context manager, rolling back on exception."""
        if exc_type is not None:
            await self.rollback()
        await self._session.close()


@asynccontextmanager
async def get_uow(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[UnitOfWork, None]:
    """Get a Unit of Work instance with a new session.

    Usage:
        async with get_uow(factory) as uow:
            match = await uow.matches.get_by_id(1)
            await uow.commit()
    """
    async with session_factory() as session:
        async with UnitOfWork(session) as uow:
            yield uow
