"""User-related repositories for accounts, favorites, notifications, and feedback."""

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from sportsync.db.models import Favorite, Feedback, Notification, User
from sportsync.db.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def get_by_username(self, username: str) -> User | None:
        """Case-insensitive lookup by username."""
        return await self.find_one(func.lower(User.username) == username.lower())

    async def get_by_email(self, email: str) -> User | None:
        """Case-insensitive lookup by email."""
        return await self.find_one(func.lower(User.email) == email.lower())

    async def get_all_by_id(self) -> Sequence[User]:
        return await self.find(order_by=(User.id,))


class FavoriteRepository(BaseRepository[Favorite]):
    """Repository for user favorite matches."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Favorite, session)

    async def get_by_user_with_match(self, user_id: int) -> Sequence[Favorite]:
        """Get a user's favorites with their matches loaded, newest first."""
        stmt = (
            select(Favorite)
            .options(joinedload(Favorite.match))
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def get_for_match(self, user_id: int, match_id: int) -> Favorite | None:
        """Get the favorite linking a user to a match."""
        return await self.find_one(Favorite.user_id == user_id, Favorite.match_id == match_id)

    async def delete_for_match(self, user_id: int, match_id: int) -> bool:
        """Remove a user's favorite for a match."""
        removed = await self.delete_where(
            Favorite.user_id == user_id,
            Favorite.match_id == match_id,
        )
        return removed > 0

    async def delete_for_user(self, user_id: int) -> int:
        return await self.delete_where(Favorite.user_id == user_id)

    async def delete_all_for_match(self, match_id: int) -> int:
        """Remove every user's favorite of a match."""
        return await self.delete_where(Favorite.match_id == match_id)


class NotificationRepository(BaseRepository[Notification]):
    """Repository for in-app notifications."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Notification, session)

    async def get_by_user(self, user_id: int) -> Sequence[Notification]:
        """Get a user's notifications, newest first."""
        return await self.find(
            Notification.user_id == user_id,
            order_by=(Notification.created_at.desc(), Notification.id.desc()),
        )

    async def delete_for_user(self, user_id: int) -> int:
        return await self.delete_where(Notification.user_id == user_id)


class FeedbackRepository(BaseRepository[Feedback]):
    """Repository for feedback submissions."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Feedback, session)

    async def get_newest_first(self) -> Sequence[Feedback]:
        """Get all feedback, newest first."""
        return await self.find(order_by=(Feedback.created_at.desc(), Feedback.id.desc()))

    async def anonymise_user(self, user_id: int) -> int:
        """Detach a user's feedback from their account."""
        return await self.update_where(Feedback.user_id == user_id, user_id=None)
