"""Relational storage backend on SQLAlchemy 2.0 async.

Each public call opens one Unit of Work, performs its reads and writes in
a single transaction and commits once, so cascades and check-then-insert
sequences are atomic from the caller's point of view.
"""

import logging

from sqlalchemy.exc import IntegrityError

from sportsync.core.exceptions import ConflictError, DuplicateFavoriteError
from sportsync.db.database import build_engine, build_session_factory, close_db, init_db
from sportsync.db.repositories import get_uow
from sportsync.schemas import (
    Favorite,
    FavoriteCreate,
    FavoriteWithMatch,
    Feedback,
    FeedbackCreate,
    Match,
    MatchCreate,
    MatchStatus,
    MatchUpdate,
    NewsArticle,
    NewsArticleCreate,
    Notification,
    NotificationCreate,
    SportType,
    User,
    UserCreate,
    UserUpdate,
    changes_of,
)
from sportsync.storage.base import Storage

logger = logging.getLogger(__name__)


class SqlStorage(Storage):
    """Storage backed by a relational database (SQLite or PostgreSQL)."""

    backend_name = "database"

    def __init__(self, database_url: str, *, echo: bool = False) -> None:
        self.database_url = database_url
        self._engine = build_engine(database_url, echo=echo)
        self._session_factory = build_session_factory(self._engine)

    def _uow(self):
        return get_uow(self._session_factory)

    async def connect(self) -> None:
        await init_db(self._engine)
        logger.info(f"Database ready ({self._engine.url.get_backend_name()})")

    async def close(self) -> None:
        await close_db(self._engine)

    # =========================================================================
    # Users
    # =========================================================================

    async def get_user(self, user_id: int) -> User | None:
        async with self._uow() as uow:
            user = await uow.users.get_by_id(user_id)
            return User.model_validate(user) if user else None

    async def get_user_by_username(self, username: str) -> User | None:
        async with self._uow() as uow:
            user = await uow.users.get_by_username(username)
            return User.model_validate(user) if user else None

    async def get_user_by_email(self, email: str) -> User | None:
        async with self._uow() as uow:
            user = await uow.users.get_by_email(email)
            return User.model_validate(user) if user else None

    async def get_users(self) -> list[User]:
        async with self._uow() as uow:
            users = await uow.users.get_all_by_id()
            return [User.model_validate(u) for u in users]

    async def create_user(self, data: UserCreate) -> User:
        await self.ensure_unique_identity(username=data.username, email=data.email)
        async with self._uow() as uow:
            try:
                user = await uow.users.create(**data.model_dump())
            except IntegrityError as e:
                raise ConflictError("User already exists") from e
            await uow.commit()
            return User.model_validate(user)

    async def update_user(self, user_id: int, data: UserUpdate) -> User | None:
        changes = changes_of(data)
        await self.ensure_unique_identity(
            username=changes.get("username"),
            email=changes.get("email"),
            exclude_user_id=user_id,
        )
        async with self._uow() as uow:
            try:
                user = await uow.users.update(user_id, **changes)
            except IntegrityError as e:
                raise ConflictError("User already exists") from e
            if user is None:
                return None
            await uow.commit()
            return User.model_validate(user)

    async def delete_user(self, user_id: int) -> bool:
        async with self._uow() as uow:
            if await uow.users.get_by_id(user_id) is None:
                return False
            await uow.favorites.delete_for_user(user_id)
            await uow.notifications.delete_for_user(user_id)
            await uow.feedback.anonymise_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()
            return True

    # =========================================================================
    # Matches
    # =========================================================================

    async def get_match(self, match_id: int) -> Match | None:
        async with self._uow() as uow:
            match = await uow.matches.get_by_id(match_id)
            return Match.model_validate(match) if match else None

    async def get_matches(
        self,
        sport_type: SportType | None = None,
        status: MatchStatus | None = None,
    ) -> list[Match]:
        async with self._uow() as uow:
            matches = await uow.matches.get_filtered(sport_type=sport_type, status=status)
            return [Match.model_validate(m) for m in matches]

    async def create_match(self, data: MatchCreate) -> Match:
        async with self._uow() as uow:
            match = await uow.matches.create(**data.model_dump())
            await uow.commit()
            return Match.model_validate(match)

    async def update_match(self, match_id: int, data: MatchUpdate) -> Match | None:
        async with self._uow() as uow:
            match = await uow.matches.update(match_id, **changes_of(data))
            if match is None:
                return None
            await uow.commit()
            return Match.model_validate(match)

    async def delete_match(self, match_id: int) -> bool:
        async with self._uow() as uow:
            if await uow.matches.get_by_id(match_id) is None:
                return False
            await uow.favorites.delete_all_for_match(match_id)
            await uow.matches.delete(match_id)
            await uow.commit()
            return True

    # =========================================================================
    # Favorites
    # =========================================================================

    async def get_favorites_by_user_id(self, user_id: int) -> list[FavoriteWithMatch]:
        async with self._uow() as uow:
            favorites = await uow.favorites.get_by_user_with_match(user_id)
            return [FavoriteWithMatch.model_validate(f) for f in favorites]

    async def add_favorite(self, data: FavoriteCreate) -> Favorite:
        async with self._uow() as uow:
            if await uow.favorites.get_for_match(data.user_id, data.match_id) is not None:
                raise DuplicateFavoriteError()
            try:
                favorite = await uow.favorites.create(**data.model_dump())
            except IntegrityError as e:
                # Lost a race against a concurrent insert of the same pair
                raise DuplicateFavoriteError() from e
            await uow.commit()
            return Favorite.model_validate(favorite)

    async def remove_favorite(self, user_id: int, match_id: int) -> bool:
        async with self._uow() as uow:
            removed = await uow.favorites.delete_for_match(user_id, match_id)
            await uow.commit()
            return removed

    async def is_favorite(self, user_id: int, match_id: int) -> bool:
        async with self._uow() as uow:
            return await uow.favorites.get_for_match(user_id, match_id) is not None

    # =========================================================================
    # Notifications
    # =========================================================================

    async def get_notification(self, notification_id: int) -> Notification | None:
        async with self._uow() as uow:
            notification = await uow.notifications.get_by_id(notification_id)
            return Notification.model_validate(notification) if notification else None

    async def get_notifications_by_user_id(self, user_id: int) -> list[Notification]:
        async with self._uow() as uow:
            notifications = await uow.notifications.get_by_user(user_id)
            return [Notification.model_validate(n) for n in notifications]

    async def create_notification(self, data: NotificationCreate) -> Notification:
        async with self._uow() as uow:
            notification = await uow.notifications.create(**data.model_dump())
            await uow.commit()
            return Notification.model_validate(notification)

    async def mark_notification_as_read(self, notification_id: int) -> Notification | None:
        async with self._uow() as uow:
            notification = await uow.notifications.update(notification_id, read=True)
            if notification is None:
                return None
            await uow.commit()
            return Notification.model_validate(notification)

    # =========================================================================
    # Feedback
    # =========================================================================

    async def get_feedback(self) -> list[Feedback]:
        async with self._uow() as uow:
            feedback = await uow.feedback.get_newest_first()
            return [Feedback.model_validate(f) for f in feedback]

    async def submit_feedback(self, data: FeedbackCreate) -> Feedback:
        async with self._uow() as uow:
            feedback = await uow.feedback.create(**data.model_dump())
            await uow.commit()
            logger.info(f"Feedback {feedback.id} received ({feedback.category})")
            return Feedback.model_validate(feedback)

    # =========================================================================
    # News
    # =========================================================================

    async def get_news_article(self, article_id: int) -> NewsArticle | None:
        async with self._uow() as uow:
            article = await uow.news.get_by_id(article_id)
            return NewsArticle.model_validate(article) if article else None

    async def get_news_articles(self, sport_type: SportType | None = None) -> list[NewsArticle]:
        async with self._uow() as uow:
            articles = await uow.news.get_latest(sport_type=sport_type)
            return [NewsArticle.model_validate(a) for a in articles]

    async def create_news_article(self, data: NewsArticleCreate) -> NewsArticle:
        async with self._uow() as uow:
            article = await uow.news.create(**data.model_dump())
            await uow.commit()
            return NewsArticle.model_validate(article)

    async def delete_news_article(self, article_id: int) -> bool:
        async with self._uow() as uow:
            deleted = await uow.news.delete(article_id)
            await uow.commit()
            return deleted
