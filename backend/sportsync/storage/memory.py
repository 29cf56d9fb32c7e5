"""In-memory storage backend.

Records live in per-kind dicts keyed by id for the lifetime of the
process. Suitable for development and tests; not safe to share between
worker processes.
"""

import itertools
import logging

from sportsync.core.exceptions import DuplicateFavoriteError
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
    utcnow,
)
from sportsync.storage.base import Storage

logger = logging.getLogger(__name__)


def _newest_first(records, key):
    return sorted(records, key=lambda r: (key(r), r.id), reverse=True)


class MemoryStorage(Storage):
    """Dict-backed storage with monotonically increasing ids per kind."""

    backend_name = "memory"

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._matches: dict[int, Match] = {}
        self._favorites: dict[int, Favorite] = {}
        self._notifications: dict[int, Notification] = {}
        self._feedback: dict[int, Feedback] = {}
        self._news: dict[int, NewsArticle] = {}
        self._ids = {
            kind: itertools.count(1)
            for kind in ("users", "matches", "favorites", "notifications", "feedback", "news")
        }

    def _next_id(self, kind: str) -> int:
        return next(self._ids[kind])

    # =========================================================================
    # Users
    # =========================================================================

    async def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        wanted = username.lower()
        return next((u for u in self._users.values() if u.username.lower() == wanted), None)

    async def get_user_by_email(self, email: str) -> User | None:
        wanted = email.lower()
        return next((u for u in self._users.values() if u.email.lower() == wanted), None)

    async def get_users(self) -> list[User]:
        return sorted(self._users.values(), key=lambda u: u.id)

    async def create_user(self, data: UserCreate) -> User:
        await self.ensure_unique_identity(username=data.username, email=data.email)
        user = User(id=self._next_id("users"), created_at=utcnow(), **data.model_dump())
        self._users[user.id] = user
        return user

    async def update_user(self, user_id: int, data: UserUpdate) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        changes = changes_of(data)
        await self.ensure_unique_identity(
            username=changes.get("username"),
            email=changes.get("email"),
            exclude_user_id=user_id,
        )
        updated = user.model_copy(update=changes)
        self._users[user_id] = updated
        return updated

    async def delete_user(self, user_id: int) -> bool:
        if self._users.pop(user_id, None) is None:
            return False
        self._favorites = {k: f for k, f in self._favorites.items() if f.user_id != user_id}
        self._notifications = {
            k: n for k, n in self._notifications.items() if n.user_id != user_id
        }
        for key, item in self._feedback.items():
            if item.user_id == user_id:
                self._feedback[key] = item.model_copy(update={"user_id": None})
        return True

    # =========================================================================
    # Matches
    # =========================================================================

    async def get_match(self, match_id: int) -> Match | None:
        return self._matches.get(match_id)

    async def get_matches(
        self,
        sport_type: SportType | None = None,
        status: MatchStatus | None = None,
    ) -> list[Match]:
        matches = [
            m
            for m in self._matches.values()
            if (sport_type is None or m.sport_type == sport_type)
            and (status is None or m.status == status)
        ]
        return _newest_first(matches, key=lambda m: m.match_time)

    async def create_match(self, data: MatchCreate) -> Match:
        match = Match(id=self._next_id("matches"), created_at=utcnow(), **data.model_dump())
        self._matches[match.id] = match
        return match

    async def update_match(self, match_id: int, data: MatchUpdate) -> Match | None:
        match = self._matches.get(match_id)
        if match is None:
            return None
        updated = match.model_copy(update=changes_of(data))
        self._matches[match_id] = updated
        return updated

    async def delete_match(self, match_id: int) -> bool:
        if self._matches.pop(match_id, None) is None:
            return False
        self._favorites = {k: f for k, f in self._favorites.items() if f.match_id != match_id}
        return True

    # =========================================================================
    # Favorites
    # =========================================================================

    async def get_favorites_by_user_id(self, user_id: int) -> list[FavoriteWithMatch]:
        favorites = [f for f in self._favorites.values() if f.user_id == user_id]
        return [
            FavoriteWithMatch(**f.model_dump(), match=self._matches[f.match_id])
            for f in _newest_first(favorites, key=lambda f: f.created_at)
            if f.match_id in self._matches
        ]

    async def add_favorite(self, data: FavoriteCreate) -> Favorite:
        if await self.is_favorite(data.user_id, data.match_id):
            raise DuplicateFavoriteError()
        favorite = Favorite(
            id=self._next_id("favorites"), created_at=utcnow(), **data.model_dump()
        )
        self._favorites[favorite.id] = favorite
        return favorite

    async def remove_favorite(self, user_id: int, match_id: int) -> bool:
        for key, favorite in self._favorites.items():
            if favorite.user_id == user_id and favorite.match_id == match_id:
                del self._favorites[key]
                return True
        return False

    async def is_favorite(self, user_id: int, match_id: int) -> bool:
        return any(
            f.user_id == user_id and f.match_id == match_id for f in self._favorites.values()
        )

    # =========================================================================
    # Notifications
    # =========================================================================

    async def get_notification(self, notification_id: int) -> Notification | None:
        return self._notifications.get(notification_id)

    async def get_notifications_by_user_id(self, user_id: int) -> list[Notification]:
        notifications = [n for n in self._notifications.values() if n.user_id == user_id]
        return _newest_first(notifications, key=lambda n: n.created_at)

    async def create_notification(self, data: NotificationCreate) -> Notification:
        notification = Notification(
            id=self._next_id("notifications"), created_at=utcnow(), **data.model_dump()
        )
        self._notifications[notification.id] = notification
        return notification

    async def mark_notification_as_read(self, notification_id: int) -> Notification | None:
        notification = self._notifications.get(notification_id)
        if notification is None:
            return None
        updated = notification.model_copy(update={"read": True})
        self._notifications[notification_id] = updated
        return updated

    # =========================================================================
    # Feedback
    # =========================================================================

    async def get_feedback(self) -> list[Feedback]:
        return _newest_first(self._feedback.values(), key=lambda f: f.created_at)

    async def submit_feedback(self, data: FeedbackCreate) -> Feedback:
        feedback = Feedback(id=self._next_id("feedback"), created_at=utcnow(), **data.model_dump())
        self._feedback[feedback.id] = feedback
        logger.info(f"Feedback {feedback.id} received ({feedback.category})")
        return feedback

    # =========================================================================
    # News
    # =========================================================================

    async def get_news_article(self, article_id: int) -> NewsArticle | None:
        return self._news.get(article_id)

    async def get_news_articles(self, sport_type: SportType | None = None) -> list[NewsArticle]:
        articles = [
            a for a in self._news.values() if sport_type is None or a.sport_type == sport_type
        ]
        return _newest_first(articles, key=lambda a: a.published_at)

    async def create_news_article(self, data: NewsArticleCreate) -> NewsArticle:
        article = NewsArticle(id=self._next_id("news"), created_at=utcnow(), **data.model_dump())
        self._news[article.id] = article
        return article

    async def delete_news_article(self, article_id: int) -> bool:
        return self._news.pop(article_id, None) is not None
