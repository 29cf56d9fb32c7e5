"""Abstract storage interface shared by the in-memory and SQL backends.

Every operation is async so the two backends are interchangeable behind
the route layer. Records returned are the pydantic models from
``sportsync.schemas``; callers never see ORM objects.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from sportsync.core.exceptions import ConflictError
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
)

if TYPE_CHECKING:
    from sportsync.core.config import Settings


class Storage(ABC):
    """Persistence capability for users, matches, favorites, notifications,
    feedback and stored news.

    Semantics common to both backends:
    - ``create_*`` assigns the next id and creation timestamp.
    - ``update_*`` applies only fields explicitly set on the update and
      returns ``None`` for an unknown id.
    - ``delete_*`` returns whether a record was removed. Deleting a user
      removes their favorites and notifications and anonymises their
      feedback; deleting a match removes favorites referencing it.
    """

    backend_name: str = "abstract"

    # Lifecycle ------------------------------------------------------------

    async def connect(self) -> None:
        """Prepare the backend (create tables, open pools)."""

    async def close(self) -> None:
        """Release backend resources."""

    async def seed(self, settings: "Settings") -> dict[str, int]:
        """Insert the admin account and sample matches if absent."""
        from sportsync.storage.seed import seed_storage

        return await seed_storage(self, settings)

    async def ensure_unique_identity(
        self,
        *,
        username: str | None = None,
        email: str | None = None,
        exclude_user_id: int | None = None,
    ) -> None:
        """Raise ``ConflictError`` if another user already has this email or username.

        Email is checked first, then username; both case-insensitively.
        """
        if email is not None:
            existing = await self.get_user_by_email(email)
            if existing is not None and existing.id != exclude_user_id:
                raise ConflictError("Email already in use")
        if username is not None:
            existing = await self.get_user_by_username(username)
            if existing is not None and existing.id != exclude_user_id:
                raise ConflictError("Username already taken")

    # Users ----------------------------------------------------------------

    @abstractmethod
    async def get_user(self, user_id: int) -> User | None: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> User | None:
        """Case-insensitive lookup."""

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None:
        """Case-insensitive lookup."""

    @abstractmethod
    async def get_users(self) -> list[User]: ...

    @abstractmethod
    async def create_user(self, data: UserCreate) -> User: ...

    @abstractmethod
    async def update_user(self, user_id: int, data: UserUpdate) -> User | None: ...

    @abstractmethod
    async def delete_user(self, user_id: int) -> bool: ...

    # Matches --------------------------------------------------------------

    @abstractmethod
    async def get_match(self, match_id: int) -> Match | None: ...

    @abstractmethod
    async def get_matches(
        self,
        sport_type: SportType | None = None,
        status: MatchStatus | None = None,
    ) -> list[Match]:
        """Matches matching both filters, latest ``match_time`` first."""

    @abstractmethod
    async def create_match(self, data: MatchCreate) -> Match: ...

    @abstractmethod
    async def update_match(self, match_id: int, data: MatchUpdate) -> Match | None: ...

    @abstractmethod
    async def delete_match(self, match_id: int) -> bool: ...

    # Favorites ------------------------------------------------------------

    @abstractmethod
    async def get_favorites_by_user_id(self, user_id: int) -> list[FavoriteWithMatch]:
        """A user's favorites joined with their matches, newest first."""

    @abstractmethod
    async def add_favorite(self, data: FavoriteCreate) -> Favorite:
        """Add a favorite; raises ``DuplicateFavoriteError`` if it exists."""

    @abstractmethod
    async def remove_favorite(self, user_id: int, match_id: int) -> bool: ...

    @abstractmethod
    async def is_favorite(self, user_id: int, match_id: int) -> bool: ...

    # Notifications --------------------------------------------------------

    @abstractmethod
    async def get_notification(self, notification_id: int) -> Notification | None: ...

    @abstractmethod
    async def get_notifications_by_user_id(self, user_id: int) -> list[Notification]:
        """A user's notifications, newest first."""

    @abstractmethod
    async def create_notification(self, data: NotificationCreate) -> Notification: ...

    @abstractmethod
    async def mark_notification_as_read(self, notification_id: int) -> Notification | None:
        """Idempotently set ``read``; ``None`` for an unknown id."""

    # Feedback -------------------------------------------------------------

    @abstractmethod
    async def get_feedback(self) -> list[Feedback]:
        """All feedback, newest first."""

    @abstractmethod
    async def submit_feedback(self, data: FeedbackCreate) -> Feedback: ...

    # News -----------------------------------------------------------------

    @abstractmethod
    async def get_news_article(self, article_id: int) -> NewsArticle | None: ...

    @abstractmethod
    async def get_news_articles(self, sport_type: SportType | None = None) -> list[NewsArticle]:
        """Stored articles, most recently published first."""

    @abstractmethod
    async def create_news_article(self, data: NewsArticleCreate) -> NewsArticle: ...

    @abstractmethod
    async def delete_news_article(self, article_id: int) -> bool: ...
