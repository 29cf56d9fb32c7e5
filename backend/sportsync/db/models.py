"""SQLAlchemy database models."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from sportsync.schemas import utcnow


class Base(DeclarativeBase):  # type: ignore[misc]
    """Base class for all models."""

    pass


class User(Base):
    """Registered user account."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(100), nullable=False)  # bcrypt hash
    role: Mapped[str] = mapped_column(String(10), default="user")  # user, admin
    favorite_sport: Mapped[str | None] = mapped_column(String(20), nullable=True)
    favorite_team: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)


class Match(Base):
    """Football or cricket match with display scores."""

    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sport_type: Mapped[str] = mapped_column(String(20), nullable=False)  # football, cricket
    team1: Mapped[str] = mapped_column(String(100), nullable=False)
    team2: Mapped[str] = mapped_column(String(100), nullable=False)
    team1_logo: Mapped[str | None] = mapped_column(Text, nullable=True)
    team2_logo: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Free-form display scores ("2", "187/4", "Yet to bat")
    score1: Mapped[str | None] = mapped_column(String(50), nullable=True, default="-")
    score2: Mapped[str | None] = mapped_column(String(50), nullable=True, default="-")

    venue: Mapped[str | None] = mapped_column(String(200), nullable=True)
    match_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="upcoming")  # upcoming, live, completed
    # Match clock ("75'", "32.4 Overs"); column renamed to avoid the CURRENT_TIME keyword
    current_time: Mapped[str | None] = mapped_column("match_clock", String(50), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    __table_args__ = (
        Index("ix_matches_sport_status", "sport_type", "status"),
        Index("ix_matches_time", "match_time"),
    )


class Favorite(Base):
    """Match favorited by a user."""

    __tablename__ = "favorites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    match_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # Relationships
    match: Mapped["Match"] = relationship()

    # Unique constraint: one favorite per user per match
    __table_args__ = (
        Index("ix_favorites_user", "user_id"),
        Index("uq_favorites_user_match", "user_id", "match_id", unique=True),
    )


class Notification(Base):
    """In-app notification for a user."""

    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    # Match a reminder is about; plain column, kept after the match is deleted
    match_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    __table_args__ = (Index("ix_notifications_user_created", "user_id", "created_at"),)


class Feedback(Base):
    """Feedback submission; kept anonymised when its author is deleted."""

    __tablename__ = "feedback"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    subscribe_to_newsletter: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)


class NewsArticle(Base):
    """Sports news article curated by an administrator."""

    __tablename__ = "news_articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sport_type: Mapped[str] = mapped_column(String(20), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    source: Mapped[str | None] = mapped_column(String(100), nullable=True)
    published_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    __table_args__ = (Index("ix_news_articles_published", "sport_type", "published_at"),)
