"""Entity records and insert/update schemas shared by storage and API.

Records are what storage returns; ``*Create`` schemas are validated
inserts; ``*Update`` schemas are partial updates where only explicitly set
fields are applied. JSON uses camelCase aliases, Python uses snake_case.
"""

from datetime import UTC, datetime
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

SportType = Literal["football", "cricket"]
MatchStatus = Literal["upcoming", "live", "completed"]
UserRole = Literal["user", "admin"]


def utcnow() -> datetime:
    """Current time as a naive UTC datetime (the storage convention)."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an aware datetime to naive UTC; naive values are assumed UTC."""
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


class CamelModel(BaseModel):
    """Base model with camelCase JSON aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialUpdate(CamelModel):
    """Partial update: unset fields are left alone, required ones cannot be nulled."""

    required_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_required(self) -> "PartialUpdate":
        nulled = sorted(
            name
            for name in self.model_fields_set & self.required_fields
            if getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self


# ============================================================================
# Records
# ============================================================================


class PublicUser(CamelModel):
    """User as exposed to clients: never carries the password hash."""

    id: int
    username: str
    email: str
    role: UserRole = "user"
    favorite_sport: SportType | None = None
    favorite_team: str | None = None
    created_at: datetime


class User(PublicUser):
    """Stored user, including the password hash."""

    password: str

    def to_public(self) -> PublicUser:
        return PublicUser.model_validate(self.model_dump(exclude={"password"}))


class Match(CamelModel):
    """Stored match."""

    id: int
    sport_type: SportType
    team1: str
    team2: str
    team1_logo: str | None = None
    team2_logo: str | None = None
    score1: str | None = "-"
    score2: str | None = "-"
    venue: str | None = None
    match_time: datetime
    status: MatchStatus = "upcoming"
    current_time: str | None = None
    created_at: datetime


class Favorite(CamelModel):
    """Stored favorite."""

    id: int
    user_id: int
    match_id: int
    created_at: datetime


class FavoriteWithMatch(Favorite):
    """Favorite joined with the match it references."""

    match: Match


class Notification(CamelModel):
    """Stored notification."""

    id: int
    user_id: int
    match_id: int | None = None
    message: str
    read: bool = False
    created_at: datetime


class Feedback(CamelModel):
    """Stored feedback; ``user_id`` is None for anonymous submissions."""

    id: int
    user_id: int | None = None
    name: str
    email: str
    category: str
    message: str
    subscribe_to_newsletter: bool = False
    created_at: datetime


class NewsArticle(CamelModel):
    """Stored news article."""

    id: int
    sport_type: SportType
    title: str
    description: str | None = None
    url: str
    image_url: str | None = None
    source: str | None = None
    published_at: datetime
    created_at: datetime


# ============================================================================
# Inserts and updates
# ============================================================================

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(CamelModel):
    """Insert schema for users. ``password`` must already be hashed."""

    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str
    role: UserRole = "user"
    favorite_sport: SportType | None = None
    favorite_team: str | None = Field(None, max_length=100)


class UserUpdate(PartialUpdate):
    """Partial update for users."""

    required_fields = frozenset({"username", "email", "password", "role"})

    username: str | None = Field(None, min_length=1, max_length=50)
    email: str | None = Field(None, pattern=EMAIL_PATTERN, max_length=255)
    password: str | None = None
    role: UserRole | None = None
    favorite_sport: SportType | None = None
    favorite_team: str | None = Field(None, max_length=100)


class MatchCreate(CamelModel):
    """Insert schema for matches."""

    sport_type: SportType
    team1: str = Field(..., min_length=1, max_length=100)
    team2: str = Field(..., min_length=1, max_length=100)
    team1_logo: str | None = None
    team2_logo: str | None = None
    score1: str | None = "-"
    score2: str | None = "-"
    venue: str | None = Field(None, max_length=200)
    match_time: datetime
    status: MatchStatus = "upcoming"
    current_time: str | None = Field(None, max_length=50)

    @field_validator("match_time")
    @classmethod
    def normalize_match_time(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class MatchUpdate(PartialUpdate):
    """Partial update for matches (scores, status, clock, details)."""

    required_fields = frozenset({"sport_type", "team1", "team2", "match_time", "status"})

    sport_type: SportType | None = None
    team1: str | None = Field(None, min_length=1, max_length=100)
    team2: str | None = Field(None, min_length=1, max_length=100)
    team1_logo: str | None = None
    team2_logo: str | None = None
    score1: str | None = None
    score2: str | None = None
    venue: str | None = Field(None, max_length=200)
    match_time: datetime | None = None
    status: MatchStatus | None = None
    current_time: str | None = Field(None, max_length=50)

    @field_validator("match_time")
    @classmethod
    def normalize_match_time(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value) if value is not None else None


class FavoriteCreate(CamelModel):
    """Insert schema for favorites."""

    user_id: int
    match_id: int = Field(..., gt=0)


class NotificationCreate(CamelModel):
    """Insert schema for notifications."""

    user_id: int
    match_id: int | None = None
    message: str = Field(..., min_length=1)
    read: bool = False


class FeedbackCreate(CamelModel):
    """Insert schema for feedback."""

    user_id: int | None = None
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    category: str = Field(..., min_length=1, max_length=50)
    message: str = Field(..., min_length=1, max_length=5000)
    subscribe_to_newsletter: bool = False


class NewsArticleCreate(CamelModel):
    """Insert schema for stored news articles."""

    sport_type: SportType
    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    url: str = Field(..., min_length=1)
    image_url: str | None = None
    source: str | None = Field(None, max_length=100)
    published_at: datetime = Field(default_factory=utcnow)

    @field_validator("published_at")
    @classmethod
    def normalize_published_at(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


def changes_of(update: BaseModel) -> dict[str, Any]:
    """Fields explicitly set on a partial update, by Python name."""
    return update.model_dump(exclude_unset=True)
