"""Match and news repositories with domain-specific operations."""

from collections.abc import Sequence

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from sportsync.db.models import Match, NewsArticle
from sportsync.db.repositories.base import BaseRepository


class MatchRepository(BaseRepository[Match]):
    """Repository for Match operations with domain-specific methods."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Match, session)

    async def get_filtered(
        self,
        *,
        sport_type: str | None = None,
        status: str | None = None,
    ) -> Sequence[Match]:
        """Get matches filtered by sport and/or status, latest kick-off first."""
        criteria: list[ColumnElement[bool]] = []
        if sport_type:
            criteria.append(Match.sport_type == sport_type)
        if status:
            criteria.append(Match.status == status)
        return await self.find(*criteria, order_by=(Match.match_time.desc(), Match.id.desc()))


class NewsArticleRepository(BaseRepository[NewsArticle]):
    """Repository for stored news articles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(NewsArticle, session)

    async def get_latest(self, *, sport_type: str | None = None) -> Sequence[NewsArticle]:
        """Get articles, most recently published first."""
        criteria = [NewsArticle.sport_type == sport_type] if sport_type else []
        return await self.find(
            *criteria,
            order_by=(NewsArticle.published_at.desc(), NewsArticle.id.desc()),
        )
