"""Sports news endpoints.

``/sports-news`` proxies the external news API and never fails: upstream
problems degrade to an empty list. ``/news`` serves admin-curated articles.
"""

import logging

from fastapi import APIRouter, Query

from sportsync.api.schemas import ArticleListResponse, ExternalArticleListResponse
from sportsync.core.context import Context
from sportsync.core.exceptions import UpstreamError
from sportsync.schemas import SportType

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/sports-news", response_model=ExternalArticleListResponse)
async def sports_news(
    context: Context,
    sport: str = Query("football", min_length=1, max_length=50, description="Topic to search"),
) -> ExternalArticleListResponse:
    """Latest external articles for a sport."""
    try:
        articles = await context.news_client.fetch(sport)
    except UpstreamError as e:
        logger.warning(f"Sports news unavailable for '{sport}': {e.message}")
        articles = []
    return ExternalArticleListResponse(articles=articles)


@router.get("/news", response_model=ArticleListResponse)
async def stored_news(
    context: Context,
    sport: SportType | None = Query(None, description="football or cricket"),
) -> ArticleListResponse:
    """Stored articles, most recently published first."""
    return ArticleListResponse(articles=await context.storage.get_news_articles(sport))
