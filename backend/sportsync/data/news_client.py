"""Client for a newsapi.org-compatible ``everything`` endpoint.

Articles are passed through as returned by the upstream API; the server
does not reshape or store them.

Usage:
    from sportsync.data.news_client import NewsClient

    client = NewsClient(api_key="...")
    articles = await client.fetch("cricket")
"""

import logging
from typing import Any

import httpx

from sportsync.core.exceptions import UpstreamError
from sportsync.core.http_client import get_http_client

logger = logging.getLogger(__name__)

DEFAULT_NEWS_URL = "https://newsapi.org/v2/everything"


class NewsClient:
    """Fetches recent articles for a topic from the configured news API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_NEWS_URL,
        page_size: int = 5,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.page_size = page_size
        self._http_client = http_client

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def fetch(self, topic: str) -> list[dict[str, Any]]:
        """Fetch articles for a topic.

        Returns an empty list without calling out when no API key is set.

        Raises:
            UpstreamError: On transport errors, non-2xx responses or a
                body that is not the expected JSON shape.
        """
        if not self.enabled:
            logger.debug("News API key not configured, skipping fetch")
            return []

        client = self._http_client or get_http_client()
        params: dict[str, str | int] = {
            "q": topic,
            "pageSize": self.page_size,
            "apiKey": self.api_key,
        }

        try:
            response = await client.get(self.base_url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"News API returned {e.response.status_code}",
                details={"topic": topic},
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"News API request failed: {e}", details={"topic": topic}) from e
        except ValueError as e:
            raise UpstreamError("News API returned invalid JSON", details={"topic": topic}) from e

        articles = data.get("articles") if isinstance(data, dict) else None
        if not isinstance(articles, list):
            raise UpstreamError("News API response has no articles list", details={"topic": topic})

        skipped = sum(1 for item in articles if not isinstance(item, dict))
        if skipped:
            logger.warning(f"Dropped {skipped} malformed news articles for '{topic}'")
            articles = [item for item in articles if isinstance(item, dict)]

        logger.info(f"Fetched {len(articles)} news articles for '{topic}'")
        return articles
