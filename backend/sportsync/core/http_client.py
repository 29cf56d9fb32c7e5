"""Shared httpx client for outbound calls (news API).

Usage:
    from sportsync.core.http_client import get_http_client

    client = get_http_client()
    response = await client.get("https://example.com")
"""

import logging

import httpx

logger = logging.getLogger(__name__)

_client: httpx.AsyncClient | None = None


def get_http_client(timeout: float = 10.0) -> httpx.AsyncClient:
    """Get the shared async HTTP client, creating it on first use.

    Args:
        timeout: Default timeout (only used on first creation)
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=5.0),
            limits=httpx.Limits(
                max_connections=20,
                max_keepalive_connections=10,
                keepalive_expiry=30,
            ),
            follow_redirects=True,
            headers={"User-Agent": "SportSync/0.1"},
        )
        logger.info("Created shared HTTP client")
    return _client


async def close_http_client() -> None:
    """Close the shared HTTP client. Call during app shutdown."""
    global _client
    if _client and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.info("Closed shared HTTP client")
