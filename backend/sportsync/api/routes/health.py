"""Health check endpoints."""

import logging
import time
from typing import Any

from fastapi import APIRouter, Request

from sportsync.core.context import Context
from sportsync.notifications.scheduler import get_scheduler_status

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
async def root(context: Context) -> dict[str, str]:
    """Root endpoint."""
    return {
        "name": context.settings.app_name,
        "version": context.settings.app_version,
        "docs": "/docs",
    }


@router.get("/health")
async def health_check(context: Context) -> dict[str, str]:
    """Basic health check."""
    return {"status": "healthy", "version": context.settings.app_version}


@router.get("/health/ready")
async def readiness_check(request: Request, context: Context) -> dict[str, Any]:
    """Readiness check including the storage backend.

    Returns "ready" when storage answers a query, "degraded" otherwise.
    """
    storage_start = time.monotonic()
    try:
        await context.storage.get_matches(status="live")
        storage_ok = True
    except Exception as e:
        logger.warning(f"Storage readiness probe failed: {e}")
        storage_ok = False
    storage_latency_ms = round((time.monotonic() - storage_start) * 1000, 1)

    return {
        "status": "ready" if storage_ok else "degraded",
        "storage": {
            "backend": context.storage.backend_name,
            "connected": storage_ok,
            "latency_ms": storage_latency_ms if storage_ok else None,
        },
        "sessions": len(context.sessions),
        "news_api": context.news_client.enabled,
        "scheduler": get_scheduler_status(getattr(request.app.state, "scheduler", None)),
    }
