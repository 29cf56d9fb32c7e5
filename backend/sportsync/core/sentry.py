"""Sentry configuration for error monitoring and alerting."""

import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from sportsync.core.config import Settings

logger = logging.getLogger(__name__)


def init_sentry(settings: Settings) -> bool:
    """Initialize Sentry SDK for error monitoring.

    Returns True when Sentry was initialized.
    """
    if not settings.sentry_dsn:
        logger.info("SENTRY_DSN not set, Sentry disabled")
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.app_env,
        traces_sample_rate=0.1 if settings.is_production else 1.0,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        # Never ship request bodies (passwords) or cookies (session tokens)
        send_default_pii=False,
        enabled=settings.is_production,
    )

    logger.info("Sentry initialized for environment: %s", settings.app_env)
    return True
