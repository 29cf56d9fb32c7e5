"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from sportsync.api.routes import (
    admin,
    auth,
    favorites,
    feedback,
    health,
    matches,
    news,
    notifications,
    users,
)
from sportsync.auth.sessions import SessionStore
from sportsync.core.config import Settings, get_settings
from sportsync.core.context import AppContext
from sportsync.core.exceptions import SportSyncError
from sportsync.core.http_client import close_http_client
from sportsync.core.logging_config import generate_request_id, setup_logging
from sportsync.core.rate_limit import configure_limiter
from sportsync.core.sentry import init_sentry
from sportsync.data.news_client import NewsClient
from sportsync.notifications.scheduler import init_scheduler, shutdown_scheduler
from sportsync.storage import Storage, create_storage

logger = logging.getLogger(__name__)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that binds a unique request_id to structlog context vars."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        structlog.contextvars.clear_contextvars()
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    def __init__(self, app: ASGIApp, hsts: bool = False) -> None:
        super().__init__(app)
        self.hsts = hsts

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response: Response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "camera=(), microphone=(), geolocation=()"
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "img-src 'self' data: https:; "
            "frame-ancestors 'none'"
        )

        # HSTS - only in production
        if self.hsts:
            response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains"

        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    context: AppContext = app.state.context
    settings = context.settings

    # Configure structured logging BEFORE anything else
    setup_logging(
        json_output=settings.is_production,
        log_level=settings.log_level,
        service=settings.app_name,
        environment=settings.app_env,
        sql_echo=settings.debug,
    )

    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.app_env}, storage: {context.storage.backend_name}")

    await context.storage.connect()
    if settings.seed_sample_data:
        await context.storage.seed(settings)

    if not context.news_client.enabled:
        logger.warning("NEWS_API_KEY: NOT set - /sports-news will return no articles")

    app.state.scheduler = None
    if settings.reminder_sweep_enabled:
        app.state.scheduler = init_scheduler(context.storage, settings.reminder_sweep_minutes)

    yield

    # Shutdown
    shutdown_scheduler(app.state.scheduler)
    await context.storage.close()
    await close_http_client()

    logger.info("Shutting down...")


# ============================================================================
# Exception handlers
# ============================================================================


def _error_body(message: str, errors: list[Any] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"message": message}
    if errors:
        body["errors"] = errors
    return body


def _validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic errors to ``{path, message, type}`` entries."""
    flat = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        # Drop the source prefix FastAPI adds ("body", "query", "path")
        if len(loc) > 1 and loc[0] in ("body", "query", "path", "cookie", "header"):
            loc = loc[1:]
        flat.append(
            {
                "path": ".".join(loc),
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type", "value_error"),
            }
        )
    return flat


async def sportsync_exception_handler(request: Request, exc: SportSyncError) -> JSONResponse:
    """Handle custom application exceptions."""
    errors = exc.details if isinstance(exc.details, list) else None
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, errors))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown routes, bad methods) in the same shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed request input with 400."""
    return JSONResponse(
        status_code=400,
        content=_error_body("Validation error", _validation_errors(list(exc.errors()))),
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Too many attempts on a rate-limited endpoint."""
    logger.warning(f"Rate limit exceeded: {exc.detail}")
    return JSONResponse(status_code=429, content=_error_body("Too many requests, try again later"))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the full error server-side; clients only get a generic message."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=_error_body("Internal server error"))


# ============================================================================
# App factory
# ============================================================================


def create_app(
    settings: Settings | None = None,
    storage: Storage | None = None,
    news_client: NewsClient | None = None,
) -> FastAPI:
    """Build the application and its process-wide context."""
    settings = settings or get_settings()

    context = AppContext(
        settings=settings,
        storage=storage or create_storage(settings),
        sessions=SessionStore(max_age=settings.session_max_age),
        news_client=news_client
        or NewsClient(
            api_key=settings.news_api_key,
            base_url=settings.news_api_url,
            page_size=settings.news_page_size,
        ),
    )

    init_sentry(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Live scores, favorites and match reminders for football and cricket",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )
    app.state.context = context
    app.state.scheduler = None

    # Rate limiting
    app.state.limiter = configure_limiter(settings)

    app.add_exception_handler(SportSyncError, sportsync_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Request ID Middleware (binds request_id to structured logs)
    app.add_middleware(RequestIdMiddleware)

    # Security Headers Middleware
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.is_production)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "X-Request-ID"],
    )

    # Include routers
    prefix = settings.api_prefix
    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["Auth"])
    app.include_router(users.router, prefix=f"{prefix}/users", tags=["Users"])
    app.include_router(matches.router, prefix=f"{prefix}/matches", tags=["Matches"])
    app.include_router(favorites.router, prefix=f"{prefix}/favorites", tags=["Favorites"])
    app.include_router(
        notifications.router,
        prefix=f"{prefix}/notifications",
        tags=["Notifications"],
    )
    app.include_router(feedback.router, prefix=f"{prefix}/feedback", tags=["Feedback"])
    app.include_router(news.router, prefix=prefix, tags=["News"])
    app.include_router(admin.router, prefix=f"{prefix}/admin", tags=["Admin"])

    return app


app = create_app()
