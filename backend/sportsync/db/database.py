"""Database engine and session management.

Uses SQLAlchemy 2.0 async patterns. Engines are built per storage instance
rather than at import time, so tests and the app can point at different
databases in the same process.
"""

from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from sportsync.db.models import Base


def _get_async_database_url(url: str) -> str:
    """Convert sync database URL to async format.

    - postgresql:// -> postgresql+asyncpg://
    - sqlite:// -> sqlite+aiosqlite://
    """
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def build_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the given (sync or async) database URL."""
    url = _get_async_database_url(database_url)
    engine_kwargs: dict[str, Any] = {"echo": echo}

    if url.startswith("sqlite"):
        # SQLite doesn't support pool_size/max_overflow
        engine_kwargs["poolclass"] = NullPool
    else:
        engine_kwargs.update(
            {
                "pool_pre_ping": True,  # Verify connections before use
                "pool_size": 3,
                "max_overflow": 5,
                "pool_recycle": 3600,  # Recycle connections after 1 hour
            }
        )

    return create_async_engine(url, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by the Unit of Work."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Prevent lazy loading issues after commit
        autocommit=False,
        autoflush=False,  # Manual flush for better control
    )


async def init_db(engine: AsyncEngine) -> None:
    """Initialize database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db(engine: AsyncEngine) -> None:
    """Close database connections."""
    await engine.dispose()
