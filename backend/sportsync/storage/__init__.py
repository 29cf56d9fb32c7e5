"""Storage backends behind a single async interface.

Usage:
    from sportsync.storage import create_storage

    storage = create_storage(settings)
    await storage.connect()
    matches = await storage.get_matches(status="live")
"""

from sportsync.core.config import Settings
from sportsync.storage.base import Storage
from sportsync.storage.memory import MemoryStorage
from sportsync.storage.sql import SqlStorage


def create_storage(settings: Settings) -> Storage:
    """Build the backend selected by ``settings.storage_backend``."""
    if settings.storage_backend == "database":
        return SqlStorage(settings.database_url, echo=settings.debug)
    return MemoryStorage()


__all__ = [
    "MemoryStorage",
    "SqlStorage",
    "Storage",
    "create_storage",
]
