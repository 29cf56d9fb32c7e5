"""Database module with SQLAlchemy 2.0 async ORM.

This module provides:
- Models: SQLAlchemy ORM models for all database tables
- Repositories: Repository pattern for data access
- Unit of Work: Transaction management pattern
- Database utilities: engine/session factories and initialization
"""

from sportsync.db.database import build_engine, build_session_factory, close_db, init_db
from sportsync.db.models import Base, Favorite, Feedback, Match, NewsArticle, Notification, User
from sportsync.db.repositories import UnitOfWork, get_uow

__all__ = [
    # Database utilities
    "build_engine",
    "build_session_factory",
    "close_db",
    "init_db",
    # Models
    "Base",
    "Favorite",
    "Feedback",
    "Match",
    "NewsArticle",
    "Notification",
    "User",
    # Unit of Work
    "UnitOfWork",
    "get_uow",
]
