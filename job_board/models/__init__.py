"""ORM models for bookmark persistence."""

from .base import Base, create_db_engine, create_session_factory, sqlite_url
from .bookmark import Bookmark

__all__ = [
    "Base",
    "Bookmark",
    "create_db_engine",
    "create_session_factory",
    "sqlite_url",
]
