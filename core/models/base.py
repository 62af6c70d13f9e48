"""
Base model class for SQLAlchemy ORM.

Re-exports the Base class from the database module for convenience, along
with the timestamp default shared by every model.
"""

from datetime import datetime, timezone

from core.db import Base


def utcnow() -> datetime:
    """Current UTC time; used as the default for timestamp columns."""
    return datetime.now(timezone.utc)


__all__ = ["Base", "utcnow"]
