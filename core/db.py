"""
Database engine and session management.

A single DatabaseManager owns the engine. Request handlers get a session
per request from get_db(); the audit recorder opens its own sessions from
session_factory so its writes commit independently.

Usage:
    from core.db import db, get_db, Base

    db.initialize()
    db.create_all_tables()
"""

import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""


def enable_sqlite_foreign_keys(engine) -> None:
    """Turn on FK enforcement so ON DELETE CASCADE holds on SQLite."""

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseManager:
    """Singleton holding the engine and session factory."""

    _instance: Optional["DatabaseManager"] = None
    _initialized: bool = False

    def __new__(cls) -> "DatabaseManager":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def initialize(self, database_url: str | None = None) -> None:
        """Create the engine once; later calls are no-ops until reset()."""
        if self._initialized:
            return

        settings = get_settings()
        url = database_url or settings.database_url
        is_sqlite = url.startswith("sqlite")

        if is_sqlite:
            self.engine = create_engine(
                url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
                echo=settings.debug,
            )
            enable_sqlite_foreign_keys(self.engine)
        else:
            self.engine = create_engine(
                url,
                poolclass=QueuePool,
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                echo=settings.debug,
            )

        self.SessionLocal = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False
        )
        self._initialized = True

    def create_all_tables(self) -> None:
        """Create every table registered by core.models (no migrations)."""
        self._ensure_initialized()
        import core.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Session that commits on success and rolls back on error."""
        self._ensure_initialized()
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @property
    def session_factory(self) -> sessionmaker:
        """Session factory for components that open their own unit of work."""
        self._ensure_initialized()
        return self.SessionLocal

    def health_check(self) -> dict:
        """Return {'healthy', 'latency_ms', 'error'} after a SELECT 1."""
        if not self._initialized:
            return {"healthy": False, "latency_ms": 0, "error": "Database not initialized"}

        start = time.perf_counter()
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            error = None
        except Exception as e:
            error = str(e)
        latency = round((time.perf_counter() - start) * 1000, 2)
        return {"healthy": error is None, "latency_ms": latency, "error": error}

    def reset(self) -> None:
        """Dispose the engine so the next initialize() starts fresh."""
        if self._initialized:
            self.engine.dispose()
        self._initialized = False

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("DatabaseManager not initialized. Call initialize() first.")


db = DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request."""
    with db.session() as session:
        yield session


__all__ = ["Base", "DatabaseManager", "db", "enable_sqlite_foreign_keys", "get_db"]
