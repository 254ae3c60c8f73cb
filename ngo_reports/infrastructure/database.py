"""Database configuration and session management."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""

    url = make_url(database_url)
    database = url.database
    if not database or database == ":memory:":
        return
    Path(database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


class Database:
    """Own the engine and session factory used by one application instance."""

    def __init__(self, database_url: str) -> None:
        connect_args: dict[str, object] = {}
        if database_url.startswith("sqlite"):
            # Background jobs open their own sessions from worker threads.
            connect_args["check_same_thread"] = False
            _ensure_sqlite_directory(database_url)
        self.engine: Engine = create_engine(
            database_url, pool_pre_ping=True, connect_args=connect_args
        )
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

    def initialize(self) -> None:
        """Ensure all ORM models have corresponding database tables."""

        from ngo_reports.infrastructure import models  # noqa: F401  # ensure models are imported

        Base.metadata.create_all(bind=self.engine, checkfirst=True)
        logger.info("Database schema ready at %s", self.engine.url.render_as_string())

    def session(self) -> Session:
        """Return a new session bound to this database."""

        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


__all__ = ["Base", "Database"]
