"""
Database engine and session handling.

The engine is created once per process. Sessions are acquired per request
through `get_session` (FastAPI dependency) or `session_scope` (scripts), and
`dispose_engine` releases pooled connections on shutdown.
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

import settings
from settings import logger


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores FK actions (CASCADE / SET NULL) unless asked."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()


def build_engine(database_url: str = None) -> Engine:
    """Create an engine for the given URL using the configured pool settings."""
    url = database_url or settings.DATABASE_URL

    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False}
        )

    return create_engine(
        url,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_pre_ping=True
    )


engine = build_engine()


def get_session() -> Iterator[Session]:
    """Yield a session bound to the process engine (FastAPI dependency)."""
    with Session(engine) as session:
        yield session


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session for scripts and management commands, closed on exit."""
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()


def dispose_engine() -> None:
    """Close every pooled connection. Called on application shutdown."""
    logger.info("Disposing database engine", extra={"url": str(engine.url)})
    engine.dispose()
