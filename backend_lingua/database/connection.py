"""
Database connection and session management.

Uses LINGUA_DB_URL / DATABASE_URL for PostgreSQL when set; otherwise falls back
to SQLite (DATABASE_PATH or lingua.db). The engine is created lazily and cached.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from backend_lingua.config.env import get_database_url, mask_database_url
from backend_lingua.core.exceptions import StoreFailure
from backend_lingua.database.tables import Base
from backend_lingua.lingua_logging import get_logger

logger = get_logger(__name__)

_engine = None
_SessionLocal: sessionmaker | None = None


def get_engine():
    """Create or return cached engine."""
    global _engine
    if _engine is None:
        url = get_database_url()
        connect_args: dict[str, Any] = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        _engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
        logger.info("lingua_db_engine", url=mask_database_url(url))
    return _engine


def _get_session_factory() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


@contextmanager
def session_scope() -> Iterator[Session]:
    """Context manager for a single session. Commits on success, rolls back on error."""
    factory = _get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def store_scope(event: str, **fields: Any) -> Iterator[Session]:
    """
    session_scope() that turns SQLAlchemy errors into StoreFailure.
    event names the failed operation in the log line (e.g. "contacts_initiated_fetch").
    """
    try:
        with session_scope() as session:
            yield session
    except SQLAlchemyError as e:
        logger.exception(f"{event}_failed", error=str(e), **fields)
        raise StoreFailure(f"Store error during {event}") from e


def init_db() -> None:
    """
    Create users, contacts and user_ratings if they do not exist.
    Uses Base.metadata.create_all. Safe to call on every startup.
    """
    try:
        engine = get_engine()
        Base.metadata.create_all(bind=engine)
        logger.info("lingua_init_db", url=mask_database_url(get_database_url()))
    except Exception as e:
        logger.exception("lingua_init_db_failed", error=str(e))
        raise


def reset_engine_for_test() -> None:
    """Dispose and clear the cached engine and session factory. For tests with a new DATABASE_PATH."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
