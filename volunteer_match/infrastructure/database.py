"""Database configuration and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from volunteer_match.config import Settings, get_settings
from volunteer_match.domain.errors import MatchingError, StoreUnavailable


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


logger = logging.getLogger(__name__)


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def create_db_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for ``settings.database_url``.

    SQLite connections open every transaction with ``BEGIN IMMEDIATE`` so writers
    queue on the database lock instead of failing when a reader upgrades. Server
    databases rely on the row lock taken by conditional ``UPDATE`` statements.
    """

    url = settings.database_url
    if not _is_sqlite(url):
        return create_engine(url, pool_pre_ping=True)

    engine = create_engine(
        url,
        connect_args={
            "check_same_thread": False,
            "timeout": settings.sqlite_busy_timeout_seconds,
        },
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        # Let SQLAlchemy emit BEGIN itself (see ``_begin_immediate``).
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


settings = get_settings()
engine = create_db_engine(settings)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from volunteer_match.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """Run the enclosed block as one transaction on ``session``.

    The transaction is committed when the block exits cleanly and rolled back
    otherwise. Connectivity and locking failures are raised as
    :class:`StoreUnavailable`; integrity violations propagate unchanged so callers
    can translate them into domain errors.
    """

    try:
        yield session
        session.commit()
    except (MatchingError, IntegrityError):
        session.rollback()
        raise
    except (OperationalError, DBAPIError) as exc:
        logger.exception("Database operation failed: %s", exc)
        _safe_rollback(session)
        raise StoreUnavailable() from exc
    except Exception:
        session.rollback()
        raise


def _safe_rollback(session: Session) -> None:
    try:
        session.rollback()
    except DBAPIError:
        logger.warning("Rollback failed after a database error; discarding session state")
        session.invalidate()


__all__ = [
    "Base",
    "SessionLocal",
    "create_db_engine",
    "engine",
    "get_db",
    "initialize_database",
    "unit_of_work",
]
