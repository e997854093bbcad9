"""Database connection and session management for the draft store."""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from creatorlink.core.config import get_config

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for service-owned tables."""


_engine = None
_SessionLocal: sessionmaker | None = None


def _build_engine(database_url: str):
    cfg = get_config()
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=cfg.DEBUG and cfg.LOG_LEVEL == "DEBUG",
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        database_url,
        echo=cfg.DEBUG and cfg.LOG_LEVEL == "DEBUG",
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=5,
        max_overflow=10,
    )


def _configure_engine(database_url: str) -> None:
    global _engine, _SessionLocal
    _engine = _build_engine(database_url)
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def get_engine():
    """Return the active SQLAlchemy engine, building it on first use."""
    if _engine is None:
        _configure_engine(get_config().DATABASE_URL)
    return _engine


def get_session_factory() -> sessionmaker:
    get_engine()
    return _SessionLocal


def init_db() -> None:
    """Create service tables if they do not exist yet."""
    import creatorlink.database.models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
    logger.info("database.init.completed", extra={"event": "database.init.completed"})


def verify_database_connection() -> bool:
    """Verify DB connectivity during startup."""
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("database.connection_failed", extra={"event": "database.connection_failed"})
        return False
