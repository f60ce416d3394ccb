"""
Database connection and session management.
"""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import NullPool

from brokerage.config import get_settings
from brokerage.db.models import Base

logger = logging.getLogger(__name__)
settings = get_settings()


def build_engine(database_url: str):
    """Create an engine suited to the configured backend."""
    if database_url.startswith("postgresql"):
        # Hosted Postgres poolers hand out short-lived connections
        return create_engine(database_url, poolclass=NullPool)
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False},  # SQLite across threads
    )


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Create any missing tables."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")


def check_db(db: Session) -> str:
    """Round-trip a trivial query; returns "ok" or the error text."""
    try:
        db.execute(text("SELECT 1"))
        return "ok"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return f"error: {e}"


def get_db() -> Generator[Session, None, None]:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """Session for scripts: commits on success, rolls back on error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
