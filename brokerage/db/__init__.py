"""
Database engine, sessions and ORM models.
"""

from brokerage.db.database import engine, SessionLocal, get_db, get_db_context, init_db
from brokerage.db.models import Base

__all__ = ["engine", "SessionLocal", "get_db", "get_db_context", "init_db", "Base"]
