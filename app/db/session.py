"""
Database session management - SQLAlchemy engine and session factory.
This module provides the database connection and session dependency for FastAPI.
"""

from typing import Generator, Optional

from sqlalchemy import create_engine  # Creates the database connection pool
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker  # Factory for creating database sessions

from app.core.config import settings  # App configuration with DATABASE_URL


def build_engine(database_url: str) -> Optional[Engine]:
    """
    Create the engine for a database URL, or None when storage is not configured.

    - pool_pre_ping=True: check pooled connections with a "SELECT 1" before use,
      so a restarted database doesn't surface as a stale-connection error.
    - SQLite needs check_same_thread=False because FastAPI runs sync routes
      in a threadpool.
    """
    if not database_url:
        return None

    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


# ---------------------------------------------------------------------------
# DATABASE ENGINE + SESSION FACTORY
# ---------------------------------------------------------------------------
# - autocommit=False: you must call db.commit(); gives the cascade delete
#   a single transaction it can roll back
# - autoflush=False: we control when flushes happen
engine = build_engine(settings.DATABASE_URL)

SessionLocal = (
    sessionmaker(autocommit=False, autoflush=False, bind=engine)
    if engine is not None
    else None
)


def get_db() -> Generator[Optional[Session], None, None]:
    """
    FastAPI dependency that provides a database session.

    Yields None when DATABASE_URL is empty so handlers can report
    "Database not configured" instead of crashing.

    Usage in a route:
        @router.delete("/delete-account")
        def delete_account(db: Session | None = Depends(get_db)):
            ...
    """
    if SessionLocal is None:
        yield None
        return

    db = SessionLocal()
    try:
        yield db
    finally:
        # Always close the session when done (returns the connection to the pool)
        db.close()
