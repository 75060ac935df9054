"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the reading log's catalog store.

The store is a single `books` table. Everything the catalog core needs from
it goes through the reader/writer in `reading_log.catalog.reader`; routes
never issue queries directly.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

This is implemented using FastAPI's dependency injection.
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from reading_log.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements in debug mode
#
# SQLite uses a single-file pool without sizing options, so pool arguments
# are only passed for server databases.

if settings.is_sqlite:
    engine = create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False},
        pool_pre_ping=True,
        echo=settings.debug,
    )
else:
    engine = create_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    The Base class provides the mapper registry and the metadata that
    create_tables() provisions.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, the route uses it, and the
    finally block closes it even if the route raised.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Table Provisioning
# =============================================================================
def create_tables() -> None:
    """
    Create the catalog tables if they do not exist.

    Called from the application lifespan. There are no migrations: the
    schema is created once and never altered by this service.
    """
    # Import models so their tables are registered on Base.metadata
    import reading_log.models  # noqa: F401

    Base.metadata.create_all(bind=engine)

