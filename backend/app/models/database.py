"""Database configuration and session management.

This module provides:
- Async SQLAlchemy engine construction with connection pooling
- Session factory for database operations
- Declarative base shared by all models
- Database initialization and reset utilities

Nothing here is created at import time; the application lifespan (and the
test fixtures) build the engine once and hand the session factory to the
repositories that need it.
"""

import logging
from datetime import datetime, UTC

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

from app.config.constants import DB_POOL_SIZE, DB_POOL_MAX_OVERFLOW

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.now(UTC).replace(tzinfo=None)


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine; pool sizing only applies to server databases."""
    kwargs = {"echo": echo, "future": True}
    if not database_url.startswith("sqlite"):
        kwargs.update(
            pool_pre_ping=True,
            pool_size=DB_POOL_SIZE,
            max_overflow=DB_POOL_MAX_OVERFLOW,
        )
    return create_async_engine(database_url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> sessionmaker:
    """Create the async session factory bound to ``engine``."""
    return sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


async def init_db(engine: AsyncEngine):
    """Initialize database by creating all tables.

    Creates tables defined in SQLAlchemy models if they don't exist.
    Safe to call multiple times (idempotent operation).
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized successfully")


async def reset_db(engine: AsyncEngine):
    """Drop all database tables.

    WARNING: This permanently deletes all data. Use only in development
    or when intentionally resetting the database schema.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("Database tables dropped - all data removed")
