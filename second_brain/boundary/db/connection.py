"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and FastAPI dependency
for database session injection. The engine is created once per process.

Dependencies: sqlalchemy, second_brain.configs
System role: Database connection lifecycle management
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from second_brain.boundary.db.base import Base
from second_brain.configs import get_settings

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_async_engine() -> AsyncEngine:
    """
    Return the process-wide async engine, creating it on first use.

    Pool options apply to server databases only; SQLite uses the
    driver's default pool.

    Returns:
        AsyncEngine: Configured async engine
    """
    global _engine
    if _engine is None:
        db_config = get_settings().database
        kwargs = {"echo": db_config.echo_sql, "pool_pre_ping": True}
        if not db_config.is_sqlite:
            kwargs.update(
                pool_size=db_config.pool_size,
                max_overflow=db_config.max_overflow,
                pool_timeout=db_config.pool_timeout,
            )
        _engine = create_async_engine(db_config.url, **kwargs)
    return _engine


def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Return the session factory bound to the process engine.

    Sessions use autoflush=False and expire_on_commit=False for explicit
    transaction control.

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_async_engine(),
            autoflush=False,
            expire_on_commit=False,
        )
    return _session_factory


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Yields:
        AsyncSession: Session scoped to the request lifetime
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session


async def create_tables() -> None:
    """Create all tables registered on Base.metadata."""
    # Import models so they register on the metadata
    from second_brain.boundary.db import models  # noqa: F401

    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close all pooled connections and forget the engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
