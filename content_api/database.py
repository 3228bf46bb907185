"""Async database engine and session management.

This module provides the async SQLAlchemy 2.0 engine configuration,
session factory, and the FastAPI dependency that gives every request its
own session (one unit of work per request).

The engine and session factory are built by ``create_app`` from settings
and stored on ``app.state``; nothing connects at import time.

Usage:
    from content_api.database import get_session

    async def my_route(db: AsyncSession = Depends(get_session)):
        result = await db.execute(select(Video))
        ...
"""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from content_api.config import DatabaseSettings
from content_api.models import Base


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record) -> None:  # noqa: ARG001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create the application engine.

    PostgreSQL gets a bounded connection pool with pre-ping (hosted databases
    recycle idle connections); SQLite uses the driver defaults with foreign
    keys enforced.
    """
    if settings.url.startswith("sqlite"):
        engine = create_async_engine(settings.url, echo=settings.echo)
        enable_sqlite_foreign_keys(engine)
        return engine

    return create_async_engine(
        settings.url,
        pool_size=10,
        max_overflow=5,
        pool_pre_ping=True,
        echo=settings.echo,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,  # CRITICAL: prevents attribute expiration after commit
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet.

    Only used when ``database.auto_create_schema`` is enabled (development and
    tests). Deployed databases are managed with Alembic.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database session injection.

    Yields a session scoped to the request with automatic commit on success
    and rollback on exception.

    Raises:
        RuntimeError: If the application was built without a session factory.
    """
    session_factory: async_sessionmaker[AsyncSession] | None = getattr(
        request.app.state, "session_factory", None
    )
    if session_factory is None:
        raise RuntimeError("Database not configured on application state")

    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def create_test_engine(
    database_url: str = "sqlite+aiosqlite:///:memory:",
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create an async engine and session factory for testing.

    Args:
        database_url: Test database URL (defaults to in-memory SQLite).
    """
    test_engine = create_async_engine(database_url, echo=False)
    if database_url.startswith("sqlite"):
        enable_sqlite_foreign_keys(test_engine)
    return test_engine, create_session_factory(test_engine)
