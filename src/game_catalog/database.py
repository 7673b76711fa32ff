"""Database configuration with async SQLAlchemy support."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from game_catalog.config import Settings


# Largest value a SQL INTEGER column (64-bit signed) can hold
SQL_INTEGER_MAX = 2**63 - 1


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form the database returns."""
    return datetime.now(UTC).replace(tzinfo=None)


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database.

    In-memory SQLite databases share a single connection so that every
    session sees the same data.
    """
    url = settings.database_url
    if url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url):
        return create_async_engine(
            url,
            echo=settings.debug,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(url, echo=settings.debug)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the async session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    # Register models on the metadata
    import game_catalog.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession]:
    """Dependency that provides an async database session.

    Yields a session and ensures it's closed after the request.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
