"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from dashsearch.config.settings import Settings, get_settings


def create_engine_from_settings(settings: Settings | None = None) -> AsyncEngine:
    """Create an async engine for the configured database.

    In-memory SQLite databases share a single connection so that every
    session sees the same data.
    """
    settings = settings or get_settings()
    url = settings.DATABASE_URL

    if url.startswith("sqlite") and ":memory:" in url:
        return create_async_engine(url, echo=settings.DEBUG, poolclass=StaticPool)
    return create_async_engine(url, echo=settings.DEBUG)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def async_session(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Context manager for obtaining a database session.

    Usage:
        async with async_session(factory) as session:
            customers = await SearchRepository(session, dashboard).search("jo")

    Yields:
        AsyncSession: A database session that will be automatically closed
    """
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()
