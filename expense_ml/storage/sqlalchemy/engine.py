"""Async engine and session factories.

The URL decides the driver: ``postgresql+asyncpg://`` in production,
``sqlite+aiosqlite://`` for local use and tests.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory; repositories open one short session per call."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
