"""Schema management for the ML store."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from expense_ml.storage.sqlalchemy import tables  # noqa: F401  (registers tables on Base.metadata)
from expense_ml.storage.sqlalchemy.base import Base

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """Create missing tables; existing ones are left untouched."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ready on %s", describe_database_url(str(engine.url)))


async def drop_tables(engine: AsyncEngine) -> None:
    logger.warning("Dropping ML tables on %s", describe_database_url(str(engine.url)))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def reset_database(engine: AsyncEngine) -> None:
    """Drop and recreate all ML tables, forgetting everything learned."""
    await drop_tables(engine)
    await create_tables(engine)


def describe_database_url(database_url: str) -> str:
    """Database URL without credentials, for display."""
    return database_url.split("@")[-1] if "@" in database_url else database_url
