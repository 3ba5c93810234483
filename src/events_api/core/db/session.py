"""Async session factory bound to the process engine."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.events_api.core.db.engine import get_engine


@asynccontextmanager
async def get_session(engine: AsyncEngine | None = None) -> AsyncIterator[AsyncSession]:
    """Open a session; pass ``engine`` to bind somewhere else (tests).

    Loaded objects stay usable after commit and nothing is flushed implicitly,
    so services decide exactly when writes hit the database.
    """
    factory = async_sessionmaker(
        engine if engine is not None else get_engine(),
        expire_on_commit=False,
        autoflush=False,
    )
    async with factory() as session:
        yield session
