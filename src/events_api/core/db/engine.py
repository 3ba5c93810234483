"""Process-wide async engine."""

from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.events_api.core.config import Settings, get_settings

_engine: AsyncEngine | None = None


def _engine_options(settings: Settings) -> dict[str, Any]:
    # SQLite (local development) has no server-side pool to size
    if make_url(settings.database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_pre_ping": True,
    }


def get_engine() -> AsyncEngine:
    """Create the engine on first use and reuse it afterwards."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(settings.database_url, **_engine_options(settings))
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections. Called from the application lifespan."""
    global _engine
    if _engine is None:
        return
    engine, _engine = _engine, None
    await engine.dispose()
