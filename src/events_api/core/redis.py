"""Process-wide Redis client.

The pool is opened lazily by the first get_redis() call and closed by the
application lifespan. Without REDIS_URL get_redis() returns None. A failed
connection also returns None, and the next call after RECONNECT_INTERVAL
seconds tries again; callers decide whether None is fatal (token state) or
tolerable (health, rate limits).
"""

import asyncio
import time
from dataclasses import dataclass, field

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from src.events_api.core.config import get_settings
from src.events_api.core.logging import get_logger

logger = get_logger(__name__)

RECONNECT_INTERVAL = 5.0  # seconds


@dataclass
class _RedisState:
    pool: ConnectionPool | None = None
    client: Redis | None = None
    retry_at: float = 0.0
    reported_missing: bool = False
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, compare=False, repr=False)


_state = _RedisState()


async def _connect(url: str, max_connections: int) -> Redis | None:
    pool = ConnectionPool.from_url(url, max_connections=max_connections, decode_responses=True)
    client = Redis(connection_pool=pool)
    try:
        await client.ping()  # type: ignore[misc]
    except (RedisError, OSError) as e:
        logger.warning("Redis unreachable", error=str(e), retry_in=RECONNECT_INTERVAL)
        await client.aclose()
        await pool.disconnect()
        return None

    _state.pool = pool
    logger.info("Redis connected")
    return client


async def get_redis() -> Redis | None:
    """Return the shared client, connecting on first use."""
    if _state.client is not None:
        return _state.client

    settings = get_settings()
    if not settings.redis_url:
        if not _state.reported_missing:
            _state.reported_missing = True
            logger.info("Redis not configured (REDIS_URL not set)")
        return None

    if time.monotonic() < _state.retry_at:
        return None

    # Callers arriving mid-connect wait for the outcome instead of seeing None
    async with _state.lock:
        if _state.client is None and time.monotonic() >= _state.retry_at:
            _state.client = await _connect(settings.redis_url, settings.redis_pool_size)
            if _state.client is None:
                _state.retry_at = time.monotonic() + RECONNECT_INTERVAL
    return _state.client


async def close_redis() -> None:
    """Close the pool; the next get_redis() call reconnects."""
    if _state.client is not None:
        await _state.client.aclose()
        logger.info("Redis connection closed")
    if _state.pool is not None:
        await _state.pool.disconnect()
    reset_redis_state()


def reset_redis_state() -> None:
    """Drop references without closing anything (tests)."""
    global _state
    _state = _RedisState()
