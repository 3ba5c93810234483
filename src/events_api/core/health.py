"""Liveness/readiness probe and Prometheus metrics.

/health reports the database and Redis separately. Results are reused for
HEALTH_CACHE_TTL seconds so load balancer polling doesn't hit the stores on
every call.
"""

import secrets
import time
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.events_api.core.config import get_settings
from src.events_api.core.db import get_session
from src.events_api.core.logging import get_logger
from src.events_api.core.redis import get_redis
from src.events_api.core.shutdown import request_tracker

logger = get_logger(__name__)

HEALTH_CACHE_TTL = 10  # seconds

_cached_report: dict[str, Any] | None = None
_cached_at: float = 0.0


def reset_health_cache() -> None:
    """Forget the last report (used by tests)."""
    global _cached_report, _cached_at
    _cached_report = None
    _cached_at = 0.0


async def _database_status() -> str:
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Health check: database unreachable", error=str(e))
        return f"unhealthy: {e!s}"
    return "healthy"


async def _redis_status() -> str:
    """Redis is optional unless refresh tokens are tracked in it."""
    client = await get_redis()
    if client is None:
        return "unavailable" if get_settings().session_tracking_enabled else "not_configured"
    try:
        await client.ping()  # type: ignore[misc]
    except Exception as e:
        logger.warning("Health check: redis unreachable", error=str(e))
        return f"unhealthy: {e!s}"
    return "healthy"


async def _build_report(now: float) -> dict[str, Any]:
    database = await _database_status()
    redis = await _redis_status()

    if database != "healthy":
        overall = "unhealthy"
    elif redis in ("healthy", "not_configured"):
        overall = "healthy"
    else:
        overall = "degraded"

    return {
        "status": overall,
        "database": database,
        "redis": redis,
        "cached": False,
        "timestamp": now,
    }


def _respond(report: dict[str, Any]) -> JSONResponse:
    healthy = report["status"] == "healthy"
    return JSONResponse(
        content=report,
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )


def setup_health_endpoint(app: FastAPI) -> None:
    @app.get("/health", tags=["health"])
    async def health() -> JSONResponse:
        global _cached_report, _cached_at

        if request_tracker.is_shutting_down:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "draining",
                    "in_flight_requests": request_tracker.in_flight_count,
                },
            )

        now = time.time()
        age = now - _cached_at
        if _cached_report is not None and age < HEALTH_CACHE_TTL:
            return _respond({**_cached_report, "cached": True, "cache_age_seconds": round(age, 1)})

        _cached_report = await _build_report(now)
        _cached_at = now
        return _respond(_cached_report)


def _require_metrics_key(expected: str) -> Callable[..., Awaitable[None]]:
    header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def _check(supplied: str | None = Depends(header)) -> None:
        if supplied is None or not secrets.compare_digest(supplied, expected):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    return _check


def setup_metrics(app: FastAPI) -> None:
    """Expose /metrics; scraping needs X-Metrics-Key when METRICS_API_KEY is set."""
    metrics_key = get_settings().metrics_api_key
    instrumentator = Instrumentator(excluded_handlers=["/health", "/metrics"]).instrument(app)

    dependencies = [Depends(_require_metrics_key(metrics_key))] if metrics_key else None
    instrumentator.expose(
        app, endpoint="/metrics", include_in_schema=False, dependencies=dependencies
    )
