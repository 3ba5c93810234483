from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.events_api.api.middlewares import setup_middlewares
from src.events_api.api.routes.router import api_router
from src.events_api.core.config import Settings, get_settings
from src.events_api.core.db import dispose_engine
from src.events_api.core.exceptions import setup_exception_handlers
from src.events_api.core.health import setup_health_endpoint, setup_metrics
from src.events_api.core.logging import get_logger, setup_logging
from src.events_api.core.rate_limit import limiter
from src.events_api.core.redis import close_redis
from src.events_api.core.shutdown import request_tracker

logger = get_logger(__name__)

TAGS = [
    {"name": "users", "description": "Registration, login, tokens and profile"},
    {"name": "password-reset", "description": "Forgotten password flow"},
    {"name": "events", "description": "The caller's calendar events"},
    {"name": "profile-images", "description": "Profile image storage"},
    {"name": "messaging", "description": "SMS notifications"},
]


async def _drain(settings: Settings) -> None:
    await request_tracker.start_shutdown()
    if not await request_tracker.wait_for_drain(timeout=settings.shutdown_grace_period):
        logger.warning(
            "Grace period elapsed with requests still in flight",
            grace_period=settings.shutdown_grace_period,
            in_flight=request_tracker.in_flight_count,
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(
        "Application starting",
        app=settings.app_name,
        env=settings.app_env,
        session_tracking=settings.session_tracking_enabled,
        reset_token_single_use=settings.reset_token_single_use,
    )
    try:
        yield
    finally:
        await _drain(settings)
        await close_redis()
        await dispose_engine()
        logger.info("Application stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    docs = settings.enable_openapi

    app = FastAPI(
        title=settings.app_name,
        description="Events management API",
        version="0.1.0",
        openapi_tags=TAGS,
        lifespan=lifespan,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
    )
    app.state.limiter = limiter

    setup_exception_handlers(app)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    setup_middlewares(app, settings)

    app.include_router(api_router)
    setup_metrics(app)
    setup_health_endpoint(app)
    return app


app = create_app()
