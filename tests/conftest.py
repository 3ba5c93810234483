"""Root test fixtures.

The app runs against an in-memory SQLite database and fakeredis, injected
through app.dependency_overrides, so the suite needs no external services.
"""

import os

# Must be set before any app imports: settings are read (and cached) at import time
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret-0123456789abcdef0123456789")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret-0123456789abcdef012345678")
os.environ.setdefault("RESET_TOKEN_SECRET", "test-reset-secret-0123456789abcdef0123456789ab")
# Cheap hashing keeps the suite fast
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator, Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fakeredis import aioredis as fakeredis_aio
from httpx import ASGITransport, AsyncClient
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.events_api import models  # noqa: F401 - registers tables on SQLModel.metadata
from src.events_api.api.dependencies import (
    get_blob_store,
    get_db_session,
    get_redis_client,
)
from src.events_api.core import redis as redis_core
from src.events_api.core.config import Settings, get_settings
from src.events_api.core.db import get_session
from src.events_api.core.security import TokenIssuer
from src.events_api.core.storage import BlobStore
from src.events_api.main import app
from tests.helpers import bearer, registration_payload

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


# --- Database ---


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database per test, shared by every connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session for seeding and inspecting data directly."""
    async with get_session(engine) as session:
        yield session


# --- Redis Test Fixtures ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """Provides a fakeredis client for testing.

    Returns an in-memory Redis implementation that behaves like
    a real Redis server but doesn't require external dependencies.
    """
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis(fake_redis: Redis, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[Redis]:
    """Patches get_redis() to return the fakeredis client (for code outside DI)."""
    redis_core.reset_redis_state()

    async def _get_fake_redis() -> Redis:
        return fake_redis

    monkeypatch.setattr("src.events_api.core.redis.get_redis", _get_fake_redis)
    monkeypatch.setattr("src.events_api.core.health.get_redis", _get_fake_redis)
    yield fake_redis
    redis_core.reset_redis_state()


# --- Collaborators ---


@pytest.fixture
def blob_store() -> MagicMock:
    """Object store double: put succeeds, open finds nothing."""
    store = MagicMock(spec=BlobStore)
    store.put = AsyncMock(return_value=None)
    store.open = AsyncMock(return_value=None)
    return store


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer.from_settings(get_settings())


@pytest.fixture
def override_settings() -> Callable[..., Settings]:
    """Replace injected settings for one test, e.g. ``override_settings(debug=True)``."""

    def _override(**changes: Any) -> Settings:
        settings = get_settings().model_copy(update=changes)
        app.dependency_overrides[get_settings] = lambda: settings
        return settings

    return _override


# --- HTTP client ---


@pytest.fixture
async def client(
    engine: AsyncEngine, fake_redis: Redis, blob_store: MagicMock
) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to the app with database, Redis and blob store overridden."""

    async def _get_test_session() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    async def _get_test_redis() -> Redis:
        return fake_redis

    app.dependency_overrides[get_db_session] = _get_test_session
    app.dependency_overrides[get_redis_client] = _get_test_redis
    app.dependency_overrides[get_blob_store] = lambda: blob_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def registered_user(client: AsyncClient) -> dict[str, Any]:
    """A registered user: the registration response (id, email and token pair)."""
    response = await client.post(
        "/users/register",
        json=registration_payload(
            email="ada@example.com",
            first_name="Ada",
            last_name="Lovelace",
            phone_number="+15551230001",
        ),
    )
    assert response.status_code == 200, response.json()
    return response.json()


@pytest.fixture
def auth_headers(registered_user: dict[str, Any]) -> dict[str, str]:
    return bearer(registered_user["accessToken"])
