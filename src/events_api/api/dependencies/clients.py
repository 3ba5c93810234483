"""Process-scoped collaborators: settings, Redis-backed stores, token issuer, blob store.

Each is exposed as a dependency so tests can swap it via app.dependency_overrides.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from redis.asyncio import Redis

from src.events_api.core.cache import SessionRegistry, UsedResetTokenStore
from src.events_api.core.config import Settings, get_settings
from src.events_api.core.redis import get_redis
from src.events_api.core.security import TokenIssuer
from src.events_api.core.storage import BlobStore

SettingsDep = Annotated[Settings, Depends(get_settings)]


async def get_redis_client() -> Redis | None:
    return await get_redis()


RedisClient = Annotated[Redis | None, Depends(get_redis_client)]


def get_token_issuer(settings: SettingsDep) -> TokenIssuer:
    return TokenIssuer.from_settings(settings)


Issuer = Annotated[TokenIssuer, Depends(get_token_issuer)]


def get_session_registry(redis: RedisClient) -> SessionRegistry:
    return SessionRegistry(redis)


Registry = Annotated[SessionRegistry, Depends(get_session_registry)]


def get_used_reset_tokens(redis: RedisClient) -> UsedResetTokenStore:
    return UsedResetTokenStore(redis)


UsedResetTokens = Annotated[UsedResetTokenStore, Depends(get_used_reset_tokens)]


@lru_cache
def get_blob_store() -> BlobStore:
    """One boto3 client per process (boto3 clients are thread-safe)."""
    return BlobStore.from_settings(get_settings())


BlobStoreDep = Annotated[BlobStore, Depends(get_blob_store)]
