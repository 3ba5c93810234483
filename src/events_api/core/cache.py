"""Redis-backed token state: the refresh-token session registry and used reset tokens.

Tokens are never stored in clear; both stores key on the SHA256 hash of the token.
Unlike rate limiting, these stores are on the authentication critical path, so an
unavailable Redis is reported as SessionStoreUnavailableError instead of being
silently skipped.
"""

from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.events_api.core.security import hash_token

KEY_LIVE_REFRESH_TOKENS = "refresh_tokens"
PREFIX_USED_RESET_TOKEN = "used_reset_token"


class SessionStoreUnavailableError(RuntimeError):
    """Raised when a token-state operation is required but Redis can't serve it."""


class SessionRegistry:
    """Set of currently-live refresh tokens.

    A refresh token is honoured by the refresh flow only while it is a member.
    Membership is removed on logout and on rotation.
    """

    def __init__(self, redis: Redis | None):
        self.redis = redis

    def _client(self) -> Redis:
        if self.redis is None:
            raise SessionStoreUnavailableError("Redis is not configured (REDIS_URL not set)")
        return self.redis

    async def register(self, token: str) -> None:
        """Mark a refresh token as live."""
        try:
            await self._client().sadd(  # type: ignore[misc]
                KEY_LIVE_REFRESH_TOKENS, hash_token(token)
            )
        except RedisError as e:
            raise SessionStoreUnavailableError(str(e)) from e

    async def revoke(self, token: str) -> bool:
        """Remove a refresh token. Returns True if it was live."""
        try:
            removed = await self._client().srem(  # type: ignore[misc]
                KEY_LIVE_REFRESH_TOKENS, hash_token(token)
            )
        except RedisError as e:
            raise SessionStoreUnavailableError(str(e)) from e
        return bool(removed)

    async def is_live(self, token: str) -> bool:
        """Check whether a refresh token is currently live."""
        try:
            result = await self._client().sismember(  # type: ignore[misc]
                KEY_LIVE_REFRESH_TOKENS, hash_token(token)
            )
        except RedisError as e:
            raise SessionStoreUnavailableError(str(e)) from e
        return bool(result)


class UsedResetTokenStore:
    """Record of reset tokens that have already changed a password.

    Entries expire together with the token itself, after which the signature
    check rejects the token anyway.
    """

    def __init__(self, redis: Redis | None):
        self.redis = redis

    def _client(self) -> Redis:
        if self.redis is None:
            raise SessionStoreUnavailableError("Redis is not configured (REDIS_URL not set)")
        return self.redis

    async def mark_used(self, token: str, ttl: int) -> bool:
        """Record a reset token as consumed.

        Returns False if it had already been consumed (SET NX semantics), so two
        concurrent password changes with the same token can't both succeed.
        """
        try:
            created = await self._client().set(
                f"{PREFIX_USED_RESET_TOKEN}:{hash_token(token)}", "1", ex=max(ttl, 1), nx=True
            )
        except RedisError as e:
            raise SessionStoreUnavailableError(str(e)) from e
        return bool(created)

    async def release(self, token: str) -> None:
        """Undo mark_used when the password change it guarded did not happen."""
        try:
            await self._client().delete(f"{PREFIX_USED_RESET_TOKEN}:{hash_token(token)}")
        except RedisError as e:
            raise SessionStoreUnavailableError(str(e)) from e

    async def is_used(self, token: str) -> bool:
        try:
            result = await self._client().get(f"{PREFIX_USED_RESET_TOKEN}:{hash_token(token)}")
        except RedisError as e:
            raise SessionStoreUnavailableError(str(e)) from e
        return result is not None
