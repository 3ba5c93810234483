"""Per-client-IP rate limits (slowapi).

Two groups: credential endpoints share the strict AUTH_RATE_LIMIT, the
authenticated data endpoints the looser GENERAL_RATE_LIMIT. Counters live in
Redis when REDIS_URL is set so every worker sees the same budget, otherwise
in process memory.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.events_api.core.config import get_settings
from src.events_api.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Bucket by socket peer address only.

    Headers such as X-Forwarded-For are client-controlled; keying on them
    would let a client mint a fresh bucket per request.
    """
    return get_remote_address(request) or "unknown"


# Limits are resolved per request so settings changes apply after a cache clear
def auth_rate_limit() -> str:
    return get_settings().auth_rate_limit


def general_rate_limit() -> str:
    return get_settings().general_rate_limit


def create_limiter() -> Limiter:
    """Build the process limiter. It is a no-op when APP_ENV=testing."""
    settings = get_settings()
    if settings.is_testing:
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    # slowapi talks to Redis through its own sync client, so it takes the URI
    storage_uri = settings.redis_url or "memory://"
    logger.info("Rate limiter configured", backend=storage_uri.split("://", 1)[0])
    return Limiter(key_func=get_rate_limit_key, storage_uri=storage_uri)


limiter = create_limiter()
