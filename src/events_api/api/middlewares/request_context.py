"""Per-request bookkeeping: log context and in-flight tracking."""

from asgi_correlation_id import correlation_id
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.events_api.core.logging import bind_request_context, clear_request_context
from src.events_api.core.shutdown import request_tracker

# Probes must keep answering while the process drains, so they are not counted
_UNTRACKED_PATHS = frozenset({"/health", "/metrics"})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds the correlation id for structlog and counts the request as in flight.

    Must run inside CorrelationIdMiddleware so the id is already set.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        clear_request_context()
        bind_request_context(correlation_id.get())
        try:
            if request.url.path in _UNTRACKED_PATHS:
                return await call_next(request)
            async with request_tracker.track_request():
                return await call_next(request)
        finally:
            clear_request_context()
