"""Browser-hardening response headers, in the spirit of Helmet."""

from collections.abc import Mapping

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.events_api.core.config import Settings

# Swagger UI loads its assets from jsDelivr and needs inline scripts
DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "img-src 'self' data: cdn.jsdelivr.net; "
    "frame-ancestors 'none'"
)

# Responses under these paths carry tokens or profile data
_NO_CACHE_PREFIXES = (
    "/users/",
    "/forgot-password",
    "/verify-reset-token",
    "/set-new-password",
)
_NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
}


def security_headers(settings: Settings) -> dict[str, str]:
    """Headers added to every response.

    The relaxed docs CSP is only used while the OpenAPI pages are served.
    """
    csp = DOCS_CSP if settings.enable_openapi else settings.csp_production
    headers = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }
    if csp:
        headers["Content-Security-Policy"] = csp
    return headers


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, headers: Mapping[str, str]):
        super().__init__(app)
        self.headers = dict(headers)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.update(self.headers)
        if request.url.path.startswith(_NO_CACHE_PREFIXES):
            response.headers.update(_NO_CACHE_HEADERS)
        return response
