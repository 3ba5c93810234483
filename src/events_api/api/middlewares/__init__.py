"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.events_api.core.config import Settings

from .request_context import RequestContextMiddleware
from .security_headers import SecurityHeadersMiddleware, security_headers

__all__ = [
    "setup_middlewares",
    "RequestContextMiddleware",
    "SecurityHeadersMiddleware",
    "security_headers",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Install the middleware stack.

    Each add_middleware call wraps the ones before it, so they are listed
    innermost first. CorrelationIdMiddleware ends up outermost and the id it
    assigns is visible to everything below.
    """
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, headers=security_headers(settings))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(CorrelationIdMiddleware)
