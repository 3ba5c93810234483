"""Exception handlers. Every JSON error body carries the correlation request_id."""

from collections.abc import Mapping
from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.events_api.core.cache import SessionStoreUnavailableError
from src.events_api.core.logging import get_logger

logger = get_logger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def error_response(
    status_code: int,
    detail: Any,
    headers: Mapping[str, str] | None = None,
    **extra: Any,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, **extra, "request_id": correlation_id.get()},
        headers=headers,
    )


def _is_absent(error: Mapping[str, Any]) -> bool:
    """A field that was not sent, or sent blank."""
    if error.get("type") == "missing":
        return True
    ctx = error.get("ctx") or {}
    return error.get("type") == "string_too_short" and ctx.get("min_length") == 1


def _validation_detail(exc: RequestValidationError) -> str:
    """One-line summary of a validation failure.

    Absent fields win over everything else; otherwise the first custom validator
    message (weak password, mismatched confirmation) is surfaced as-is.
    """
    errors = exc.errors()
    if any(_is_absent(error) for error in errors):
        return "Missing required fields"
    for error in errors:
        if error.get("type") == "value_error":
            return str(error.get("msg", "")).removeprefix(_VALUE_ERROR_PREFIX)
    return "Invalid request"


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, exc.detail, headers=exc.headers)


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Client input errors are 400 rather than FastAPI's 422
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        _validation_detail(exc),
        errors=jsonable_encoder(exc.errors(), exclude={"input", "ctx"}),
    )


async def _session_store_error(
    request: Request, exc: SessionStoreUnavailableError
) -> JSONResponse:
    logger.error("Session store unavailable", path=request.url.path, error=str(exc))
    return error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Session store unavailable, please retry later",
    )


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception",
        exc_info=exc,
        request_id=correlation_id.get(),
        path=request.url.path,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def setup_exception_handlers(app: FastAPI) -> None:
    # fastapi.HTTPException subclasses Starlette's, so one handler covers both
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(SessionStoreUnavailableError, _session_store_error)
    app.add_exception_handler(Exception, _unhandled_error)
