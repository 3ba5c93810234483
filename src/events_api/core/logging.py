"""structlog setup and request-scoped log context.

Both structlog loggers and plain stdlib loggers (uvicorn, SQLAlchemy, boto)
end up in one handler, rendered as JSON in production and as colored console
lines in debug mode.
"""

import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

_NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "botocore",
    "boto3",
    "twilio.http_client",
    "httpx",
    "httpcore",
)


def setup_logging(debug: bool = False) -> None:
    """Configure structlog and the root stdlib logger. Call once at startup."""
    pre_chain: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]
    renderer: structlog.typing.Processor = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        )
    )
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    """Attach the correlation id to every log line of the current request."""
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_user_context(user_id: int, email: str | None = None) -> None:
    """Attach the authenticated user to the current request's log lines.

    The email is only included when LOG_USER_EMAILS is enabled.
    """
    from src.events_api.core.config import get_settings

    bind_contextvars(user_id=user_id)
    if email and get_settings().log_user_emails:
        bind_contextvars(user_email=email)


def clear_request_context() -> None:
    clear_contextvars()
