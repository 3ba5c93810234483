"""Bounded execution of blocking provider SDK calls (Resend, Twilio)."""

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any

from src.events_api.core.logging import get_logger

logger = get_logger(__name__)

# A call that outlives its timeout keeps its worker until the SDK returns; with
# NOTIFY_WORKERS such calls hung at once, later sends queue and time out too.
# Twilio calls carry their own HTTP timeout so they always come back.
NOTIFY_WORKERS = 4

_executor = ThreadPoolExecutor(max_workers=NOTIFY_WORKERS, thread_name_prefix="notify")


def deliver(send: Callable[[], Any], *, channel: str, timeout: float, **context: Any) -> bool:
    """Run ``send`` on the notification pool and wait at most ``timeout`` seconds.

    Provider errors and timeouts are logged and reported as False; they never
    propagate. A timed-out call keeps running in its thread.
    """
    future = _executor.submit(send)
    try:
        future.result(timeout=timeout)
    except FuturesTimeoutError:
        logger.error("Notification timed out", channel=channel, timeout=timeout, **context)
        return False
    except Exception as e:
        logger.error("Notification failed", channel=channel, error=str(e), **context)
        return False
    logger.info("Notification sent", channel=channel, **context)
    return True
