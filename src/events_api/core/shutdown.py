"""Graceful shutdown: count requests in flight so the lifespan can drain them."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.events_api.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    """In-flight request counter.

    Everything runs on one event loop and the counter is never touched across
    an await, so it needs no lock.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._in_flight = 0
        self._shutting_down = False
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def is_shutting_down(self) -> bool:
        return self._shutting_down

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    @asynccontextmanager
    async def track_request(self) -> AsyncIterator[None]:
        self._in_flight += 1
        self._idle.clear()
        try:
            yield
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._idle.set()

    async def start_shutdown(self) -> None:
        """Flag the process as draining; /health starts answering 503."""
        self._shutting_down = True
        if self._in_flight:
            logger.info("Draining in-flight requests", in_flight=self._in_flight)

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait until nothing is in flight. Returns False on timeout."""
        try:
            await asyncio.wait_for(self._idle.wait(), timeout=timeout)
        except TimeoutError:
            return False
        return True


request_tracker = RequestTracker()
