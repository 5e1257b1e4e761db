"""Request pacing for public map services.

Nominatim and Overpass ask clients to leave a minimum gap between requests.
One limiter exists per service name, so every adapter instance talking to the
same service shares a single schedule.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import ClassVar

logger = logging.getLogger(__name__)


class ApiRateLimiter:
    """Spaces requests to one service at least ``min_delay_seconds`` apart.

    Callers are served one at a time in arrival order.
    """

    _shared: ClassVar[dict[str, ApiRateLimiter]] = {}
    _shared_lock: ClassVar[asyncio.Lock | None] = None

    def __init__(self, api_name: str, min_delay_seconds: float = 1.0) -> None:
        """Create a limiter.

        Args:
            api_name: Service the limiter paces, used in log messages.
            min_delay_seconds: Gap to keep between two requests.
        """
        self.api_name = api_name
        self.min_delay_seconds = min_delay_seconds
        # Monotonic time before which the next request may not start
        self._next_slot: float | None = None
        self._turn = asyncio.Lock()

    @classmethod
    async def get_instance(cls, api_name: str, min_delay_seconds: float = 1.0) -> ApiRateLimiter:
        """Return the limiter shared by everything talking to ``api_name``.

        The first registration fixes the delay; later ``min_delay_seconds``
        values are ignored.
        """
        if cls._shared_lock is None:
            cls._shared_lock = asyncio.Lock()

        async with cls._shared_lock:
            limiter = cls._shared.get(api_name)
            if limiter is None:
                limiter = cls(api_name, min_delay_seconds)
                cls._shared[api_name] = limiter
                logger.info(f"Pacing {api_name} requests {min_delay_seconds}s apart")
            return limiter

    @classmethod
    def reset(cls) -> None:
        """Drop all shared limiters; their locks belong to the loop that created them."""
        cls._shared.clear()
        cls._shared_lock = None

    async def acquire(self) -> None:
        """Wait for this caller's slot."""
        async with self._turn:
            if self._next_slot is not None:
                delay = self._next_slot - time.monotonic()
                if delay > 0:
                    logger.debug(f"{self.api_name}: holding request for {delay:.2f}s")
                    await asyncio.sleep(delay)
            self._next_slot = time.monotonic() + self.min_delay_seconds
