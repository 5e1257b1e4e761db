"""Single-slot guard for async fetches that must not overlap."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class SingleFlightGuard:
    """Allows at most one outstanding operation; extra triggers are dropped, not queued.

    Usage::

        with guard.claim() as acquired:
            if not acquired:
                return
            await fetch()
    """

    def __init__(self, name: str) -> None:
        """Initialize the guard.

        Args:
            name: Name of the guarded operation (for logging).
        """
        self.name = name
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        """Whether an operation currently holds the slot."""
        return self._in_flight

    @contextmanager
    def claim(self) -> Iterator[bool]:
        """Try to take the slot for the duration of the block.

        Yields:
            True if the slot was taken, False if another operation holds it.
        """
        if self._in_flight:
            logger.debug(f"{self.name}: already in flight, dropping trigger")
            yield False
            return

        self._in_flight = True
        try:
            yield True
        finally:
            self._in_flight = False
