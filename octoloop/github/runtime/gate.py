"""Pacing of state-modifying calls.

GitHub asks clients to keep at most one state-modifying request in flight per
user and to leave at least one second between them. The gate serializes such
calls in FIFO order and starts each one no sooner than ``interval`` seconds
after the previous one completed. It never rejects a call.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)


class UpdateGate:
    """Single-slot cooldown token for mutating calls."""

    def __init__(self, interval: float = 1.0, *, clock: Callable[[], float] | None = None) -> None:
        """Initialize gate.

        Args:
            interval: Minimum seconds from one call completing to the next starting
            clock: Monotonic clock (defaults to the running loop's time)
        """
        self._interval = interval
        self._clock = clock
        # asyncio.Lock wakes waiters in acquisition order
        self._lock = asyncio.Lock()
        self._next_start: float | None = None
        self._waiting = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def waiting(self) -> int:
        """Number of calls queued behind the one holding the slot."""
        return self._waiting

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def _now(self) -> float:
        if self._clock is not None:
            return self._clock()
        return asyncio.get_running_loop().time()

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold the gate for the duration of one mutating call."""
        self._waiting += 1
        try:
            await self._lock.acquire()
        finally:
            self._waiting -= 1
        try:
            if self._next_start is not None:
                delay = self._next_start - self._now()
                if delay > 0:
                    logger.debug(f"Update gate delaying call by {delay:.3f}s")
                # the loop may wake a sleeper up to one clock tick early
                while delay > 0:
                    await asyncio.sleep(delay)
                    delay = self._next_start - self._now()
            yield
        finally:
            # cooldown is measured from completion
            self._next_start = self._now() + self._interval
            self._lock.release()
