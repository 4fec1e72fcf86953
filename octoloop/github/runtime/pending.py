"""Registry of in-flight paginated requests."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .pagination import PageStream

logger = logging.getLogger(__name__)


@dataclass
class PendingRequest:
    """An operation currently in flight."""

    id: int
    stream: PageStream | None
    uri: str
    task: asyncio.Task[Any]
    label: str | None = None
    started_at: float = field(default_factory=time.time)

    def cancel(self) -> bool:
        """Ask the operation to stop; returns False if it had already finished."""
        if self.stream is not None:
            return self.stream.cancel()
        return self.task.cancel()


class PendingRequestRegistry:
    """Ordered collection of PendingRequest entries.

    The creator of an entry inserts it and the operation's completion handler
    removes it; the two never touch the same entry concurrently.
    """

    def __init__(self) -> None:
        self._entries: dict[int, PendingRequest] = {}

    def add(self, entry: PendingRequest) -> None:
        self._entries[entry.id] = entry
        logger.debug(f"Tracking request {entry.id} for {entry.uri}")

    def remove(self, request_id: int) -> PendingRequest | None:
        entry = self._entries.pop(request_id, None)
        if entry is None:
            logger.debug(f"Request {request_id} was not tracked")
        return entry

    def get(self, request_id: int) -> PendingRequest | None:
        return self._entries.get(request_id)

    def list(self) -> list[PendingRequest]:
        """Snapshot of active entries in insertion order."""
        return list(self._entries.values())

    def cancel_all(self) -> int:
        """Cancel every active entry; returns how many were asked to cancel."""
        cancelled = 0
        for entry in self.list():
            if entry.cancel():
                cancelled += 1
        if cancelled:
            logger.info(f"Cancelled {cancelled} pending request(s)")
        return cancelled

    def __iter__(self) -> Iterator[PendingRequest]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, request_id: object) -> bool:
        return request_id in self._entries
