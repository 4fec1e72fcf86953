"""Rate limit tracking from API responses.

The tracker holds three independent observable fields (limit, remaining,
reset). It is fed in two ways:

- ``update_from_headers``: called by the executor for every response, using
  whichever ``X-RateLimit-*`` headers are present. A missing header leaves the
  matching field unchanged; the response status does not matter.
- ``refresh``: one explicit fetch of the ``rate_limit`` endpoint, populating
  all three fields from the ``core`` resource.

Fields are written independently; the last write wins and there is no
cross-field atomicity.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from ..models.observable import Observable
from ..models.rate_limit import RateLimit, RateLimitSnapshot

logger = logging.getLogger(__name__)

HEADER_FIELDS = {
    "X-RateLimit-Limit": "limit",
    "X-RateLimit-Remaining": "remaining",
    "X-RateLimit-Reset": "reset",
}


class RateLimitTracker:
    """Observable limit/remaining/reset state for the core API bucket."""

    def __init__(self) -> None:
        self.limit: Observable[int] = Observable(label="limit")
        self.remaining: Observable[int] = Observable(label="remaining")
        self.reset: Observable[int] = Observable(label="reset")

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """Best-effort update from response headers."""
        for header, name in HEADER_FIELDS.items():
            value = headers.get(header)
            if value is None:
                continue
            try:
                getattr(self, name).set_numeric(value)
            except ValueError:
                logger.warning(f"Non-numeric {header} header: {value!r}")

    def apply(self, data: Mapping[str, Any]) -> RateLimit:
        """Populate all fields from a decoded ``rate_limit`` response body."""
        rate_limit = RateLimit.model_validate(data)
        core = rate_limit.core
        if core is None:
            logger.warning("rate_limit response has no core resource")
            return rate_limit
        if core.limit is not None:
            self.limit.set_numeric(core.limit)
        if core.remaining is not None:
            self.remaining.set_numeric(core.remaining)
        if core.reset is not None:
            self.reset.set_numeric(core.reset)
        return rate_limit

    async def refresh(self, fetch: Callable[[], Awaitable[Any]]) -> RateLimit:
        """Fetch the rate_limit endpoint once and apply it.

        Args:
            fetch: Coroutine function returning the decoded response body
        """
        data = await fetch()
        logger.info("Rate limit refreshed", extra={"rate_limit": data})
        return self.apply(data)

    def snapshot(self) -> RateLimitSnapshot:
        return RateLimitSnapshot(
            limit=self.limit.value,
            remaining=self.remaining.value,
            reset=self.reset.value,
        )

    def __repr__(self) -> str:
        s = self.snapshot()
        return f"RateLimitTracker(limit={s.limit}, remaining={s.remaining}, reset={s.reset})"
