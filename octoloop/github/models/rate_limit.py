"""Rate limit models."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class RateLimitSnapshot(BaseModel):
    """Point-in-time copy of a rate limit bucket."""

    limit: int | float | None = None
    remaining: int | float | None = None
    reset: int | float | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def reset_at(self) -> datetime | None:
        if self.reset is None:
            return None
        return datetime.fromtimestamp(self.reset, tz=timezone.utc)

    @property
    def exhausted(self) -> bool:
        return self.remaining is not None and self.remaining <= 0


class RateLimitResource(RateLimitSnapshot):
    """One bucket of the ``/rate_limit`` response."""

    used: int | None = None


class RateLimit(BaseModel):
    """Full ``/rate_limit`` response."""

    resources: dict[str, RateLimitResource] = Field(default_factory=dict)
    rate: RateLimitResource | None = None

    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def core(self) -> RateLimitResource | None:
        return self.resources.get("core", self.rate)
