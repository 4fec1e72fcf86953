"""Unit tests for RateLimitTracker."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from octoloop.github.runtime import RateLimitTracker


class TestUpdateFromHeaders:
    def test_all_headers(self):
        tracker = RateLimitTracker()
        tracker.update_from_headers(
            {
                "X-RateLimit-Limit": "5000",
                "X-RateLimit-Remaining": "4990",
                "X-RateLimit-Reset": "1700000000",
            }
        )
        snapshot = tracker.snapshot()
        assert snapshot.limit == 5000
        assert snapshot.remaining == 4990
        assert snapshot.reset == 1700000000

    def test_absent_headers_leave_fields_untouched(self):
        tracker = RateLimitTracker()
        tracker.update_from_headers(
            {"X-RateLimit-Limit": "5000", "X-RateLimit-Remaining": "10", "X-RateLimit-Reset": "1"}
        )
        tracker.update_from_headers({"X-RateLimit-Remaining": "9"})

        assert tracker.limit.value == 5000
        assert tracker.remaining.value == 9
        assert tracker.reset.value == 1

    def test_non_numeric_header_ignored(self):
        tracker = RateLimitTracker()
        tracker.remaining.set(3)
        tracker.update_from_headers({"X-RateLimit-Remaining": "soon"})
        assert tracker.remaining.value == 3

    def test_subscribers_observe_changes(self):
        tracker = RateLimitTracker()
        seen = MagicMock()
        tracker.remaining.subscribe(seen)

        tracker.update_from_headers({"X-RateLimit-Remaining": "7"})
        tracker.update_from_headers({"X-RateLimit-Remaining": "7"})
        tracker.update_from_headers({"X-RateLimit-Remaining": "6"})

        assert [c.args[0] for c in seen.call_args_list] == [7, 6]


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_populates_from_core_resource(self):
        tracker = RateLimitTracker()
        fetch = AsyncMock(
            return_value={
                "resources": {
                    "core": {"limit": 60, "remaining": 59, "reset": 1700000123},
                }
            }
        )

        result = await tracker.refresh(fetch)

        fetch.assert_awaited_once()
        assert result.core.limit == 60
        assert tracker.snapshot().remaining == 59
        assert tracker.reset.value == 1700000123

    @pytest.mark.asyncio
    async def test_refresh_without_core_leaves_state(self):
        tracker = RateLimitTracker()
        tracker.limit.set(1)
        await tracker.refresh(AsyncMock(return_value={"resources": {}}))
        assert tracker.limit.value == 1
