"""Unit tests for PendingRequestRegistry."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from octoloop.github.runtime import PendingRequest, PendingRequestRegistry


def _entry(request_id: int, task) -> PendingRequest:
    return PendingRequest(id=request_id, stream=None, uri=f"/r/{request_id}", task=task)


class TestPendingRequestRegistry:
    def test_insertion_order(self):
        registry = PendingRequestRegistry()
        for i in (3, 1, 2):
            registry.add(_entry(i, MagicMock()))

        assert [e.id for e in registry] == [3, 1, 2]
        assert len(registry) == 3
        assert 1 in registry

    def test_remove_by_identity(self):
        registry = PendingRequestRegistry()
        registry.add(_entry(1, MagicMock()))
        registry.add(_entry(2, MagicMock()))

        removed = registry.remove(1)

        assert removed.id == 1
        assert [e.id for e in registry] == [2]
        assert registry.remove(1) is None

    def test_iteration_is_a_snapshot(self):
        registry = PendingRequestRegistry()
        registry.add(_entry(1, MagicMock()))
        registry.add(_entry(2, MagicMock()))

        for entry in registry:
            registry.remove(entry.id)

        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_cancel_all_cancels_tasks(self):
        registry = PendingRequestRegistry()
        tasks = [asyncio.create_task(asyncio.sleep(10)) for _ in range(2)]
        for i, task in enumerate(tasks):
            registry.add(_entry(i, task))

        assert registry.cancel_all() == 2

        results = await asyncio.gather(*tasks, return_exceptions=True)
        assert all(isinstance(r, asyncio.CancelledError) for r in results)

    def test_cancel_entry_delegates_to_stream(self):
        stream = MagicMock()
        stream.cancel.return_value = True
        entry = PendingRequest(id=1, stream=stream, uri="/x", task=MagicMock())

        assert entry.cancel() is True
        stream.cancel.assert_called_once()
        entry.task.cancel.assert_not_called()
