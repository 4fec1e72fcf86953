"""Unit tests for UpdateGate pacing."""

from __future__ import annotations

import asyncio

import pytest

from octoloop.github.runtime import UpdateGate


async def _call(gate: UpdateGate, log: list[tuple[str, float]], name: str, work: float = 0.0):
    async with gate.slot():
        loop = asyncio.get_running_loop()
        log.append((name, loop.time()))
        if work:
            await asyncio.sleep(work)


class TestUpdateGate:
    @pytest.mark.asyncio
    async def test_first_call_not_delayed(self):
        gate = UpdateGate(interval=1.0)
        loop = asyncio.get_running_loop()
        start = loop.time()
        log: list[tuple[str, float]] = []

        await _call(gate, log, "a")

        assert log[0][1] - start < 0.1

    @pytest.mark.asyncio
    async def test_back_to_back_calls_spaced_by_one_second(self):
        gate = UpdateGate()
        log: list[tuple[str, float]] = []

        await _call(gate, log, "a")
        await _call(gate, log, "b")

        assert log[1][1] - log[0][1] >= 1.0

    @pytest.mark.asyncio
    async def test_concurrent_calls_fifo_and_spaced(self):
        gate = UpdateGate(interval=0.1)
        log: list[tuple[str, float]] = []

        await asyncio.gather(*(_call(gate, log, name) for name in "abcd"))

        assert [name for name, _ in log] == ["a", "b", "c", "d"]
        gaps = [b[1] - a[1] for a, b in zip(log, log[1:])]
        assert all(gap >= 0.1 - 1e-3 for gap in gaps)

    @pytest.mark.asyncio
    async def test_one_call_in_flight(self):
        gate = UpdateGate(interval=0.0)
        active = 0
        peak = 0

        async def call():
            nonlocal active, peak
            async with gate.slot():
                active += 1
                peak = max(peak, active)
                await asyncio.sleep(0.01)
                active -= 1

        await asyncio.gather(*(call() for _ in range(5)))

        assert peak == 1

    @pytest.mark.asyncio
    async def test_slow_call_delays_next_until_done(self):
        gate = UpdateGate(interval=0.05)
        log: list[tuple[str, float]] = []

        await asyncio.gather(_call(gate, log, "slow", work=0.2), _call(gate, log, "next"))

        assert log[1][1] - log[0][1] >= 0.2 - 1e-3

    @pytest.mark.asyncio
    async def test_slot_released_on_error(self):
        gate = UpdateGate(interval=0.0)

        with pytest.raises(RuntimeError):
            async with gate.slot():
                raise RuntimeError("failed call")

        assert not gate.busy
        async with gate.slot():
            pass

    @pytest.mark.asyncio
    async def test_waiting_count(self):
        gate = UpdateGate(interval=0.0)
        release = asyncio.Event()

        async def holder():
            async with gate.slot():
                await release.wait()

        async def waiter():
            async with gate.slot():
                pass

        tasks = [asyncio.create_task(holder()), asyncio.create_task(waiter())]
        await asyncio.sleep(0.01)
        assert gate.busy
        assert gate.waiting == 1

        release.set()
        await asyncio.gather(*tasks)
        assert gate.waiting == 0
