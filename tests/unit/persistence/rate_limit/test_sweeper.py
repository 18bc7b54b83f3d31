"""Unit tests for RateLimitSweeper."""

import asyncio

import pytest

from narravo.persistence.rate_limit import InMemoryRateLimitStore, RateLimitSweeper


class CountingStore(InMemoryRateLimitStore):
    """Counts sweep passes."""

    def __init__(self) -> None:
        super().__init__()
        self.sweeps = 0

    async def sweep(self) -> int:
        self.sweeps += 1
        return await super().sweep()


class FailingStore(InMemoryRateLimitStore):
    """Sweep always fails."""

    def __init__(self) -> None:
        super().__init__()
        self.sweeps = 0

    async def sweep(self) -> int:
        self.sweeps += 1
        raise RuntimeError("boom")


class TestRateLimitSweeper:
    """Tests for the background sweep loop."""

    @pytest.mark.asyncio
    async def test_sweeps_periodically_until_stopped(self):
        # Arrange
        store = CountingStore()
        sweeper = RateLimitSweeper(store, interval_seconds=0.01)

        # Act
        sweeper.start()
        await asyncio.sleep(0.1)
        await sweeper.stop()
        sweeps_at_stop = store.sweeps
        await asyncio.sleep(0.05)

        # Assert
        assert sweeps_at_stop >= 2
        assert store.sweeps == sweeps_at_stop
        assert sweeper.running is False

    @pytest.mark.asyncio
    async def test_failed_sweep_keeps_loop_alive(self):
        # Arrange
        store = FailingStore()
        sweeper = RateLimitSweeper(store, interval_seconds=0.01)

        # Act
        sweeper.start()
        await asyncio.sleep(0.1)

        # Assert
        assert sweeper.running is True
        assert store.sweeps >= 2
        await sweeper.stop()

    @pytest.mark.asyncio
    async def test_start_twice_runs_one_loop(self):
        store = CountingStore()
        sweeper = RateLimitSweeper(store, interval_seconds=10)

        sweeper.start()
        first_task = sweeper._task
        sweeper.start()

        assert sweeper._task is first_task
        await sweeper.stop()
