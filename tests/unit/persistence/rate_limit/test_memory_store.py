"""Unit tests for InMemoryRateLimitStore."""

import asyncio
from uuid import uuid4

import pytest

from narravo.domain.model import RateLimitKey
from narravo.domain.value import AbuseAction, UserId
from narravo.persistence.rate_limit import InMemoryRateLimitStore
from tests.di import FakeClock


def make_key(client_id: str = "203.0.113.7") -> RateLimitKey:
    return RateLimitKey(
        action=AbuseAction.COMMENT, user_id=UserId(uuid4()), client_id=client_id
    )


class TestSlidingWindow:
    """Tests for check and record."""

    @pytest.mark.asyncio
    async def test_entries_expire_exactly_one_window_later(self):
        """A timestamp stops counting once it is a full window old."""
        # Arrange
        clock = FakeClock()
        store = InMemoryRateLimitStore(clock=clock)
        key = make_key()
        await store.record(key, limit=1, window_seconds=60)

        # Act
        clock.advance(59.5)
        still_blocked = await store.check(key, limit=1, window_seconds=60)
        clock.advance(0.5)
        freed = await store.check(key, limit=1, window_seconds=60)

        # Assert
        assert still_blocked.allowed is False
        assert still_blocked.retry_after == 1
        assert freed.allowed is True

    @pytest.mark.asyncio
    async def test_reset_time_is_one_window_ahead(self):
        clock = FakeClock()
        store = InMemoryRateLimitStore(clock=clock)

        check = await store.record(make_key(), limit=3, window_seconds=60)

        assert check.reset_time == clock() + 60
        assert check.remaining == 2

    @pytest.mark.asyncio
    async def test_concurrent_records_never_exceed_limit(self):
        """Simultaneous submissions on one key are admitted at most limit times."""
        # Arrange
        store = InMemoryRateLimitStore(clock=FakeClock())
        key = make_key()

        # Act
        results = await asyncio.gather(
            *[store.record(key, limit=5, window_seconds=60) for _ in range(20)]
        )

        # Assert
        assert sum(1 for r in results if r.allowed) == 5


class TestHousekeeping:
    """Tests for sweep and clear."""

    @pytest.mark.asyncio
    async def test_sweep_drops_keys_past_retention(self):
        """Only keys with no recent entries are removed."""
        # Arrange
        clock = FakeClock()
        store = InMemoryRateLimitStore(clock=clock, retention_seconds=3600)
        await store.record(make_key("198.51.100.1"), limit=5, window_seconds=60)
        clock.advance(3000)
        await store.record(make_key("198.51.100.2"), limit=5, window_seconds=60)
        clock.advance(700)

        # Act
        removed = await store.sweep()

        # Assert
        assert removed == 1
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_clear_forgets_everything(self):
        # Arrange
        store = InMemoryRateLimitStore(clock=FakeClock())
        key = make_key()
        await store.record(key, limit=1, window_seconds=60)

        # Act
        await store.clear()

        # Assert
        assert len(store) == 0
        assert (await store.check(key, limit=1, window_seconds=60)).allowed is True
