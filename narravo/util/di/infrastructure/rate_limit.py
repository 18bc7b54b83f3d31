"""Rate limit store providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from narravo.config import Settings
from narravo.domain.repository import RateLimitStore
from narravo.persistence.rate_limit import InMemoryRateLimitStore, RateLimitSweeper
from narravo.util.di.base import ProviderBase


class RateLimitProvider(ProviderBase):
    """Rate limit component base."""

    __mock_component__ = "rate_limit"


class ProdRateLimitProvider(RateLimitProvider):
    """Process-wide in-memory store with a background sweeper."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_rate_limit_store(
        self, settings: Settings
    ) -> AsyncIterator[RateLimitStore]:
        """Provide the rate limit store for the lifetime of the container.

        The sweeper stops and the store is emptied when the container closes.
        """
        store = InMemoryRateLimitStore(
            retention_seconds=settings.rate_limit.retention_seconds
        )
        sweeper = RateLimitSweeper(
            store, interval_seconds=settings.rate_limit.sweep_interval_seconds
        )
        sweeper.start()
        try:
            yield store
        finally:
            await sweeper.stop()
            await store.clear()
