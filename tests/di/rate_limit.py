"""Mock rate limit providers for testing."""

from dishka import Scope, provide

from narravo.domain.repository import RateLimitStore
from narravo.persistence.rate_limit import InMemoryRateLimitStore
from narravo.util.di.infrastructure.rate_limit import RateLimitProvider


class FakeClock:
    """Manually advanced clock in epoch seconds."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MockRateLimitProvider(RateLimitProvider):
    """In-memory store driven by a fake clock, without the background sweeper."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_clock(self) -> FakeClock:
        """Provide the clock tests advance by hand."""
        return FakeClock()

    @provide(scope=Scope.APP)
    def get_rate_limit_store(self, clock: FakeClock) -> RateLimitStore:
        """Provide an in-memory store reading the fake clock."""
        return InMemoryRateLimitStore(clock=clock)
