"""Rate limit store interface."""

from abc import ABC, abstractmethod

from narravo.domain.model.rate_limit import RateLimitCheck, RateLimitKey


class RateLimitStore(ABC):
    """Sliding-window request log keyed by (action, user, client).

    Owned by the application root and injected where needed, so an
    in-process store can be swapped for a shared one without touching
    callers. Implementations never raise for an exhausted window; they
    report ``allowed=False`` instead.
    """

    @abstractmethod
    async def check(
        self, key: RateLimitKey, limit: int, window_seconds: float
    ) -> RateLimitCheck:
        """Report the window state without recording anything."""
        pass

    @abstractmethod
    async def record(
        self, key: RateLimitKey, limit: int, window_seconds: float
    ) -> RateLimitCheck:
        """Check and, if allowed, record a request as one atomic step."""
        pass

    @abstractmethod
    async def sweep(self) -> int:
        """Drop entries past the retention ceiling.

        Returns:
            Number of keys removed
        """
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Forget every key."""
        pass
