"""Periodic cleanup of the in-process rate limit store."""

import asyncio
import contextlib
from typing import Optional

import logfire

from narravo.domain.repository import RateLimitStore

DEFAULT_SWEEP_INTERVAL_SECONDS = 5 * 60


class RateLimitSweeper:
    """Runs ``RateLimitStore.sweep`` on a fixed interval.

    Started and stopped by whoever owns the store (the DI container), so
    memory stays bounded regardless of request volume.
    """

    def __init__(
        self,
        store: RateLimitStore,
        interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self.store = store
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logfire.info("Rate limit sweeper started", interval=self.interval_seconds)

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logfire.info("Rate limit sweeper stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                removed = await self.store.sweep()
            except Exception as e:
                # Keep sweeping; a failed pass only delays cleanup
                logfire.error("Rate limit sweep failed", error=str(e))
                continue
            logfire.debug("Rate limit sweep finished", keys_removed=removed)
