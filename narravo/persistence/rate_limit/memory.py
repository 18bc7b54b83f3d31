"""In-memory sliding-window rate limit store.

Single-process only: every worker process keeps its own counts. Use a
shared implementation of ``RateLimitStore`` when running several workers.
"""

import math
import threading
import time
from typing import Callable

from narravo.domain.model.rate_limit import RateLimitCheck, RateLimitKey
from narravo.domain.repository import RateLimitStore

# Longest window anyone configures in practice; older entries are garbage
DEFAULT_RETENTION_SECONDS = 60 * 60


class InMemoryRateLimitStore(RateLimitStore):
    """Rate limit store backed by a dict of timestamp lists.

    A timestamp counts while it is newer than ``now - window``. Check and
    record happen under one lock, so concurrent submissions on the same key
    can never push the count past the limit.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        retention_seconds: float = DEFAULT_RETENTION_SECONDS,
    ) -> None:
        """Initialize the store.

        Args:
            clock: Returns the current time in epoch seconds
            retention_seconds: Age after which sweep drops entries
        """
        self.clock = clock
        self.retention_seconds = retention_seconds
        self._entries: dict[str, list[float]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def _evaluate(
        self, timestamps: list[float], limit: int, window_seconds: float, now: float
    ) -> tuple[RateLimitCheck, list[float]]:
        window_start = now - window_seconds
        in_window = [ts for ts in timestamps if ts > window_start]
        allowed = len(in_window) < limit

        retry_after = None
        if not allowed:
            if in_window:
                retry_after = math.ceil(in_window[0] + window_seconds - now)
            else:
                # Only reachable with limit <= 0
                retry_after = math.ceil(window_seconds)
            retry_after = max(1, retry_after)

        check = RateLimitCheck(
            allowed=allowed,
            retry_after=retry_after,
            limit=limit,
            remaining=max(0, limit - len(in_window)),
            reset_time=now + window_seconds,
        )
        return check, in_window

    async def check(
        self, key: RateLimitKey, limit: int, window_seconds: float
    ) -> RateLimitCheck:
        with self._lock:
            timestamps = self._entries.get(str(key), [])
            check, _ = self._evaluate(timestamps, limit, window_seconds, self.clock())
            return check

    async def record(
        self, key: RateLimitKey, limit: int, window_seconds: float
    ) -> RateLimitCheck:
        with self._lock:
            now = self.clock()
            timestamps = self._entries.get(str(key), [])
            check, in_window = self._evaluate(timestamps, limit, window_seconds, now)
            if not check.allowed:
                return check

            in_window.append(now)
            # Never keep more than the limit; older entries cannot matter
            self._entries[str(key)] = in_window[-limit:]
            return check.model_copy(update={"remaining": max(0, check.remaining - 1)})

    async def sweep(self) -> int:
        with self._lock:
            cutoff = self.clock() - self.retention_seconds
            removed = 0
            for key in list(self._entries):
                kept = [ts for ts in self._entries[key] if ts > cutoff]
                if kept:
                    self._entries[key] = kept
                else:
                    del self._entries[key]
                    removed += 1
            return removed

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()
