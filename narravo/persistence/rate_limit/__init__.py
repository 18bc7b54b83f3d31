"""In-process rate limit store and its housekeeping task."""

from .memory import InMemoryRateLimitStore
from .sweeper import RateLimitSweeper

__all__ = ["InMemoryRateLimitStore", "RateLimitSweeper"]
