"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .rate_limit import FakeClock, MockRateLimitProvider
from .container import build_test_container

__all__ = [
    "FakeClock",
    "MockPersistenceProvider",
    "MockRateLimitProvider",
    "build_test_container",
]
