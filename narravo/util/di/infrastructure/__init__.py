"""Infrastructure providers."""

# Import bases
from .persistence import PersistenceProvider
from .rate_limit import RateLimitProvider

# Import implementations (needed for __subclasses__())
from .persistence import ProdPersistenceProvider  # noqa: F401
from .rate_limit import ProdRateLimitProvider  # noqa: F401

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdRateLimitProvider",
    "RateLimitProvider",
]
