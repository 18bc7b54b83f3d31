"""Rate limiting records."""

from typing import Optional

from narravo.domain.error import AntiAbuseError
from narravo.domain.model.common import DomainModel
from narravo.domain.value import AbuseAction, UserId

UNKNOWN_CLIENT = "unknown"


class RateLimitKey(DomainModel):
    """Composite limiter key: action, user and best-effort client identifier."""

    action: AbuseAction
    user_id: UserId
    client_id: str = UNKNOWN_CLIENT

    def __str__(self) -> str:
        return f"{self.action.value}:{self.user_id}:{self.client_id}"


class RateLimitCheck(DomainModel):
    """Snapshot of a key's window.

    Attributes:
        allowed: Whether another request fits in the window
        retry_after: Seconds until the oldest request leaves the window (rejections only)
        limit: Requests allowed per window
        remaining: Requests left in the window
        reset_time: Epoch seconds at which the current window ends
    """

    allowed: bool
    retry_after: Optional[int] = None
    limit: int
    remaining: int
    reset_time: float


class AntiAbuseResult(DomainModel):
    """Outcome of the anti-abuse gate.

    ``error`` holds the typed rejection; ``rate_limit_info`` is set whenever
    the rate limiter was consulted.
    """

    valid: bool
    error: Optional[AntiAbuseError] = None
    rate_limit_info: Optional[RateLimitCheck] = None

    @property
    def message(self) -> Optional[str]:
        return str(self.error) if self.error else None

    def raise_for_error(self) -> None:
        """Raise the rejection, if any."""
        if self.error is not None:
            raise self.error
