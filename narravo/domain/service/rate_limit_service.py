"""Rate limiting domain service."""

from typing import Mapping, Optional

import logfire

from narravo.domain.model.rate_limit import (
    UNKNOWN_CLIENT,
    RateLimitCheck,
    RateLimitKey,
)
from narravo.domain.repository import RateLimitStore
from narravo.domain.value import AbuseAction, UserId
from narravo.util.error import ConfigurationError
from narravo.util.network import extract_client_ip

from .base import Service
from .config_service import (
    RATE_COMMENTS_PER_MINUTE,
    RATE_REACTIONS_PER_MINUTE,
    RATE_WINDOW_MINUTES,
    ConfigService,
)

DEFAULT_WINDOW_MINUTES = 1.0

LIMIT_KEYS = {
    AbuseAction.COMMENT: RATE_COMMENTS_PER_MINUTE,
    AbuseAction.REACTION: RATE_REACTIONS_PER_MINUTE,
}


class RateLimitService(Service):
    """Per-action sliding-window limits keyed by user and client IP.

    Keying on both user and IP stops one account from spreading load over
    many addresses and one address from cycling accounts.
    """

    def __init__(
        self, rate_limit_store: RateLimitStore, config_service: ConfigService
    ) -> None:
        """Initialize rate limit service.

        Args:
            rate_limit_store: Process-wide request log
            config_service: Runtime configuration for limits
        """
        self.rate_limit_store = rate_limit_store
        self.config_service = config_service

    @staticmethod
    def key_for(
        action: AbuseAction,
        user_id: UserId,
        headers: Optional[Mapping[str, str]] = None,
        client_ip: Optional[str] = None,
    ) -> RateLimitKey:
        """Build the limiter key for a submission."""
        client_id = client_ip or extract_client_ip(headers) or UNKNOWN_CLIENT
        return RateLimitKey(action=action, user_id=user_id, client_id=client_id)

    async def policy_for(self, action: AbuseAction) -> tuple[int, float]:
        """Resolve the request limit and window length for an action.

        Returns:
            (limit, window in seconds)

        Raises:
            ConfigurationError: If no limit is configured for the action
        """
        config_key = LIMIT_KEYS[action]
        limit = await self.config_service.get_number(config_key)
        if limit is None:
            raise ConfigurationError(config_key)

        window_minutes = await self.config_service.get_number(RATE_WINDOW_MINUTES)
        if window_minutes is None or window_minutes <= 0:
            window_minutes = DEFAULT_WINDOW_MINUTES
        return int(limit), window_minutes * 60

    async def check_limit(
        self,
        action: AbuseAction,
        user_id: UserId,
        headers: Optional[Mapping[str, str]] = None,
        client_ip: Optional[str] = None,
    ) -> RateLimitCheck:
        """Report whether a submission would be allowed, without recording it."""
        key = self.key_for(action, user_id, headers, client_ip)
        limit, window = await self.policy_for(action)
        return await self.rate_limit_store.check(key, limit, window)

    async def record_request(
        self,
        action: AbuseAction,
        user_id: UserId,
        headers: Optional[Mapping[str, str]] = None,
        client_ip: Optional[str] = None,
    ) -> RateLimitCheck:
        """Record a submission if it fits in the window.

        Args:
            action: Submission kind
            user_id: Submitting user
            headers: Request headers for client IP extraction
            client_ip: Explicit client IP (wins over headers)

        Returns:
            Window snapshot; ``allowed`` is False when over the limit

        Raises:
            ConfigurationError: If no limit is configured for the action
        """
        key = self.key_for(action, user_id, headers, client_ip)
        limit, window = await self.policy_for(action)
        check = await self.rate_limit_store.record(key, limit, window)
        if not check.allowed:
            logfire.warn(
                "Rate limit exceeded",
                key=str(key),
                limit=limit,
                retry_after=check.retry_after,
            )
        return check
