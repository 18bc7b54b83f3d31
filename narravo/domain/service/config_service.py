"""Runtime configuration domain service."""

import math
from typing import Any, Mapping, Optional

import logfire

from narravo.domain.repository import ConfigRepository

from .base import Service

# Configuration keys
COMMENTS_TOP_PAGE_SIZE = "COMMENTS.TOP-PAGE-SIZE"
COMMENTS_REPLIES_PAGE_SIZE = "COMMENTS.REPLIES-PAGE-SIZE"
COMMENTS_AUTO_APPROVE = "COMMENTS.AUTO-APPROVE"
RATE_COMMENTS_PER_MINUTE = "RATE.COMMENTS-PER-MINUTE"
RATE_REACTIONS_PER_MINUTE = "RATE.REACTIONS-PER-MINUTE"
RATE_MIN_SUBMIT_SECS = "RATE.MIN-SUBMIT-SECS"
RATE_WINDOW_MINUTES = "RATE.WINDOW-MINUTES"


class ConfigService(Service):
    """Typed access to administrator-maintained configuration.

    Values stored in the configuration repository win; otherwise the
    deployment defaults passed in at construction are used.
    """

    def __init__(
        self,
        config_repository: ConfigRepository,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Initialize config service.

        Args:
            config_repository: Configuration repository
            defaults: Fallback values keyed like the repository
        """
        self.config_repository = config_repository
        self.defaults = dict(defaults or {})

    async def _get(self, key: str) -> Optional[Any]:
        value = await self.config_repository.get_value(key)
        if value is None:
            return self.defaults.get(key)
        return value

    async def get_number(self, key: str) -> Optional[float]:
        """Get a numeric value.

        Args:
            key: Configuration key

        Returns:
            The number, or None if unset or not numeric
        """
        value = await self._get(key)
        if isinstance(value, bool) or value is None:
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            logfire.warn("Configuration value is not numeric", key=key)
            return None
        if not math.isfinite(number):
            return None
        return number

    async def get_boolean(self, key: str) -> Optional[bool]:
        """Get a boolean value.

        Args:
            key: Configuration key

        Returns:
            The flag, or None if unset
        """
        value = await self._get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes", "on")
        return bool(value)

    async def seed_defaults(self) -> list[str]:
        """Store the deployment defaults for keys that have no value yet.

        Existing values are left alone, so administrators' changes survive
        a re-seed. Defaults of None are skipped.

        Returns:
            Keys that were written
        """
        with logfire.span("config_service.seed_defaults"):
            seeded = []
            for key, value in self.defaults.items():
                if value is None:
                    continue
                if await self.config_repository.get_value(key) is not None:
                    continue
                await self.config_repository.set_value(key, value)
                seeded.append(key)

            logfire.info("Seeded configuration defaults", keys=seeded)
            return seeded
