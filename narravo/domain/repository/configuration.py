"""Runtime configuration repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class ConfigRepository(ABC):
    """Key/value configuration maintained by administrators.

    Keys look like ``RATE.COMMENTS-PER-MINUTE``.
    """

    @abstractmethod
    async def get_value(self, key: str) -> Optional[Any]:
        """Get the global value for a key.

        Args:
            key: Configuration key

        Returns:
            Decoded JSON value, or None if unset
        """
        pass

    @abstractmethod
    async def set_value(self, key: str, value: Any) -> None:
        """Set the global value for a key."""
        pass
