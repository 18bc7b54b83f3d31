"""In-memory configuration repository for testing."""

from typing import Any, Optional

from narravo.domain.repository.configuration import ConfigRepository


class InMemoryConfigRepository(ConfigRepository):
    """In-memory implementation of ConfigRepository for testing."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    async def get_value(self, key: str) -> Optional[Any]:
        """Get the value for a key."""
        return self._values.get(key)

    async def set_value(self, key: str, value: Any) -> None:
        """Set the value for a key."""
        self._values[key] = value
