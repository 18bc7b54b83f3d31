"""PostgreSQL implementation of Config repository."""

from typing import Any, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from narravo.domain.repository import ConfigRepository
from narravo.persistence.tables import configuration_table


class PostgresConfigRepository(ConfigRepository):
    """Reads global (non user-scoped) configuration rows."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def get_value(self, key: str) -> Optional[Any]:
        """Get the global value for a key."""
        stmt = (
            select(configuration_table.c.value)
            .where(configuration_table.c.key == key)
            .where(configuration_table.c.user_id.is_(None))
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_value(self, key: str, value: Any) -> None:
        """Update the global value, inserting it on first use.

        Update-then-insert because the uniqueness rule is a partial index.
        """
        updated = await self.session.execute(
            update(configuration_table)
            .where(configuration_table.c.key == key)
            .where(configuration_table.c.user_id.is_(None))
            .values(value=value, updated_at=func.now())
        )
        if not updated.rowcount:
            await self.session.execute(
                configuration_table.insert().values(key=key, user_id=None, value=value)
            )
        await self.session.flush()
