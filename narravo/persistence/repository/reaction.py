"""PostgreSQL implementation of Reaction repository."""

from collections import defaultdict
from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from narravo.domain.repository import ReactionRepository
from narravo.domain.value import CommentId, ReactionKind, UserId
from narravo.persistence.tables import reactions_table

COMMENT_TARGET = "comment"


class PostgresReactionRepository(ReactionRepository):
    """PostgreSQL implementation of ReactionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def count_for_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, dict[str, int]]:
        """Count reactions per kind for each comment."""
        if not comment_ids:
            return {}
        stmt = (
            select(reactions_table.c.target_id, reactions_table.c.kind, func.count())
            .where(reactions_table.c.target_type == COMMENT_TARGET)
            .where(reactions_table.c.target_id.in_(list(comment_ids)))
            .group_by(reactions_table.c.target_id, reactions_table.c.kind)
        )
        result = await self.session.execute(stmt)
        counts: dict[CommentId, dict[str, int]] = defaultdict(dict)
        for target_id, kind, count in result.fetchall():
            counts[CommentId(target_id)][kind] = count
        return dict(counts)

    async def find_user_reactions(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, list[str]]:
        """Find a user's reaction kinds on each comment."""
        if not comment_ids:
            return {}
        stmt = (
            select(reactions_table.c.target_id, reactions_table.c.kind)
            .where(reactions_table.c.target_type == COMMENT_TARGET)
            .where(reactions_table.c.user_id == user_id)
            .where(reactions_table.c.target_id.in_(list(comment_ids)))
            .order_by(reactions_table.c.target_id, reactions_table.c.kind)
        )
        result = await self.session.execute(stmt)
        kinds: dict[CommentId, list[str]] = defaultdict(list)
        for target_id, kind in result.fetchall():
            kinds[CommentId(target_id)].append(kind)
        return dict(kinds)

    async def toggle(
        self, comment_id: CommentId, user_id: UserId, kind: ReactionKind
    ) -> bool:
        """Remove the reaction if present, otherwise add it."""
        removed = await self.session.execute(
            delete(reactions_table)
            .where(reactions_table.c.target_type == COMMENT_TARGET)
            .where(reactions_table.c.target_id == comment_id)
            .where(reactions_table.c.user_id == user_id)
            .where(reactions_table.c.kind == kind.root)
        )
        if removed.rowcount:
            await self.session.flush()
            return False

        stmt = (
            insert(reactions_table)
            .values(
                target_type=COMMENT_TARGET,
                target_id=comment_id,
                user_id=user_id,
                kind=kind.root,
            )
            .on_conflict_do_nothing(constraint="uq_reactions_target_user_kind")
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return True
