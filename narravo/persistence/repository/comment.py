"""PostgreSQL implementation of Comment repository."""

from typing import Optional, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from narravo.domain.error import PathConflictError
from narravo.domain.model import Comment, ParentComment
from narravo.domain.repository import CommentRepository
from narravo.domain.value import CommentId, CommentStatus, PostId
from narravo.domain.value.path import descendant_prefix, path_depth
from narravo.persistence.mappers import (
    comment_to_dict,
    row_to_comment,
    row_to_parent_comment,
)
from narravo.persistence.tables import comments_table

PATH_UNIQUE_CONSTRAINT = "uq_comments_post_path"


def _visible():
    """Filter for comments shown in the public tree."""
    return (
        comments_table.c.status == CommentStatus.APPROVED.value,
        comments_table.c.deleted_at.is_(None),
    )


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_parent(self, parent_id: CommentId) -> Optional[ParentComment]:
        """Find a non-deleted parent comment."""
        stmt = (
            select(
                comments_table.c.id,
                comments_table.c.post_id,
                comments_table.c.depth,
                comments_table.c.path,
            )
            .where(comments_table.c.id == parent_id)
            .where(comments_table.c.deleted_at.is_(None))
            .where(comments_table.c.status != CommentStatus.DELETED.value)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_parent_comment(row._asdict()) if row else None

    async def count_siblings(
        self, post_id: PostId, parent_id: Optional[CommentId]
    ) -> int:
        """Count every direct child of the parent, deleted ones included."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.post_id == post_id)
        )
        if parent_id is None:
            stmt = stmt.where(comments_table.c.parent_id.is_(None))
        else:
            stmt = stmt.where(comments_table.c.parent_id == parent_id)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def insert(self, comment: Comment) -> Comment:
        """Insert a comment inside a savepoint.

        A path collision only rolls back the savepoint, leaving the request
        transaction usable for the retry.
        """
        stmt = (
            comments_table.insert()
            .values(**comment_to_dict(comment))
            .returning(comments_table)
        )
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.fetchone()
        except IntegrityError as e:
            if PATH_UNIQUE_CONSTRAINT in str(e.orig):
                raise PathConflictError(comment.path) from e
            raise
        return row_to_comment(row._asdict())

    async def find_top_level(
        self,
        post_id: PostId,
        cursor: Optional[str],
        limit: int,
    ) -> list[Comment]:
        """Find visible top-level comments after the cursor."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(comments_table.c.depth == 0)
            .where(*_visible())
        )
        if cursor:
            stmt = stmt.where(comments_table.c.path > cursor)
        stmt = stmt.order_by(comments_table.c.path).limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_descendants(
        self, post_id: PostId, parent_paths: Sequence[str]
    ) -> list[Comment]:
        """Find visible descendants of all given paths with one query."""
        if not parent_paths:
            return []
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(*_visible())
            .where(
                or_(
                    *[
                        comments_table.c.path.startswith(
                            descendant_prefix(p), autoescape=True
                        )
                        for p in parent_paths
                    ]
                )
            )
            .order_by(comments_table.c.path)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_children(
        self,
        post_id: PostId,
        parent_path: str,
        cursor: Optional[str],
        limit: int,
    ) -> list[Comment]:
        """Find visible direct children of a path after the cursor."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(*_visible())
            .where(
                comments_table.c.path.startswith(
                    descendant_prefix(parent_path), autoescape=True
                )
            )
            .where(comments_table.c.depth == path_depth(parent_path) + 1)
        )
        if cursor:
            stmt = stmt.where(comments_table.c.path > cursor)
        stmt = stmt.order_by(comments_table.c.path).limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_children(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count visible direct children per parent."""
        if not comment_ids:
            return {}
        stmt = (
            select(comments_table.c.parent_id, func.count())
            .where(comments_table.c.parent_id.in_(list(comment_ids)))
            .where(*_visible())
            .group_by(comments_table.c.parent_id)
        )
        result = await self.session.execute(stmt)
        return {CommentId(parent_id): count for parent_id, count in result.fetchall()}
