"""PostgreSQL implementation of Attachment repository."""

from collections import defaultdict
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from narravo.domain.model import CommentAttachment
from narravo.domain.repository import AttachmentRepository
from narravo.domain.value import CommentId
from narravo.persistence.mappers import attachment_to_dict, row_to_attachment
from narravo.persistence.tables import comment_attachments_table


class PostgresAttachmentRepository(AttachmentRepository):
    """PostgreSQL implementation of AttachmentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, list[CommentAttachment]]:
        """Find non-deleted attachments grouped by comment."""
        if not comment_ids:
            return {}
        stmt = (
            select(comment_attachments_table)
            .where(comment_attachments_table.c.comment_id.in_(list(comment_ids)))
            .where(comment_attachments_table.c.deleted_at.is_(None))
            .order_by(
                comment_attachments_table.c.comment_id,
                comment_attachments_table.c.id,
            )
        )
        result = await self.session.execute(stmt)
        grouped: dict[CommentId, list[CommentAttachment]] = defaultdict(list)
        for row in result.fetchall():
            attachment = row_to_attachment(row._asdict())
            grouped[attachment.comment_id].append(attachment)
        return dict(grouped)

    async def save(self, attachment: CommentAttachment) -> CommentAttachment:
        """Insert an attachment record."""
        stmt = comment_attachments_table.insert().values(
            **attachment_to_dict(attachment)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return attachment
