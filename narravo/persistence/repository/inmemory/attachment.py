"""In-memory attachment repository for testing."""

from typing import Sequence

from narravo.domain.model.comment import CommentAttachment
from narravo.domain.repository.attachment import AttachmentRepository
from narravo.domain.value import CommentId


class InMemoryAttachmentRepository(AttachmentRepository):
    """In-memory implementation of AttachmentRepository for testing."""

    def __init__(self) -> None:
        self._attachments: list[CommentAttachment] = []

    async def find_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, list[CommentAttachment]]:
        """Find attachments grouped by comment."""
        wanted = set(comment_ids)
        grouped: dict[CommentId, list[CommentAttachment]] = {}
        for attachment in self._attachments:
            if attachment.comment_id in wanted:
                grouped.setdefault(attachment.comment_id, []).append(attachment)
        return grouped

    async def save(self, attachment: CommentAttachment) -> CommentAttachment:
        """Save an attachment record."""
        self._attachments.append(attachment)
        return attachment
