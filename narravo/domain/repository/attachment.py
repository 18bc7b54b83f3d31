"""Comment attachment repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from narravo.domain.model.comment import CommentAttachment
from narravo.domain.value import CommentId


class AttachmentRepository(ABC):
    """Read access to media attached to comments."""

    @abstractmethod
    async def find_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, list[CommentAttachment]]:
        """Find non-deleted attachments for the given comments.

        Args:
            comment_ids: Comment IDs

        Returns:
            Mapping of comment ID to its attachments
        """
        pass

    @abstractmethod
    async def save(self, attachment: CommentAttachment) -> CommentAttachment:
        """Save an attachment record."""
        pass
