"""Reaction repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from narravo.domain.value import CommentId, ReactionKind, UserId


class ReactionRepository(ABC):
    """Reactions on comments, read in bulk for tree rendering."""

    @abstractmethod
    async def count_for_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, dict[str, int]]:
        """Count reactions per kind for each comment.

        Args:
            comment_ids: Comment IDs

        Returns:
            Mapping of comment ID to {kind: count}
        """
        pass

    @abstractmethod
    async def find_user_reactions(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, list[str]]:
        """Find the kinds a user reacted with on each comment.

        Args:
            user_id: The reacting user
            comment_ids: Comment IDs

        Returns:
            Mapping of comment ID to sorted reaction kinds
        """
        pass

    @abstractmethod
    async def toggle(
        self, comment_id: CommentId, user_id: UserId, kind: ReactionKind
    ) -> bool:
        """Add the reaction if absent, remove it if present.

        Returns:
            True if the reaction now exists, False if it was removed
        """
        pass
