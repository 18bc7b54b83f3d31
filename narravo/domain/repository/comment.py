"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from narravo.domain.model.comment import Comment, ParentComment
from narravo.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_parent(self, parent_id: CommentId) -> Optional[ParentComment]:
        """Find the fields needed to reply to a comment.

        Args:
            parent_id: The parent comment ID

        Returns:
            The parent record, or None if missing or soft-deleted
        """
        pass

    @abstractmethod
    async def count_siblings(
        self, post_id: PostId, parent_id: Optional[CommentId]
    ) -> int:
        """Count direct children of a parent (top-level comments when None).

        Every row counts regardless of status or soft deletion, so sibling
        sequence numbers are never handed out twice.

        Args:
            post_id: The post ID
            parent_id: The parent comment ID, or None for top level

        Returns:
            Number of existing siblings
        """
        pass

    @abstractmethod
    async def insert(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment

        Raises:
            PathConflictError: If (post_id, path) is already taken
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        post_id: PostId,
        cursor: Optional[str],
        limit: int,
    ) -> list[Comment]:
        """Find visible top-level comments after a cursor, in path order.

        Args:
            post_id: The post ID
            cursor: Only return paths strictly greater than this
            limit: Maximum number of rows

        Returns:
            Approved, non-deleted depth-0 comments
        """
        pass

    @abstractmethod
    async def find_descendants(
        self, post_id: PostId, parent_paths: Sequence[str]
    ) -> list[Comment]:
        """Find every visible descendant of the given paths in one query.

        Args:
            post_id: The post ID
            parent_paths: Paths whose subtrees are wanted

        Returns:
            Approved, non-deleted comments ordered by path
        """
        pass

    @abstractmethod
    async def find_children(
        self,
        post_id: PostId,
        parent_path: str,
        cursor: Optional[str],
        limit: int,
    ) -> list[Comment]:
        """Find visible direct children of a path after a cursor.

        Args:
            post_id: The post ID
            parent_path: Path of the parent comment
            cursor: Only return paths strictly greater than this
            limit: Maximum number of rows

        Returns:
            Approved, non-deleted children ordered by path
        """
        pass

    @abstractmethod
    async def count_children(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count approved direct children for each comment.

        Args:
            comment_ids: Parent comment IDs

        Returns:
            Mapping of comment ID to child count (missing IDs have none)
        """
        pass
