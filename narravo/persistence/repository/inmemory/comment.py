"""In-memory comment repository for testing."""

from typing import Optional, Sequence

from narravo.domain.error import PathConflictError
from narravo.domain.model.comment import Comment, ParentComment
from narravo.domain.repository.comment import CommentRepository
from narravo.domain.value import CommentId, CommentStatus, PostId
from narravo.domain.value.path import descendant_prefix, path_depth


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Enforces the same unique (post_id, path) rule as the database.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    def _visible(self, post_id: PostId) -> list[Comment]:
        comments = [
            c for c in self._comments.values() if c.post_id == post_id and c.is_visible
        ]
        comments.sort(key=lambda c: c.path)
        return comments

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_parent(self, parent_id: CommentId) -> Optional[ParentComment]:
        """Find a non-deleted parent comment."""
        comment = self._comments.get(parent_id)
        if (
            comment is None
            or comment.deleted_at is not None
            or comment.status == CommentStatus.DELETED
        ):
            return None
        return ParentComment(
            id=comment.id,
            post_id=comment.post_id,
            depth=comment.depth,
            path=comment.path,
        )

    async def count_siblings(
        self, post_id: PostId, parent_id: Optional[CommentId]
    ) -> int:
        """Count every direct child of the parent, deleted ones included."""
        return sum(
            1
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id == parent_id
        )

    async def insert(self, comment: Comment) -> Comment:
        """Insert a comment.

        Raises:
            PathConflictError: If the path is already used on the post
        """
        for existing in self._comments.values():
            if existing.post_id == comment.post_id and existing.path == comment.path:
                raise PathConflictError(comment.path)
        self._comments[comment.id] = comment
        return comment

    async def find_top_level(
        self,
        post_id: PostId,
        cursor: Optional[str],
        limit: int,
    ) -> list[Comment]:
        """Find visible top-level comments after the cursor."""
        comments = [
            c
            for c in self._visible(post_id)
            if c.depth == 0 and (not cursor or c.path > cursor)
        ]
        return comments[:limit]

    async def find_descendants(
        self, post_id: PostId, parent_paths: Sequence[str]
    ) -> list[Comment]:
        """Find visible descendants of all given paths."""
        prefixes = tuple(descendant_prefix(p) for p in parent_paths)
        if not prefixes:
            return []
        return [c for c in self._visible(post_id) if c.path.startswith(prefixes)]

    async def find_children(
        self,
        post_id: PostId,
        parent_path: str,
        cursor: Optional[str],
        limit: int,
    ) -> list[Comment]:
        """Find visible direct children of a path after the cursor."""
        prefix = descendant_prefix(parent_path)
        depth = path_depth(parent_path) + 1
        comments = [
            c
            for c in self._visible(post_id)
            if c.path.startswith(prefix)
            and c.depth == depth
            and (not cursor or c.path > cursor)
        ]
        return comments[:limit]

    async def count_children(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count visible direct children per parent."""
        wanted = set(comment_ids)
        counts: dict[CommentId, int] = {}
        for c in self._comments.values():
            if c.parent_id in wanted and c.is_visible:
                counts[c.parent_id] = counts.get(c.parent_id, 0) + 1
        return counts
