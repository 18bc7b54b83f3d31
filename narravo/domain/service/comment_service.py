"""Comment domain service: reply validation and path allocation."""

from datetime import datetime
from uuid import uuid4

import logfire

from narravo.domain.error import (
    MaxDepthExceededError,
    ParentNotFoundError,
    PathConflictError,
    ValidationError,
)
from narravo.domain.model.comment import MAX_COMMENT_DEPTH, Comment
from narravo.domain.repository import CommentRepository
from narravo.domain.value import CommentId, CommentStatus, PostId, UserId
from narravo.domain.value.path import child_path

from .base import Service
from .config_service import COMMENTS_AUTO_APPROVE, ConfigService
from .post_service import PostService
from .rendering import BodyRenderer

# Concurrent replies to one parent can race for the same sequence number;
# the storage unique constraint rejects the loser, which recounts and retries.
MAX_PATH_ALLOCATION_ATTEMPTS = 5


class CommentService(Service):
    """Domain service for creating comments."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        body_renderer: BodyRenderer,
        config_service: ConfigService,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_service: Post service for existence checks
            body_renderer: Markdown renderer and sanitizer
            config_service: Runtime configuration
        """
        self.comment_repository = comment_repository
        self.post_service = post_service
        self.body_renderer = body_renderer
        self.config_service = config_service

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        body_md: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        The new comment's path is its parent's path plus its own 4-digit
        sibling sequence; top-level comments get a single segment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            body_md: Comment body (markdown)
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the post is missing or deleted
            ParentNotFoundError: If the parent is missing, deleted or on another post
            MaxDepthExceededError: If the reply would reach MAX_COMMENT_DEPTH
            PathConflictError: If allocation kept colliding with concurrent replies
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            await self.post_service.ensure_post_exists(post_id)

            depth = 0
            parent_path = None
            if parent_id:
                parent = await self.comment_repository.find_parent(parent_id)
                if parent is None or parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise ParentNotFoundError(str(parent_id))
                depth = parent.depth + 1
                if depth >= MAX_COMMENT_DEPTH:
                    logfire.warn(
                        "Reply would exceed max depth",
                        parent_id=str(parent_id),
                        depth=depth,
                    )
                    raise MaxDepthExceededError(depth, MAX_COMMENT_DEPTH)
                parent_path = parent.path

            body_html = self.body_renderer.render(body_md)
            auto_approve = await self.config_service.get_boolean(COMMENTS_AUTO_APPROVE)
            status = CommentStatus.APPROVED if auto_approve else CommentStatus.PENDING

            sequence = 0
            path = ""
            for attempt in range(1, MAX_PATH_ALLOCATION_ATTEMPTS + 1):
                sibling_count = await self.comment_repository.count_siblings(
                    post_id, parent_id
                )
                # Never step backwards, even if a sibling row disappeared
                sequence = max(sibling_count + 1, sequence + 1)
                try:
                    path = child_path(parent_path, sequence)
                except ValueError as e:
                    raise ValidationError("Too many replies to this comment") from e

                comment = Comment(
                    id=CommentId(uuid4()),
                    post_id=post_id,
                    author_id=author_id,
                    parent_id=parent_id,
                    path=path,
                    depth=depth,
                    body_md=body_md,
                    body_html=body_html,
                    status=status,
                    created_at=datetime.now(),
                    deleted_at=None,
                )

                try:
                    saved = await self.comment_repository.insert(comment)
                except PathConflictError:
                    logfire.warn(
                        "Comment path collision, retrying",
                        post_id=str(post_id),
                        path=path,
                        attempt=attempt,
                    )
                    continue

                logfire.info(
                    "Comment created",
                    comment_id=str(saved.id),
                    post_id=str(post_id),
                    path=saved.path,
                    depth=saved.depth,
                    status=saved.status.value,
                )
                return saved

            logfire.error(
                "Comment path allocation exhausted",
                post_id=str(post_id),
                parent_id=str(parent_id) if parent_id else None,
                attempts=MAX_PATH_ALLOCATION_ATTEMPTS,
            )
            raise PathConflictError(path)
