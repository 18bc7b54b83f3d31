"""Comment tree domain service: paginated, enriched thread reads."""

from typing import Optional, Sequence

import logfire

from narravo.domain.error import ValidationError
from narravo.domain.model.comment import (
    Comment,
    CommentNode,
    CommentPage,
    CommentTree,
    ReactionSummary,
)
from narravo.domain.repository import (
    AttachmentRepository,
    CommentRepository,
    ReactionRepository,
)
from narravo.domain.value import CommentId, PostId, UserId
from narravo.domain.value.path import is_valid_path
from narravo.domain.value.path import parent_path as parent_of

from .base import Service

DEFAULT_LIMIT_TOP = 10
DEFAULT_LIMIT_REPLIES = 3


class CommentTreeService(Service):
    """Domain service for reading comment threads.

    Top-level comments are paged with a path cursor. For each page every
    descendant is loaded in one prefix query and capped per parent group.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        reaction_repository: ReactionRepository,
        attachment_repository: AttachmentRepository,
    ) -> None:
        """Initialize comment tree service.

        Args:
            comment_repository: Comment repository
            reaction_repository: Reaction counts and user reactions
            attachment_repository: Comment attachments
        """
        self.comment_repository = comment_repository
        self.reaction_repository = reaction_repository
        self.attachment_repository = attachment_repository

    async def get_comment_tree(
        self,
        post_id: PostId,
        cursor: Optional[str] = None,
        limit_top: int = DEFAULT_LIMIT_TOP,
        limit_replies: int = DEFAULT_LIMIT_REPLIES,
        user_id: Optional[UserId] = None,
    ) -> CommentTree:
        """Get one page of top-level comments with their replies.

        Replies are grouped by their immediate parent's path. Each group
        keeps at most ``limit_replies`` comments, counted over the whole
        flattened thread in path order, so a busy sub-thread can use up a
        group before its deeper siblings are reached. Dropped replies are
        only visible through the top-level ``children_count``.

        Args:
            post_id: Post ID
            cursor: Path of the last top-level comment already shown
            limit_top: Top-level comments per page
            limit_replies: Replies kept per parent group
            user_id: Caller, to include their own reactions

        Returns:
            Tree page with ``next_cursor`` set when more top-level comments exist
        """
        with logfire.span(
            "comment_tree_service.get_comment_tree",
            post_id=str(post_id),
            cursor=cursor,
            limit_top=limit_top,
            limit_replies=limit_replies,
        ):
            rows = await self.comment_repository.find_top_level(
                post_id, cursor, limit_top + 1
            )
            has_more = len(rows) > limit_top
            top = rows[:limit_top]
            next_cursor = top[-1].path if has_more and top else None

            children: dict[str, list[Comment]] = {}
            if top:
                descendants = await self.comment_repository.find_descendants(
                    post_id, [c.path for c in top]
                )
                for comment in descendants:
                    group = children.setdefault(parent_of(comment.path) or "", [])
                    if len(group) < limit_replies:
                        group.append(comment)

            accepted = top + [c for group in children.values() for c in group]
            children_counts: dict[CommentId, int] = {}
            if top:
                children_counts = await self.comment_repository.count_children(
                    [c.id for c in top]
                )
            enrich = await self._enrichment(accepted, user_id)

            tree = CommentTree(
                top=[
                    enrich(c, children_count=children_counts.get(c.id, 0))
                    for c in top
                ],
                children={
                    path: [enrich(c) for c in group]
                    for path, group in children.items()
                },
                next_cursor=next_cursor,
            )
            logfire.info(
                "Comment tree retrieved",
                post_id=str(post_id),
                top_count=len(tree.top),
                reply_count=len(accepted) - len(top),
                has_more=has_more,
            )
            return tree

    async def get_replies(
        self,
        post_id: PostId,
        parent_path: str,
        cursor: Optional[str] = None,
        limit: int = DEFAULT_LIMIT_REPLIES,
        user_id: Optional[UserId] = None,
    ) -> CommentPage:
        """Get the next page of direct replies under one comment.

        Args:
            post_id: Post ID
            parent_path: Path of the parent comment
            cursor: Path of the last reply already shown
            limit: Replies per page
            user_id: Caller, to include their own reactions

        Returns:
            Page of replies with ``next_cursor`` set when more exist

        Raises:
            ValidationError: If a path argument is malformed
        """
        if not is_valid_path(parent_path) or (cursor and not is_valid_path(cursor)):
            raise ValidationError("Invalid comment path")

        with logfire.span(
            "comment_tree_service.get_replies",
            post_id=str(post_id),
            parent_path=parent_path,
            cursor=cursor,
            limit=limit,
        ):
            rows = await self.comment_repository.find_children(
                post_id, parent_path, cursor, limit + 1
            )
            has_more = len(rows) > limit
            page = rows[:limit]
            counts: dict[CommentId, int] = {}
            if page:
                counts = await self.comment_repository.count_children(
                    [c.id for c in page]
                )
            enrich = await self._enrichment(page, user_id)
            return CommentPage(
                parent_path=parent_path,
                nodes=[enrich(c, children_count=counts.get(c.id, 0)) for c in page],
                next_cursor=page[-1].path if has_more and page else None,
            )

    async def _enrichment(
        self, comments: Sequence[Comment], user_id: Optional[UserId]
    ):
        """Bulk-load reactions and attachments, returning a node builder."""
        ids: list[CommentId] = [c.id for c in comments]
        counts: dict[CommentId, dict[str, int]] = {}
        mine: dict[CommentId, list[str]] = {}
        attachments = {}
        if ids:
            counts = await self.reaction_repository.count_for_comments(ids)
            if user_id is not None:
                mine = await self.reaction_repository.find_user_reactions(
                    user_id, ids
                )
            attachments = await self.attachment_repository.find_by_comments(ids)

        def build(comment: Comment, children_count: Optional[int] = None) -> CommentNode:
            return CommentNode(
                comment=comment,
                children_count=children_count,
                reactions=ReactionSummary(
                    counts=counts.get(comment.id, {}),
                    user_reactions=mine.get(comment.id, []),
                ),
                attachments=attachments.get(comment.id, []),
            )

        return build
