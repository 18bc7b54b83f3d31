"""Get comment tree use case."""

from pydantic import BaseModel

from narravo.domain.service import CommentTreeService, ConfigService
from narravo.domain.service.comment_tree_service import (
    DEFAULT_LIMIT_REPLIES,
    DEFAULT_LIMIT_TOP,
)
from narravo.domain.service.config_service import (
    COMMENTS_REPLIES_PAGE_SIZE,
    COMMENTS_TOP_PAGE_SIZE,
)
from narravo.domain.value import PostId, UserId, parse_id

from .item import CommentItem


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    post_id: str  # UUID string
    cursor: str | None = None
    user_id: str | None = None  # Authenticated viewer, if any


class GetCommentTreeResponse(BaseModel):
    """Get comment tree response."""

    post_id: str
    top: list[CommentItem]
    children: dict[str, list[CommentItem]]
    next_cursor: str | None


async def page_size(config_service: ConfigService, key: str, default: int) -> int:
    """Read a positive page size from configuration."""
    value = await config_service.get_number(key)
    if value is None or value < 1:
        return default
    return int(value)


class GetCommentTreeUseCase:
    """Use case for reading one page of a post's comment thread."""

    def __init__(
        self,
        comment_tree_service: CommentTreeService,
        config_service: ConfigService,
    ) -> None:
        """Initialize get comment tree use case.

        Args:
            comment_tree_service: Comment tree reader
            config_service: Runtime configuration for page sizes
        """
        self.comment_tree_service = comment_tree_service
        self.config_service = config_service

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Args:
            request: Get comment tree request

        Returns:
            Top-level comments, replies grouped by parent path and the next cursor

        Raises:
            ValidationError: If the post ID is malformed
        """
        post_id = PostId(parse_id(request.post_id, "post_id"))
        viewer_id = (
            UserId(parse_id(request.user_id, "user_id")) if request.user_id else None
        )
        limit_top = await page_size(
            self.config_service, COMMENTS_TOP_PAGE_SIZE, DEFAULT_LIMIT_TOP
        )
        limit_replies = await page_size(
            self.config_service, COMMENTS_REPLIES_PAGE_SIZE, DEFAULT_LIMIT_REPLIES
        )

        tree = await self.comment_tree_service.get_comment_tree(
            post_id=post_id,
            cursor=request.cursor,
            limit_top=limit_top,
            limit_replies=limit_replies,
            user_id=viewer_id,
        )

        return GetCommentTreeResponse(
            post_id=request.post_id,
            top=[CommentItem.from_node(node) for node in tree.top],
            children={
                path: [CommentItem.from_node(node) for node in nodes]
                for path, nodes in tree.children.items()
            },
            next_cursor=tree.next_cursor,
        )
