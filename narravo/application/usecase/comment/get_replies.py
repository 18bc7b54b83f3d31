"""Get replies use case ("load more replies")."""

from pydantic import BaseModel

from narravo.domain.service import CommentTreeService, ConfigService
from narravo.domain.service.comment_tree_service import DEFAULT_LIMIT_REPLIES
from narravo.domain.service.config_service import COMMENTS_REPLIES_PAGE_SIZE
from narravo.domain.value import PostId, UserId, parse_id

from .get_comment_tree import page_size
from .item import CommentItem


class GetRepliesRequest(BaseModel):
    """Get replies request."""

    post_id: str  # UUID string
    parent_path: str
    cursor: str | None = None
    user_id: str | None = None


class GetRepliesResponse(BaseModel):
    """Get replies response."""

    post_id: str
    parent_path: str
    replies: list[CommentItem]
    next_cursor: str | None


class GetRepliesUseCase:
    """Use case for paging through the direct replies of one comment."""

    def __init__(
        self,
        comment_tree_service: CommentTreeService,
        config_service: ConfigService,
    ) -> None:
        self.comment_tree_service = comment_tree_service
        self.config_service = config_service

    async def execute(self, request: GetRepliesRequest) -> GetRepliesResponse:
        """Execute get replies flow.

        Raises:
            ValidationError: If the post ID or parent path is malformed
        """
        post_id = PostId(parse_id(request.post_id, "post_id"))
        viewer_id = (
            UserId(parse_id(request.user_id, "user_id")) if request.user_id else None
        )
        limit = await page_size(
            self.config_service, COMMENTS_REPLIES_PAGE_SIZE, DEFAULT_LIMIT_REPLIES
        )
        page = await self.comment_tree_service.get_replies(
            post_id=post_id,
            parent_path=request.parent_path,
            cursor=request.cursor,
            limit=limit,
            user_id=viewer_id,
        )
        return GetRepliesResponse(
            post_id=request.post_id,
            parent_path=page.parent_path,
            replies=[CommentItem.from_node(node) for node in page.nodes],
            next_cursor=page.next_cursor,
        )
