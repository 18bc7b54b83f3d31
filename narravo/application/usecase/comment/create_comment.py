"""Create comment use case."""

from datetime import datetime
from pydantic import BaseModel, Field

from narravo.domain.model.rate_limit import RateLimitCheck
from narravo.domain.service import AntiAbuseService, CommentService
from narravo.domain.value import (
    AbuseAction,
    CommentId,
    CommentStatus,
    PostId,
    UserId,
    parse_id,
)


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    body_md: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies
    honeypot: str | None = None
    submit_start_time: float | None = None  # Epoch milliseconds
    headers: dict[str, str] = Field(default_factory=dict)


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    post_id: str
    parent_id: str | None
    path: str
    depth: int
    status: CommentStatus
    body_html: str
    created_at: datetime
    rate_limit: RateLimitCheck | None = None


class CreateCommentUseCase:
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        anti_abuse_service: AntiAbuseService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            anti_abuse_service: Submission gate
        """
        self.comment_service = comment_service
        self.anti_abuse_service = anti_abuse_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Pass the submission through the anti-abuse gate
        2. Create comment via comment service (allocates the path)

        Args:
            request: Create comment request

        Returns:
            Create comment response with the stored comment

        Raises:
            AntiAbuseError: If the submission is rejected
            NotFoundError: If the post is missing
            CommentError: If the parent is invalid or too deep
            ValidationError: If an identifier is malformed
        """
        author_id = UserId(parse_id(request.author_id, "author_id"))
        post_id = PostId(parse_id(request.post_id, "post_id"))
        parent_id = (
            CommentId(parse_id(request.parent_id, "parent_id"))
            if request.parent_id
            else None
        )

        result = await self.anti_abuse_service.validate(
            user_id=author_id,
            action=AbuseAction.COMMENT,
            honeypot=request.honeypot,
            submit_start_time=request.submit_start_time,
            headers=request.headers,
        )
        result.raise_for_error()

        comment = await self.comment_service.create_comment(
            post_id=post_id,
            author_id=author_id,
            body_md=request.body_md,
            parent_id=parent_id,
        )

        return CreateCommentResponse(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            path=comment.path,
            depth=comment.depth,
            status=comment.status,
            body_html=comment.body_html,
            created_at=comment.created_at,
            rate_limit=result.rate_limit_info,
        )
