"""Toggle reaction use case."""

from pydantic import BaseModel, Field

from narravo.domain.service import AntiAbuseService, ReactionService
from narravo.domain.value import (
    AbuseAction,
    CommentId,
    ReactionKind,
    UserId,
    parse_id,
)


class ToggleReactionRequest(BaseModel):
    """Toggle reaction request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    kind: ReactionKind
    honeypot: str | None = None
    submit_start_time: float | None = None  # Epoch milliseconds
    headers: dict[str, str] = Field(default_factory=dict)


class ToggleReactionResponse(BaseModel):
    """Toggle reaction response."""

    comment_id: str
    kind: str
    active: bool
    counts: dict[str, int]


class ToggleReactionUseCase:
    """Use case for adding or removing a reaction on a comment."""

    def __init__(
        self,
        reaction_service: ReactionService,
        anti_abuse_service: AntiAbuseService,
    ) -> None:
        """Initialize toggle reaction use case.

        Args:
            reaction_service: Reaction domain service
            anti_abuse_service: Submission gate
        """
        self.reaction_service = reaction_service
        self.anti_abuse_service = anti_abuse_service

    async def execute(self, request: ToggleReactionRequest) -> ToggleReactionResponse:
        """Execute toggle reaction flow.

        Raises:
            AntiAbuseError: If the submission is rejected
            NotFoundError: If the comment is missing or hidden
            ValidationError: If an identifier is malformed
        """
        user_id = UserId(parse_id(request.user_id, "user_id"))
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))

        result = await self.anti_abuse_service.validate(
            user_id=user_id,
            action=AbuseAction.REACTION,
            honeypot=request.honeypot,
            submit_start_time=request.submit_start_time,
            headers=request.headers,
        )
        result.raise_for_error()

        active, counts = await self.reaction_service.toggle_reaction(
            comment_id=comment_id,
            user_id=user_id,
            kind=request.kind,
        )
        return ToggleReactionResponse(
            comment_id=request.comment_id,
            kind=request.kind.root,
            active=active,
            counts=counts,
        )
