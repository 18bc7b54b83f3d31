"""Reaction routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Request, status
from pydantic import BaseModel

from narravo.application.usecase.reaction import (
    ToggleReactionRequest,
    ToggleReactionResponse,
    ToggleReactionUseCase,
)
from narravo.domain.error import DomainError
from narravo.domain.service import JWTService
from narravo.domain.value import ReactionKind
from narravo.interface.error import to_http_exception

router = APIRouter(prefix="/comments", tags=["reactions"], route_class=DishkaRoute)


class ToggleReactionAPIRequest(BaseModel):
    """API request for toggling a reaction."""

    kind: ReactionKind
    honeypot: str | None = None
    submit_start_time: float | None = None


@router.post("/{comment_id}/reactions", response_model=ToggleReactionResponse)
async def toggle_reaction(
    comment_id: str,
    request: ToggleReactionAPIRequest,
    http_request: Request,
    toggle_reaction_use_case: FromDishka[ToggleReactionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ToggleReactionResponse:
    """Add the reaction if absent, remove it if present.

    Requires authentication.

    Raises:
        HTTPException: If not authenticated, rejected or the comment is hidden
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to react",
        )

    try:
        use_case_request = ToggleReactionRequest(
            comment_id=comment_id,
            user_id=user_id,
            kind=request.kind,
            honeypot=request.honeypot,
            submit_start_time=request.submit_start_time,
            headers=dict(http_request.headers),
        )
        return await toggle_reaction_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e) from e
