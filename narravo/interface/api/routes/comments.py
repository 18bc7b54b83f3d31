"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Request, status
from pydantic import BaseModel, Field

from narravo.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentTreeRequest,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
    GetRepliesRequest,
    GetRepliesResponse,
    GetRepliesUseCase,
)
from narravo.domain.error import DomainError
from narravo.domain.service import JWTService
from narravo.interface.error import to_http_exception

router = APIRouter(prefix="/posts", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    body_md: str = Field(min_length=1, max_length=10000)
    parent_id: str | None = None  # Parent comment ID for replies
    # Hidden form field, must stay empty
    honeypot: str | None = None
    # Epoch milliseconds when the form was rendered
    submit_start_time: float | None = None


@router.post(
    "/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CreateCommentAPIRequest,
    http_request: Request,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Create a comment on a post or reply to another comment.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Comment creation data
        http_request: Raw request, for client IP headers
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created comment details

    Raises:
        HTTPException: If not authenticated, rejected or invalid
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to create comments",
        )

    try:
        use_case_request = CreateCommentRequest(
            post_id=post_id,
            body_md=request.body_md,
            author_id=user_id,
            parent_id=request.parent_id,
            honeypot=request.honeypot,
            submit_start_time=request.submit_start_time,
            headers=dict(http_request.headers),
        )
        return await create_comment_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/{post_id}/comments", response_model=GetCommentTreeResponse)
async def get_comments(
    post_id: str,
    get_comment_tree_use_case: FromDishka[GetCommentTreeUseCase],
    jwt_service: FromDishka[JWTService],
    cursor: str | None = None,
    auth_token: str | None = Cookie(default=None),
) -> GetCommentTreeResponse:
    """Get one page of a post's comment thread.

    If authenticated, includes the caller's own reactions.

    Args:
        post_id: Post UUID
        get_comment_tree_use_case: Get comment tree use case from DI
        jwt_service: JWT service for token verification (injected)
        cursor: Path of the last top-level comment already shown
        auth_token: JWT token from cookie (optional)

    Returns:
        Top-level comments with replies grouped by parent path
    """
    try:
        request = GetCommentTreeRequest(
            post_id=post_id,
            cursor=cursor,
            user_id=jwt_service.get_user_id_from_token(auth_token),
        )
        return await get_comment_tree_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/{post_id}/comments/replies", response_model=GetRepliesResponse)
async def get_replies(
    post_id: str,
    parent_path: str,
    get_replies_use_case: FromDishka[GetRepliesUseCase],
    jwt_service: FromDishka[JWTService],
    cursor: str | None = None,
    auth_token: str | None = Cookie(default=None),
) -> GetRepliesResponse:
    """Load more direct replies under a comment."""
    try:
        request = GetRepliesRequest(
            post_id=post_id,
            parent_path=parent_path,
            cursor=cursor,
            user_id=jwt_service.get_user_id_from_token(auth_token),
        )
        return await get_replies_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e) from e
