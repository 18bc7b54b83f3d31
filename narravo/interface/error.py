"""Mapping of domain errors onto HTTP responses."""

import logfire
from fastapi import HTTPException, status

from narravo.domain.error import (
    AntiAbuseError,
    DomainError,
    MaxDepthExceededError,
    NotFoundError,
    ParentNotFoundError,
    PathConflictError,
    RateLimitedError,
    ValidationError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into the HTTP error the client sees.

    Args:
        error: Error raised by a use case

    Returns:
        HTTPException with status, detail and, for rate limits, Retry-After
    """
    if isinstance(error, RateLimitedError):
        return HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=str(error),
            headers={"Retry-After": str(error.retry_after)},
        )
    if isinstance(error, AntiAbuseError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, (NotFoundError, ParentNotFoundError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, MaxDepthExceededError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(error)
        )
    if isinstance(error, PathConflictError):
        logfire.error("Comment path allocation gave up", path=error.path)
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Could not place the comment, please retry",
        )
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    logfire.error("Unhandled domain error", error=str(error), error_type=type(error).__name__)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error"
    )
