"""Domain layer errors."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from narravo.domain.model.rate_limit import RateLimitCheck


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


# ============================================================================
# Comment allocation
# ============================================================================


class CommentError(DomainError):
    """Base error for comment creation."""

    pass


class ParentNotFoundError(CommentError):
    """Parent comment is missing, deleted, or belongs to another post."""

    def __init__(self, parent_id: str):
        self.parent_id = parent_id
        super().__init__("Parent comment not found")


class MaxDepthExceededError(CommentError):
    """A reply would be nested deeper than allowed."""

    def __init__(self, depth: int, max_depth: int):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__("Max depth exceeded")


class PathConflictError(CommentError):
    """Another comment already holds the allocated path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Comment path already taken: {path}")


# ============================================================================
# Anti-abuse
# ============================================================================


class AntiAbuseError(DomainError):
    """Base error for rejected submissions."""

    pass


class InvalidSubmissionError(AntiAbuseError):
    """Honeypot field was filled in."""

    def __init__(self) -> None:
        super().__init__("Invalid form submission")


class SubmittedTooFastError(AntiAbuseError):
    """Form was submitted before the minimum dwell time elapsed."""

    def __init__(self, required_seconds: float, actual_seconds: Optional[float] = None):
        self.required_seconds = required_seconds
        self.actual_seconds = actual_seconds
        super().__init__(
            f"Submission too fast. Please wait at least {required_seconds:g} seconds."
        )


class RateLimitedError(AntiAbuseError):
    """Too many submissions in the current window."""

    def __init__(self, retry_after: int, rate_limit_info: "RateLimitCheck"):
        self.retry_after = retry_after
        self.rate_limit_info = rate_limit_info
        super().__init__(f"Rate limit exceeded. Try again in {retry_after} seconds.")


class ValidationFailedError(AntiAbuseError):
    """Unexpected failure while validating a submission."""

    def __init__(self) -> None:
        super().__init__("Validation failed")
