"""Domain models."""

from narravo.domain.model.comment import (
    MAX_COMMENT_DEPTH,
    Comment,
    CommentAttachment,
    CommentNode,
    CommentPage,
    CommentTree,
    ParentComment,
    ReactionSummary,
)
from narravo.domain.model.post import Post
from narravo.domain.model.rate_limit import (
    AntiAbuseResult,
    RateLimitCheck,
    RateLimitKey,
)

__all__ = [
    "MAX_COMMENT_DEPTH",
    "AntiAbuseResult",
    "Comment",
    "CommentAttachment",
    "CommentNode",
    "CommentPage",
    "CommentTree",
    "ParentComment",
    "Post",
    "RateLimitCheck",
    "RateLimitKey",
    "ReactionSummary",
]
