"""Domain value objects for Narravo."""

from narravo.domain.value.identifiers import (
    AttachmentId,
    CommentId,
    PostId,
    UserId,
    parse_id,
)
from narravo.domain.value.types import (
    AbuseAction,
    AttachmentKind,
    CommentStatus,
    ReactionKind,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "AttachmentId",
    "parse_id",
    # Types
    "AbuseAction",
    "AttachmentKind",
    "CommentStatus",
    "ReactionKind",
]
