"""Domain value types for Narravo.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import field_validator

from narravo.domain.value.common import RootValueObject


class CommentStatus(str, Enum):
    """Moderation state of a comment."""

    PENDING = "pending"
    APPROVED = "approved"
    SPAM = "spam"
    DELETED = "deleted"


class AbuseAction(str, Enum):
    """Submission kinds guarded by the anti-abuse gate."""

    COMMENT = "comment"
    REACTION = "reaction"


class AttachmentKind(str, Enum):
    """Media kind of a comment attachment."""

    IMAGE = "image"
    VIDEO = "video"


class ReactionKind(RootValueObject[str]):
    """Reaction name, e.g. 'like', 'heart', 'laugh'.

    Lowercase letters, digits and hyphens, 1-32 characters.
    """

    @field_validator("root")
    @classmethod
    def validate_kind(cls, v: str) -> str:
        """Validate reaction kind format."""
        if not re.match(r"^[a-z0-9-]{1,32}$", v):
            raise ValueError(
                "Reaction kind must be 1-32 characters, lowercase, alphanumeric with hyphens"
            )
        return v
