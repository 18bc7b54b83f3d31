"""Strongly typed identifiers for Narravo domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

from narravo.domain.error import ValidationError

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
AttachmentId = NewType("AttachmentId", UUID)


def parse_id(value: str, field: str) -> UUID:
    """Parse a caller-supplied identifier.

    Args:
        value: UUID string from the request
        field: Field name used in the error message

    Returns:
        Parsed UUID

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except (TypeError, ValueError, AttributeError) as e:
        raise ValidationError(f"Invalid {field}") from e
