"""Repository interfaces for the Narravo domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from narravo.domain.repository.attachment import AttachmentRepository
from narravo.domain.repository.comment import CommentRepository
from narravo.domain.repository.configuration import ConfigRepository
from narravo.domain.repository.post import PostRepository
from narravo.domain.repository.rate_limit import RateLimitStore
from narravo.domain.repository.reaction import ReactionRepository

__all__ = [
    "AttachmentRepository",
    "CommentRepository",
    "ConfigRepository",
    "PostRepository",
    "RateLimitStore",
    "ReactionRepository",
]
