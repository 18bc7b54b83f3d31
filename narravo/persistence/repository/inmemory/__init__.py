"""In-memory repository implementations for testing."""

from .attachment import InMemoryAttachmentRepository
from .comment import InMemoryCommentRepository
from .configuration import InMemoryConfigRepository
from .post import InMemoryPostRepository
from .reaction import InMemoryReactionRepository

__all__ = [
    "InMemoryAttachmentRepository",
    "InMemoryCommentRepository",
    "InMemoryConfigRepository",
    "InMemoryPostRepository",
    "InMemoryReactionRepository",
]
