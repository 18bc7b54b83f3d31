"""PostgreSQL repository implementations."""

from narravo.persistence.repository.attachment import PostgresAttachmentRepository
from narravo.persistence.repository.comment import PostgresCommentRepository
from narravo.persistence.repository.configuration import PostgresConfigRepository
from narravo.persistence.repository.post import PostgresPostRepository
from narravo.persistence.repository.reaction import PostgresReactionRepository

__all__ = [
    "PostgresAttachmentRepository",
    "PostgresCommentRepository",
    "PostgresConfigRepository",
    "PostgresPostRepository",
    "PostgresReactionRepository",
]
