"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from narravo.domain.model import Comment, CommentAttachment, ParentComment, Post
from narravo.domain.value import (
    AttachmentId,
    AttachmentKind,
    CommentId,
    CommentStatus,
    PostId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["user_id"])),
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        path=row["path"],
        depth=row["depth"],
        body_md=row["body_md"],
        body_html=row["body_html"],
        status=CommentStatus(row["status"]),
        created_at=row["created_at"],
        deleted_at=row.get("deleted_at"),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "parent_id": comment.parent_id,
        "user_id": comment.author_id,
        "path": comment.path,
        "depth": comment.depth,
        "body_md": comment.body_md,
        "body_html": comment.body_html,
        "status": comment.status.value,
        "created_at": comment.created_at,
        "deleted_at": comment.deleted_at,
    }


def row_to_parent_comment(row: Dict[str, Any]) -> ParentComment:
    """Convert a parent lookup row to a ParentComment record."""
    return ParentComment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        depth=row["depth"],
        path=row["path"],
    )


def row_to_attachment(row: Dict[str, Any]) -> CommentAttachment:
    """Convert database row to CommentAttachment domain model."""
    return CommentAttachment(
        id=AttachmentId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        kind=AttachmentKind(row["kind"]),
        url=row["url"],
        poster_url=row.get("poster_url"),
        mime=row.get("mime"),
    )


def attachment_to_dict(attachment: CommentAttachment) -> Dict[str, Any]:
    """Convert CommentAttachment domain model to database dict."""
    data = attachment.model_dump()
    data["kind"] = attachment.kind.value
    return data


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        slug=row["slug"],
        title=row["title"],
        created_at=row["created_at"],
        deleted_at=row.get("deleted_at"),
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return post.model_dump()
