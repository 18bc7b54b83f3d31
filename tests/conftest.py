"""Test configuration and fixtures."""

import time
from datetime import datetime
from uuid import uuid4

import logfire

from narravo.domain.model import Comment, Post
from narravo.domain.repository import CommentRepository, PostRepository
from narravo.domain.value import CommentId, CommentStatus, PostId, UserId


async def make_post(post_repo: PostRepository, deleted: bool = False) -> Post:
    """Save a post for comments to hang off.

    Args:
        post_repo: Repository to save into
        deleted: Whether the post is soft-deleted

    Returns:
        The saved post
    """
    post_id = PostId(uuid4())
    post = Post(
        id=post_id,
        slug=f"post-{str(post_id)[:8]}",
        title="Test Post",
        deleted_at=datetime.now() if deleted else None,
    )
    return await post_repo.save(post)


def form_opened_ago(seconds: float) -> float:
    """Epoch milliseconds of a form rendered ``seconds`` ago."""
    return (time.time() - seconds) * 1000


async def make_comment(
    comment_repo: CommentRepository,
    post_id: PostId,
    path: str,
    parent: Comment | None = None,
    status: CommentStatus = CommentStatus.APPROVED,
    deleted: bool = False,
) -> Comment:
    """Insert a comment at a fixed path.

    Args:
        comment_repo: Repository to insert into
        post_id: Post the comment belongs to
        path: Materialized path, e.g. "0001.0002"
        parent: Parent comment (None for top-level)
        status: Moderation status
        deleted: Whether the comment is soft-deleted

    Returns:
        The stored comment
    """
    comment = Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=UserId(uuid4()),
        parent_id=parent.id if parent else None,
        path=path,
        depth=path.count("."),
        body_md=f"Comment {path}",
        body_html=f"<p>Comment {path}</p>",
        status=status,
        deleted_at=datetime.now() if deleted else None,
    )
    return await comment_repo.insert(comment)


# Keep spans on the console only; nothing is exported during tests
logfire.configure(send_to_logfire=False, console=False)
