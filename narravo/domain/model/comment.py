"""Comment entity and the records the comment tree is assembled from.

Comments are threaded replies on a post. Threading uses a materialized path
(see ``narravo.domain.value.path``) so a whole thread can be read with a
single prefix query, and nesting is capped at ``MAX_COMMENT_DEPTH``.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from narravo.domain.model.common import DomainModel
from narravo.domain.value import (
    AttachmentId,
    AttachmentKind,
    CommentId,
    CommentStatus,
    PostId,
    UserId,
)
from narravo.domain.value.path import is_valid_path, path_depth

# A comment at depth 0 is top-level; replies may go down to depth 4.
MAX_COMMENT_DEPTH = 5


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - path: Parent's path + "." + own 4-digit sibling sequence
    - depth: Number of path segments minus one
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    parent_id: Optional[CommentId] = None
    path: str
    depth: int = Field(default=0, ge=0, lt=MAX_COMMENT_DEPTH)
    body_md: str = Field(min_length=1, max_length=10000)
    body_html: str
    status: CommentStatus = CommentStatus.PENDING
    created_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_path_matches_depth(self) -> "Comment":
        """Path shape and depth must agree."""
        if not is_valid_path(self.path):
            raise ValueError(f"Malformed comment path: {self.path!r}")
        if path_depth(self.path) != self.depth:
            raise ValueError(
                f"Depth {self.depth} does not match path {self.path!r}"
            )
        if (self.parent_id is None) != (self.depth == 0):
            raise ValueError("Only top-level comments may omit parent_id")
        return self

    @property
    def is_visible(self) -> bool:
        """Whether the comment is shown in the public tree."""
        return self.status == CommentStatus.APPROVED and self.deleted_at is None


class ParentComment(DomainModel):
    """Fields of a parent comment needed to allocate a reply path."""

    id: CommentId
    post_id: PostId
    depth: int
    path: str


class CommentAttachment(DomainModel):
    """Media attached to a comment."""

    id: AttachmentId
    comment_id: CommentId
    kind: AttachmentKind
    url: str
    poster_url: Optional[str] = None
    mime: Optional[str] = None


class ReactionSummary(DomainModel):
    """Reaction counts for a comment and the caller's own reactions."""

    counts: dict[str, int] = Field(default_factory=dict)
    user_reactions: list[str] = Field(default_factory=list)


class CommentNode(DomainModel):
    """A comment enriched for rendering."""

    comment: Comment
    # Direct approved children; only computed for top-level comments
    children_count: Optional[int] = None
    reactions: ReactionSummary = Field(default_factory=ReactionSummary)
    attachments: list[CommentAttachment] = Field(default_factory=list)


class CommentTree(DomainModel):
    """One page of top-level comments with their capped descendants.

    ``children`` maps a parent path to its accepted replies in path order.
    """

    top: list[CommentNode]
    children: dict[str, list[CommentNode]]
    next_cursor: Optional[str] = None


class CommentPage(DomainModel):
    """A page of direct replies under one parent."""

    parent_path: str
    nodes: list[CommentNode]
    next_cursor: Optional[str] = None
