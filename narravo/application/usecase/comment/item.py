"""Comment items shared by the comment read use cases."""

from datetime import datetime

from pydantic import BaseModel

from narravo.domain.model import CommentNode
from narravo.domain.value import AttachmentKind


class AttachmentItem(BaseModel):
    """Attachment in a comment response."""

    attachment_id: str
    kind: AttachmentKind
    url: str
    poster_url: str | None = None
    mime: str | None = None


class CommentItem(BaseModel):
    """Comment in a tree or replies response."""

    comment_id: str
    post_id: str
    author_id: str
    parent_id: str | None
    path: str
    depth: int
    body_html: str
    created_at: datetime
    children_count: int | None = None
    reactions: dict[str, int]
    user_reactions: list[str]
    attachments: list[AttachmentItem]

    @classmethod
    def from_node(cls, node: CommentNode) -> "CommentItem":
        comment = node.comment
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            path=comment.path,
            depth=comment.depth,
            body_html=comment.body_html,
            created_at=comment.created_at,
            children_count=node.children_count,
            reactions=node.reactions.counts,
            user_reactions=node.reactions.user_reactions,
            attachments=[
                AttachmentItem(
                    attachment_id=str(a.id),
                    kind=a.kind,
                    url=a.url,
                    poster_url=a.poster_url,
                    mime=a.mime,
                )
                for a in node.attachments
            ],
        )
