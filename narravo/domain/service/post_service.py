"""Post domain service."""

import logfire

from narravo.domain.error import NotFoundError
from narravo.domain.model.post import Post
from narravo.domain.repository import PostRepository
from narravo.domain.value import PostId

from .base import Service


class PostService(Service):
    """Domain service for the post lookups comments depend on."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def ensure_post_exists(self, post_id: PostId) -> Post:
        """Fail unless the post exists and is not deleted.

        Args:
            post_id: Post ID

        Returns:
            The post

        Raises:
            NotFoundError: If the post is missing or soft-deleted
        """
        post = await self.post_repository.find_by_id(post_id)
        if post is None or post.deleted_at is not None:
            logfire.warn("Post not found for comment", post_id=str(post_id))
            raise NotFoundError("Post", str(post_id))
        return post
