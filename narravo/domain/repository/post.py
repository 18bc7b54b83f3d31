"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from narravo.domain.model.post import Post
from narravo.domain.value import PostId


class PostRepository(ABC):
    """Read access to posts for the comment subsystem."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID, including soft-deleted posts.

        Args:
            post_id: The post ID

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        pass
