"""Integration tests for PostgresCommentRepository.

Needs PostgreSQL at DATABASE__URL with migrations applied
(``python scripts/run_migrations.py``).
"""

import os
from uuid import uuid4

import pytest

from narravo.domain.error import PathConflictError
from narravo.domain.repository import CommentRepository, PostRepository
from narravo.domain.service import CommentService
from narravo.domain.value import CommentStatus, UserId
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
    ),
]

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


class TestCommentRepositoryIntegration:
    """Database behaviour the allocator and tree reader rely on."""

    @pytest.mark.asyncio
    async def test_duplicate_path_raises_path_conflict(self, integration_env):
        """The unique (post_id, path) constraint maps to PathConflictError."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        post = await make_post(await integration_env.get(PostRepository))
        await make_comment(comment_repo, post.id, "0001")

        # Act & Assert
        with pytest.raises(PathConflictError):
            await make_comment(comment_repo, post.id, "0001")

        # The savepoint rolled back; the session is still usable
        assert await comment_repo.count_siblings(post.id, None) == 1

    @pytest.mark.asyncio
    async def test_prefix_queries_return_subtree_in_path_order(
        self, integration_env
    ):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        post = await make_post(await integration_env.get(PostRepository))
        first = await make_comment(comment_repo, post.id, "0001")
        second = await make_comment(comment_repo, post.id, "0002")
        reply = await make_comment(comment_repo, post.id, "0001.0002", parent=first)
        await make_comment(comment_repo, post.id, "0001.0001", parent=first)
        await make_comment(comment_repo, post.id, "0001.0002.0001", parent=reply)
        await make_comment(
            comment_repo,
            post.id,
            "0002.0001",
            parent=second,
            status=CommentStatus.PENDING,
        )

        # Act
        descendants = await comment_repo.find_descendants(post.id, ["0001", "0002"])
        children = await comment_repo.find_children(post.id, "0001", None, 10)
        counts = await comment_repo.count_children([first.id, second.id])

        # Assert
        assert [c.path for c in descendants] == [
            "0001.0001",
            "0001.0002",
            "0001.0002.0001",
        ]
        assert [c.path for c in children] == ["0001.0001", "0001.0002"]
        assert counts == {first.id: 2}

    @pytest.mark.asyncio
    async def test_service_allocates_paths_against_postgres(self, integration_env):
        # Arrange
        comment_service = await integration_env.get(CommentService)
        post = await make_post(await integration_env.get(PostRepository))

        # Act
        top = await comment_service.create_comment(
            post_id=post.id, author_id=UserId(uuid4()), body_md="top"
        )
        reply = await comment_service.create_comment(
            post_id=post.id,
            author_id=UserId(uuid4()),
            body_md="reply",
            parent_id=top.id,
        )

        # Assert
        assert top.path == "0001"
        assert reply.path == "0001.0001"
