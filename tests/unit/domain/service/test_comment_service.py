"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from narravo.domain.error import (
    MaxDepthExceededError,
    NotFoundError,
    ParentNotFoundError,
    PathConflictError,
    ValidationError,
)
from narravo.domain.model.comment import Comment
from narravo.domain.repository import CommentRepository, ConfigRepository, PostRepository
from narravo.domain.service import (
    BodyRenderer,
    CommentService,
    ConfigService,
    PostService,
)
from narravo.domain.service.comment_service import MAX_PATH_ALLOCATION_ATTEMPTS
from narravo.domain.service.config_service import COMMENTS_AUTO_APPROVE
from narravo.domain.value import CommentId, CommentStatus, PostId, UserId
from narravo.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class StaleCountCommentRepository(InMemoryCommentRepository):
    """Reports no siblings, as if a concurrent insert had not been seen yet."""

    async def count_siblings(self, post_id, parent_id) -> int:
        return 0


class FullSiblingRangeCommentRepository(InMemoryCommentRepository):
    """Reports every four-digit sibling sequence as taken."""

    async def count_siblings(self, post_id, parent_id) -> int:
        return 9999


class AlwaysConflictingCommentRepository(InMemoryCommentRepository):
    """Every insert loses the race."""

    def __init__(self) -> None:
        super().__init__()
        self.insert_attempts = 0

    async def insert(self, comment: Comment) -> Comment:
        self.insert_attempts += 1
        raise PathConflictError(comment.path)


async def build_service(unit_env, comment_repo: CommentRepository) -> CommentService:
    return CommentService(
        comment_repository=comment_repo,
        post_service=await unit_env.get(PostService),
        body_renderer=await unit_env.get(BodyRenderer),
        config_service=await unit_env.get(ConfigService),
    )


class TestCreateTopLevelComment:
    """Tests for top-level comment creation."""

    @pytest.mark.asyncio
    async def test_first_comment_on_empty_post_gets_first_path(self, unit_env):
        """First comment on a post is 0001 at depth 0."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = await make_post(await unit_env.get(PostRepository))
        author_id = UserId(uuid4())

        # Act
        result = await comment_service.create_comment(
            post_id=post.id, author_id=author_id, body_md="First!"
        )

        # Assert
        assert result.path == "0001"
        assert result.depth == 0
        assert result.parent_id is None
        assert result.author_id == author_id

        saved = await comment_repo.find_by_id(result.id)
        assert saved is not None
        assert saved.path == "0001"

    @pytest.mark.asyncio
    async def test_sibling_sequences_increase_in_creation_order(self, unit_env):
        """Each new top-level comment takes the next sequence number."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostRepository))

        # Act
        paths = [
            (
                await comment_service.create_comment(
                    post_id=post.id, author_id=UserId(uuid4()), body_md=f"c{i}"
                )
            ).path
            for i in range(3)
        ]

        # Assert
        assert paths == ["0001", "0002", "0003"]
        assert paths == sorted(paths)

    @pytest.mark.asyncio
    async def test_deleted_sibling_sequence_is_not_reused(self, unit_env):
        """Soft-deleted siblings still hold their sequence number."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = await make_post(await unit_env.get(PostRepository))
        await make_comment(comment_repo, post.id, "0001", deleted=True)
        await make_comment(
            comment_repo, post.id, "0002", status=CommentStatus.SPAM
        )

        # Act
        result = await comment_service.create_comment(
            post_id=post.id, author_id=UserId(uuid4()), body_md="Hello"
        )

        # Assert
        assert result.path == "0003"

    @pytest.mark.asyncio
    async def test_paths_are_scoped_per_post(self, unit_env):
        """Two posts each start their own sequence."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        first = await make_post(post_repo)
        second = await make_post(post_repo)
        await comment_service.create_comment(
            post_id=first.id, author_id=UserId(uuid4()), body_md="a"
        )

        # Act
        result = await comment_service.create_comment(
            post_id=second.id, author_id=UserId(uuid4()), body_md="b"
        )

        # Assert
        assert result.path == "0001"

    @pytest.mark.asyncio
    async def test_body_is_rendered_to_safe_html(self, unit_env):
        """Markup in the body is escaped in body_html."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostRepository))

        # Act
        result = await comment_service.create_comment(
            post_id=post.id,
            author_id=UserId(uuid4()),
            body_md="<script>x</script>",
        )

        # Assert
        assert result.body_md == "<script>x</script>"
        assert "<script>" not in result.body_html
        assert "&lt;script&gt;" in result.body_html

    @pytest.mark.asyncio
    async def test_comment_on_missing_post_raises_not_found(self, unit_env):
        """Commenting on an unknown post fails."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError, match="Post not found"):
            await comment_service.create_comment(
                post_id=PostId(uuid4()), author_id=UserId(uuid4()), body_md="x"
            )

    @pytest.mark.asyncio
    async def test_comment_on_deleted_post_raises_not_found(self, unit_env):
        """Commenting on a soft-deleted post fails."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostRepository), deleted=True)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                post_id=post.id, author_id=UserId(uuid4()), body_md="x"
            )


class TestModerationStatus:
    """Tests for the status given to new comments."""

    @pytest.mark.asyncio
    async def test_comments_are_approved_by_default(self, unit_env):
        """Auto-approve is on unless configured otherwise."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostRepository))

        # Act
        result = await comment_service.create_comment(
            post_id=post.id, author_id=UserId(uuid4()), body_md="x"
        )

        # Assert
        assert result.status == CommentStatus.APPROVED

    @pytest.mark.asyncio
    async def test_comments_wait_for_moderation_when_auto_approve_off(
        self, unit_env
    ):
        """With auto-approve disabled new comments are pending."""
        # Arrange
        config_repo = await unit_env.get(ConfigRepository)
        await config_repo.set_value(COMMENTS_AUTO_APPROVE, False)
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostRepository))

        # Act
        result = await comment_service.create_comment(
            post_id=post.id, author_id=UserId(uuid4()), body_md="x"
        )

        # Assert
        assert result.status == CommentStatus.PENDING


class TestCreateReply:
    """Tests for replies."""

    @pytest.mark.asyncio
    async def test_first_reply_extends_parent_path(self, unit_env):
        """Reply to 0001 with no existing replies is 0001.0001 at depth 1."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostRepository))
        parent = await comment_service.create_comment(
            post_id=post.id, author_id=UserId(uuid4()), body_md="parent"
        )

        # Act
        result = await comment_service.create_comment(
            post_id=post.id,
            author_id=UserId(uuid4()),
            body_md="reply",
            parent_id=parent.id,
        )

        # Assert
        assert result.path == "0001.0001"
        assert result.depth == 1
        assert result.parent_id == parent.id

    @pytest.mark.asyncio
    async def test_reply_chain_stops_at_max_depth(self, unit_env):
        """A reply below depth 4 is rejected and nothing is stored."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = await make_post(await unit_env.get(PostRepository))

        parent_id = None
        for _ in range(5):
            comment = await comment_service.create_comment(
                post_id=post.id,
                author_id=UserId(uuid4()),
                body_md="deeper",
                parent_id=parent_id,
            )
            parent_id = comment.id

        assert comment.depth == 4
        assert comment.path == "0001.0001.0001.0001.0001"

        # Act & Assert
        with pytest.raises(MaxDepthExceededError, match="Max depth exceeded"):
            await comment_service.create_comment(
                post_id=post.id,
                author_id=UserId(uuid4()),
                body_md="too deep",
                parent_id=comment.id,
            )
        assert await comment_repo.count_siblings(post.id, comment.id) == 0

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_raises(self, unit_env):
        """Unknown parent id is rejected."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostRepository))

        # Act & Assert
        with pytest.raises(ParentNotFoundError, match="Parent comment not found"):
            await comment_service.create_comment(
                post_id=post.id,
                author_id=UserId(uuid4()),
                body_md="x",
                parent_id=CommentId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_reply_to_deleted_parent_raises(self, unit_env):
        """Soft-deleted parents cannot be replied to."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = await make_post(await unit_env.get(PostRepository))
        parent = await make_comment(comment_repo, post.id, "0001", deleted=True)

        # Act & Assert
        with pytest.raises(ParentNotFoundError):
            await comment_service.create_comment(
                post_id=post.id,
                author_id=UserId(uuid4()),
                body_md="x",
                parent_id=parent.id,
            )

    @pytest.mark.asyncio
    async def test_reply_to_parent_on_another_post_raises(self, unit_env):
        """A parent must belong to the same post."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await make_post(post_repo)
        other_post = await make_post(post_repo)
        parent = await comment_service.create_comment(
            post_id=other_post.id, author_id=UserId(uuid4()), body_md="elsewhere"
        )

        # Act & Assert
        with pytest.raises(ParentNotFoundError):
            await comment_service.create_comment(
                post_id=post.id,
                author_id=UserId(uuid4()),
                body_md="x",
                parent_id=parent.id,
            )


class TestPathCollisions:
    """Tests for concurrent allocation of the same path."""

    @pytest.mark.asyncio
    async def test_collision_retries_with_next_sequence(self, unit_env):
        """A stale sibling count collides once, then takes the next free path."""
        # Arrange
        comment_repo = StaleCountCommentRepository()
        post = await make_post(await unit_env.get(PostRepository))
        await make_comment(comment_repo, post.id, "0001")
        comment_service = await build_service(unit_env, comment_repo)

        # Act
        result = await comment_service.create_comment(
            post_id=post.id, author_id=UserId(uuid4()), body_md="racing"
        )

        # Assert
        assert result.path == "0002"

    @pytest.mark.asyncio
    async def test_persistent_collisions_give_up(self, unit_env):
        """After the retry budget the conflict is surfaced."""
        # Arrange
        comment_repo = AlwaysConflictingCommentRepository()
        post = await make_post(await unit_env.get(PostRepository))
        comment_service = await build_service(unit_env, comment_repo)

        # Act & Assert
        with pytest.raises(PathConflictError):
            await comment_service.create_comment(
                post_id=post.id, author_id=UserId(uuid4()), body_md="unlucky"
            )
        assert comment_repo.insert_attempts == MAX_PATH_ALLOCATION_ATTEMPTS

    @pytest.mark.asyncio
    async def test_exhausted_sibling_range_raises_validation_error(self, unit_env):
        """A full segment range is reported with the formatting error as cause."""
        # Arrange
        comment_repo = FullSiblingRangeCommentRepository()
        post = await make_post(await unit_env.get(PostRepository))
        comment_service = await build_service(unit_env, comment_repo)

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await comment_service.create_comment(
                post_id=post.id, author_id=UserId(uuid4()), body_md="one too many"
            )
        assert str(exc_info.value) == "Too many replies to this comment"
        assert isinstance(exc_info.value.__cause__, ValueError)
