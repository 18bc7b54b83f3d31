"""In-memory reaction repository for testing."""

from typing import Sequence

from narravo.domain.repository.reaction import ReactionRepository
from narravo.domain.value import CommentId, ReactionKind, UserId


class InMemoryReactionRepository(ReactionRepository):
    """In-memory implementation of ReactionRepository for testing."""

    def __init__(self) -> None:
        self._reactions: set[tuple[CommentId, UserId, str]] = set()

    async def count_for_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, dict[str, int]]:
        """Count reactions per kind for each comment."""
        wanted = set(comment_ids)
        counts: dict[CommentId, dict[str, int]] = {}
        for comment_id, _, kind in self._reactions:
            if comment_id in wanted:
                per_kind = counts.setdefault(comment_id, {})
                per_kind[kind] = per_kind.get(kind, 0) + 1
        return counts

    async def find_user_reactions(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, list[str]]:
        """Find a user's reaction kinds on each comment."""
        wanted = set(comment_ids)
        kinds: dict[CommentId, list[str]] = {}
        for comment_id, reactor, kind in self._reactions:
            if comment_id in wanted and reactor == user_id:
                kinds.setdefault(comment_id, []).append(kind)
        return {comment_id: sorted(k) for comment_id, k in kinds.items()}

    async def toggle(
        self, comment_id: CommentId, user_id: UserId, kind: ReactionKind
    ) -> bool:
        """Remove the reaction if present, otherwise add it."""
        entry = (comment_id, user_id, kind.root)
        if entry in self._reactions:
            self._reactions.remove(entry)
            return False
        self._reactions.add(entry)
        return True
