"""Reaction domain service."""

import logfire

from narravo.domain.error import NotFoundError
from narravo.domain.repository import CommentRepository, ReactionRepository
from narravo.domain.value import CommentId, ReactionKind, UserId

from .base import Service


class ReactionService(Service):
    """Domain service for reacting to comments."""

    def __init__(
        self,
        reaction_repository: ReactionRepository,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize reaction service.

        Args:
            reaction_repository: Reaction repository
            comment_repository: Comment repository
        """
        self.reaction_repository = reaction_repository
        self.comment_repository = comment_repository

    async def toggle_reaction(
        self, comment_id: CommentId, user_id: UserId, kind: ReactionKind
    ) -> tuple[bool, dict[str, int]]:
        """Add or remove a user's reaction on a visible comment.

        Args:
            comment_id: Comment ID
            user_id: Reacting user
            kind: Reaction kind

        Returns:
            (whether the reaction is now present, updated counts for the comment)

        Raises:
            NotFoundError: If the comment is missing or not visible
        """
        with logfire.span(
            "reaction_service.toggle_reaction",
            comment_id=str(comment_id),
            user_id=str(user_id),
            kind=kind.root,
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None or not comment.is_visible:
                logfire.warn("Reaction on missing comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            active = await self.reaction_repository.toggle(comment_id, user_id, kind)
            counts = await self.reaction_repository.count_for_comments([comment_id])
            logfire.info(
                "Reaction toggled",
                comment_id=str(comment_id),
                kind=kind.root,
                active=active,
            )
            return active, counts.get(comment_id, {})
