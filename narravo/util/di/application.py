"""Application layer DI providers."""

from dishka import Scope, provide

from narravo.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentTreeUseCase,
    GetRepliesUseCase,
)
from narravo.application.usecase.reaction import ToggleReactionUseCase
from narravo.domain.service import (
    AntiAbuseService,
    CommentService,
    CommentTreeService,
    ConfigService,
    ReactionService,
)
from narravo.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        anti_abuse_service: AntiAbuseService,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            anti_abuse_service=anti_abuse_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_tree_use_case(
        self,
        comment_tree_service: CommentTreeService,
        config_service: ConfigService,
    ) -> GetCommentTreeUseCase:
        """Provide get comment tree use case."""
        return GetCommentTreeUseCase(
            comment_tree_service=comment_tree_service,
            config_service=config_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_replies_use_case(
        self,
        comment_tree_service: CommentTreeService,
        config_service: ConfigService,
    ) -> GetRepliesUseCase:
        """Provide get replies use case."""
        return GetRepliesUseCase(
            comment_tree_service=comment_tree_service,
            config_service=config_service,
        )

    # Reaction use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_reaction_use_case(
        self,
        reaction_service: ReactionService,
        anti_abuse_service: AntiAbuseService,
    ) -> ToggleReactionUseCase:
        """Provide toggle reaction use case."""
        return ToggleReactionUseCase(
            reaction_service=reaction_service,
            anti_abuse_service=anti_abuse_service,
        )
