"""Domain layer DI providers."""

from typing import Any

from dishka import Scope, provide

from narravo.adapter.rendering import EscapingBodyRenderer
from narravo.config import AuthSettings, Settings
from narravo.domain.repository import (
    AttachmentRepository,
    CommentRepository,
    ConfigRepository,
    PostRepository,
    RateLimitStore,
    ReactionRepository,
)
from narravo.domain.service import (
    AntiAbuseService,
    BodyRenderer,
    CommentService,
    CommentTreeService,
    ConfigService,
    JWTService,
    PostService,
    RateLimitService,
    ReactionService,
)
from narravo.domain.service.config_service import (
    COMMENTS_AUTO_APPROVE,
    COMMENTS_REPLIES_PAGE_SIZE,
    COMMENTS_TOP_PAGE_SIZE,
    RATE_COMMENTS_PER_MINUTE,
    RATE_MIN_SUBMIT_SECS,
    RATE_REACTIONS_PER_MINUTE,
    RATE_WINDOW_MINUTES,
)
from narravo.util.di.base import ProviderBase


def config_defaults(settings: Settings) -> dict[str, Any]:
    """Map deployment settings onto runtime configuration keys."""
    return {
        COMMENTS_TOP_PAGE_SIZE: settings.comments.top_page_size,
        COMMENTS_REPLIES_PAGE_SIZE: settings.comments.replies_page_size,
        COMMENTS_AUTO_APPROVE: settings.comments.auto_approve,
        RATE_COMMENTS_PER_MINUTE: settings.rate_limit.comments_per_minute,
        RATE_REACTIONS_PER_MINUTE: settings.rate_limit.reactions_per_minute,
        RATE_MIN_SUBMIT_SECS: settings.rate_limit.min_submit_seconds,
        RATE_WINDOW_MINUTES: settings.rate_limit.window_minutes,
    }


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_body_renderer(self) -> BodyRenderer:
        """Provide the comment body renderer."""
        return EscapingBodyRenderer()

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_config_service(
        self, config_repository: ConfigRepository, settings: Settings
    ) -> ConfigService:
        """Provide runtime configuration service backed by settings defaults."""
        return ConfigService(
            config_repository=config_repository, defaults=config_defaults(settings)
        )

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        body_renderer: BodyRenderer,
        config_service: ConfigService,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_service=post_service,
            body_renderer=body_renderer,
            config_service=config_service,
        )

    @provide
    def get_comment_tree_service(
        self,
        comment_repository: CommentRepository,
        reaction_repository: ReactionRepository,
        attachment_repository: AttachmentRepository,
    ) -> CommentTreeService:
        """Provide comment tree reader."""
        return CommentTreeService(
            comment_repository=comment_repository,
            reaction_repository=reaction_repository,
            attachment_repository=attachment_repository,
        )

    @provide
    def get_reaction_service(
        self,
        reaction_repository: ReactionRepository,
        comment_repository: CommentRepository,
    ) -> ReactionService:
        """Provide reaction domain service."""
        return ReactionService(
            reaction_repository=reaction_repository,
            comment_repository=comment_repository,
        )

    @provide
    def get_rate_limit_service(
        self, rate_limit_store: RateLimitStore, config_service: ConfigService
    ) -> RateLimitService:
        """Provide rate limit service over the shared store."""
        return RateLimitService(
            rate_limit_store=rate_limit_store, config_service=config_service
        )

    @provide
    def get_anti_abuse_service(
        self, rate_limit_service: RateLimitService, config_service: ConfigService
    ) -> AntiAbuseService:
        """Provide anti-abuse gate."""
        return AntiAbuseService(
            rate_limit_service=rate_limit_service, config_service=config_service
        )
