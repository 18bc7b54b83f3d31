"""Domain services."""

from .anti_abuse_service import AntiAbuseService
from .base import Service
from .comment_service import CommentService
from .comment_tree_service import CommentTreeService
from .config_service import ConfigService
from .jwt_service import JWTService
from .post_service import PostService
from .rate_limit_service import RateLimitService
from .reaction_service import ReactionService
from .rendering import BodyRenderer

__all__ = [
    "AntiAbuseService",
    "BodyRenderer",
    "CommentService",
    "CommentTreeService",
    "ConfigService",
    "JWTService",
    "PostService",
    "RateLimitService",
    "ReactionService",
    "Service",
]
