"""SQLAlchemy table definitions for the comment subsystem.

These table definitions are used by the Core-level repositories.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# POSTS TABLE (owned by the publishing side; read-only here)
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("slug", String(200), nullable=False, unique=True),
    Column("title", String(300), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("user_id", UUID, nullable=False),  # Users live in the auth service
    Column("path", Text, nullable=False),  # e.g. 0001.0003
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("body_md", Text, nullable=False),
    Column("body_html", Text, nullable=False),
    Column("status", String(16), nullable=False, server_default="pending"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("depth >= 0 AND depth < 5", name="comments_depth_range"),
    CheckConstraint(
        "status IN ('pending', 'approved', 'spam', 'deleted')",
        name="comments_status_valid",
    ),
    # Concurrent replies racing for one sequence number collide here
    UniqueConstraint("post_id", "path", name="uq_comments_post_path"),
)

Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_status", comments_table.c.status)
# Prefix (LIKE 'p.%') scans need the C-collation operator class
Index(
    "idx_comments_post_path_pattern",
    comments_table.c.post_id,
    comments_table.c.path,
    postgresql_ops={"path": "text_pattern_ops"},
)

# ============================================================================
# COMMENT ATTACHMENTS TABLE
# ============================================================================
comment_attachments_table = Table(
    "comment_attachments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("kind", String(16), nullable=False),  # image|video
    Column("url", Text, nullable=False),
    Column("poster_url", Text, nullable=True),
    Column("mime", String(255), nullable=True),
    Column("bytes", Integer, nullable=True),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_comment_attachments_comment_id", comment_attachments_table.c.comment_id)

# ============================================================================
# REACTIONS TABLE
# ============================================================================
reactions_table = Table(
    "reactions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("target_type", String(16), nullable=False, server_default="comment"),
    Column("target_id", UUID, nullable=False),
    Column("user_id", UUID, nullable=False),
    Column("kind", String(32), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "target_type", "target_id", "user_id", "kind", name="uq_reactions_target_user_kind"
    ),
)

Index("idx_reactions_target", reactions_table.c.target_type, reactions_table.c.target_id)

# ============================================================================
# CONFIGURATION TABLE (global keys only; user overrides are not read here)
# ============================================================================
configuration_table = Table(
    "configuration",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("key", Text, nullable=False),
    Column("user_id", UUID, nullable=True),
    Column("value", JSONB, nullable=False),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_configuration_global_key",
    configuration_table.c.key,
    unique=True,
    postgresql_where=configuration_table.c.user_id.is_(None),
)
