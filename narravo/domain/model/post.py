"""Post entity.

Posts are managed by the publishing side of the platform; comments only
need to know whether a post exists and is live.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from narravo.domain.model.common import DomainModel
from narravo.domain.value import PostId


class Post(DomainModel):
    """Post a comment thread hangs off."""

    id: PostId
    slug: str = Field(min_length=1, max_length=200)
    title: str = Field(min_length=1, max_length=300)
    created_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None
