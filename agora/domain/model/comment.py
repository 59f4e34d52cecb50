"""Comment entity.

Comments form a forest per post: top-level comments have no parent, replies
point at a parent comment on the same post.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel, utcnow
from agora.domain.value import CommentId, PostId, UserId, Username
from agora.domain.value.common import ValueObject


class Comment(DomainModel):
    """Comment entity."""

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_username: Username
    body: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class CommentUpdate(ValueObject):
    """Fields of a comment its author may change."""

    body: Optional[str] = Field(default=None, min_length=1, max_length=10000)

    @property
    def is_empty(self) -> bool:
        return self.body is None
