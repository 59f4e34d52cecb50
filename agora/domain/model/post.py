"""Post aggregate root.

A post is either plain text or the carrier of a poll. Its vote counters are
denormalized caches of the post vote ledger.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel, utcnow
from agora.domain.value import Category, PostId, PostType, UserId, Username
from agora.domain.value.common import ValueObject


class Post(DomainModel):
    """Post aggregate root."""

    id: PostId
    author_id: UserId
    author_username: Username
    title: str = Field(min_length=1, max_length=300)
    body: str = Field(default="", max_length=10000)
    category: Category
    type: PostType = PostType.TEXT
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class PostUpdate(ValueObject):
    """Fields of a post its author may change.

    ``None`` leaves the field untouched.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    body: Optional[str] = Field(default=None, max_length=10000)
    category: Optional[Category] = None

    @property
    def is_empty(self) -> bool:
        return self.title is None and self.body is None and self.category is None
