"""Domain value objects for Agora.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import field_validator

from agora.domain.value.common import RootValueObject


class VoteDirection(str, Enum):
    """Direction of a ledger vote."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class VotableType(str, Enum):
    """Type of entity that carries a vote ledger."""

    POST = "post"
    COMMENT = "comment"


class PostType(str, Enum):
    """Kind of post.

    Poll posts own exactly one poll; text posts own none.
    """

    TEXT = "text"
    POLL = "poll"


class ConflictReason(str, Enum):
    """Why a state transition was refused."""

    ALREADY_VOTED = "already_voted"
    OPPOSITE_VOTE_EXISTS = "opposite_vote_exists"
    WRONG_DIRECTION = "wrong_direction"
    EXPIRED = "expired"
    MINIMUM_OPTIONS = "minimum_options"


class Username(RootValueObject[str]):
    """Public username of an author, copied from the verified token."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is 1-50 characters without whitespace."""
        if not re.match(r"^\S{1,50}$", v):
            raise ValueError("Username must be 1-50 characters without whitespace")
        return v


class Category(RootValueObject[str]):
    """Free-form post category such as 'General' or 'Sports'."""

    @field_validator("root")
    @classmethod
    def validate_category(cls, v: str) -> str:
        """Validate category is non-blank and at most 50 characters."""
        v = v.strip()
        if len(v) < 1 or len(v) > 50:
            raise ValueError("Category must be 1-50 characters")
        return v
