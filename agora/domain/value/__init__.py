"""Domain value objects for Agora."""

from agora.domain.value.identifiers import (
    CommentId,
    PollId,
    PollOptionId,
    PostId,
    UserId,
)
from agora.domain.value.types import (
    Category,
    ConflictReason,
    PostType,
    Username,
    VotableType,
    VoteDirection,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "PollId",
    "PollOptionId",
    # Types
    "Category",
    "ConflictReason",
    "PostType",
    "Username",
    "VotableType",
    "VoteDirection",
]
