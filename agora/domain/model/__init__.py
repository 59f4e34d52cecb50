"""Domain model entities for Agora."""

from agora.domain.model.comment import Comment, CommentUpdate
from agora.domain.model.poll import (
    MAX_OPTION_TEXT,
    MIN_POLL_OPTIONS,
    OptionResult,
    Poll,
    PollOption,
    PollResults,
    PollUpdate,
)
from agora.domain.model.post import Post, PostUpdate
from agora.domain.model.vote import PollVote, Vote

__all__ = [
    "Post",
    "PostUpdate",
    "Comment",
    "CommentUpdate",
    "Poll",
    "PollOption",
    "PollUpdate",
    "PollResults",
    "OptionResult",
    "MIN_POLL_OPTIONS",
    "MAX_OPTION_TEXT",
    "Vote",
    "PollVote",
]
