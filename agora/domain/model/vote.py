"""Vote ledger entries.

A ``Vote`` records one user's up- or downvote on a post or comment; the pair
(user, target) is unique. A ``PollVote`` records one user's ballot for one
poll option.
"""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel, utcnow
from agora.domain.value import (
    PollId,
    PollOptionId,
    UserId,
    VotableType,
    VoteDirection,
)


class Vote(DomainModel):
    """Ledger row for a post or comment vote.

    Rows are never flipped in place: switching direction means removing the
    row first, then casting the opposite vote.
    """

    user_id: UserId
    votable_type: VotableType
    votable_id: int  # PostId or CommentId
    direction: VoteDirection
    created_at: datetime = Field(default_factory=utcnow)


class PollVote(DomainModel):
    """Ballot row for one poll option, keyed by (user, option)."""

    user_id: UserId
    poll_id: PollId
    option_id: PollOptionId
    created_at: datetime = Field(default_factory=utcnow)
