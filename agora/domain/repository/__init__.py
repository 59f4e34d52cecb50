"""Repository interfaces for the Agora domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from agora.domain.repository.comment import CommentRepository
from agora.domain.repository.poll import PollRepository
from agora.domain.repository.poll_vote import PollVoteRepository
from agora.domain.repository.post import PostRepository
from agora.domain.repository.transaction import TransactionManager
from agora.domain.repository.votable import VotableRepository
from agora.domain.repository.vote import VoteRepository

__all__ = [
    "CommentRepository",
    "PollRepository",
    "PollVoteRepository",
    "PostRepository",
    "TransactionManager",
    "VotableRepository",
    "VoteRepository",
]
