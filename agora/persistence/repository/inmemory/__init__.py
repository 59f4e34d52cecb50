"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .poll import InMemoryPollRepository
from .poll_vote import InMemoryPollVoteRepository
from .post import InMemoryPostRepository
from .transaction import InMemoryTransactionManager
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryPollRepository",
    "InMemoryPollVoteRepository",
    "InMemoryPostRepository",
    "InMemoryTransactionManager",
    "InMemoryVoteRepository",
]
