"""PostgreSQL repository implementations."""

from agora.persistence.repository.comment import PostgresCommentRepository
from agora.persistence.repository.poll import PostgresPollRepository
from agora.persistence.repository.poll_vote import PostgresPollVoteRepository
from agora.persistence.repository.post import PostgresPostRepository
from agora.persistence.repository.transaction import PostgresTransactionManager
from agora.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresPollRepository",
    "PostgresPollVoteRepository",
    "PostgresTransactionManager",
]
