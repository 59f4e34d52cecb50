"""Shared contract for repositories of votable entities."""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from agora.domain.value import VoteDirection

T = TypeVar("T")


class VotableRepository(ABC, Generic[T]):
    """Repository for an entity that carries up/down vote counters.

    The vote ledger only needs these three operations, so posts and comments
    can share a single ledger implementation.
    """

    @abstractmethod
    async def find_by_id(self, entity_id: int) -> Optional[T]:
        """Find the entity by ID.

        Args:
            entity_id: The entity's unique identifier

        Returns:
            The entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def lock_by_id(self, entity_id: int) -> Optional[T]:
        """Find the entity by ID and lock its row until the transaction ends.

        Concurrent lockers of the same row wait, which serializes
        check-then-act sequences on one target.

        Args:
            entity_id: The entity's unique identifier

        Returns:
            The entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def adjust_vote_count(
        self, entity_id: int, direction: VoteDirection, delta: int
    ) -> None:
        """Atomically add ``delta`` to the counter matching ``direction``.

        Decrements never take a counter below zero.

        Args:
            entity_id: The entity's unique identifier
            direction: Which counter to change (upvotes or downvotes)
            delta: +1 or -1
        """
        pass
