"""Vote ledger repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from agora.domain.model.vote import Vote
from agora.domain.value import UserId, VotableType, VoteDirection


class VoteRepository(ABC):
    """Repository for post and comment ledger rows.

    A row is keyed by (user, votable type, votable id). Implementations must
    reject a second row for the same key with ``sqlalchemy.exc.IntegrityError``.
    """

    @abstractmethod
    async def find(
        self, user_id: UserId, votable_type: VotableType, votable_id: int
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[int],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The user's ID
            votable_type: Type of items (post or comment)
            votable_ids: IDs of the items to check

        Returns:
            Votes by the user on the specified items
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a ledger row.

        Raises:
            IntegrityError: If the user already has a vote on this item
        """
        pass

    @abstractmethod
    async def delete(
        self, user_id: UserId, votable_type: VotableType, votable_id: int
    ) -> bool:
        """Delete a user's vote on an item.

        Returns:
            True if a vote was deleted, False if no vote existed
        """
        pass

    @abstractmethod
    async def delete_by_votables(
        self, votable_type: VotableType, votable_ids: Sequence[int]
    ) -> int:
        """Delete every vote on the given items (used by cascading deletes).

        Returns:
            Number of deleted votes
        """
        pass

    @abstractmethod
    async def count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: int,
        direction: VoteDirection,
    ) -> int:
        """Count ledger rows of one direction on an item."""
        pass
