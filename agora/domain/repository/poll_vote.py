"""Poll ballot repository interface."""

from abc import ABC, abstractmethod
from typing import List

from agora.domain.model.vote import PollVote
from agora.domain.value import PollId, PollOptionId, UserId


class PollVoteRepository(ABC):
    """Repository for poll ballot rows, keyed by (user, option)."""

    @abstractmethod
    async def find_by_user_and_poll(
        self, user_id: UserId, poll_id: PollId
    ) -> List[PollVote]:
        """Find every ballot a user cast on a poll."""
        pass

    @abstractmethod
    async def save(self, vote: PollVote) -> PollVote:
        """Insert a ballot row.

        Raises:
            IntegrityError: If the user already holds this option
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId, option_id: PollOptionId) -> bool:
        """Delete a user's ballot for one option.

        Returns:
            True if a ballot was deleted
        """
        pass

    @abstractmethod
    async def delete_by_option(self, option_id: PollOptionId) -> int:
        """Delete every ballot for an option."""
        pass

    @abstractmethod
    async def delete_by_poll(self, poll_id: PollId) -> int:
        """Delete every ballot on a poll."""
        pass

    @abstractmethod
    async def count_by_option(self, option_id: PollOptionId) -> int:
        """Count ballots for an option."""
        pass
