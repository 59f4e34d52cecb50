"""Poll repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from agora.domain.model.poll import Poll, PollOption, PollUpdate
from agora.domain.value import PollId, PollOptionId, PostId


class PollRepository(ABC):
    """Repository for Poll aggregate (poll row plus its options).

    Options are always returned ordered by ID, which is their creation order.
    """

    @abstractmethod
    async def next_id(self) -> PollId:
        """Reserve a new poll ID from the store's sequence."""
        pass

    @abstractmethod
    async def next_option_id(self) -> PollOptionId:
        """Reserve a new poll option ID from the store's sequence."""
        pass

    @abstractmethod
    async def find_by_id(self, poll_id: PollId) -> Optional[Poll]:
        """Find a poll with its options.

        Returns:
            The poll if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> Optional[Poll]:
        """Find the poll attached to a post."""
        pass

    @abstractmethod
    async def lock_by_id(self, poll_id: PollId) -> Optional[Poll]:
        """Find a poll and lock its row until the transaction ends."""
        pass

    @abstractmethod
    async def save(self, poll: Poll) -> Poll:
        """Insert a new poll together with its options."""
        pass

    @abstractmethod
    async def update(self, poll_id: PollId, update: PollUpdate) -> Optional[Poll]:
        """Apply the non-empty fields of ``update``.

        Returns:
            The updated poll, or None if it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, poll_id: PollId) -> bool:
        """Delete a poll and its options.

        Returns:
            True if a poll was deleted
        """
        pass

    @abstractmethod
    async def update_option_text(
        self, option_id: PollOptionId, text: str
    ) -> Optional[PollOption]:
        """Change an option's text.

        Returns:
            The updated option, or None if it does not exist
        """
        pass

    @abstractmethod
    async def delete_option(self, option_id: PollOptionId) -> bool:
        """Delete one option.

        Returns:
            True if an option was deleted
        """
        pass

    @abstractmethod
    async def adjust_option_count(self, option_id: PollOptionId, delta: int) -> None:
        """Atomically add ``delta`` to an option's vote count (floor zero)."""
        pass
