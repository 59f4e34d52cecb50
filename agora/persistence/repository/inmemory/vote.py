"""In-memory vote repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from agora.domain.model.vote import Vote
from agora.domain.repository.vote import VoteRepository
from agora.domain.value import UserId, VotableType, VoteDirection

VoteKey = tuple[UserId, VotableType, int]


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[VoteKey, Vote] = {}

    async def find(
        self, user_id: UserId, votable_type: VotableType, votable_id: int
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        return self._votes.get((user_id, votable_type, votable_id))

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[int],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        wanted = set(votable_ids)
        return [
            v
            for v in self._votes.values()
            if v.user_id == user_id
            and v.votable_type == votable_type
            and v.votable_id in wanted
        ]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        key = (vote.user_id, vote.votable_type, vote.votable_id)
        if key in self._votes:
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes[key] = vote
        return vote

    async def delete(
        self, user_id: UserId, votable_type: VotableType, votable_id: int
    ) -> bool:
        """Delete a vote by user and votable item."""
        return self._votes.pop((user_id, votable_type, votable_id), None) is not None

    async def delete_by_votables(
        self, votable_type: VotableType, votable_ids: Sequence[int]
    ) -> int:
        """Delete every vote on the given items."""
        wanted = set(votable_ids)
        doomed = [
            key
            for key, v in self._votes.items()
            if v.votable_type == votable_type and v.votable_id in wanted
        ]
        for key in doomed:
            del self._votes[key]
        return len(doomed)

    async def count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: int,
        direction: VoteDirection,
    ) -> int:
        """Count votes of one direction on an item."""
        return sum(
            1
            for v in self._votes.values()
            if v.votable_type == votable_type
            and v.votable_id == votable_id
            and v.direction == direction
        )
