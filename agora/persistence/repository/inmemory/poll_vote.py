"""In-memory poll ballot repository for testing."""

from sqlalchemy.exc import IntegrityError

from agora.domain.model.vote import PollVote
from agora.domain.repository.poll_vote import PollVoteRepository
from agora.domain.value import PollId, PollOptionId, UserId


class InMemoryPollVoteRepository(PollVoteRepository):
    """In-memory implementation of PollVoteRepository for testing."""

    def __init__(self) -> None:
        self._ballots: dict[tuple[UserId, PollOptionId], PollVote] = {}

    async def find_by_user_and_poll(
        self, user_id: UserId, poll_id: PollId
    ) -> list[PollVote]:
        return [
            b
            for b in self._ballots.values()
            if b.user_id == user_id and b.poll_id == poll_id
        ]

    async def save(self, vote: PollVote) -> PollVote:
        """Save a ballot.

        Raises:
            IntegrityError: If the user already holds this option
        """
        key = (vote.user_id, vote.option_id)
        if key in self._ballots:
            raise IntegrityError("Duplicate ballot", None, Exception())
        self._ballots[key] = vote
        return vote

    async def delete(self, user_id: UserId, option_id: PollOptionId) -> bool:
        return self._ballots.pop((user_id, option_id), None) is not None

    def _delete_where(self, predicate) -> int:
        doomed = [key for key, b in self._ballots.items() if predicate(b)]
        for key in doomed:
            del self._ballots[key]
        return len(doomed)

    async def delete_by_option(self, option_id: PollOptionId) -> int:
        return self._delete_where(lambda b: b.option_id == option_id)

    async def delete_by_poll(self, poll_id: PollId) -> int:
        return self._delete_where(lambda b: b.poll_id == poll_id)

    async def count_by_option(self, option_id: PollOptionId) -> int:
        return sum(1 for b in self._ballots.values() if b.option_id == option_id)
