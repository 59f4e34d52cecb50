"""In-memory poll repository for testing."""

from itertools import count
from typing import Optional

from agora.domain.model.poll import Poll, PollOption, PollUpdate
from agora.domain.repository.poll import PollRepository
from agora.domain.value import PollId, PollOptionId, PostId


class InMemoryPollRepository(PollRepository):
    """In-memory implementation of PollRepository for testing.

    Polls and options are stored separately, like their tables, and joined
    on read.
    """

    def __init__(self) -> None:
        self._polls: dict[PollId, Poll] = {}
        self._options: dict[PollOptionId, PollOption] = {}
        self._ids = count(1)
        self._option_ids = count(1)

    async def next_id(self) -> PollId:
        return PollId(next(self._ids))

    async def next_option_id(self) -> PollOptionId:
        return PollOptionId(next(self._option_ids))

    def _assemble(self, poll: Poll) -> Poll:
        options = sorted(
            (o for o in self._options.values() if o.poll_id == poll.id),
            key=lambda o: o.id,
        )
        return poll.model_copy(update={"options": options})

    async def find_by_id(self, poll_id: PollId) -> Optional[Poll]:
        poll = self._polls.get(poll_id)
        return self._assemble(poll) if poll else None

    async def find_by_post(self, post_id: PostId) -> Optional[Poll]:
        for poll in self._polls.values():
            if poll.post_id == post_id:
                return self._assemble(poll)
        return None

    async def lock_by_id(self, poll_id: PollId) -> Optional[Poll]:
        return await self.find_by_id(poll_id)

    async def save(self, poll: Poll) -> Poll:
        self._polls[poll.id] = poll.model_copy(update={"options": []})
        for option in poll.options:
            self._options[option.id] = option
        return poll

    async def update(self, poll_id: PollId, update: PollUpdate) -> Optional[Poll]:
        poll = self._polls.get(poll_id)
        if poll is None:
            return None

        changes: dict = {}
        if update.multiple_choice is not None:
            changes["multiple_choice"] = update.multiple_choice
        if update.clear_expiry:
            changes["expires_at"] = None
        elif update.expires_at is not None:
            changes["expires_at"] = update.expires_at

        self._polls[poll_id] = poll.model_copy(update=changes)
        return self._assemble(self._polls[poll_id])

    async def delete(self, poll_id: PollId) -> bool:
        for option_id in [o.id for o in self._options.values() if o.poll_id == poll_id]:
            del self._options[option_id]
        return self._polls.pop(poll_id, None) is not None

    async def update_option_text(
        self, option_id: PollOptionId, text: str
    ) -> Optional[PollOption]:
        option = self._options.get(option_id)
        if option is None:
            return None
        updated = option.model_copy(update={"text": text})
        self._options[option_id] = updated
        return updated

    async def delete_option(self, option_id: PollOptionId) -> bool:
        return self._options.pop(option_id, None) is not None

    async def adjust_option_count(self, option_id: PollOptionId, delta: int) -> None:
        option = self._options.get(option_id)
        if option is None:
            return
        self._options[option_id] = option.model_copy(
            update={"vote_count": max(option.vote_count + delta, 0)}
        )
