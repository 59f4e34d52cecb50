"""Get poll use case."""

from datetime import datetime

from pydantic import BaseModel

from agora.domain.model import Poll, PollOption
from agora.domain.model.common import utcnow
from agora.domain.service import PollService
from agora.domain.value import PollId, UserId


class PollOptionItem(BaseModel):
    """Poll option as returned to clients."""

    option_id: int
    text: str
    vote_count: int

    @classmethod
    def from_option(cls, option: PollOption) -> "PollOptionItem":
        return cls(option_id=option.id, text=option.text, vote_count=option.vote_count)


class PollItem(BaseModel):
    """Poll with options and the actor's current selection."""

    poll_id: int
    post_id: int
    multiple_choice: bool
    expires_at: datetime | None
    is_expired: bool
    options: list[PollOptionItem]
    total_votes: int
    created_at: datetime
    user_selection: list[int] = []  # Option IDs held by the current user

    @classmethod
    def from_poll(cls, poll: Poll, user_selection: set[int] | None = None) -> "PollItem":
        return cls(
            poll_id=poll.id,
            post_id=poll.post_id,
            multiple_choice=poll.multiple_choice,
            expires_at=poll.expires_at,
            is_expired=poll.is_expired(utcnow()),
            options=[PollOptionItem.from_option(option) for option in poll.options],
            total_votes=sum(option.vote_count for option in poll.options),
            created_at=poll.created_at,
            user_selection=sorted(user_selection or ()),
        )


class GetPollRequest(BaseModel):
    """Get poll request."""

    poll_id: int
    user_id: int | None = None  # Current user ID (if authenticated)


class GetPollUseCase:
    """Use case for reading a poll."""

    def __init__(self, poll_service: PollService) -> None:
        self.poll_service = poll_service

    async def execute(self, request: GetPollRequest) -> PollItem:
        poll_id = PollId(request.poll_id)
        poll = await self.poll_service.get_poll(poll_id)

        selection: set[int] = set()
        if request.user_id is not None:
            selection = await self.poll_service.get_user_selection(
                poll_id, UserId(request.user_id)
            )
        return PollItem.from_poll(poll, selection)
