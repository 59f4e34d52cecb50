"""Update poll option use case."""

from pydantic import BaseModel, Field

from agora.application.usecase.poll.get_poll import PollOptionItem
from agora.domain.service import PollService
from agora.domain.value import PollId, PollOptionId, UserId


class UpdatePollOptionRequest(BaseModel):
    poll_id: int
    option_id: int
    text: str = Field(min_length=1, max_length=200)
    user_id: int  # User ID from authenticated user


class UpdatePollOptionUseCase:
    """Use case for renaming a poll option."""

    def __init__(self, poll_service: PollService) -> None:
        self.poll_service = poll_service

    async def execute(self, request: UpdatePollOptionRequest) -> PollOptionItem:
        option = await self.poll_service.update_option(
            PollId(request.poll_id),
            PollOptionId(request.option_id),
            request.text.strip(),
            UserId(request.user_id),
        )
        return PollOptionItem.from_option(option)
