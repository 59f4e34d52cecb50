"""Get poll options use case."""

from pydantic import BaseModel

from agora.application.usecase.poll.get_poll import PollOptionItem
from agora.domain.service import PollService
from agora.domain.value import PollId


class GetPollOptionsRequest(BaseModel):
    poll_id: int


class GetPollOptionsUseCase:
    """Use case for listing a poll's options with their vote counts."""

    def __init__(self, poll_service: PollService) -> None:
        self.poll_service = poll_service

    async def execute(self, request: GetPollOptionsRequest) -> list[PollOptionItem]:
        """List options in creation order.

        Raises:
            NotFoundError: If the poll does not exist
        """
        poll = await self.poll_service.get_poll(PollId(request.poll_id))
        return [PollOptionItem.from_option(option) for option in poll.options]
