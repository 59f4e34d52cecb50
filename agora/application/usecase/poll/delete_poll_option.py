"""Delete poll option use case."""

from pydantic import BaseModel

from agora.application.usecase.poll.get_poll import PollItem
from agora.domain.service import PollService
from agora.domain.value import PollId, PollOptionId, UserId


class DeletePollOptionRequest(BaseModel):
    poll_id: int
    option_id: int
    user_id: int  # User ID from authenticated user


class DeletePollOptionUseCase:
    """Use case for removing a poll option and its ballots."""

    def __init__(self, poll_service: PollService) -> None:
        self.poll_service = poll_service

    async def execute(self, request: DeletePollOptionRequest) -> PollItem:
        """Execute delete option flow.

        Returns:
            The poll without the removed option

        Raises:
            ConflictError: If the poll would keep fewer than two options
        """
        poll_id = PollId(request.poll_id)
        user_id = UserId(request.user_id)
        await self.poll_service.delete_option(
            poll_id, PollOptionId(request.option_id), user_id
        )
        poll = await self.poll_service.get_poll(poll_id)
        selection = await self.poll_service.get_user_selection(poll_id, user_id)
        return PollItem.from_poll(poll, selection)
