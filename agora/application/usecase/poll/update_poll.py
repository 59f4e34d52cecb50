"""Update poll use case."""

from datetime import datetime

from pydantic import BaseModel

from agora.application.usecase.poll.get_poll import PollItem
from agora.domain.model import PollUpdate
from agora.domain.service import PollService
from agora.domain.value import PollId, UserId


class UpdatePollRequest(BaseModel):
    """Update poll settings request."""

    poll_id: int
    user_id: int  # User ID from authenticated user
    multiple_choice: bool | None = None
    expires_at: datetime | None = None
    clear_expiry: bool = False  # Make the poll open-ended


class UpdatePollUseCase:
    """Use case for changing poll settings."""

    def __init__(self, poll_service: PollService) -> None:
        """Initialize update poll use case.

        Args:
            poll_service: Poll domain service
        """
        self.poll_service = poll_service

    async def execute(self, request: UpdatePollRequest) -> PollItem:
        """Execute update poll flow.

        Raises:
            NotFoundError: If the poll does not exist
            NotAuthorizedError: If the user does not own the poll
            ConflictError: If the poll has expired
        """
        poll_id = PollId(request.poll_id)
        user_id = UserId(request.user_id)
        poll = await self.poll_service.update_poll(
            poll_id,
            PollUpdate(
                multiple_choice=request.multiple_choice,
                expires_at=request.expires_at,
                clear_expiry=request.clear_expiry,
            ),
            user_id,
        )
        selection = await self.poll_service.get_user_selection(poll_id, user_id)
        return PollItem.from_poll(poll, selection)
