"""Delete poll use case."""

from pydantic import BaseModel

from agora.domain.service import PollService
from agora.domain.value import PollId, UserId


class DeletePollRequest(BaseModel):
    """Delete poll request."""

    poll_id: int
    user_id: int  # User ID from authenticated user


class DeletePollResponse(BaseModel):
    poll_id: int
    message: str


class DeletePollUseCase:
    """Use case for deleting a poll together with its post."""

    def __init__(self, poll_service: PollService) -> None:
        self.poll_service = poll_service

    async def execute(self, request: DeletePollRequest) -> DeletePollResponse:
        await self.poll_service.delete_poll(
            PollId(request.poll_id), UserId(request.user_id)
        )
        return DeletePollResponse(
            poll_id=request.poll_id, message="Poll deleted successfully"
        )
