"""Vote on poll use case."""

import logfire
from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase
from agora.application.usecase.poll.get_poll_results import PollResultsResponse
from agora.domain.error import AuthenticationRequiredError
from agora.domain.service import PollService
from agora.domain.value import PollId, PollOptionId, UserId


class VotePollRequest(BaseModel):
    """Ballot request."""

    poll_id: int
    option_ids: list[int] = Field(min_length=1)
    user_id: int | None = None  # Ballots always need an actor


class VotePollUseCase(BaseUseCase[VotePollRequest, PollResultsResponse]):
    """Use case for casting a poll ballot."""

    def __init__(self, poll_service: PollService) -> None:
        """Initialize vote poll use case.

        Args:
            poll_service: Poll domain service
        """
        self.poll_service = poll_service

    async def execute(self, request: VotePollRequest) -> PollResultsResponse:
        """Execute ballot flow.

        Returns:
            Results after the ballot, with the actor's new selection

        Raises:
            AuthenticationRequiredError: If no user is signed in
            NotFoundError: If the poll does not exist
            ConflictError: If the poll has expired
            InvalidInputError: If the ballot is malformed
        """
        if request.user_id is None:
            raise AuthenticationRequiredError("vote on a poll")

        with logfire.span(
            "vote_poll.execute",
            poll_id=request.poll_id,
            user_id=request.user_id,
        ):
            poll_id = PollId(request.poll_id)
            user_id = UserId(request.user_id)
            results = await self.poll_service.vote(
                poll_id, user_id, [PollOptionId(i) for i in request.option_ids]
            )
            selection = await self.poll_service.get_user_selection(poll_id, user_id)
            return PollResultsResponse.from_results(results, selection)
