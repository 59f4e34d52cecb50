"""Get poll results use case."""

from pydantic import BaseModel

from agora.domain.model import PollResults
from agora.domain.service import PollService
from agora.domain.value import PollId, UserId


class OptionResultItem(BaseModel):
    option_id: int
    text: str
    votes: int
    percentage: float


class PollResultsResponse(BaseModel):
    """Tally of a poll."""

    poll_id: int
    total_votes: int
    options: list[OptionResultItem]
    user_selection: list[int] = []

    @classmethod
    def from_results(
        cls, results: PollResults, user_selection: set[int] | None = None
    ) -> "PollResultsResponse":
        return cls(
            poll_id=results.poll_id,
            total_votes=results.total_votes,
            options=[
                OptionResultItem(
                    option_id=option.id,
                    text=option.text,
                    votes=option.votes,
                    percentage=round(option.percentage, 2),
                )
                for option in results.options
            ],
            user_selection=sorted(user_selection or ()),
        )


class GetPollResultsRequest(BaseModel):
    poll_id: int
    user_id: int | None = None


class GetPollResultsUseCase:
    """Use case for reading a poll tally."""

    def __init__(self, poll_service: PollService) -> None:
        self.poll_service = poll_service

    async def execute(self, request: GetPollResultsRequest) -> PollResultsResponse:
        poll_id = PollId(request.poll_id)
        results = await self.poll_service.results(poll_id)

        selection: set[int] = set()
        if request.user_id is not None:
            selection = await self.poll_service.get_user_selection(
                poll_id, UserId(request.user_id)
            )
        return PollResultsResponse.from_results(results, selection)
