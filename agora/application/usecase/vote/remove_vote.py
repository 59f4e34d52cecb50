"""Remove vote use case."""

from pydantic import BaseModel

from agora.application.usecase.vote.cast_vote import VoteResponse
from agora.domain.service import VoteService
from agora.domain.value import UserId, VotableType, VoteDirection


class RemoveVoteRequest(BaseModel):
    """Remove vote request."""

    votable_type: VotableType
    votable_id: int
    direction: VoteDirection  # The vote being withdrawn
    user_id: int  # User ID from authenticated user


class RemoveVoteUseCase:
    """Use case for withdrawing an upvote or downvote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize remove vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: RemoveVoteRequest) -> VoteResponse:
        """Execute remove vote flow.

        Args:
            request: Remove vote request

        Returns:
            Refreshed counters; the actor holds no vote afterwards

        Raises:
            NotFoundError: If the target or the actor's vote does not exist
            ConflictError: If the actor's vote points the other way
        """
        user_id = UserId(request.user_id)

        if request.direction == VoteDirection.UPVOTE:
            target = await self.vote_service.remove_upvote(
                request.votable_type, request.votable_id, user_id
            )
        else:
            target = await self.vote_service.remove_downvote(
                request.votable_type, request.votable_id, user_id
            )

        return VoteResponse(
            votable_type=request.votable_type,
            votable_id=target.id,
            upvotes=target.upvotes,
            downvotes=target.downvotes,
            was_upvoted=False,
            was_downvoted=False,
        )
