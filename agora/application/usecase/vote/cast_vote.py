"""Cast vote use case."""

import logfire
from pydantic import BaseModel

from agora.domain.service import VoteService
from agora.domain.value import UserId, VotableType, VoteDirection


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: int
    direction: VoteDirection
    user_id: int | None = None  # None for an anonymous vote


class VoteResponse(BaseModel):
    """Vote state of a post or comment after a ledger change."""

    votable_type: VotableType
    votable_id: int
    upvotes: int
    downvotes: int
    was_upvoted: bool
    was_downvoted: bool


class CastVoteUseCase:
    """Use case for upvoting or downvoting a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> VoteResponse:
        """Execute vote flow.

        Args:
            request: Cast vote request

        Returns:
            Refreshed counters and the actor's vote state

        Raises:
            NotFoundError: If the target does not exist
            AuthenticationRequiredError: If anonymous votes are disabled
            ConflictError: If the actor already voted on the target
        """
        with logfire.span(
            "cast_vote.execute",
            votable_type=request.votable_type.value,
            votable_id=request.votable_id,
            direction=request.direction.value,
        ):
            user_id = UserId(request.user_id) if request.user_id is not None else None

            if request.direction == VoteDirection.UPVOTE:
                target = await self.vote_service.upvote(
                    request.votable_type, request.votable_id, user_id
                )
            else:
                target = await self.vote_service.downvote(
                    request.votable_type, request.votable_id, user_id
                )

            # Anonymous votes leave no ledger row to report
            recorded = user_id is not None
            return VoteResponse(
                votable_type=request.votable_type,
                votable_id=target.id,
                upvotes=target.upvotes,
                downvotes=target.downvotes,
                was_upvoted=recorded and request.direction == VoteDirection.UPVOTE,
                was_downvoted=recorded and request.direction == VoteDirection.DOWNVOTE,
            )
