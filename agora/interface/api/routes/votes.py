"""Vote routes.

Each post and comment exposes ``/upvote`` and ``/downvote``: POST casts the
vote, DELETE withdraws it.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from agora.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    RemoveVoteRequest,
    RemoveVoteUseCase,
    VoteResponse,
)
from agora.domain.service import JWTService
from agora.domain.value import VotableType, VoteDirection
from agora.interface.api.actor import actor_id, current_actor, require_actor

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


async def _cast(
    use_case: CastVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
    votable_type: VotableType,
    votable_id: int,
    direction: VoteDirection,
) -> VoteResponse:
    # Anonymous votes are accepted or refused by the vote service
    actor = current_actor(jwt_service, auth_token)
    return await use_case.execute(
        CastVoteRequest(
            votable_type=votable_type,
            votable_id=votable_id,
            direction=direction,
            user_id=actor_id(actor),
        )
    )


async def _remove(
    use_case: RemoveVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
    votable_type: VotableType,
    votable_id: int,
    direction: VoteDirection,
) -> VoteResponse:
    actor = require_actor(jwt_service, auth_token, "remove a vote")
    return await use_case.execute(
        RemoveVoteRequest(
            votable_type=votable_type,
            votable_id=votable_id,
            direction=direction,
            user_id=actor.user_id,
        )
    )


@router.post("/posts/{post_id}/upvote", response_model=VoteResponse)
async def upvote_post(
    post_id: int,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Upvote a post."""
    return await _cast(
        cast_vote_use_case,
        jwt_service,
        auth_token,
        VotableType.POST,
        post_id,
        VoteDirection.UPVOTE,
    )


@router.delete("/posts/{post_id}/upvote", response_model=VoteResponse)
async def remove_upvote_from_post(
    post_id: int,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Withdraw an upvote from a post."""
    return await _remove(
        remove_vote_use_case,
        jwt_service,
        auth_token,
        VotableType.POST,
        post_id,
        VoteDirection.UPVOTE,
    )


@router.post("/posts/{post_id}/downvote", response_model=VoteResponse)
async def downvote_post(
    post_id: int,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Downvote a post."""
    return await _cast(
        cast_vote_use_case,
        jwt_service,
        auth_token,
        VotableType.POST,
        post_id,
        VoteDirection.DOWNVOTE,
    )


@router.delete("/posts/{post_id}/downvote", response_model=VoteResponse)
async def remove_downvote_from_post(
    post_id: int,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Withdraw a downvote from a post."""
    return await _remove(
        remove_vote_use_case,
        jwt_service,
        auth_token,
        VotableType.POST,
        post_id,
        VoteDirection.DOWNVOTE,
    )


@router.post("/comments/{comment_id}/upvote", response_model=VoteResponse)
async def upvote_comment(
    comment_id: int,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Upvote a comment."""
    return await _cast(
        cast_vote_use_case,
        jwt_service,
        auth_token,
        VotableType.COMMENT,
        comment_id,
        VoteDirection.UPVOTE,
    )


@router.delete("/comments/{comment_id}/upvote", response_model=VoteResponse)
async def remove_upvote_from_comment(
    comment_id: int,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Withdraw an upvote from a comment."""
    return await _remove(
        remove_vote_use_case,
        jwt_service,
        auth_token,
        VotableType.COMMENT,
        comment_id,
        VoteDirection.UPVOTE,
    )


@router.post("/comments/{comment_id}/downvote", response_model=VoteResponse)
async def downvote_comment(
    comment_id: int,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Downvote a comment."""
    return await _cast(
        cast_vote_use_case,
        jwt_service,
        auth_token,
        VotableType.COMMENT,
        comment_id,
        VoteDirection.DOWNVOTE,
    )


@router.delete("/comments/{comment_id}/downvote", response_model=VoteResponse)
async def remove_downvote_from_comment(
    comment_id: int,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Withdraw a downvote from a comment."""
    return await _remove(
        remove_vote_use_case,
        jwt_service,
        auth_token,
        VotableType.COMMENT,
        comment_id,
        VoteDirection.DOWNVOTE,
    )
