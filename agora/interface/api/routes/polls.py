"""Poll routes."""

from datetime import datetime
from typing import Annotated

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from agora.application.usecase.poll import (
    CreatePollRequest,
    CreatePollResponse,
    CreatePollUseCase,
    DeletePollOptionRequest,
    DeletePollOptionUseCase,
    DeletePollRequest,
    DeletePollResponse,
    DeletePollUseCase,
    GetPollOptionsRequest,
    GetPollOptionsUseCase,
    GetPollRequest,
    GetPollResultsRequest,
    GetPollResultsUseCase,
    GetPollUseCase,
    PollItem,
    PollOptionItem,
    PollResultsResponse,
    UpdatePollOptionRequest,
    UpdatePollOptionUseCase,
    UpdatePollRequest,
    UpdatePollUseCase,
    VotePollRequest,
    VotePollUseCase,
)
from agora.domain.service import JWTService
from agora.interface.api.actor import actor_id, current_actor, require_actor

router = APIRouter(prefix="/polls", tags=["polls"], route_class=DishkaRoute)


class CreatePollAPIRequest(BaseModel):
    """API request for creating a poll post."""

    title: str = Field(min_length=1, max_length=300)
    body: str = Field(default="", max_length=10000)
    category: str = Field(default="General", min_length=1, max_length=50)
    options: list[Annotated[str, Field(min_length=1, max_length=200)]] = Field(
        min_length=2, max_length=20
    )
    multiple_choice: bool = False
    expires_at: datetime | None = None


class UpdatePollAPIRequest(BaseModel):
    multiple_choice: bool | None = None
    expires_at: datetime | None = None
    clear_expiry: bool = False


class VotePollAPIRequest(BaseModel):
    option_ids: list[int] = Field(min_length=1)


class UpdatePollOptionAPIRequest(BaseModel):
    text: str = Field(min_length=1, max_length=200)


@router.post("", response_model=CreatePollResponse, status_code=status.HTTP_201_CREATED)
async def create_poll(
    request: CreatePollAPIRequest,
    create_poll_use_case: FromDishka[CreatePollUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreatePollResponse:
    """Create a poll post.

    Requires authentication.
    """
    actor = require_actor(jwt_service, auth_token, "create polls")
    return await create_poll_use_case.execute(
        CreatePollRequest(
            title=request.title,
            body=request.body,
            category=request.category,
            options=request.options,
            multiple_choice=request.multiple_choice,
            expires_at=request.expires_at,
            author_id=actor.user_id,
            author_username=actor.username,
        )
    )


@router.get("/{poll_id}", response_model=PollItem)
async def get_poll(
    poll_id: int,
    get_poll_use_case: FromDishka[GetPollUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PollItem:
    """Get a poll with its options and the caller's selection."""
    actor = current_actor(jwt_service, auth_token)
    return await get_poll_use_case.execute(
        GetPollRequest(poll_id=poll_id, user_id=actor_id(actor))
    )


@router.patch("/{poll_id}", response_model=PollItem)
async def update_poll(
    poll_id: int,
    request: UpdatePollAPIRequest,
    update_poll_use_case: FromDishka[UpdatePollUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PollItem:
    """Change poll settings.

    Only the poll author can edit, and only before the poll expires.
    """
    actor = require_actor(jwt_service, auth_token, "edit polls")
    return await update_poll_use_case.execute(
        UpdatePollRequest(
            poll_id=poll_id,
            user_id=actor.user_id,
            multiple_choice=request.multiple_choice,
            expires_at=request.expires_at,
            clear_expiry=request.clear_expiry,
        )
    )


@router.delete("/{poll_id}", response_model=DeletePollResponse)
async def delete_poll(
    poll_id: int,
    delete_poll_use_case: FromDishka[DeletePollUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeletePollResponse:
    """Delete a poll together with its post."""
    actor = require_actor(jwt_service, auth_token, "delete polls")
    return await delete_poll_use_case.execute(
        DeletePollRequest(poll_id=poll_id, user_id=actor.user_id)
    )


@router.post("/{poll_id}/vote", response_model=PollResultsResponse)
async def vote_on_poll(
    poll_id: int,
    request: VotePollAPIRequest,
    vote_poll_use_case: FromDishka[VotePollUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PollResultsResponse:
    """Cast a ballot.

    Requires authentication.
    """
    actor = current_actor(jwt_service, auth_token)
    return await vote_poll_use_case.execute(
        VotePollRequest(
            poll_id=poll_id, option_ids=request.option_ids, user_id=actor_id(actor)
        )
    )


@router.get("/{poll_id}/results", response_model=PollResultsResponse)
async def get_poll_results(
    poll_id: int,
    get_poll_results_use_case: FromDishka[GetPollResultsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PollResultsResponse:
    """Get the current tally of a poll."""
    actor = current_actor(jwt_service, auth_token)
    return await get_poll_results_use_case.execute(
        GetPollResultsRequest(poll_id=poll_id, user_id=actor_id(actor))
    )


@router.get("/{poll_id}/options", response_model=list[PollOptionItem])
async def list_poll_options(
    poll_id: int,
    get_poll_options_use_case: FromDishka[GetPollOptionsUseCase],
) -> list[PollOptionItem]:
    """List a poll's options with their vote counts."""
    return await get_poll_options_use_case.execute(
        GetPollOptionsRequest(poll_id=poll_id)
    )


@router.patch("/{poll_id}/options/{option_id}", response_model=PollOptionItem)
async def update_poll_option(
    poll_id: int,
    option_id: int,
    request: UpdatePollOptionAPIRequest,
    update_poll_option_use_case: FromDishka[UpdatePollOptionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PollOptionItem:
    """Rename a poll option."""
    actor = require_actor(jwt_service, auth_token, "edit polls")
    return await update_poll_option_use_case.execute(
        UpdatePollOptionRequest(
            poll_id=poll_id,
            option_id=option_id,
            text=request.text,
            user_id=actor.user_id,
        )
    )


@router.delete("/{poll_id}/options/{option_id}", response_model=PollItem)
async def delete_poll_option(
    poll_id: int,
    option_id: int,
    delete_poll_option_use_case: FromDishka[DeletePollOptionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PollItem:
    """Delete a poll option and the ballots cast for it."""
    actor = require_actor(jwt_service, auth_token, "edit polls")
    return await delete_poll_option_use_case.execute(
        DeletePollOptionRequest(
            poll_id=poll_id, option_id=option_id, user_id=actor.user_id
        )
    )
