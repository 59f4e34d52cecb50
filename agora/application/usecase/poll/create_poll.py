"""Create poll use case."""

from datetime import datetime
from typing import Annotated

import logfire
from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase, parse_category
from agora.application.usecase.poll.get_poll import PollItem
from agora.application.usecase.post.get_post import PostItem
from agora.domain.service import PollService
from agora.domain.value import UserId, Username


class CreatePollRequest(BaseModel):
    """Create poll request."""

    title: str = Field(min_length=1, max_length=300)
    body: str = Field(default="", max_length=10000)
    category: str = Field(default="General", min_length=1, max_length=50)
    options: list[Annotated[str, Field(min_length=1, max_length=200)]] = Field(
        min_length=2, max_length=20
    )
    multiple_choice: bool = False
    expires_at: datetime | None = None
    author_id: int  # User ID from authenticated user
    author_username: str


class CreatePollResponse(BaseModel):
    """Created poll post and its poll."""

    post: PostItem
    poll: PollItem


class CreatePollUseCase(BaseUseCase[CreatePollRequest, CreatePollResponse]):
    """Use case for creating a poll post.

    The post and the poll are written in one transaction, so a failure
    leaves neither behind.
    """

    def __init__(self, poll_service: PollService) -> None:
        """Initialize create poll use case.

        Args:
            poll_service: Poll domain service
        """
        self.poll_service = poll_service

    async def execute(self, request: CreatePollRequest) -> CreatePollResponse:
        """Execute create poll flow.

        Args:
            request: Create poll request

        Returns:
            The new post and poll

        Raises:
            InvalidInputError: If fewer than two options are given, an option
                is blank, the category is invalid, or the expiry is in the past
        """
        with logfire.span(
            "create_poll.execute",
            author_id=request.author_id,
            option_count=len(request.options),
        ):
            post, poll = await self.poll_service.create_poll(
                author_id=UserId(request.author_id),
                author_username=Username(request.author_username),
                title=request.title,
                body=request.body,
                category=parse_category(request.category),
                options=[text.strip() for text in request.options],
                multiple_choice=request.multiple_choice,
                expires_at=request.expires_at,
            )
            return CreatePollResponse(
                post=PostItem.from_post(post), poll=PollItem.from_poll(poll)
            )
