"""List user comments use case."""

import math

import logfire
from pydantic import BaseModel, Field

from agora.application.usecase.comment.create_comment import CommentItem
from agora.config import PaginationSettings
from agora.domain.service import CommentService
from agora.domain.value import UserId


class ListUserCommentsRequest(BaseModel):
    """Comments written by one user."""

    author_id: int
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)


class ListUserCommentsResponse(BaseModel):
    """Page of a user's comments, each pointing at its post."""

    comments: list[CommentItem]
    total: int
    page: int
    limit: int
    total_pages: int


class ListUserCommentsUseCase:
    """Use case for a user's comment history across all posts."""

    def __init__(
        self,
        comment_service: CommentService,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize list user comments use case.

        Args:
            comment_service: Comment domain service
            pagination_settings: Page size limits
        """
        self.comment_service = comment_service
        self.pagination_settings = pagination_settings

    async def execute(
        self, request: ListUserCommentsRequest
    ) -> ListUserCommentsResponse:
        limit = self.pagination_settings.clamp(request.limit)
        with logfire.span(
            "list_user_comments.execute",
            author_id=request.author_id,
            page=request.page,
            limit=limit,
        ):
            comments, total = await self.comment_service.list_by_author(
                UserId(request.author_id),
                limit=limit,
                offset=(request.page - 1) * limit,
            )
            return ListUserCommentsResponse(
                comments=[CommentItem.from_comment(comment) for comment in comments],
                total=total,
                page=request.page,
                limit=limit,
                total_pages=math.ceil(total / limit) if total else 0,
            )
