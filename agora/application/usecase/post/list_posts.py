"""List posts use case."""

import math
from typing import Sequence

import logfire
from pydantic import BaseModel, Field

from agora.application.usecase.base import parse_category
from agora.application.usecase.post.get_post import PostItem
from agora.config import PaginationSettings
from agora.domain.model import Post
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import PostType, UserId, VotableType


class ListPostsRequest(BaseModel):
    """List posts request."""

    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)  # Defaults from settings
    type: PostType | None = None
    category: str | None = None
    user_id: int | None = None  # Current user ID (if authenticated)


class ListPostsResponse(BaseModel):
    """Page of posts with pagination metadata."""

    posts: list[PostItem]
    total: int
    page: int
    limit: int
    total_pages: int


async def build_post_page(
    posts: Sequence[Post],
    total: int,
    page: int,
    limit: int,
    viewer_id: int | None,
    comment_service: CommentService,
    vote_service: VoteService,
) -> ListPostsResponse:
    """Annotate a page of posts for the viewer.

    Comment counts and the viewer's votes are fetched with one batch query
    each for the whole page.
    """
    post_ids = [post.id for post in posts]
    counts = await comment_service.count_comments(post_ids)

    votes = {}
    if viewer_id is not None and posts:
        votes = await vote_service.get_user_votes(
            UserId(viewer_id), VotableType.POST, post_ids
        )

    return ListPostsResponse(
        posts=[
            PostItem.from_post(post, counts.get(post.id, 0), votes.get(post.id))
            for post in posts
        ],
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit) if total else 0,
    )


class ListPostsUseCase:
    """Use case for the newest-first post feed."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service (comment counts)
            vote_service: Vote domain service (actor's votes)
            pagination_settings: Page size limits
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service
        self.pagination_settings = pagination_settings

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with filters and pagination

        Returns:
            Page of posts matching criteria

        Raises:
            InvalidInputError: If the category filter is blank or too long
        """
        limit = self.pagination_settings.clamp(request.limit)
        with logfire.span(
            "list_posts.execute",
            page=request.page,
            limit=limit,
            type=request.type.value if request.type else None,
            category=request.category,
        ):
            posts, total = await self.post_service.list_posts(
                limit=limit,
                offset=(request.page - 1) * limit,
                post_type=request.type,
                category=parse_category(request.category) if request.category else None,
            )
            return await build_post_page(
                posts,
                total,
                request.page,
                limit,
                request.user_id,
                self.comment_service,
                self.vote_service,
            )
