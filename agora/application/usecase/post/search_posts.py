"""Search posts use case."""

import logfire
from pydantic import BaseModel, Field

from agora.application.usecase.post.list_posts import ListPostsResponse, build_post_page
from agora.config import PaginationSettings
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import PostType


class SearchPostsRequest(BaseModel):
    """Search posts request."""

    query: str
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)
    type: PostType | None = None
    user_id: int | None = None  # Current user ID (if authenticated)


class SearchPostsUseCase:
    """Use case for substring search over post titles and bodies."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
        pagination_settings: PaginationSettings,
    ) -> None:
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service
        self.pagination_settings = pagination_settings

    async def execute(self, request: SearchPostsRequest) -> ListPostsResponse:
        """Execute search flow.

        Raises:
            InvalidInputError: If the query is blank
        """
        limit = self.pagination_settings.clamp(request.limit)
        with logfire.span(
            "search_posts.execute",
            query=request.query,
            page=request.page,
            limit=limit,
        ):
            posts, total = await self.post_service.search_posts(
                request.query,
                limit=limit,
                offset=(request.page - 1) * limit,
                post_type=request.type,
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
