"""List user posts use case."""

from pydantic import BaseModel, Field

from agora.application.usecase.post.list_posts import ListPostsResponse, build_post_page
from agora.config import PaginationSettings
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import UserId


class ListUserPostsRequest(BaseModel):
    """Posts written by one user."""

    author_id: int
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)
    user_id: int | None = None  # Current user ID (if authenticated)


class ListUserPostsUseCase:
    """Use case for a user's post history, newest first."""

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

    async def execute(self, request: ListUserPostsRequest) -> ListPostsResponse:
        limit = self.pagination_settings.clamp(request.limit)
        posts, total = await self.post_service.list_by_author(
            UserId(request.author_id), limit=limit, offset=(request.page - 1) * limit
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
