"""Create post use case."""

from pydantic import BaseModel, Field

from agora.application.usecase.base import parse_category
from agora.application.usecase.post.get_post import PostItem
from agora.domain.service import PostService
from agora.domain.value import UserId, Username


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str = Field(min_length=1, max_length=300)
    body: str = Field(default="", max_length=10000)
    category: str = Field(default="General", min_length=1, max_length=50)
    author_id: int  # User ID from authenticated user
    author_username: str


class CreatePostUseCase:
    """Use case for creating a new text post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> PostItem:
        """Execute create post flow.

        Args:
            request: Create post request

        Returns:
            The new post
        """
        post = await self.post_service.create_post(
            author_id=UserId(request.author_id),
            author_username=Username(request.author_username),
            title=request.title,
            body=request.body,
            category=parse_category(request.category),
        )
        return PostItem.from_post(post)
