"""Update post use case."""

import logfire
from pydantic import BaseModel, Field

from agora.application.usecase.base import parse_category
from agora.application.usecase.post.get_post import PostItem
from agora.domain.model import PostUpdate
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import PostId, UserId, VotableType


class UpdatePostRequest(BaseModel):
    """Update post request.

    Fields left as None keep their current value.
    """

    post_id: int
    user_id: int  # User ID from authenticated user
    title: str | None = Field(default=None, min_length=1, max_length=300)
    body: str | None = Field(default=None, max_length=10000)
    category: str | None = Field(default=None, min_length=1, max_length=50)


class UpdatePostUseCase:
    """Use case for editing a post."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service (comment count)
            vote_service: Vote domain service (actor's vote)
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: UpdatePostRequest) -> PostItem:
        """Execute update post flow.

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span(
            "update_post.execute", post_id=request.post_id, user_id=request.user_id
        ):
            user_id = UserId(request.user_id)
            update = PostUpdate(
                title=request.title,
                body=request.body,
                category=parse_category(request.category) if request.category else None,
            )
            post = await self.post_service.update_post(
                PostId(request.post_id), update, user_id
            )

            counts = await self.comment_service.count_comments([post.id])
            votes = await self.vote_service.get_user_votes(
                user_id, VotableType.POST, [post.id]
            )
            return PostItem.from_post(post, counts.get(post.id, 0), votes.get(post.id))
