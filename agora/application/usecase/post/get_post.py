"""Get post use case."""

from datetime import datetime

from pydantic import BaseModel

from agora.domain.model import Post
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import PostId, PostType, UserId, VotableType, VoteDirection


class PostItem(BaseModel):
    """Post as returned to clients."""

    post_id: int
    author_id: int
    author_username: str
    title: str
    body: str
    category: str
    type: PostType
    upvotes: int
    downvotes: int
    comment_count: int
    created_at: datetime
    updated_at: datetime
    was_upvoted: bool = False
    was_downvoted: bool = False

    @classmethod
    def from_post(
        cls,
        post: Post,
        comment_count: int = 0,
        vote: VoteDirection | None = None,
    ) -> "PostItem":
        return cls(
            post_id=post.id,
            author_id=post.author_id,
            author_username=str(post.author_username),
            title=post.title,
            body=post.body,
            category=str(post.category),
            type=post.type,
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            comment_count=comment_count,
            created_at=post.created_at,
            updated_at=post.updated_at,
            was_upvoted=vote == VoteDirection.UPVOTE,
            was_downvoted=vote == VoteDirection.DOWNVOTE,
        )


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: int
    user_id: int | None = None  # Current user ID (if authenticated)


class GetPostUseCase:
    """Use case for reading one post with its comment count."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service (comment count)
            vote_service: Vote domain service (actor's vote)
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: GetPostRequest) -> PostItem:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.post_service.get_post(PostId(request.post_id))
        counts = await self.comment_service.count_comments([post.id])

        vote = None
        if request.user_id is not None:
            votes = await self.vote_service.get_user_votes(
                UserId(request.user_id), VotableType.POST, [post.id]
            )
            vote = votes.get(post.id)

        return PostItem.from_post(post, counts.get(post.id, 0), vote)
