"""Create comment use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from agora.domain.model import Comment
from agora.domain.service import CommentService
from agora.domain.value import CommentId, PostId, UserId, Username


class CommentItem(BaseModel):
    """Single comment without replies."""

    comment_id: int
    post_id: int
    parent_id: int | None
    author_id: int
    author_username: str
    body: str
    upvotes: int
    downvotes: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        return cls(
            comment_id=comment.id,
            post_id=comment.post_id,
            parent_id=comment.parent_id,
            author_id=comment.author_id,
            author_username=str(comment.author_username),
            body=comment.body,
            upvotes=comment.upvotes,
            downvotes=comment.downvotes,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: int
    body: str = Field(min_length=1, max_length=10000)
    parent_id: int | None = None  # For threaded replies
    author_id: int  # User ID from authenticated user
    author_username: str


class CreateCommentUseCase:
    """Use case for commenting on a post."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CommentItem:
        """Execute create comment flow.

        Raises:
            NotFoundError: If the post or parent comment does not exist
            InvalidInputError: If the parent comment is on another post
        """
        comment = await self.comment_service.create_comment(
            post_id=PostId(request.post_id),
            author_id=UserId(request.author_id),
            author_username=Username(request.author_username),
            body=request.body,
            parent_id=(
                CommentId(request.parent_id) if request.parent_id is not None else None
            ),
        )
        return CommentItem.from_comment(comment)
