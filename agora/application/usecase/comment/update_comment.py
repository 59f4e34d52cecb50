"""Update comment use case."""

from pydantic import BaseModel, Field

from agora.application.usecase.comment.create_comment import CommentItem
from agora.domain.model import CommentUpdate
from agora.domain.service import CommentService
from agora.domain.value import CommentId, UserId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: int
    user_id: int  # User ID from authenticated user
    body: str | None = Field(default=None, min_length=1, max_length=10000)


class UpdateCommentUseCase:
    """Use case for editing a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentItem:
        """Execute update comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
        """
        comment = await self.comment_service.update_comment(
            CommentId(request.comment_id),
            CommentUpdate(body=request.body),
            UserId(request.user_id),
        )
        return CommentItem.from_comment(comment)
