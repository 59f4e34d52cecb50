"""Delete comment use case."""

import logfire
from pydantic import BaseModel

from agora.domain.service import CommentService
from agora.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: int
    user_id: int  # User ID from authenticated user


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: int
    deleted_count: int  # The comment plus every reply below it
    message: str


class DeleteCommentUseCase:
    """Use case for deleting a comment thread."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span(
            "delete_comment.execute",
            comment_id=request.comment_id,
            user_id=request.user_id,
        ):
            deleted = await self.comment_service.delete_comment(
                CommentId(request.comment_id), UserId(request.user_id)
            )
            return DeleteCommentResponse(
                comment_id=request.comment_id,
                deleted_count=deleted,
                message="Comment deleted successfully",
            )
