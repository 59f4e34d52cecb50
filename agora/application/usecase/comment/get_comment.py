"""Get comment use case."""

from pydantic import BaseModel

from agora.application.usecase.comment.get_comments import CommentNode
from agora.domain.service import CommentTreeService
from agora.domain.value import CommentId, UserId


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: int
    user_id: int | None = None  # Current user ID (if authenticated)


class GetCommentUseCase:
    """Use case for reading one comment with its direct replies."""

    def __init__(self, comment_tree_service: CommentTreeService) -> None:
        self.comment_tree_service = comment_tree_service

    async def execute(self, request: GetCommentRequest) -> CommentNode:
        node = await self.comment_tree_service.get_comment(
            CommentId(request.comment_id),
            user_id=UserId(request.user_id) if request.user_id is not None else None,
        )
        return CommentNode.from_tree(node)
