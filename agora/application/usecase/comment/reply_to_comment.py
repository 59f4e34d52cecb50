"""Reply to comment use case."""

from pydantic import BaseModel, Field

from agora.application.usecase.comment.create_comment import CommentItem
from agora.domain.service import CommentService
from agora.domain.value import CommentId, UserId, Username


class ReplyToCommentRequest(BaseModel):
    """Reply request; the post is taken from the parent comment."""

    comment_id: int
    body: str = Field(min_length=1, max_length=10000)
    author_id: int
    author_username: str


class ReplyToCommentUseCase:
    """Use case for replying directly to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ReplyToCommentRequest) -> CommentItem:
        comment = await self.comment_service.reply(
            comment_id=CommentId(request.comment_id),
            author_id=UserId(request.author_id),
            author_username=Username(request.author_username),
            body=request.body,
        )
        return CommentItem.from_comment(comment)
