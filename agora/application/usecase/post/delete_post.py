"""Delete post use case."""

from pydantic import BaseModel

from agora.domain.service import PostService
from agora.domain.value import PostId, UserId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: int
    user_id: int  # User ID from authenticated user


class DeletePostResponse(BaseModel):
    """Delete post response."""

    post_id: int
    message: str


class DeletePostUseCase:
    """Use case for deleting a post with its comments, poll and votes."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the user is not the author
        """
        await self.post_service.delete_post(
            PostId(request.post_id), UserId(request.user_id)
        )
        return DeletePostResponse(
            post_id=request.post_id, message="Post deleted successfully"
        )
