"""Get comments use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from agora.domain.service import CommentTreeNode, CommentTreeService
from agora.domain.value import PostId, UserId


class CommentNode(BaseModel):
    """Comment with its loaded replies."""

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
    depth: int
    reply_count: int
    has_more_replies: bool
    was_upvoted: bool = False
    was_downvoted: bool = False
    replies: list["CommentNode"] = Field(default_factory=list)

    @classmethod
    def from_tree(cls, node: CommentTreeNode, depth: int = 0) -> "CommentNode":
        comment = node.comment
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
            depth=depth,
            reply_count=node.reply_count,
            has_more_replies=node.has_more_replies,
            was_upvoted=node.was_upvoted,
            was_downvoted=node.was_downvoted,
            replies=[cls.from_tree(reply, depth + 1) for reply in node.replies],
        )


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: int
    depth: int | None = None  # Reply levels to expand; defaults from settings
    user_id: int | None = None  # Current user ID (if authenticated)


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: int
    comments: list[CommentNode]


class GetCommentsUseCase:
    """Use case for reading the comment tree of a post."""

    def __init__(self, comment_tree_service: CommentTreeService) -> None:
        """Initialize get comments use case.

        Args:
            comment_tree_service: Comment tree domain service
        """
        self.comment_tree_service = comment_tree_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Raises:
            NotFoundError: If the post does not exist
            InvalidInputError: If the depth is negative
        """
        with logfire.span(
            "get_comments.execute", post_id=request.post_id, depth=request.depth
        ):
            roots = await self.comment_tree_service.build_tree(
                PostId(request.post_id),
                max_depth=request.depth,
                user_id=UserId(request.user_id) if request.user_id is not None else None,
            )
            return GetCommentsResponse(
                post_id=request.post_id,
                comments=[CommentNode.from_tree(root) for root in roots],
            )
