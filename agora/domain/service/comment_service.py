"""Comment domain service."""

from typing import Sequence

import logfire

from agora.domain.error import InvalidInputError, NotAuthorizedError, NotFoundError
from agora.domain.model import Comment, CommentUpdate
from agora.domain.repository import (
    CommentRepository,
    PostRepository,
    TransactionManager,
    VoteRepository,
)
from agora.domain.value import CommentId, PostId, UserId, Username, VotableType

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository (existence checks)
            vote_repository: Vote ledger repository (cascading deletes)
            transaction_manager: Atomic block provider
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.vote_repository = vote_repository
        self.transaction_manager = transaction_manager

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        author_username: Username,
        body: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            author_username: Author username
            body: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the post or the parent comment does not exist
            InvalidInputError: If the parent belongs to another post
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=post_id,
            author_id=author_id,
            parent_id=parent_id,
        ):
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                logfire.warn("Comment on non-existent post", post_id=post_id)
                raise NotFoundError("Post", post_id)

            if parent_id is not None:
                parent = await self.comment_repository.find_by_id(parent_id)
                if parent is None:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=parent_id,
                        post_id=post_id,
                    )
                    raise NotFoundError("Comment", parent_id)
                if parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=parent_id,
                        parent_post_id=parent.post_id,
                        target_post_id=post_id,
                    )
                    raise InvalidInputError(
                        "Parent comment does not belong to this post"
                    )

            comment = Comment(
                id=await self.comment_repository.next_id(),
                post_id=post_id,
                author_id=author_id,
                author_username=author_username,
                body=body,
                parent_id=parent_id,
            )
            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=saved.id,
                post_id=post_id,
                is_reply=parent_id is not None,
            )
            return saved

    async def reply(
        self,
        comment_id: CommentId,
        author_id: UserId,
        author_username: Username,
        body: str,
    ) -> Comment:
        """Reply to a comment on the comment's own post.

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.reply", comment_id=comment_id, author_id=author_id
        ):
            parent = await self.comment_repository.find_by_id(comment_id)
            if parent is None:
                logfire.warn("Reply to non-existent comment", comment_id=comment_id)
                raise NotFoundError("Comment", comment_id)
            return await self.create_comment(
                post_id=parent.post_id,
                author_id=author_id,
                author_username=author_username,
                body=body,
                parent_id=parent.id,
            )

    async def update_comment(
        self, comment_id: CommentId, update: CommentUpdate, user_id: UserId
    ) -> Comment:
        """Apply an update to a comment owned by ``user_id``.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=comment_id,
            user_id=user_id,
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found for update", comment_id=comment_id)
                raise NotFoundError("Comment", comment_id)
            self._ensure_author(comment, user_id)

            if update.is_empty:
                return comment

            updated = await self.comment_repository.update(comment_id, update)
            if updated is None:
                raise NotFoundError("Comment", comment_id)
            logfire.info("Comment updated", comment_id=comment_id)
            return updated

    async def delete_comment(self, comment_id: CommentId, user_id: UserId) -> int:
        """Delete a comment, all replies below it and their votes.

        Returns:
            Number of deleted comments

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=comment_id,
            user_id=user_id,
        ):
            async with self.transaction_manager.atomic():
                comment = await self.comment_repository.lock_by_id(comment_id)
                if comment is None:
                    logfire.warn("Comment not found for delete", comment_id=comment_id)
                    raise NotFoundError("Comment", comment_id)
                self._ensure_author(comment, user_id)

                subtree = await self.comment_repository.find_subtree_ids(comment_id)
                await self.vote_repository.delete_by_votables(
                    VotableType.COMMENT, subtree
                )
                deleted = await self.comment_repository.delete_many(subtree)
                logfire.info(
                    "Comment deleted", comment_id=comment_id, deleted_count=deleted
                )
                return deleted

    async def count_comments(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Number of comments on each post (batch query)."""
        if not post_ids:
            return {}
        return await self.comment_repository.count_by_posts(post_ids)

    async def list_by_author(
        self, author_id: UserId, limit: int, offset: int
    ) -> tuple[list[Comment], int]:
        """List one user's comments across all posts, newest first.

        Returns:
            The requested page and the user's total comment count
        """
        with logfire.span(
            "comment_service.list_by_author", author_id=author_id, limit=limit
        ):
            comments = await self.comment_repository.find_by_author(
                author_id, limit, offset
            )
            total = await self.comment_repository.count_by_author(author_id)
            return comments, total

    def _ensure_author(self, comment: Comment, user_id: UserId) -> None:
        if comment.author_id != user_id:
            logfire.warn(
                "User does not own comment", comment_id=comment.id, user_id=user_id
            )
            raise NotAuthorizedError("comment", comment.id, user_id)
