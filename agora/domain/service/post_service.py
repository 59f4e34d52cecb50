"""Post domain service."""

from typing import Optional

import logfire

from agora.domain.error import InvalidInputError, NotAuthorizedError, NotFoundError
from agora.domain.model import Post, PostUpdate
from agora.domain.repository import (
    CommentRepository,
    PollRepository,
    PollVoteRepository,
    PostRepository,
    TransactionManager,
    VoteRepository,
)
from agora.domain.value import (
    Category,
    PostId,
    PostType,
    UserId,
    Username,
    VotableType,
)

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        poll_repository: PollRepository,
        poll_vote_repository: PollVoteRepository,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            comment_repository: Comment repository (cascading deletes)
            vote_repository: Vote ledger repository (cascading deletes)
            poll_repository: Poll repository (cascading deletes)
            poll_vote_repository: Poll ballot repository (cascading deletes)
            transaction_manager: Atomic block provider
        """
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.vote_repository = vote_repository
        self.poll_repository = poll_repository
        self.poll_vote_repository = poll_vote_repository
        self.transaction_manager = transaction_manager

    async def create_post(
        self,
        author_id: UserId,
        author_username: Username,
        title: str,
        body: str,
        category: Category,
        post_type: PostType = PostType.TEXT,
    ) -> Post:
        """Create a post.

        Args:
            author_id: Author user ID
            author_username: Author username
            title: Post title
            body: Post body (may be empty)
            category: Post category
            post_type: Text or poll

        Returns:
            Created post
        """
        with logfire.span(
            "post_service.create_post",
            author_id=author_id,
            title=title,
            post_type=post_type.value,
        ):
            post = Post(
                id=await self.post_repository.next_id(),
                author_id=author_id,
                author_username=author_username,
                title=title,
                body=body,
                category=category,
                type=post_type,
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=saved.id, author_id=author_id)
            return saved

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("post_service.get_post", post_id=post_id):
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                logfire.warn("Post not found", post_id=post_id)
                raise NotFoundError("Post", post_id)
            return post

    async def list_posts(
        self,
        limit: int,
        offset: int,
        post_type: Optional[PostType] = None,
        category: Optional[Category] = None,
    ) -> tuple[list[Post], int]:
        """List posts newest first.

        Returns:
            The requested page and the total number of matching posts
        """
        with logfire.span(
            "post_service.list_posts",
            limit=limit,
            offset=offset,
            post_type=post_type.value if post_type else None,
            category=str(category) if category else None,
        ):
            posts = await self.post_repository.find_page(
                limit=limit, offset=offset, post_type=post_type, category=category
            )
            total = await self.post_repository.count(
                post_type=post_type, category=category
            )
            logfire.info("Posts listed", count=len(posts), total=total)
            return posts, total

    async def list_by_author(
        self, author_id: UserId, limit: int, offset: int
    ) -> tuple[list[Post], int]:
        """List one user's posts newest first, with the total count."""
        with logfire.span(
            "post_service.list_by_author", author_id=author_id, limit=limit
        ):
            posts = await self.post_repository.find_page(
                limit=limit, offset=offset, author_id=author_id
            )
            total = await self.post_repository.count(author_id=author_id)
            return posts, total

    async def search_posts(
        self,
        query: str,
        limit: int,
        offset: int,
        post_type: Optional[PostType] = None,
    ) -> tuple[list[Post], int]:
        """Find posts whose title or body contains ``query``, newest first.

        Matching ignores case. There is no relevance ranking.

        Returns:
            The requested page and the total number of matching posts

        Raises:
            InvalidInputError: If the query is blank
        """
        needle = query.strip()
        if not needle:
            raise InvalidInputError("Search query is required")
        with logfire.span(
            "post_service.search_posts",
            query=needle,
            limit=limit,
            offset=offset,
            post_type=post_type.value if post_type else None,
        ):
            posts = await self.post_repository.find_page(
                limit=limit, offset=offset, post_type=post_type, query=needle
            )
            total = await self.post_repository.count(post_type=post_type, query=needle)
            logfire.info("Posts searched", count=len(posts), total=total)
            return posts, total

    async def update_post(
        self, post_id: PostId, update: PostUpdate, user_id: UserId
    ) -> Post:
        """Apply an update to a post owned by ``user_id``.

        An empty update returns the post unchanged.

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span(
            "post_service.update_post", post_id=post_id, user_id=user_id
        ):
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                logfire.warn("Post not found for update", post_id=post_id)
                raise NotFoundError("Post", post_id)
            self._ensure_author(post, user_id)

            if update.is_empty:
                return post

            updated = await self.post_repository.update(post_id, update)
            if updated is None:
                raise NotFoundError("Post", post_id)
            logfire.info("Post updated", post_id=post_id)
            return updated

    async def delete_post(self, post_id: PostId, user_id: UserId) -> None:
        """Delete a post together with everything hanging off it.

        Removes the post's comments and their votes, its poll with options
        and ballots, its own votes, then the post, in one atomic block.

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the user is not the author
        """
        with logfire.span(
            "post_service.delete_post", post_id=post_id, user_id=user_id
        ):
            async with self.transaction_manager.atomic():
                post = await self.post_repository.lock_by_id(post_id)
                if post is None:
                    logfire.warn("Post not found for delete", post_id=post_id)
                    raise NotFoundError("Post", post_id)
                self._ensure_author(post, user_id)

                comment_ids = await self.comment_repository.find_ids_by_post(post_id)
                await self.vote_repository.delete_by_votables(
                    VotableType.COMMENT, comment_ids
                )
                await self.comment_repository.delete_many(comment_ids)

                poll = await self.poll_repository.find_by_post(post_id)
                if poll is not None:
                    await self.poll_vote_repository.delete_by_poll(poll.id)
                    await self.poll_repository.delete(poll.id)

                await self.vote_repository.delete_by_votables(
                    VotableType.POST, [post_id]
                )
                await self.post_repository.delete(post_id)

                logfire.info(
                    "Post deleted",
                    post_id=post_id,
                    comment_count=len(comment_ids),
                    had_poll=poll is not None,
                )

    def _ensure_author(self, post: Post, user_id: UserId) -> None:
        if post.author_id != user_id:
            logfire.warn(
                "User does not own post", post_id=post.id, user_id=user_id
            )
            raise NotAuthorizedError("post", post.id, user_id)
