"""In-memory post repository for testing."""

from itertools import count
from typing import Optional

from agora.domain.model.common import utcnow
from agora.domain.model.post import Post, PostUpdate
from agora.domain.repository.post import PostRepository
from agora.domain.value import Category, PostId, PostType, UserId, VoteDirection


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}
        self._ids = count(1)

    async def next_id(self) -> PostId:
        return PostId(next(self._ids))

    async def find_by_id(self, post_id: int) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(PostId(post_id))

    async def lock_by_id(self, post_id: int) -> Optional[Post]:
        """Find a post by ID (locking is the transaction manager's job here)."""
        return self._posts.get(PostId(post_id))

    def _filtered(
        self,
        post_type: Optional[PostType],
        category: Optional[Category],
        author_id: Optional[UserId],
        query: Optional[str],
    ) -> list[Post]:
        posts = list(self._posts.values())
        if post_type is not None:
            posts = [p for p in posts if p.type == post_type]
        if category is not None:
            posts = [p for p in posts if p.category == category]
        if author_id is not None:
            posts = [p for p in posts if p.author_id == author_id]
        if query:
            needle = query.lower()
            posts = [
                p
                for p in posts
                if needle in p.title.lower() or needle in p.body.lower()
            ]
        return posts

    async def find_page(
        self,
        limit: int,
        offset: int,
        post_type: Optional[PostType] = None,
        category: Optional[Category] = None,
        author_id: Optional[UserId] = None,
        query: Optional[str] = None,
    ) -> list[Post]:
        """Find posts newest first with filtering and pagination."""
        posts = self._filtered(post_type, category, author_id, query)
        posts.sort(key=lambda p: (p.created_at, p.id), reverse=True)
        return posts[offset : offset + limit]

    async def count(
        self,
        post_type: Optional[PostType] = None,
        category: Optional[Category] = None,
        author_id: Optional[UserId] = None,
        query: Optional[str] = None,
    ) -> int:
        """Count posts matching the given filters."""
        return len(self._filtered(post_type, category, author_id, query))

    async def save(self, post: Post) -> Post:
        """Insert a post."""
        self._posts[post.id] = post
        return post

    async def update(self, post_id: PostId, update: PostUpdate) -> Optional[Post]:
        """Apply the set fields of ``update``."""
        post = self._posts.get(post_id)
        if post is None:
            return None

        # Domain models are immutable
        changes = {
            field: value
            for field, value in update
            if value is not None
        }
        updated = post.model_copy(update={**changes, "updated_at": utcnow()})
        self._posts[post_id] = updated
        return updated

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post."""
        return self._posts.pop(post_id, None) is not None

    async def adjust_vote_count(
        self, post_id: int, direction: VoteDirection, delta: int
    ) -> None:
        """Move a vote counter (minimum 0)."""
        post = self._posts.get(PostId(post_id))
        if post is None:
            return
        field = "upvotes" if direction == VoteDirection.UPVOTE else "downvotes"
        value = max(getattr(post, field) + delta, 0)
        self._posts[post.id] = post.model_copy(update={field: value})
