"""In-memory comment repository for testing."""

from collections import Counter
from itertools import count
from typing import Optional, Sequence

from agora.domain.model.comment import Comment, CommentUpdate
from agora.domain.model.common import utcnow
from agora.domain.repository.comment import CommentRepository
from agora.domain.value import CommentId, PostId, UserId, VoteDirection


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._ids = count(1)

    async def next_id(self) -> CommentId:
        return CommentId(next(self._ids))

    async def find_by_id(self, comment_id: int) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(CommentId(comment_id))

    async def lock_by_id(self, comment_id: int) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(CommentId(comment_id))

    async def find_roots(self, post_id: PostId) -> list[Comment]:
        """Find top-level comments, newest first."""
        roots = [
            c
            for c in self._comments.values()
            if c.post_id == post_id and c.parent_id is None
        ]
        roots.sort(key=lambda c: (c.created_at, c.id), reverse=True)
        return roots

    async def find_children(self, parent_ids: Sequence[CommentId]) -> list[Comment]:
        """Find direct replies of several comments, oldest first."""
        parents = set(parent_ids)
        children = [c for c in self._comments.values() if c.parent_id in parents]
        children.sort(key=lambda c: (c.created_at, c.id))
        return children

    async def count_replies(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies per comment."""
        wanted = set(comment_ids)
        counts = Counter(
            c.parent_id for c in self._comments.values() if c.parent_id in wanted
        )
        return dict(counts)  # type: ignore[arg-type]

    async def count_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Count comments per post."""
        wanted = set(post_ids)
        counts = Counter(
            c.post_id for c in self._comments.values() if c.post_id in wanted
        )
        return dict(counts)

    async def find_by_author(
        self, author_id: UserId, limit: int, offset: int
    ) -> list[Comment]:
        """Find a user's comments newest first."""
        mine = [c for c in self._comments.values() if c.author_id == author_id]
        mine.sort(key=lambda c: (c.created_at, c.id), reverse=True)
        return mine[offset : offset + limit]

    async def count_by_author(self, author_id: UserId) -> int:
        return sum(1 for c in self._comments.values() if c.author_id == author_id)

    async def find_subtree_ids(self, comment_id: CommentId) -> list[CommentId]:
        """IDs of a comment and its transitive replies."""
        if comment_id not in self._comments:
            return []

        found = [comment_id]
        frontier = {comment_id}
        while frontier:
            frontier = {
                c.id for c in self._comments.values() if c.parent_id in frontier
            }
            found.extend(frontier)
        return found

    async def find_ids_by_post(self, post_id: PostId) -> list[CommentId]:
        """IDs of every comment on a post."""
        return [c.id for c in self._comments.values() if c.post_id == post_id]

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment."""
        self._comments[comment.id] = comment
        return comment

    async def update(
        self, comment_id: CommentId, update: CommentUpdate
    ) -> Optional[Comment]:
        """Apply the set fields of ``update``."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.model_copy(
            update={"body": update.body or comment.body, "updated_at": utcnow()}
        )
        self._comments[comment_id] = updated
        return updated

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments."""
        deleted = 0
        for comment_id in comment_ids:
            if self._comments.pop(comment_id, None) is not None:
                deleted += 1
        return deleted

    async def adjust_vote_count(
        self, comment_id: int, direction: VoteDirection, delta: int
    ) -> None:
        """Move a vote counter (minimum 0)."""
        comment = self._comments.get(CommentId(comment_id))
        if comment is None:
            return
        field = "upvotes" if direction == VoteDirection.UPVOTE else "downvotes"
        value = max(getattr(comment, field) + delta, 0)
        self._comments[comment.id] = comment.model_copy(update={field: value})
