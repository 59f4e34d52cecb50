"""Comment repository interface."""

from abc import abstractmethod
from typing import Dict, List, Optional, Sequence

from agora.domain.model.comment import Comment, CommentUpdate
from agora.domain.repository.votable import VotableRepository
from agora.domain.value import CommentId, PostId, UserId


class CommentRepository(VotableRepository[Comment]):
    """Repository for Comment entity.

    Tree reads are level-oriented: callers fetch the roots of a post, then the
    children of a whole level at once, so building a tree costs one query per
    level instead of one per comment.
    """

    @abstractmethod
    async def next_id(self) -> CommentId:
        """Reserve a new comment ID from the store's sequence."""
        pass

    @abstractmethod
    async def find_roots(self, post_id: PostId) -> List[Comment]:
        """Find top-level comments of a post, newest first.

        Ties on creation time are broken by ID, highest first.
        """
        pass

    @abstractmethod
    async def find_children(self, parent_ids: Sequence[CommentId]) -> List[Comment]:
        """Find the direct replies of several comments (batch query).

        Args:
            parent_ids: Parent comment IDs

        Returns:
            Replies to any of the parents, oldest first (ties by ID ascending)
        """
        pass

    @abstractmethod
    async def count_replies(
        self, comment_ids: Sequence[CommentId]
    ) -> Dict[CommentId, int]:
        """Count direct replies stored for each comment (batch query).

        Returns:
            Mapping of comment ID to reply count; comments without replies
            may be absent
        """
        pass

    @abstractmethod
    async def count_by_posts(self, post_ids: Sequence[PostId]) -> Dict[PostId, int]:
        """Count all comments of each post (batch query)."""
        pass

    @abstractmethod
    async def find_by_author(
        self, author_id: UserId, limit: int, offset: int
    ) -> List[Comment]:
        """Find a user's comments across all posts, newest first."""
        pass

    @abstractmethod
    async def count_by_author(self, author_id: UserId) -> int:
        pass

    @abstractmethod
    async def find_subtree_ids(self, comment_id: CommentId) -> List[CommentId]:
        """IDs of a comment and all its transitive replies."""
        pass

    @abstractmethod
    async def find_ids_by_post(self, post_id: PostId) -> List[CommentId]:
        """IDs of every comment on a post."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        pass

    @abstractmethod
    async def update(
        self, comment_id: CommentId, update: CommentUpdate
    ) -> Optional[Comment]:
        """Apply the non-empty fields of ``update`` and bump ``updated_at``.

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comment rows.

        Returns:
            Number of deleted comments
        """
        pass
