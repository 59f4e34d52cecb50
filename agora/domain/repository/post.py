"""Post repository interface."""

from abc import abstractmethod
from typing import List, Optional

from agora.domain.model.post import Post, PostUpdate
from agora.domain.repository.votable import VotableRepository
from agora.domain.value import Category, PostId, PostType, UserId


class PostRepository(VotableRepository[Post]):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def next_id(self) -> PostId:
        """Reserve a new post ID from the store's sequence."""
        pass

    @abstractmethod
    async def find_page(
        self,
        limit: int,
        offset: int,
        post_type: Optional[PostType] = None,
        category: Optional[Category] = None,
        author_id: Optional[UserId] = None,
        query: Optional[str] = None,
    ) -> List[Post]:
        """Find posts newest first, optionally filtered.

        Args:
            limit: Maximum number of posts to return
            offset: Number of posts to skip
            post_type: Only posts of this type
            category: Only posts in this category
            author_id: Only posts by this user
            query: Only posts whose title or body contains this text,
                ignoring case

        Returns:
            List of posts ordered by creation time (newest first)
        """
        pass

    @abstractmethod
    async def count(
        self,
        post_type: Optional[PostType] = None,
        category: Optional[Category] = None,
        author_id: Optional[UserId] = None,
        query: Optional[str] = None,
    ) -> int:
        """Count posts matching the same filters as ``find_page``."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Insert a new post.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def update(self, post_id: PostId, update: PostUpdate) -> Optional[Post]:
        """Apply the non-empty fields of ``update`` and bump ``updated_at``.

        Returns:
            The updated post, or None if it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post row.

        Returns:
            True if a post was deleted
        """
        pass
