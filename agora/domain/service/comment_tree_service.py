"""Comment tree domain service."""

from dataclasses import dataclass, field

import logfire

from agora.config import CommentSettings
from agora.domain.error import InvalidInputError, NotFoundError
from agora.domain.model import Comment
from agora.domain.repository import CommentRepository, PostRepository
from agora.domain.value import CommentId, PostId, UserId, VotableType, VoteDirection

from .base import Service
from .vote_service import VoteService


@dataclass
class CommentTreeNode:
    """Node in a post's comment forest.

    ``reply_count`` is the number of direct replies in storage, which may be
    larger than ``len(replies)`` when the tree was cut at a depth limit.
    """

    comment: Comment
    reply_count: int
    replies: list["CommentTreeNode"] = field(default_factory=list)
    was_upvoted: bool = False
    was_downvoted: bool = False

    @property
    def has_more_replies(self) -> bool:
        """Whether storage holds replies that are not included here."""
        return self.reply_count > len(self.replies)


class CommentTreeService(Service):
    """Builds depth-limited comment trees.

    Root comments are listed newest first so recent activity surfaces;
    replies at every level read oldest first, like a conversation.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        vote_service: VoteService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize comment tree service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository (existence checks)
            vote_service: Vote service for batched vote lookups
            comment_settings: Default reply depth
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.vote_service = vote_service
        self.comment_settings = comment_settings

    async def build_tree(
        self,
        post_id: PostId,
        max_depth: int | None = None,
        user_id: UserId | None = None,
    ) -> list[CommentTreeNode]:
        """Build the comment forest of a post.

        Depth 0 returns only root comments. Depth d expands d levels of
        replies below the roots; nodes on the last expanded level carry no
        replies and report ``has_more_replies`` if they have any in storage.

        The tree is assembled from a flat arena filled level by level, so
        the number of queries depends on the depth, not on the tree size:
        one for the roots, one per expanded level, one for reply counts and
        one for the user's votes.

        Args:
            post_id: Post ID
            max_depth: Reply levels to expand (default from settings)
            user_id: Requesting user, for vote annotation

        Returns:
            Root nodes, newest first

        Raises:
            InvalidInputError: If the depth is negative
            NotFoundError: If the post does not exist
        """
        depth = self.comment_settings.default_depth if max_depth is None else max_depth
        if depth < 0:
            raise InvalidInputError("Depth must be a non-negative number")

        with logfire.span(
            "comment_tree_service.build_tree",
            post_id=post_id,
            max_depth=depth,
            user_id=user_id,
        ):
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                logfire.warn("Comment tree for non-existent post", post_id=post_id)
                raise NotFoundError("Post", post_id)

            # Arena: comments in level order, children linked by arena index
            arena: list[Comment] = []
            children: list[list[int]] = []
            index: dict[CommentId, int] = {}

            def add(comment: Comment) -> int:
                index[comment.id] = len(arena)
                arena.append(comment)
                children.append([])
                return index[comment.id]

            roots = [add(comment) for comment in await self.comment_repository.find_roots(post_id)]

            frontier = roots
            for _ in range(depth):
                if not frontier:
                    break
                replies = await self.comment_repository.find_children(
                    [arena[i].id for i in frontier]
                )
                next_frontier = []
                for reply in replies:
                    position = add(reply)
                    # parent_id is set for every reply returned by find_children
                    children[index[reply.parent_id]].append(position)  # type: ignore[index]
                    next_frontier.append(position)
                frontier = next_frontier

            nodes = await self._assemble(arena, children, user_id)
            logfire.info(
                "Comment tree built",
                post_id=post_id,
                root_count=len(roots),
                node_count=len(arena),
            )
            return [nodes[i] for i in roots]

    async def get_comment(
        self, comment_id: CommentId, user_id: UserId | None = None
    ) -> CommentTreeNode:
        """Get a single comment with one level of direct replies.

        Args:
            comment_id: Comment ID
            user_id: Requesting user, for vote annotation

        Returns:
            Node for the comment; its replies are oldest first and carry no
            replies of their own

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_tree_service.get_comment", comment_id=comment_id, user_id=user_id
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found", comment_id=comment_id)
                raise NotFoundError("Comment", comment_id)

            replies = await self.comment_repository.find_children([comment_id])
            arena = [comment, *replies]
            children = [list(range(1, len(arena)))] + [[] for _ in replies]

            nodes = await self._assemble(arena, children, user_id)
            return nodes[0]

    async def _assemble(
        self,
        arena: list[Comment],
        children: list[list[int]],
        user_id: UserId | None,
    ) -> list[CommentTreeNode]:
        """Turn the arena into linked nodes with counts and vote flags."""
        if not arena:
            return []

        comment_ids = [comment.id for comment in arena]
        reply_counts = await self.comment_repository.count_replies(comment_ids)

        votes: dict[int, VoteDirection] = {}
        if user_id is not None:
            votes = await self.vote_service.get_user_votes(
                user_id, VotableType.COMMENT, comment_ids
            )

        nodes: list[CommentTreeNode | None] = [None] * len(arena)
        # Children always sit after their parent, so walk backwards
        for i in range(len(arena) - 1, -1, -1):
            comment = arena[i]
            direction = votes.get(comment.id)
            nodes[i] = CommentTreeNode(
                comment=comment,
                reply_count=reply_counts.get(comment.id, 0),
                replies=[nodes[c] for c in children[i]],  # type: ignore[misc]
                was_upvoted=direction == VoteDirection.UPVOTE,
                was_downvoted=direction == VoteDirection.DOWNVOTE,
            )
        return nodes  # type: ignore[return-value]
