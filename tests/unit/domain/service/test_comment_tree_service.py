"""Unit tests for CommentTreeService."""

import pytest

from agora.domain.error import InvalidInputError, NotFoundError
from agora.domain.service import (
    CommentService,
    CommentTreeService,
    PostService,
    VoteService,
)
from agora.domain.value import PostId, VotableType
from tests.conftest import ALICE, BOB, CAROL, make_comment, make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _chain(comment_service: CommentService, post_id: PostId, length: int):
    """Create a single reply chain root -> c1 -> c2 ... and return it."""
    chain = [await make_comment(comment_service, post_id, body="level 0")]
    for level in range(1, length):
        chain.append(
            await make_comment(
                comment_service,
                post_id,
                body=f"level {level}",
                parent_id=chain[-1].id,
            )
        )
    return chain


class TestBuildTreeDepth:
    """Depth limits and truncation flags."""

    @pytest.mark.asyncio
    async def test_depth_zero_returns_roots_only(self, unit_env):
        """Depth 0 should return roots without replies but flag hidden ones."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostService))
        with_reply = await make_comment(comment_service, post.id, body="has reply")
        await make_comment(comment_service, post.id, parent_id=with_reply.id)
        await make_comment(comment_service, post.id, body="alone")

        # Act
        roots = await tree_service.build_tree(post.id, max_depth=0)

        # Assert
        assert [node.comment.body for node in roots] == ["alone", "has reply"]
        assert all(node.replies == [] for node in roots)
        flags = {node.comment.body: node.has_more_replies for node in roots}
        assert flags == {"alone": False, "has reply": True}

    @pytest.mark.asyncio
    async def test_depth_two_cuts_four_level_chain(self, unit_env):
        """Depth 2 on a 4-deep chain should nest two levels of replies."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        post = await make_post(await unit_env.get(PostService))
        chain = await _chain(await unit_env.get(CommentService), post.id, 4)

        # Act
        roots = await tree_service.build_tree(post.id, max_depth=2)

        # Assert
        assert len(roots) == 1
        root = roots[0]
        assert root.comment.id == chain[0].id
        level_one = root.replies[0]
        assert level_one.comment.id == chain[1].id
        level_two = level_one.replies[0]
        assert level_two.comment.id == chain[2].id
        assert level_two.replies == []
        assert level_two.reply_count == 1
        assert level_two.has_more_replies is True
        assert root.has_more_replies is False

    @pytest.mark.asyncio
    async def test_default_depth_comes_from_settings(self, unit_env):
        """Without a depth the configured default of 3 applies."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        post = await make_post(await unit_env.get(PostService))
        await _chain(await unit_env.get(CommentService), post.id, 5)

        # Act
        roots = await tree_service.build_tree(post.id)

        # Assert
        node = roots[0]
        levels = 0
        while node.replies:
            node = node.replies[0]
            levels += 1
        assert levels == 3
        assert node.has_more_replies is True

    @pytest.mark.asyncio
    async def test_negative_depth_is_invalid(self, unit_env):
        tree_service = await unit_env.get(CommentTreeService)
        post = await make_post(await unit_env.get(PostService))

        with pytest.raises(InvalidInputError):
            await tree_service.build_tree(post.id, max_depth=-1)

    @pytest.mark.asyncio
    async def test_large_depth_expands_deep_chain(self, unit_env):
        """Depths beyond the default are honored without an upper cap."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        post = await make_post(await unit_env.get(PostService))
        chain = await _chain(await unit_env.get(CommentService), post.id, 12)

        # Act
        roots = await tree_service.build_tree(post.id, max_depth=11)

        # Assert
        node = roots[0]
        levels = 0
        while node.replies:
            node = node.replies[0]
            levels += 1
        assert levels == 11
        assert node.comment.id == chain[-1].id
        assert node.has_more_replies is False

    @pytest.mark.asyncio
    async def test_unknown_post_raises_not_found(self, unit_env):
        tree_service = await unit_env.get(CommentTreeService)

        with pytest.raises(NotFoundError):
            await tree_service.build_tree(PostId(404))

    @pytest.mark.asyncio
    async def test_post_without_comments_gives_empty_forest(self, unit_env):
        tree_service = await unit_env.get(CommentTreeService)
        post = await make_post(await unit_env.get(PostService))

        assert await tree_service.build_tree(post.id) == []


class TestBuildTreeOrdering:
    """Roots newest first, replies oldest first."""

    @pytest.mark.asyncio
    async def test_roots_newest_first_replies_oldest_first(self, unit_env):
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostService))
        first_root = await make_comment(comment_service, post.id, body="root 1")
        second_root = await make_comment(comment_service, post.id, body="root 2")
        for body in ("reply a", "reply b", "reply c"):
            await make_comment(
                comment_service, post.id, body=body, parent_id=first_root.id
            )

        # Act
        roots = await tree_service.build_tree(post.id, max_depth=1)

        # Assert
        assert [node.comment.id for node in roots] == [second_root.id, first_root.id]
        assert [reply.comment.body for reply in roots[1].replies] == [
            "reply a",
            "reply b",
            "reply c",
        ]

    @pytest.mark.asyncio
    async def test_comments_of_other_posts_are_excluded(self, unit_env):
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        comment_service = await unit_env.get(CommentService)
        post_service = await unit_env.get(PostService)
        post = await make_post(post_service, title="Mine")
        other = await make_post(post_service, title="Other")
        await make_comment(comment_service, post.id, body="here")
        await make_comment(comment_service, other.id, body="elsewhere")

        # Act
        roots = await tree_service.build_tree(post.id)

        # Assert
        assert [node.comment.body for node in roots] == ["here"]


class TestVoteAnnotation:
    """Nodes carry the requesting user's vote."""

    @pytest.mark.asyncio
    async def test_nodes_flag_requesting_users_votes(self, unit_env):
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        post = await make_post(await unit_env.get(PostService))
        root = await make_comment(comment_service, post.id, author_id=ALICE)
        reply = await make_comment(
            comment_service, post.id, author_id=BOB, parent_id=root.id
        )
        await vote_service.upvote(VotableType.COMMENT, root.id, CAROL)
        await vote_service.downvote(VotableType.COMMENT, reply.id, CAROL)

        # Act
        as_carol = await tree_service.build_tree(post.id, user_id=CAROL)
        anonymous = await tree_service.build_tree(post.id)

        # Assert
        assert as_carol[0].was_upvoted is True
        assert as_carol[0].was_downvoted is False
        assert as_carol[0].replies[0].was_downvoted is True
        assert as_carol[0].comment.upvotes == 1
        assert anonymous[0].was_upvoted is False
        assert anonymous[0].replies[0].was_downvoted is False


class TestGetComment:
    """Single comment with its direct replies."""

    @pytest.mark.asyncio
    async def test_returns_one_level_of_replies(self, unit_env):
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        post = await make_post(await unit_env.get(PostService))
        chain = await _chain(await unit_env.get(CommentService), post.id, 3)

        # Act
        node = await tree_service.get_comment(chain[0].id)

        # Assert
        assert node.comment.id == chain[0].id
        assert [reply.comment.id for reply in node.replies] == [chain[1].id]
        assert node.replies[0].replies == []
        assert node.replies[0].has_more_replies is True

    @pytest.mark.asyncio
    async def test_unknown_comment_raises_not_found(self, unit_env):
        tree_service = await unit_env.get(CommentTreeService)

        with pytest.raises(NotFoundError):
            await tree_service.get_comment(12345)
