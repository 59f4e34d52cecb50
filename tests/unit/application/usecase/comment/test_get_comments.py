"""Unit tests for GetCommentsUseCase."""

import pytest

from agora.application.usecase.comment import GetCommentsRequest, GetCommentsUseCase
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import VotableType
from tests.conftest import ALICE, BOB, make_comment, make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetCommentsUseCase:
    """Tests for the comment tree response."""

    @pytest.mark.asyncio
    async def test_nodes_carry_depth_and_author(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostService))
        root = await make_comment(comment_service, post.id, author_id=BOB)
        await make_comment(comment_service, post.id, author_id=ALICE, parent_id=root.id)

        # Act
        response = await use_case.execute(GetCommentsRequest(post_id=post.id))

        # Assert
        assert response.post_id == post.id
        [node] = response.comments
        assert node.depth == 0
        assert node.author_username == "bob"
        assert node.reply_count == 1
        assert node.has_more_replies is False
        assert node.replies[0].depth == 1
        assert node.replies[0].author_username == "alice"

    @pytest.mark.asyncio
    async def test_depth_zero_flags_hidden_replies(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostService))
        root = await make_comment(comment_service, post.id)
        await make_comment(comment_service, post.id, parent_id=root.id)

        # Act
        response = await use_case.execute(GetCommentsRequest(post_id=post.id, depth=0))

        # Assert
        assert response.comments[0].replies == []
        assert response.comments[0].has_more_replies is True

    @pytest.mark.asyncio
    async def test_actor_votes_are_marked(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        vote_service = await unit_env.get(VoteService)
        post = await make_post(await unit_env.get(PostService))
        comment = await make_comment(await unit_env.get(CommentService), post.id)
        await vote_service.upvote(VotableType.COMMENT, comment.id, ALICE)

        # Act
        response = await use_case.execute(
            GetCommentsRequest(post_id=post.id, user_id=ALICE)
        )

        # Assert
        assert response.comments[0].was_upvoted is True
        assert response.comments[0].upvotes == 1
