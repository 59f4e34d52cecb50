"""Unit tests for CastVoteUseCase and RemoveVoteUseCase."""

import pytest

from agora.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    RemoveVoteRequest,
    RemoveVoteUseCase,
)
from agora.domain.error import ConflictError
from agora.domain.service import CommentService, PostService
from agora.domain.value import ConflictReason, VotableType, VoteDirection
from tests.conftest import BOB, CAROL, make_comment, make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for casting votes through the use case."""

    @pytest.mark.asyncio
    async def test_downvote_comment_reports_actor_state(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        post = await make_post(await unit_env.get(PostService))
        comment = await make_comment(await unit_env.get(CommentService), post.id)

        # Act
        response = await use_case.execute(
            CastVoteRequest(
                votable_type=VotableType.COMMENT,
                votable_id=comment.id,
                direction=VoteDirection.DOWNVOTE,
                user_id=CAROL,
            )
        )

        # Assert
        assert response.votable_id == comment.id
        assert (response.upvotes, response.downvotes) == (0, 1)
        assert response.was_downvoted is True
        assert response.was_upvoted is False

    @pytest.mark.asyncio
    async def test_opposite_vote_is_refused(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        post = await make_post(await unit_env.get(PostService))
        await use_case.execute(
            CastVoteRequest(
                votable_type=VotableType.POST,
                votable_id=post.id,
                direction=VoteDirection.UPVOTE,
                user_id=BOB,
            )
        )

        # Act & Assert
        with pytest.raises(ConflictError) as exc_info:
            await use_case.execute(
                CastVoteRequest(
                    votable_type=VotableType.POST,
                    votable_id=post.id,
                    direction=VoteDirection.DOWNVOTE,
                    user_id=BOB,
                )
            )
        assert exc_info.value.reason == ConflictReason.OPPOSITE_VOTE_EXISTS


class TestRemoveVoteUseCase:
    """Tests for withdrawing votes through the use case."""

    @pytest.mark.asyncio
    async def test_remove_upvote_clears_actor_state(self, unit_env):
        # Arrange
        cast = await unit_env.get(CastVoteUseCase)
        remove = await unit_env.get(RemoveVoteUseCase)
        post = await make_post(await unit_env.get(PostService))
        await cast.execute(
            CastVoteRequest(
                votable_type=VotableType.POST,
                votable_id=post.id,
                direction=VoteDirection.UPVOTE,
                user_id=BOB,
            )
        )

        # Act
        response = await remove.execute(
            RemoveVoteRequest(
                votable_type=VotableType.POST,
                votable_id=post.id,
                direction=VoteDirection.UPVOTE,
                user_id=BOB,
            )
        )

        # Assert
        assert response.upvotes == 0
        assert response.was_upvoted is False
