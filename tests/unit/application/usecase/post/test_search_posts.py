"""Unit tests for SearchPostsUseCase."""

import pytest

from agora.application.usecase.post import SearchPostsRequest, SearchPostsUseCase
from agora.domain.error import InvalidInputError
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import VotableType
from tests.conftest import BOB, CAROL, make_comment, make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestSearchPosts:
    """Tests for post search."""

    @pytest.mark.asyncio
    async def test_results_carry_counts_and_viewer_votes(self, unit_env):
        # Arrange
        use_case = await unit_env.get(SearchPostsUseCase)
        post_service = await unit_env.get(PostService)
        hit = await make_post(post_service, title="Async Python")
        await make_post(post_service, title="Gardening")
        await make_comment(await unit_env.get(CommentService), hit.id)
        await (await unit_env.get(VoteService)).downvote(
            VotableType.POST, hit.id, CAROL
        )

        # Act
        response = await use_case.execute(
            SearchPostsRequest(query="async", user_id=CAROL)
        )

        # Assert
        assert response.total == 1
        assert response.total_pages == 1
        item = response.posts[0]
        assert item.post_id == hit.id
        assert item.comment_count == 1
        assert item.was_downvoted is True
        assert item.was_upvoted is False

    @pytest.mark.asyncio
    async def test_pages_through_matches(self, unit_env):
        use_case = await unit_env.get(SearchPostsUseCase)
        post_service = await unit_env.get(PostService)
        for i in range(3):
            await make_post(post_service, author_id=BOB, title=f"Match {i}")

        response = await use_case.execute(
            SearchPostsRequest(query="match", page=2, limit=2)
        )

        assert response.total == 3
        assert response.total_pages == 2
        assert [post.title for post in response.posts] == ["Match 0"]

    @pytest.mark.asyncio
    async def test_blank_query_is_invalid(self, unit_env):
        use_case = await unit_env.get(SearchPostsUseCase)

        with pytest.raises(InvalidInputError):
            await use_case.execute(SearchPostsRequest(query="  "))
