"""Unit tests for the per-user post and comment listings."""

import pytest

from agora.application.usecase.user import (
    ListUserCommentsRequest,
    ListUserCommentsUseCase,
    ListUserPostsRequest,
    ListUserPostsUseCase,
)
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import VotableType
from tests.conftest import ALICE, BOB, CAROL, make_comment, make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestListUserPosts:
    @pytest.mark.asyncio
    async def test_only_authors_posts_with_viewer_votes(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        mine = await make_post(post_service, author_id=BOB, title="Bob's")
        await make_post(post_service, author_id=ALICE, title="Alice's")
        await (await unit_env.get(VoteService)).upvote(
            VotableType.POST, mine.id, CAROL
        )
        use_case = await unit_env.get(ListUserPostsUseCase)

        # Act
        response = await use_case.execute(
            ListUserPostsRequest(author_id=BOB, user_id=CAROL)
        )

        # Assert
        assert response.total == 1
        assert response.posts[0].title == "Bob's"
        assert response.posts[0].upvotes == 1
        assert response.posts[0].was_upvoted is True

    @pytest.mark.asyncio
    async def test_user_without_posts_gets_empty_page(self, unit_env):
        use_case = await unit_env.get(ListUserPostsUseCase)

        response = await use_case.execute(ListUserPostsRequest(author_id=CAROL))

        assert response.posts == []
        assert response.total == 0
        assert response.total_pages == 0


class TestListUserComments:
    @pytest.mark.asyncio
    async def test_comments_point_at_their_posts(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        first = await make_post(post_service, title="First")
        second = await make_post(post_service, title="Second")
        root = await make_comment(comment_service, first.id, author_id=CAROL)
        await make_comment(comment_service, first.id, author_id=BOB, parent_id=root.id)
        await make_comment(comment_service, second.id, author_id=CAROL, body="Later")
        use_case = await unit_env.get(ListUserCommentsUseCase)

        # Act
        response = await use_case.execute(ListUserCommentsRequest(author_id=CAROL))

        # Assert
        assert response.total == 2
        assert [c.post_id for c in response.comments] == [second.id, first.id]
        assert response.comments[0].body == "Later"
        assert all(c.author_id == CAROL for c in response.comments)
