"""Unit tests for CommentService."""

import pytest

from agora.domain.error import InvalidInputError, NotAuthorizedError, NotFoundError
from agora.domain.model import CommentUpdate
from agora.domain.repository import CommentRepository, VoteRepository
from agora.domain.service import CommentService, PostService, VoteService
from agora.domain.value import VotableType
from tests.conftest import ALICE, BOB, CAROL, make_comment, make_post, username
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment and reply."""

    @pytest.mark.asyncio
    async def test_top_level_comment(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostService))

        comment = await make_comment(comment_service, post.id, body="First!")

        assert comment.post_id == post.id
        assert comment.parent_id is None
        assert comment.body == "First!"

    @pytest.mark.asyncio
    async def test_comment_on_unknown_post_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError) as exc_info:
            await make_comment(comment_service, 404)
        assert exc_info.value.resource == "Post"

    @pytest.mark.asyncio
    async def test_missing_parent_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostService))

        with pytest.raises(NotFoundError) as exc_info:
            await make_comment(comment_service, post.id, parent_id=999)
        assert exc_info.value.resource == "Comment"

    @pytest.mark.asyncio
    async def test_parent_on_other_post_is_invalid(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_service = await unit_env.get(PostService)
        post = await make_post(post_service)
        other = await make_post(post_service)
        foreign_parent = await make_comment(comment_service, other.id)

        # Act & Assert
        with pytest.raises(InvalidInputError):
            await make_comment(comment_service, post.id, parent_id=foreign_parent.id)

    @pytest.mark.asyncio
    async def test_reply_lands_on_parents_post(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostService))
        parent = await make_comment(comment_service, post.id)

        # Act
        reply = await comment_service.reply(
            comment_id=parent.id,
            author_id=CAROL,
            author_username=username(CAROL),
            body="Agreed",
        )

        # Assert
        assert reply.post_id == post.id
        assert reply.parent_id == parent.id

    @pytest.mark.asyncio
    async def test_reply_to_unknown_comment_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.reply(
                comment_id=31337,
                author_id=CAROL,
                author_username=username(CAROL),
                body="Hello?",
            )


class TestUpdateComment:
    """Tests for update_comment."""

    @pytest.mark.asyncio
    async def test_author_can_edit_body(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostService))
        comment = await make_comment(comment_service, post.id, author_id=BOB)

        updated = await comment_service.update_comment(
            comment.id, CommentUpdate(body="Edited"), BOB
        )

        assert updated.body == "Edited"

    @pytest.mark.asyncio
    async def test_other_user_cannot_edit(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostService))
        comment = await make_comment(comment_service, post.id, author_id=BOB)

        with pytest.raises(NotAuthorizedError):
            await comment_service.update_comment(
                comment.id, CommentUpdate(body="Hijacked"), ALICE
            )


class TestDeleteComment:
    """Tests for delete_comment."""

    @pytest.mark.asyncio
    async def test_delete_removes_subtree_and_its_votes(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        vote_repo = await unit_env.get(VoteRepository)
        post = await make_post(await unit_env.get(PostService))
        root = await make_comment(comment_service, post.id, author_id=BOB)
        child = await make_comment(comment_service, post.id, parent_id=root.id)
        grandchild = await make_comment(comment_service, post.id, parent_id=child.id)
        sibling = await make_comment(comment_service, post.id, body="untouched")
        await vote_service.upvote(VotableType.COMMENT, grandchild.id, CAROL)

        # Act
        deleted = await comment_service.delete_comment(root.id, BOB)

        # Assert
        assert deleted == 3
        for comment in (root, child, grandchild):
            assert await comment_repo.find_by_id(comment.id) is None
        assert await comment_repo.find_by_id(sibling.id) is not None
        assert await vote_repo.find(CAROL, VotableType.COMMENT, grandchild.id) is None
        assert await comment_service.count_comments([post.id]) == {post.id: 1}

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostService))
        comment = await make_comment(comment_service, post.id, author_id=BOB)

        with pytest.raises(NotAuthorizedError):
            await comment_service.delete_comment(comment.id, CAROL)

    @pytest.mark.asyncio
    async def test_delete_unknown_comment_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(8, BOB)


class TestCountComments:
    """Tests for count_comments."""

    @pytest.mark.asyncio
    async def test_counts_per_post(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_service = await unit_env.get(PostService)
        busy = await make_post(post_service)
        quiet = await make_post(post_service)
        root = await make_comment(comment_service, busy.id)
        await make_comment(comment_service, busy.id, parent_id=root.id)

        # Act
        counts = await comment_service.count_comments([busy.id, quiet.id])

        # Assert
        assert counts.get(busy.id) == 2
        assert counts.get(quiet.id, 0) == 0

    @pytest.mark.asyncio
    async def test_no_posts_gives_empty_mapping(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        assert await comment_service.count_comments([]) == {}


class TestListByAuthor:
    """Tests for list_by_author."""

    @pytest.mark.asyncio
    async def test_lists_across_posts_newest_first(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_service = await unit_env.get(PostService)
        first_post = await make_post(post_service)
        second_post = await make_post(post_service)
        older = await make_comment(comment_service, first_post.id, author_id=CAROL)
        await make_comment(comment_service, first_post.id, author_id=BOB)
        newer = await make_comment(comment_service, second_post.id, author_id=CAROL)

        # Act
        comments, total = await comment_service.list_by_author(
            CAROL, limit=10, offset=0
        )

        # Assert
        assert total == 2
        assert [comment.id for comment in comments] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_pagination_keeps_total(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        post = await make_post(await unit_env.get(PostService))
        for _ in range(3):
            await make_comment(comment_service, post.id, author_id=BOB)

        comments, total = await comment_service.list_by_author(BOB, limit=2, offset=2)

        assert total == 3
        assert len(comments) == 1
