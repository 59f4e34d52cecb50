"""Test configuration and fixtures."""

from agora.config import AuthSettings
from agora.domain.model import Comment, Post
from agora.domain.service import CommentService, PostService
from agora.domain.value import Category, CommentId, PostId, UserId, Username
from agora.util.jwt import create_token

ALICE = UserId(1)
BOB = UserId(2)
CAROL = UserId(3)

USERNAMES = {ALICE: "alice", BOB: "bob", CAROL: "carol"}


def username(user_id: UserId) -> Username:
    return Username(USERNAMES.get(user_id, f"user{user_id}"))


def auth_cookie(user_id: UserId, settings: AuthSettings | None = None) -> dict[str, str]:
    """Cookie jar entry for a signed-in user."""
    token = create_token(
        user_id, str(username(user_id)), settings or AuthSettings()
    )
    return {"auth_token": token}


async def make_post(
    post_service: PostService,
    author_id: UserId = ALICE,
    title: str = "Test Post",
    body: str = "Test content",
    category: str = "General",
) -> Post:
    return await post_service.create_post(
        author_id=author_id,
        author_username=username(author_id),
        title=title,
        body=body,
        category=Category(category),
    )


async def make_comment(
    comment_service: CommentService,
    post_id: PostId,
    author_id: UserId = BOB,
    body: str = "Test comment",
    parent_id: CommentId | None = None,
) -> Comment:
    return await comment_service.create_comment(
        post_id=post_id,
        author_id=author_id,
        author_username=username(author_id),
        body=body,
        parent_id=parent_id,
    )
