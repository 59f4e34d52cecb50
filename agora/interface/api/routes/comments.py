"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from agora.application.usecase.comment import (
    CommentItem,
    CommentNode,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    GetCommentUseCase,
    ReplyToCommentRequest,
    ReplyToCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from agora.domain.service import JWTService
from agora.interface.api.actor import actor_id, current_actor, require_actor

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    body: str = Field(min_length=1, max_length=10000)
    parent_id: int | None = None  # Parent comment ID for replies


class ReplyAPIRequest(BaseModel):
    body: str = Field(min_length=1, max_length=10000)


class UpdateCommentAPIRequest(BaseModel):
    body: str | None = Field(default=None, min_length=1, max_length=10000)


@router.get("/posts/{post_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    post_id: int,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    depth: int | None = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetCommentsResponse:
    """Get the comment tree of a post.

    Args:
        post_id: Post ID
        depth: Reply levels to expand below the top-level comments
        auth_token: JWT token from cookie (optional)
    """
    actor = current_actor(jwt_service, auth_token)
    return await get_comments_use_case.execute(
        GetCommentsRequest(post_id=post_id, depth=depth, user_id=actor_id(actor))
    )


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentItem:
    """Create a comment on a post or reply to another comment.

    Requires authentication.
    """
    actor = require_actor(jwt_service, auth_token, "create comments")
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            post_id=post_id,
            body=request.body,
            parent_id=request.parent_id,
            author_id=actor.user_id,
            author_username=actor.username,
        )
    )


@router.get("/comments/{comment_id}", response_model=CommentNode)
async def get_comment(
    comment_id: int,
    get_comment_use_case: FromDishka[GetCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentNode:
    """Get a comment with its direct replies."""
    actor = current_actor(jwt_service, auth_token)
    return await get_comment_use_case.execute(
        GetCommentRequest(comment_id=comment_id, user_id=actor_id(actor))
    )


@router.post(
    "/comments/{comment_id}/reply",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def reply_to_comment(
    comment_id: int,
    request: ReplyAPIRequest,
    reply_use_case: FromDishka[ReplyToCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentItem:
    """Reply to a comment.

    Requires authentication.
    """
    actor = require_actor(jwt_service, auth_token, "reply to comments")
    return await reply_use_case.execute(
        ReplyToCommentRequest(
            comment_id=comment_id,
            body=request.body,
            author_id=actor.user_id,
            author_username=actor.username,
        )
    )


@router.patch("/comments/{comment_id}", response_model=CommentItem)
async def update_comment(
    comment_id: int,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentItem:
    """Edit a comment.

    Only the comment author can edit.
    """
    actor = require_actor(jwt_service, auth_token, "edit comments")
    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=comment_id, user_id=actor.user_id, body=request.body
        )
    )


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: int,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment and every reply below it.

    Only the comment author can delete.
    """
    actor = require_actor(jwt_service, auth_token, "delete comments")
    return await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=comment_id, user_id=actor.user_id)
    )
