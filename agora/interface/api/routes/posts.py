"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from agora.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    PostItem,
    SearchPostsRequest,
    SearchPostsUseCase,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from agora.domain.service import JWTService
from agora.domain.value import PostType
from agora.interface.api.actor import actor_id, current_actor, require_actor

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a text post."""

    title: str = Field(min_length=1, max_length=300)
    body: str = Field(default="", max_length=10000)
    category: str = Field(default="General", min_length=1, max_length=50)


class UpdatePostAPIRequest(BaseModel):
    """API request for editing a post."""

    title: str | None = Field(default=None, min_length=1, max_length=300)
    body: str | None = Field(default=None, max_length=10000)
    category: str | None = Field(default=None, min_length=1, max_length=50)


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    type: PostType | None = None,
    category: str | None = Query(default=None, min_length=1, max_length=50),
    auth_token: str | None = Cookie(default=None),
) -> ListPostsResponse:
    """List posts newest first.

    Args:
        page: 1-based page number
        limit: Page size, capped by the pagination settings
        type: Only posts of this type
        category: Only posts in this category
        auth_token: JWT token from cookie (optional)
    """
    actor = current_actor(jwt_service, auth_token)
    return await list_posts_use_case.execute(
        ListPostsRequest(
            page=page,
            limit=limit,
            type=type,
            category=category,
            user_id=actor_id(actor),
        )
    )


@router.get("/search", response_model=ListPostsResponse)
async def search_posts(
    search_posts_use_case: FromDishka[SearchPostsUseCase],
    jwt_service: FromDishka[JWTService],
    q: str = Query(min_length=1, max_length=200),
    type: PostType | None = None,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    auth_token: str | None = Cookie(default=None),
) -> ListPostsResponse:
    """Find posts whose title or body contains the query, ignoring case."""
    actor = current_actor(jwt_service, auth_token)
    return await search_posts_use_case.execute(
        SearchPostsRequest(
            query=q, page=page, limit=limit, type=type, user_id=actor_id(actor)
        )
    )


@router.post("", response_model=PostItem, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostItem:
    """Create a new text post.

    Requires authentication.
    """
    actor = require_actor(jwt_service, auth_token, "create posts")
    return await create_post_use_case.execute(
        CreatePostRequest(
            title=request.title,
            body=request.body,
            category=request.category,
            author_id=actor.user_id,
            author_username=actor.username,
        )
    )


@router.get("/{post_id}", response_model=PostItem)
async def get_post(
    post_id: int,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostItem:
    """Get a post by ID."""
    actor = current_actor(jwt_service, auth_token)
    return await get_post_use_case.execute(
        GetPostRequest(post_id=post_id, user_id=actor_id(actor))
    )


@router.patch("/{post_id}", response_model=PostItem)
async def update_post(
    post_id: int,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostItem:
    """Edit a post.

    Only the post author can edit.
    """
    actor = require_actor(jwt_service, auth_token, "edit posts")
    return await update_post_use_case.execute(
        UpdatePostRequest(
            post_id=post_id,
            user_id=actor.user_id,
            title=request.title,
            body=request.body,
            category=request.category,
        )
    )


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: int,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeletePostResponse:
    """Delete a post with its comments, poll and votes.

    Only the post author can delete.
    """
    actor = require_actor(jwt_service, auth_token, "delete posts")
    return await delete_post_use_case.execute(
        DeletePostRequest(post_id=post_id, user_id=actor.user_id)
    )
