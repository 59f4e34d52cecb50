"""User activity routes.

Accounts live with the identity provider; these routes only filter forum
content by author ID.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from agora.application.usecase.post import ListPostsResponse
from agora.application.usecase.user import (
    ListUserCommentsRequest,
    ListUserCommentsResponse,
    ListUserCommentsUseCase,
    ListUserPostsRequest,
    ListUserPostsUseCase,
)
from agora.domain.service import JWTService
from agora.interface.api.actor import actor_id, current_actor

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/{user_id}/posts", response_model=ListPostsResponse)
async def list_user_posts(
    user_id: int,
    list_user_posts_use_case: FromDishka[ListUserPostsUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    auth_token: str | None = Cookie(default=None),
) -> ListPostsResponse:
    """List a user's posts newest first, annotated with the caller's votes."""
    actor = current_actor(jwt_service, auth_token)
    return await list_user_posts_use_case.execute(
        ListUserPostsRequest(
            author_id=user_id, page=page, limit=limit, user_id=actor_id(actor)
        )
    )


@router.get("/{user_id}/comments", response_model=ListUserCommentsResponse)
async def list_user_comments(
    user_id: int,
    list_user_comments_use_case: FromDishka[ListUserCommentsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> ListUserCommentsResponse:
    """List a user's comments across all posts, newest first."""
    return await list_user_comments_use_case.execute(
        ListUserCommentsRequest(author_id=user_id, page=page, limit=limit)
    )
