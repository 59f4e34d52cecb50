"""Per-user activity use cases."""

from .list_user_comments import (
    ListUserCommentsRequest,
    ListUserCommentsResponse,
    ListUserCommentsUseCase,
)
from .list_user_posts import ListUserPostsRequest, ListUserPostsUseCase

__all__ = [
    "ListUserCommentsRequest",
    "ListUserCommentsResponse",
    "ListUserCommentsUseCase",
    "ListUserPostsRequest",
    "ListUserPostsUseCase",
]
