"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .comment_tree_service import CommentTreeNode, CommentTreeService
from .jwt_service import JWTService
from .poll_service import PollService
from .post_service import PostService
from .vote_service import VoteService

__all__ = [
    "CommentService",
    "CommentTreeNode",
    "CommentTreeService",
    "JWTService",
    "PollService",
    "PostService",
    "Service",
    "VoteService",
]
