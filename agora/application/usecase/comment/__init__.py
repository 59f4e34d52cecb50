"""Comment use cases."""

from .create_comment import CommentItem, CreateCommentRequest, CreateCommentUseCase
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comment import GetCommentRequest, GetCommentUseCase
from .get_comments import (
    CommentNode,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from .reply_to_comment import ReplyToCommentRequest, ReplyToCommentUseCase
from .update_comment import UpdateCommentRequest, UpdateCommentUseCase

__all__ = [
    "CommentItem",
    "CommentNode",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentRequest",
    "GetCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "ReplyToCommentRequest",
    "ReplyToCommentUseCase",
    "UpdateCommentRequest",
    "UpdateCommentUseCase",
]
