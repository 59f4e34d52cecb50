"""Poll use cases."""

from .create_poll import CreatePollRequest, CreatePollResponse, CreatePollUseCase
from .delete_poll import DeletePollRequest, DeletePollResponse, DeletePollUseCase
from .delete_poll_option import DeletePollOptionRequest, DeletePollOptionUseCase
from .get_poll import GetPollRequest, GetPollUseCase, PollItem, PollOptionItem
from .get_poll_options import GetPollOptionsRequest, GetPollOptionsUseCase
from .get_poll_results import (
    GetPollResultsRequest,
    GetPollResultsUseCase,
    OptionResultItem,
    PollResultsResponse,
)
from .update_poll import UpdatePollRequest, UpdatePollUseCase
from .update_poll_option import UpdatePollOptionRequest, UpdatePollOptionUseCase
from .vote_poll import VotePollRequest, VotePollUseCase

__all__ = [
    "CreatePollRequest",
    "CreatePollResponse",
    "CreatePollUseCase",
    "DeletePollRequest",
    "DeletePollResponse",
    "DeletePollUseCase",
    "DeletePollOptionRequest",
    "DeletePollOptionUseCase",
    "GetPollRequest",
    "GetPollUseCase",
    "PollItem",
    "PollOptionItem",
    "GetPollOptionsRequest",
    "GetPollOptionsUseCase",
    "GetPollResultsRequest",
    "GetPollResultsUseCase",
    "OptionResultItem",
    "PollResultsResponse",
    "UpdatePollRequest",
    "UpdatePollUseCase",
    "UpdatePollOptionRequest",
    "UpdatePollOptionUseCase",
    "VotePollRequest",
    "VotePollUseCase",
]
