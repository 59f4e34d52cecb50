"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Sequence

from agora.domain.model import Comment, Poll, PollOption, PollVote, Post, Vote
from agora.domain.value import (
    Category,
    CommentId,
    PollId,
    PollOptionId,
    PostId,
    PostType,
    UserId,
    Username,
    VotableType,
    VoteDirection,
)


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(row["id"]),
        author_id=UserId(row["author_id"]),
        author_username=Username(row["author_username"]),
        title=row["title"],
        body=row["body"],
        category=Category(row["category"]),
        type=PostType(row["type"]),
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    Username and Category dump to their plain strings.
    """
    data = post.model_dump()
    data["type"] = post.type.value
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        author_id=UserId(row["author_id"]),
        author_username=Username(row["author_username"]),
        body=row["body"],
        parent_id=CommentId(row["parent_id"]) if row.get("parent_id") else None,
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_vote(row: Dict[str, Any], votable_type: VotableType) -> Vote:
    """Convert a post_votes or comment_votes row to a Vote.

    The ledger tables do not store the votable type; it is implied by the
    table the row was read from.
    """
    return Vote(
        user_id=UserId(row["user_id"]),
        votable_type=votable_type,
        votable_id=row["votable_id"],
        direction=VoteDirection(row["direction"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to a ledger table dict."""
    data = vote.model_dump(exclude={"votable_type"})
    data["direction"] = vote.direction.value
    return data


def row_to_poll_option(row: Dict[str, Any]) -> PollOption:
    """Convert database row to PollOption domain model."""
    return PollOption(
        id=PollOptionId(row["id"]),
        poll_id=PollId(row["poll_id"]),
        text=row["text"],
        vote_count=row["vote_count"],
    )


def row_to_poll(row: Dict[str, Any], option_rows: Sequence[Dict[str, Any]]) -> Poll:
    """Convert a polls row plus its option rows to a Poll aggregate.

    Args:
        row: polls row as dict
        option_rows: poll_options rows, already ordered

    Returns:
        Poll domain model
    """
    return Poll(
        id=PollId(row["id"]),
        post_id=PostId(row["post_id"]),
        multiple_choice=row["multiple_choice"],
        expires_at=row.get("expires_at"),
        options=[row_to_poll_option(option) for option in option_rows],
        created_at=row["created_at"],
    )


def poll_to_dict(poll: Poll) -> Dict[str, Any]:
    """Convert Poll domain model to a polls table dict (options excluded)."""
    return poll.model_dump(exclude={"options"})


def poll_option_to_dict(option: PollOption) -> Dict[str, Any]:
    """Convert PollOption domain model to database dict."""
    return option.model_dump()


def row_to_poll_vote(row: Dict[str, Any]) -> PollVote:
    """Convert database row to PollVote domain model."""
    return PollVote(
        user_id=UserId(row["user_id"]),
        poll_id=PollId(row["poll_id"]),
        option_id=PollOptionId(row["option_id"]),
        created_at=row["created_at"],
    )


def poll_vote_to_dict(vote: PollVote) -> Dict[str, Any]:
    """Convert PollVote domain model to database dict."""
    return vote.model_dump()
