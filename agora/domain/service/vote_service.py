"""Vote domain service."""

from typing import Sequence, Union

import logfire
from sqlalchemy.exc import IntegrityError

from agora.config import VotingSettings
from agora.domain.error import (
    AuthenticationRequiredError,
    ConflictError,
    NotFoundError,
)
from agora.domain.model import Comment, Post, Vote
from agora.domain.repository import (
    CommentRepository,
    PostRepository,
    TransactionManager,
    VotableRepository,
    VoteRepository,
)
from agora.domain.value import ConflictReason, UserId, VotableType, VoteDirection

from .base import Service

Votable = Union[Post, Comment]


class VoteService(Service):
    """Domain service for the post and comment vote ledger.

    Each authenticated user holds at most one vote per target, either up or
    down. Casting or removing a vote writes one ledger row and moves one
    counter on the target, both inside a single atomic block that starts by
    locking the target row.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        transaction_manager: TransactionManager,
        voting_settings: VotingSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Ledger repository
            post_repository: Post repository (post counters)
            comment_repository: Comment repository (comment counters)
            transaction_manager: Atomic block provider
            voting_settings: Voting configuration
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.transaction_manager = transaction_manager
        self.voting_settings = voting_settings

    def _targets(self, votable_type: VotableType) -> VotableRepository:
        if votable_type == VotableType.POST:
            return self.post_repository
        return self.comment_repository

    async def upvote(
        self,
        votable_type: VotableType,
        votable_id: int,
        user_id: UserId | None,
    ) -> Votable:
        """Upvote a post or comment.

        Args:
            votable_type: Post or comment
            votable_id: Target ID
            user_id: Voting user, None for an anonymous vote

        Returns:
            The target with refreshed counters

        Raises:
            NotFoundError: If the target does not exist
            AuthenticationRequiredError: If anonymous votes are disabled
            ConflictError: ALREADY_VOTED or OPPOSITE_VOTE_EXISTS
        """
        return await self._cast(votable_type, votable_id, user_id, VoteDirection.UPVOTE)

    async def downvote(
        self,
        votable_type: VotableType,
        votable_id: int,
        user_id: UserId | None,
    ) -> Votable:
        """Downvote a post or comment. Mirror image of ``upvote``."""
        return await self._cast(
            votable_type, votable_id, user_id, VoteDirection.DOWNVOTE
        )

    async def remove_upvote(
        self, votable_type: VotableType, votable_id: int, user_id: UserId
    ) -> Votable:
        """Withdraw the user's upvote.

        Returns:
            The target with refreshed counters

        Raises:
            NotFoundError: If the target or the user's vote does not exist
            ConflictError: WRONG_DIRECTION if the user downvoted instead
        """
        return await self._remove(
            votable_type, votable_id, user_id, VoteDirection.UPVOTE
        )

    async def remove_downvote(
        self, votable_type: VotableType, votable_id: int, user_id: UserId
    ) -> Votable:
        """Withdraw the user's downvote. Mirror image of ``remove_upvote``."""
        return await self._remove(
            votable_type, votable_id, user_id, VoteDirection.DOWNVOTE
        )

    async def _cast(
        self,
        votable_type: VotableType,
        votable_id: int,
        user_id: UserId | None,
        direction: VoteDirection,
    ) -> Votable:
        targets = self._targets(votable_type)
        with logfire.span(
            "vote_service.cast",
            votable_type=votable_type.value,
            votable_id=votable_id,
            user_id=user_id,
            direction=direction.value,
        ):
            async with self.transaction_manager.atomic():
                target = await targets.lock_by_id(votable_id)
                if target is None:
                    logfire.warn(
                        "Vote on non-existent target",
                        votable_type=votable_type.value,
                        votable_id=votable_id,
                    )
                    raise NotFoundError(votable_type.value.capitalize(), votable_id)

                if user_id is None:
                    if not self.voting_settings.allow_anonymous_votes:
                        raise AuthenticationRequiredError(
                            f"{direction.value} a {votable_type.value}"
                        )
                    await targets.adjust_vote_count(votable_id, direction, 1)
                    logfire.info(
                        "Anonymous vote counted",
                        votable_type=votable_type.value,
                        votable_id=votable_id,
                        direction=direction.value,
                    )
                    return await self._refresh(targets, votable_type, votable_id)

                existing = await self.vote_repository.find(
                    user_id, votable_type, votable_id
                )
                if existing is not None:
                    self._reject_existing(existing, direction)

                vote = Vote(
                    user_id=user_id,
                    votable_type=votable_type,
                    votable_id=votable_id,
                    direction=direction,
                )
                try:
                    await self.vote_repository.save(vote)
                except IntegrityError:
                    logfire.warn(
                        "Duplicate vote attempt",
                        user_id=user_id,
                        votable_type=votable_type.value,
                        votable_id=votable_id,
                    )
                    raise ConflictError(
                        ConflictReason.ALREADY_VOTED,
                        f"User has already voted on this {votable_type.value}",
                    )

                await targets.adjust_vote_count(votable_id, direction, 1)
                logfire.info(
                    "Vote recorded",
                    user_id=user_id,
                    votable_type=votable_type.value,
                    votable_id=votable_id,
                    direction=direction.value,
                )
                return await self._refresh(targets, votable_type, votable_id)

    def _reject_existing(self, existing: Vote, direction: VoteDirection) -> None:
        kind = existing.votable_type.value
        if existing.direction == direction:
            raise ConflictError(
                ConflictReason.ALREADY_VOTED,
                f"User has already {direction.value}d this {kind}",
            )
        raise ConflictError(
            ConflictReason.OPPOSITE_VOTE_EXISTS,
            f"Cannot {direction.value} a {kind} you have already "
            f"{existing.direction.value}d. Remove your {existing.direction.value} first.",
        )

    async def _remove(
        self,
        votable_type: VotableType,
        votable_id: int,
        user_id: UserId,
        direction: VoteDirection,
    ) -> Votable:
        targets = self._targets(votable_type)
        with logfire.span(
            "vote_service.remove",
            votable_type=votable_type.value,
            votable_id=votable_id,
            user_id=user_id,
            direction=direction.value,
        ):
            async with self.transaction_manager.atomic():
                target = await targets.lock_by_id(votable_id)
                if target is None:
                    logfire.warn(
                        "Vote removal on non-existent target",
                        votable_type=votable_type.value,
                        votable_id=votable_id,
                    )
                    raise NotFoundError(votable_type.value.capitalize(), votable_id)

                existing = await self.vote_repository.find(
                    user_id, votable_type, votable_id
                )
                if existing is None:
                    logfire.info(
                        "No vote to remove",
                        user_id=user_id,
                        votable_type=votable_type.value,
                        votable_id=votable_id,
                    )
                    raise NotFoundError("Vote", f"{votable_type.value} {votable_id}")

                if existing.direction != direction:
                    raise ConflictError(
                        ConflictReason.WRONG_DIRECTION,
                        f"User has not {direction.value}d this {votable_type.value}",
                    )

                await self.vote_repository.delete(user_id, votable_type, votable_id)
                await targets.adjust_vote_count(votable_id, direction, -1)
                logfire.info(
                    "Vote removed",
                    user_id=user_id,
                    votable_type=votable_type.value,
                    votable_id=votable_id,
                    direction=direction.value,
                )
                return await self._refresh(targets, votable_type, votable_id)

    async def _refresh(
        self, targets: VotableRepository, votable_type: VotableType, votable_id: int
    ) -> Votable:
        target = await targets.find_by_id(votable_id)
        if target is None:
            raise NotFoundError(votable_type.value.capitalize(), votable_id)
        return target

    async def get_user_votes(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[int],
    ) -> dict[int, VoteDirection]:
        """Look up a user's vote direction on many items at once.

        Args:
            user_id: User ID
            votable_type: Type of the items
            votable_ids: Item IDs to check

        Returns:
            Mapping of item ID to direction; items without a vote are absent
        """
        if not votable_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_user_and_votables(
            user_id=user_id,
            votable_type=votable_type,
            votable_ids=votable_ids,
        )
        return {vote.votable_id: vote.direction for vote in votes}
