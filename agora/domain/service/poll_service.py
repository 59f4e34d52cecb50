"""Poll domain service."""

from datetime import datetime
from typing import Optional, Sequence

import logfire

from agora.domain.error import (
    ConflictError,
    InvalidInputError,
    NotAuthorizedError,
    NotFoundError,
)
from agora.domain.model import (
    MAX_OPTION_TEXT,
    MIN_POLL_OPTIONS,
    Poll,
    PollOption,
    PollResults,
    PollUpdate,
    PollVote,
    Post,
)
from agora.domain.model.common import utcnow
from agora.domain.repository import (
    PollRepository,
    PollVoteRepository,
    PostRepository,
    TransactionManager,
)
from agora.domain.value import (
    Category,
    ConflictReason,
    PollId,
    PollOptionId,
    PostType,
    UserId,
    Username,
)

from .base import Service
from .post_service import PostService


class PollService(Service):
    """Domain service for polls and their ballots.

    Option counters are caches of the ballot rows. Every ballot change
    happens inside one atomic block that starts by locking the poll row, so
    concurrent ballots on one poll are applied one after another.
    """

    def __init__(
        self,
        poll_repository: PollRepository,
        poll_vote_repository: PollVoteRepository,
        post_repository: PostRepository,
        post_service: PostService,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize poll service.

        Args:
            poll_repository: Poll repository
            poll_vote_repository: Ballot repository
            post_repository: Post repository (ownership checks)
            post_service: Post service (poll post creation and deletion)
            transaction_manager: Atomic block provider
        """
        self.poll_repository = poll_repository
        self.poll_vote_repository = poll_vote_repository
        self.post_repository = post_repository
        self.post_service = post_service
        self.transaction_manager = transaction_manager

    async def create_poll(
        self,
        author_id: UserId,
        author_username: Username,
        title: str,
        body: str,
        category: Category,
        options: Sequence[str],
        multiple_choice: bool = False,
        expires_at: Optional[datetime] = None,
    ) -> tuple[Post, Poll]:
        """Create a poll post together with its poll and options.

        Returns:
            The new post and its poll

        Raises:
            InvalidInputError: If fewer than two options are given, an option
                text is blank or too long, or the expiry lies in the past
        """
        with logfire.span(
            "poll_service.create_poll",
            author_id=author_id,
            option_count=len(options),
            multiple_choice=multiple_choice,
        ):
            if len(options) < MIN_POLL_OPTIONS:
                raise InvalidInputError(
                    f"A poll needs at least {MIN_POLL_OPTIONS} options"
                )
            for text in options:
                _check_option_text(text)

            poll_draft = PollUpdate(expires_at=expires_at)
            if poll_draft.expires_at is not None and poll_draft.expires_at <= utcnow():
                raise InvalidInputError("Poll expiry must be in the future")

            async with self.transaction_manager.atomic():
                post = await self.post_service.create_post(
                    author_id=author_id,
                    author_username=author_username,
                    title=title,
                    body=body,
                    category=category,
                    post_type=PostType.POLL,
                )
                poll_id = await self.poll_repository.next_id()
                poll = Poll(
                    id=poll_id,
                    post_id=post.id,
                    multiple_choice=multiple_choice,
                    expires_at=poll_draft.expires_at,
                    options=[
                        PollOption(
                            id=await self.poll_repository.next_option_id(),
                            poll_id=poll_id,
                            text=text,
                        )
                        for text in options
                    ],
                )
                saved = await self.poll_repository.save(poll)

            logfire.info(
                "Poll created",
                poll_id=saved.id,
                post_id=post.id,
                option_count=len(saved.options),
            )
            return post, saved

    async def get_poll(self, poll_id: PollId) -> Poll:
        """Get a poll with its options.

        Raises:
            NotFoundError: If the poll does not exist
        """
        with logfire.span("poll_service.get_poll", poll_id=poll_id):
            poll = await self.poll_repository.find_by_id(poll_id)
            if poll is None:
                logfire.warn("Poll not found", poll_id=poll_id)
                raise NotFoundError("Poll", poll_id)
            return poll

    async def get_user_selection(
        self, poll_id: PollId, user_id: UserId
    ) -> set[PollOptionId]:
        """Option IDs the user currently holds on a poll."""
        ballots = await self.poll_vote_repository.find_by_user_and_poll(
            user_id, poll_id
        )
        return {ballot.option_id for ballot in ballots}

    async def vote(
        self,
        poll_id: PollId,
        user_id: UserId,
        option_ids: Sequence[PollOptionId],
    ) -> PollResults:
        """Cast a ballot.

        On a single-choice poll the user's previous choice is withdrawn
        before the new one is recorded. On a multiple-choice poll each option
        is added once; options the user already holds are not counted again.

        Args:
            poll_id: Poll ID
            user_id: Voting user
            option_ids: Chosen options; duplicates are collapsed

        Returns:
            Results after the ballot

        Raises:
            NotFoundError: If the poll does not exist
            ConflictError: EXPIRED if the poll stopped accepting ballots
            InvalidInputError: If the ballot is empty, names several options
                on a single-choice poll, or names an option of another poll
        """
        chosen = list(dict.fromkeys(option_ids))
        with logfire.span(
            "poll_service.vote",
            poll_id=poll_id,
            user_id=user_id,
            option_ids=chosen,
        ):
            async with self.transaction_manager.atomic():
                poll = await self.poll_repository.lock_by_id(poll_id)
                if poll is None:
                    logfire.warn("Ballot on non-existent poll", poll_id=poll_id)
                    raise NotFoundError("Poll", poll_id)
                if poll.is_expired():
                    logfire.info("Ballot on expired poll", poll_id=poll_id)
                    raise ConflictError(ConflictReason.EXPIRED, "Poll has expired")
                self._validate_ballot(poll, chosen)

                held = await self.get_user_selection(poll_id, user_id)

                if not poll.multiple_choice:
                    for option_id in held - set(chosen):
                        await self.poll_vote_repository.delete(user_id, option_id)
                        await self.poll_repository.adjust_option_count(option_id, -1)

                added = 0
                for option_id in chosen:
                    if option_id in held:
                        continue
                    # Ballots on one poll are serialized by the poll row lock
                    await self.poll_vote_repository.save(
                        PollVote(user_id=user_id, poll_id=poll_id, option_id=option_id)
                    )
                    await self.poll_repository.adjust_option_count(option_id, 1)
                    added += 1

                logfire.info(
                    "Ballot recorded",
                    poll_id=poll_id,
                    user_id=user_id,
                    added=added,
                )
                return await self._results(poll_id)

    def _validate_ballot(self, poll: Poll, chosen: list[PollOptionId]) -> None:
        if not chosen:
            raise InvalidInputError("At least one option must be selected")
        if not poll.multiple_choice and len(chosen) > 1:
            raise InvalidInputError("Multiple choice not allowed for this poll")
        foreign = [option_id for option_id in chosen if option_id not in poll.option_ids()]
        if foreign:
            logfire.warn("Ballot names unknown options", poll_id=poll.id, option_ids=foreign)
            raise InvalidInputError(
                f"Options do not belong to poll {poll.id}: "
                + ", ".join(str(option_id) for option_id in foreign)
            )

    async def results(self, poll_id: PollId) -> PollResults:
        """Current tally of a poll.

        Raises:
            NotFoundError: If the poll does not exist
        """
        with logfire.span("poll_service.results", poll_id=poll_id):
            return await self._results(poll_id)

    async def _results(self, poll_id: PollId) -> PollResults:
        poll = await self.poll_repository.find_by_id(poll_id)
        if poll is None:
            raise NotFoundError("Poll", poll_id)
        return PollResults.from_poll(poll)

    async def update_poll(
        self, poll_id: PollId, update: PollUpdate, user_id: UserId
    ) -> Poll:
        """Change poll settings.

        Raises:
            NotFoundError: If the poll does not exist
            NotAuthorizedError: If the user does not own the poll's post
            ConflictError: EXPIRED if the poll already expired
        """
        with logfire.span(
            "poll_service.update_poll", poll_id=poll_id, user_id=user_id
        ):
            async with self.transaction_manager.atomic():
                poll = await self.poll_repository.lock_by_id(poll_id)
                if poll is None:
                    raise NotFoundError("Poll", poll_id)
                await self._ensure_owner(poll, user_id)
                if poll.is_expired():
                    raise ConflictError(
                        ConflictReason.EXPIRED, "Cannot edit an expired poll"
                    )
                if update.is_empty:
                    return poll

                updated = await self.poll_repository.update(poll_id, update)
                if updated is None:
                    raise NotFoundError("Poll", poll_id)
                logfire.info(
                    "Poll updated",
                    poll_id=poll_id,
                    multiple_choice=updated.multiple_choice,
                    expires_at=updated.expires_at,
                )
                return updated

    async def update_option(
        self,
        poll_id: PollId,
        option_id: PollOptionId,
        text: str,
        user_id: UserId,
    ) -> PollOption:
        """Change the text of an option.

        Raises:
            NotFoundError: If the poll or the option does not exist
            NotAuthorizedError: If the user does not own the poll's post
            InvalidInputError: If the text is blank or too long
        """
        _check_option_text(text)
        with logfire.span(
            "poll_service.update_option",
            poll_id=poll_id,
            option_id=option_id,
            user_id=user_id,
        ):
            poll = await self.get_poll(poll_id)
            if poll.get_option(option_id) is None:
                raise NotFoundError("Poll option", option_id)
            await self._ensure_owner(poll, user_id)

            updated = await self.poll_repository.update_option_text(option_id, text)
            if updated is None:
                raise NotFoundError("Poll option", option_id)
            logfire.info("Poll option updated", poll_id=poll_id, option_id=option_id)
            return updated

    async def delete_option(
        self, poll_id: PollId, option_id: PollOptionId, user_id: UserId
    ) -> None:
        """Delete an option and the ballots cast for it.

        Raises:
            NotFoundError: If the poll or the option does not exist
            NotAuthorizedError: If the user does not own the poll's post
            ConflictError: MINIMUM_OPTIONS if the poll would drop below two
                options
        """
        with logfire.span(
            "poll_service.delete_option",
            poll_id=poll_id,
            option_id=option_id,
            user_id=user_id,
        ):
            async with self.transaction_manager.atomic():
                poll = await self.poll_repository.lock_by_id(poll_id)
                if poll is None:
                    raise NotFoundError("Poll", poll_id)
                if poll.get_option(option_id) is None:
                    raise NotFoundError("Poll option", option_id)
                await self._ensure_owner(poll, user_id)
                if len(poll.options) <= MIN_POLL_OPTIONS:
                    raise ConflictError(
                        ConflictReason.MINIMUM_OPTIONS,
                        f"Cannot delete option. Poll must have at least "
                        f"{MIN_POLL_OPTIONS} options",
                    )

                removed = await self.poll_vote_repository.delete_by_option(option_id)
                await self.poll_repository.delete_option(option_id)
                logfire.info(
                    "Poll option deleted",
                    poll_id=poll_id,
                    option_id=option_id,
                    removed_ballots=removed,
                )

    async def delete_poll(self, poll_id: PollId, user_id: UserId) -> None:
        """Delete a poll together with its post.

        Raises:
            NotFoundError: If the poll does not exist
            NotAuthorizedError: If the user does not own the poll's post
        """
        with logfire.span(
            "poll_service.delete_poll", poll_id=poll_id, user_id=user_id
        ):
            poll = await self.get_poll(poll_id)
            await self._ensure_owner(poll, user_id)
            # The post cascade removes ballots, options and the poll row
            await self.post_service.delete_post(poll.post_id, user_id)
            logfire.info("Poll deleted", poll_id=poll_id, post_id=poll.post_id)

    async def _ensure_owner(self, poll: Poll, user_id: UserId) -> None:
        post = await self.post_repository.find_by_id(poll.post_id)
        if post is None:
            raise NotFoundError("Post", poll.post_id)
        if post.author_id != user_id:
            logfire.warn("User does not own poll", poll_id=poll.id, user_id=user_id)
            raise NotAuthorizedError("poll", poll.id, user_id)


def _check_option_text(text: str) -> None:
    if not text.strip() or len(text) > MAX_OPTION_TEXT:
        raise InvalidInputError(
            f"Option text must be 1-{MAX_OPTION_TEXT} characters"
        )
