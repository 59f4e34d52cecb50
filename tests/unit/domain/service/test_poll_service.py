"""Unit tests for PollService."""

import asyncio
from datetime import timedelta

import pytest

from agora.domain.error import (
    ConflictError,
    InvalidInputError,
    NotAuthorizedError,
    NotFoundError,
)
from agora.domain.model import PollUpdate
from agora.domain.model.common import utcnow
from agora.domain.repository import (
    PollRepository,
    PollVoteRepository,
    PostRepository,
)
from agora.domain.service import PollService
from agora.domain.value import Category, ConflictReason, PostType
from tests.conftest import ALICE, BOB, CAROL, username
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _create_poll(
    poll_service: PollService,
    options: list[str] | None = None,
    multiple_choice: bool = False,
):
    post, poll = await poll_service.create_poll(
        author_id=ALICE,
        author_username=username(ALICE),
        title="Best language?",
        body="",
        category=Category("General"),
        options=options or ["Python", "Rust", "Go"],
        multiple_choice=multiple_choice,
    )
    return post, poll


async def _expire(unit_env, poll_id) -> None:
    """Move a poll's expiry into the past behind the service's back."""
    poll_repo = await unit_env.get(PollRepository)
    await poll_repo.update(
        poll_id, PollUpdate(expires_at=utcnow() - timedelta(minutes=1))
    )


class TestCreatePoll:
    """Tests for create_poll."""

    @pytest.mark.asyncio
    async def test_creates_poll_post_and_options(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)

        # Act
        post, poll = await _create_poll(poll_service)

        # Assert
        assert post.type == PostType.POLL
        assert poll.post_id == post.id
        assert [option.text for option in poll.options] == ["Python", "Rust", "Go"]
        assert all(option.vote_count == 0 for option in poll.options)

        post_repo = await unit_env.get(PostRepository)
        assert await post_repo.find_by_id(post.id) is not None

    @pytest.mark.asyncio
    async def test_fewer_than_two_options_is_invalid(self, unit_env):
        poll_service = await unit_env.get(PollService)

        with pytest.raises(InvalidInputError):
            await _create_poll(poll_service, options=["Only one"])

    @pytest.mark.asyncio
    async def test_expiry_in_the_past_is_invalid(self, unit_env):
        poll_service = await unit_env.get(PollService)

        with pytest.raises(InvalidInputError):
            await poll_service.create_poll(
                author_id=ALICE,
                author_username=username(ALICE),
                title="Too late",
                body="",
                category=Category("General"),
                options=["Yes", "No"],
                expires_at=utcnow() - timedelta(days=1),
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_option", ["", "   ", "x" * 201])
    async def test_blank_or_long_option_is_invalid(self, unit_env, bad_option):
        """A bad option text is refused before anything is written."""
        # Arrange
        poll_service = await unit_env.get(PollService)
        post_repo = await unit_env.get(PostRepository)

        # Act
        with pytest.raises(InvalidInputError):
            await _create_poll(poll_service, options=[bad_option, "Fine"])

        # Assert
        assert await post_repo.count() == 0


class TestSingleChoiceVote:
    """Single-choice ballots replace the previous choice."""

    @pytest.mark.asyncio
    async def test_changing_choice_transfers_the_vote(self, unit_env):
        """Voting A then B should leave one ballot row, on B."""
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll_vote_repo = await unit_env.get(PollVoteRepository)
        _, poll = await _create_poll(poll_service)
        option_a, option_b = poll.options[0].id, poll.options[1].id

        # Act
        await poll_service.vote(poll.id, BOB, [option_a])
        results = await poll_service.vote(poll.id, BOB, [option_b])

        # Assert
        votes = {option.id: option.votes for option in results.options}
        assert votes[option_a] == 0
        assert votes[option_b] == 1
        assert results.total_votes == 1
        ballots = await poll_vote_repo.find_by_user_and_poll(BOB, poll.id)
        assert [ballot.option_id for ballot in ballots] == [option_b]

    @pytest.mark.asyncio
    async def test_revoting_same_option_is_a_no_op(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)
        option_a = poll.options[0].id

        # Act
        await poll_service.vote(poll.id, BOB, [option_a])
        results = await poll_service.vote(poll.id, BOB, [option_a])

        # Assert
        assert results.total_votes == 1

    @pytest.mark.asyncio
    async def test_several_options_on_single_choice_is_invalid(self, unit_env):
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)

        with pytest.raises(InvalidInputError):
            await poll_service.vote(
                poll.id, BOB, [poll.options[0].id, poll.options[1].id]
            )

    @pytest.mark.asyncio
    async def test_option_of_another_poll_is_invalid(self, unit_env):
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)
        _, other = await _create_poll(poll_service)

        with pytest.raises(InvalidInputError):
            await poll_service.vote(poll.id, BOB, [other.options[0].id])


class TestMultipleChoiceVote:
    """Multiple-choice ballots add options."""

    @pytest.mark.asyncio
    async def test_held_options_are_not_counted_twice(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service, multiple_choice=True)
        first, second, third = (option.id for option in poll.options)

        # Act
        await poll_service.vote(poll.id, BOB, [first, second])
        results = await poll_service.vote(poll.id, BOB, [second, third, third])

        # Assert
        assert [option.votes for option in results.options] == [1, 1, 1]
        selection = await poll_service.get_user_selection(poll.id, BOB)
        assert selection == {first, second, third}


class TestCounterConsistency:
    """Option counters always equal the ballot rows behind them."""

    @pytest.mark.asyncio
    async def test_counters_match_ballots_after_concurrent_ballots(self, unit_env):
        """Interleaved single- and multiple-choice ballots keep counters exact."""
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll_vote_repo = await unit_env.get(PollVoteRepository)
        _, single = await _create_poll(poll_service)
        _, multi = await _create_poll(poll_service, multiple_choice=True)
        s1, s2, s3 = (option.id for option in single.options)
        m1, m2, m3 = (option.id for option in multi.options)

        # Act
        await asyncio.gather(
            poll_service.vote(single.id, BOB, [s1]),
            poll_service.vote(single.id, BOB, [s2]),
            poll_service.vote(single.id, CAROL, [s2]),
            poll_service.vote(multi.id, BOB, [m1, m2]),
            poll_service.vote(multi.id, BOB, [m2, m3]),
            poll_service.vote(multi.id, CAROL, [m1]),
            poll_service.vote(multi.id, CAROL, [m1]),
        )
        await poll_service.vote(single.id, CAROL, [s3])

        # Assert
        for poll_id in (single.id, multi.id):
            poll = await poll_service.get_poll(poll_id)
            for option in poll.options:
                ballots = await poll_vote_repo.count_by_option(option.id)
                assert option.vote_count == ballots
        assert (await poll_service.results(single.id)).total_votes == 2
        multi_results = await poll_service.results(multi.id)
        assert [option.votes for option in multi_results.options] == [2, 1, 1]


class TestResults:
    """Tally and percentages."""

    @pytest.mark.asyncio
    async def test_zero_votes_give_zero_percentages(self, unit_env):
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)

        results = await poll_service.results(poll.id)

        assert results.total_votes == 0
        assert all(option.percentage == 0 for option in results.options)

    @pytest.mark.asyncio
    async def test_percentages_split_by_votes(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service, options=["Yes", "No"])
        yes, no = poll.options[0].id, poll.options[1].id
        await poll_service.vote(poll.id, ALICE, [yes])
        await poll_service.vote(poll.id, BOB, [yes])
        await poll_service.vote(poll.id, CAROL, [yes])

        # Act
        results = await poll_service.vote(poll.id, 4, [no])

        # Assert
        assert results.total_votes == 4
        assert [option.percentage for option in results.options] == [75.0, 25.0]

    @pytest.mark.asyncio
    async def test_unknown_poll_raises_not_found(self, unit_env):
        poll_service = await unit_env.get(PollService)

        with pytest.raises(NotFoundError):
            await poll_service.results(999)


class TestExpiry:
    """Expired polls refuse ballots and edits."""

    @pytest.mark.asyncio
    async def test_vote_on_expired_poll_conflicts(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)
        await _expire(unit_env, poll.id)

        # Act & Assert
        with pytest.raises(ConflictError) as exc_info:
            await poll_service.vote(poll.id, BOB, [poll.options[0].id])
        assert exc_info.value.reason == ConflictReason.EXPIRED

    @pytest.mark.asyncio
    async def test_update_expired_poll_conflicts(self, unit_env):
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)
        await _expire(unit_env, poll.id)

        with pytest.raises(ConflictError) as exc_info:
            await poll_service.update_poll(
                poll.id, PollUpdate(multiple_choice=True), ALICE
            )
        assert exc_info.value.reason == ConflictReason.EXPIRED


class TestOwnerEdits:
    """Only the poll author may change it."""

    @pytest.mark.asyncio
    async def test_update_poll_switches_to_multiple_choice(self, unit_env):
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)

        updated = await poll_service.update_poll(
            poll.id, PollUpdate(multiple_choice=True), ALICE
        )

        assert updated.multiple_choice is True

    @pytest.mark.asyncio
    async def test_clear_expiry_removes_deadline(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)
        await poll_service.update_poll(
            poll.id, PollUpdate(expires_at=utcnow() + timedelta(days=2)), ALICE
        )

        # Act
        updated = await poll_service.update_poll(
            poll.id, PollUpdate(clear_expiry=True), ALICE
        )

        # Assert
        assert updated.expires_at is None

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, unit_env):
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)

        with pytest.raises(NotAuthorizedError):
            await poll_service.update_poll(
                poll.id, PollUpdate(multiple_choice=True), BOB
            )

    @pytest.mark.asyncio
    async def test_update_option_text(self, unit_env):
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)

        option = await poll_service.update_option(
            poll.id, poll.options[2].id, "Golang", ALICE
        )

        assert option.text == "Golang"
        stored = await poll_service.get_poll(poll.id)
        assert [o.text for o in stored.options] == ["Python", "Rust", "Golang"]

    @pytest.mark.asyncio
    async def test_update_option_to_blank_text_is_invalid(self, unit_env):
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)

        with pytest.raises(InvalidInputError):
            await poll_service.update_option(poll.id, poll.options[0].id, "  ", ALICE)

    @pytest.mark.asyncio
    async def test_delete_option_removes_its_ballots(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)
        doomed = poll.options[2].id
        await poll_service.vote(poll.id, BOB, [doomed])

        # Act
        await poll_service.delete_option(poll.id, doomed, ALICE)

        # Assert
        stored = await poll_service.get_poll(poll.id)
        assert len(stored.options) == 2
        assert await poll_service.get_user_selection(poll.id, BOB) == set()

    @pytest.mark.asyncio
    async def test_delete_option_keeps_two_options(self, unit_env):
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service, options=["Yes", "No"])

        with pytest.raises(ConflictError) as exc_info:
            await poll_service.delete_option(poll.id, poll.options[0].id, ALICE)
        assert exc_info.value.reason == ConflictReason.MINIMUM_OPTIONS

    @pytest.mark.asyncio
    async def test_delete_poll_removes_post(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        post_repo = await unit_env.get(PostRepository)
        post, poll = await _create_poll(poll_service)
        await poll_service.vote(poll.id, BOB, [poll.options[0].id])

        # Act
        await poll_service.delete_poll(poll.id, ALICE)

        # Assert
        assert await post_repo.find_by_id(post.id) is None
        with pytest.raises(NotFoundError):
            await poll_service.get_poll(poll.id)

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete_poll(self, unit_env):
        poll_service = await unit_env.get(PollService)
        _, poll = await _create_poll(poll_service)

        with pytest.raises(NotAuthorizedError):
            await poll_service.delete_poll(poll.id, BOB)
