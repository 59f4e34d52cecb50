"""Unit tests for GetPollOptionsUseCase."""

import pytest

from agora.application.usecase.poll import (
    CreatePollRequest,
    CreatePollUseCase,
    GetPollOptionsRequest,
    GetPollOptionsUseCase,
)
from agora.domain.error import NotFoundError
from agora.domain.service import PollService
from tests.conftest import ALICE, BOB, CAROL, username
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetPollOptions:
    """Tests for listing poll options."""

    @pytest.mark.asyncio
    async def test_lists_options_with_counts_in_creation_order(self, unit_env):
        # Arrange
        created = await (await unit_env.get(CreatePollUseCase)).execute(
            CreatePollRequest(
                title="Editor?",
                options=["Vim", "Emacs", "Nano"],
                author_id=ALICE,
                author_username=str(username(ALICE)),
            )
        )
        poll = created.poll
        poll_service = await unit_env.get(PollService)
        emacs = poll.options[1].option_id
        await poll_service.vote(poll.poll_id, BOB, [emacs])
        await poll_service.vote(poll.poll_id, CAROL, [emacs])

        # Act
        options = await (await unit_env.get(GetPollOptionsUseCase)).execute(
            GetPollOptionsRequest(poll_id=poll.poll_id)
        )

        # Assert
        assert [(option.text, option.vote_count) for option in options] == [
            ("Vim", 0),
            ("Emacs", 2),
            ("Nano", 0),
        ]

    @pytest.mark.asyncio
    async def test_unknown_poll_raises_not_found(self, unit_env):
        use_case = await unit_env.get(GetPollOptionsUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetPollOptionsRequest(poll_id=404))
