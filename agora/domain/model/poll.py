"""Poll aggregate.

A poll belongs to exactly one poll-type post and owns an ordered set of
options. Option vote counts are denormalized caches of the ballot rows.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from agora.domain.model.common import DomainModel, utcnow
from agora.domain.value import PollId, PollOptionId, PostId
from agora.domain.value.common import ValueObject

MIN_POLL_OPTIONS = 2
MAX_OPTION_TEXT = 200


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Naive timestamps are read as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PollOption(DomainModel):
    """One answer a voter can choose."""

    id: PollOptionId
    poll_id: PollId
    text: str = Field(min_length=1, max_length=MAX_OPTION_TEXT)
    vote_count: int = Field(default=0, ge=0)


class Poll(DomainModel):
    """Poll aggregate root."""

    id: PollId
    post_id: PostId
    multiple_choice: bool = False
    expires_at: Optional[datetime] = None
    options: list[PollOption] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("expires_at")
    @classmethod
    def normalize_expiry(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Read naive expiry timestamps as UTC."""
        return _as_utc(v)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Whether the poll stopped accepting ballots."""
        if self.expires_at is None:
            return False
        return self.expires_at < (now or utcnow())

    def option_ids(self) -> set[PollOptionId]:
        return {option.id for option in self.options}

    def get_option(self, option_id: PollOptionId) -> PollOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None


class PollUpdate(ValueObject):
    """Poll settings the poll owner may change."""

    multiple_choice: Optional[bool] = None
    expires_at: Optional[datetime] = None
    clear_expiry: bool = False  # Remove the expiry instead of setting one

    @field_validator("expires_at")
    @classmethod
    def normalize_expiry(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Read naive expiry timestamps as UTC."""
        return _as_utc(v)

    @property
    def is_empty(self) -> bool:
        return (
            self.multiple_choice is None
            and self.expires_at is None
            and not self.clear_expiry
        )


class OptionResult(ValueObject):
    """Tally of one option."""

    id: PollOptionId
    text: str
    votes: int
    percentage: float


class PollResults(ValueObject):
    """Tally of a whole poll, options in creation order."""

    poll_id: PollId
    total_votes: int
    options: list[OptionResult]

    @classmethod
    def from_poll(cls, poll: Poll) -> "PollResults":
        """Compute percentages from the option counters.

        Percentages are 0 for every option while no votes were cast.
        """
        total = sum(option.vote_count for option in poll.options)
        return cls(
            poll_id=poll.id,
            total_votes=total,
            options=[
                OptionResult(
                    id=option.id,
                    text=option.text,
                    votes=option.vote_count,
                    percentage=(option.vote_count / total * 100) if total else 0.0,
                )
                for option in poll.options
            ],
        )
