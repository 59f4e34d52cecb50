"""PostgreSQL implementation of Poll repository."""

from typing import Optional

import logfire
from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Poll, PollOption, PollUpdate
from agora.domain.repository import PollRepository
from agora.domain.value import PollId, PollOptionId, PostId
from agora.persistence.mappers import (
    poll_option_to_dict,
    poll_to_dict,
    row_to_poll,
    row_to_poll_option,
)
from agora.persistence.tables import (
    poll_options_id_seq,
    poll_options_table,
    polls_id_seq,
    polls_table,
)


class PostgresPollRepository(PollRepository):
    """PostgreSQL implementation of PollRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def next_id(self) -> PollId:
        result = await self.session.execute(select(polls_id_seq.next_value()))
        return PollId(result.scalar_one())

    async def next_option_id(self) -> PollOptionId:
        result = await self.session.execute(select(poll_options_id_seq.next_value()))
        return PollOptionId(result.scalar_one())

    async def _with_options(self, row) -> Poll:
        stmt = (
            select(poll_options_table)
            .where(poll_options_table.c.poll_id == row.id)
            .order_by(poll_options_table.c.id)
        )
        result = await self.session.execute(stmt)
        return row_to_poll(row._asdict(), [r._asdict() for r in result.fetchall()])

    async def find_by_id(self, poll_id: PollId) -> Optional[Poll]:
        """Find a poll with its options."""
        stmt = select(polls_table).where(polls_table.c.id == poll_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return await self._with_options(row) if row else None

    async def find_by_post(self, post_id: PostId) -> Optional[Poll]:
        """Find the poll attached to a post."""
        stmt = select(polls_table).where(polls_table.c.post_id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return await self._with_options(row) if row else None

    async def lock_by_id(self, poll_id: PollId) -> Optional[Poll]:
        """Find a poll with ``SELECT ... FOR UPDATE`` on the poll row."""
        stmt = select(polls_table).where(polls_table.c.id == poll_id).with_for_update()
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return await self._with_options(row) if row else None

    async def save(self, poll: Poll) -> Poll:
        """Insert a poll and its options."""
        with logfire.span(
            "poll_repository.save", poll_id=poll.id, option_count=len(poll.options)
        ):
            await self.session.execute(insert(polls_table).values(**poll_to_dict(poll)))
            if poll.options:
                await self.session.execute(
                    insert(poll_options_table),
                    [poll_option_to_dict(option) for option in poll.options],
                )
            await self.session.flush()
            return poll

    async def update(self, poll_id: PollId, poll_update: PollUpdate) -> Optional[Poll]:
        """Apply the set fields of ``poll_update``."""
        values: dict = {}
        if poll_update.multiple_choice is not None:
            values["multiple_choice"] = poll_update.multiple_choice
        if poll_update.clear_expiry:
            values["expires_at"] = None
        elif poll_update.expires_at is not None:
            values["expires_at"] = poll_update.expires_at

        if values:
            stmt = update(polls_table).where(polls_table.c.id == poll_id).values(**values)
            await self.session.execute(stmt)
            await self.session.flush()
        return await self.find_by_id(poll_id)

    async def delete(self, poll_id: PollId) -> bool:
        """Delete a poll; options cascade in the database."""
        await self.session.execute(
            delete(poll_options_table).where(poll_options_table.c.poll_id == poll_id)
        )
        result = await self.session.execute(
            delete(polls_table).where(polls_table.c.id == poll_id)
        )
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def update_option_text(
        self, option_id: PollOptionId, text: str
    ) -> Optional[PollOption]:
        """Change an option's text."""
        stmt = (
            update(poll_options_table)
            .where(poll_options_table.c.id == option_id)
            .values(text=text)
            .returning(poll_options_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_poll_option(row._asdict()) if row else None

    async def delete_option(self, option_id: PollOptionId) -> bool:
        """Delete one option."""
        result = await self.session.execute(
            delete(poll_options_table).where(poll_options_table.c.id == option_id)
        )
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def adjust_option_count(self, option_id: PollOptionId, delta: int) -> None:
        """Atomically move an option's vote count (minimum 0)."""
        column = poll_options_table.c.vote_count
        stmt = (
            update(poll_options_table)
            .where(poll_options_table.c.id == option_id)
            .values(vote_count=column + delta)
        )
        if delta < 0:
            stmt = stmt.where(column > 0)
        await self.session.execute(stmt)
        await self.session.flush()
