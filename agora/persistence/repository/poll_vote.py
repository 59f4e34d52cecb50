"""PostgreSQL implementation of PollVote repository."""

from typing import List

from sqlalchemy import and_, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import PollVote
from agora.domain.repository import PollVoteRepository
from agora.domain.value import PollId, PollOptionId, UserId
from agora.persistence.mappers import poll_vote_to_dict, row_to_poll_vote
from agora.persistence.tables import poll_votes_table


class PostgresPollVoteRepository(PollVoteRepository):
    """PostgreSQL implementation of PollVoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_poll(
        self, user_id: UserId, poll_id: PollId
    ) -> List[PollVote]:
        stmt = select(poll_votes_table).where(
            and_(
                poll_votes_table.c.user_id == user_id,
                poll_votes_table.c.poll_id == poll_id,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_poll_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: PollVote) -> PollVote:
        await self.session.execute(
            insert(poll_votes_table).values(**poll_vote_to_dict(vote))
        )
        await self.session.flush()
        return vote

    async def delete(self, user_id: UserId, option_id: PollOptionId) -> bool:
        stmt = delete(poll_votes_table).where(
            and_(
                poll_votes_table.c.user_id == user_id,
                poll_votes_table.c.option_id == option_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_option(self, option_id: PollOptionId) -> int:
        stmt = delete(poll_votes_table).where(poll_votes_table.c.option_id == option_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def delete_by_poll(self, poll_id: PollId) -> int:
        stmt = delete(poll_votes_table).where(poll_votes_table.c.poll_id == poll_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def count_by_option(self, option_id: PollOptionId) -> int:
        stmt = (
            select(func.count())
            .select_from(poll_votes_table)
            .where(poll_votes_table.c.option_id == option_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
