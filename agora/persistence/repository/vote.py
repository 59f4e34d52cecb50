"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence

from sqlalchemy import Table, and_, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Vote
from agora.domain.repository import VoteRepository
from agora.domain.value import UserId, VotableType, VoteDirection
from agora.persistence.mappers import row_to_vote, vote_to_dict
from agora.persistence.tables import comment_votes_table, post_votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    Post votes and comment votes live in separate tables; the votable type
    selects the table.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _table(votable_type: VotableType) -> Table:
        if votable_type == VotableType.POST:
            return post_votes_table
        return comment_votes_table

    async def find(
        self, user_id: UserId, votable_type: VotableType, votable_id: int
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        table = self._table(votable_type)
        stmt = select(table).where(
            and_(table.c.user_id == user_id, table.c.votable_id == votable_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict(), votable_type) if row else None

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[int],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        table = self._table(votable_type)
        stmt = select(table).where(
            and_(table.c.user_id == user_id, table.c.votable_id.in_(votable_ids))
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict(), votable_type) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Insert a ledger row (the primary key rejects duplicates)."""
        table = self._table(vote.votable_type)
        await self.session.execute(insert(table).values(**vote_to_dict(vote)))
        await self.session.flush()
        return vote

    async def delete(
        self, user_id: UserId, votable_type: VotableType, votable_id: int
    ) -> bool:
        """Delete a vote by user and votable."""
        table = self._table(votable_type)
        stmt = delete(table).where(
            and_(table.c.user_id == user_id, table.c.votable_id == votable_id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_votables(
        self, votable_type: VotableType, votable_ids: Sequence[int]
    ) -> int:
        """Delete every vote on the given items."""
        if not votable_ids:
            return 0

        table = self._table(votable_type)
        stmt = delete(table).where(table.c.votable_id.in_(votable_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def count_by_votable(
        self,
        votable_type: VotableType,
        votable_id: int,
        direction: VoteDirection,
    ) -> int:
        """Count ledger rows of one direction on an item."""
        table = self._table(votable_type)
        stmt = (
            select(func.count())
            .select_from(table)
            .where(table.c.votable_id == votable_id)
            .where(table.c.direction == direction.value)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
