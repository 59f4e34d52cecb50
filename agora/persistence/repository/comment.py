"""PostgreSQL implementation of Comment repository."""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import asc, delete, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Comment, CommentUpdate
from agora.domain.repository import CommentRepository
from agora.domain.value import CommentId, PostId, UserId, VoteDirection
from agora.persistence.mappers import comment_to_dict, row_to_comment
from agora.persistence.repository.counters import vote_counter_update
from agora.persistence.tables import comments_id_seq, comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def next_id(self) -> CommentId:
        """Reserve the next comment ID."""
        result = await self.session.execute(select(comments_id_seq.next_value()))
        return CommentId(result.scalar_one())

    async def find_by_id(self, comment_id: int) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def lock_by_id(self, comment_id: int) -> Optional[Comment]:
        """Find a comment by ID with ``SELECT ... FOR UPDATE``."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.id == comment_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_roots(self, post_id: PostId) -> List[Comment]:
        """Find top-level comments of a post, newest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(comments_table.c.parent_id.is_(None))
            .order_by(desc(comments_table.c.created_at), desc(comments_table.c.id))
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_children(self, parent_ids: Sequence[CommentId]) -> List[Comment]:
        """Find direct replies of several comments, oldest first."""
        if not parent_ids:
            return []

        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id.in_(parent_ids))
            .order_by(asc(comments_table.c.created_at), asc(comments_table.c.id))
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_replies(
        self, comment_ids: Sequence[CommentId]
    ) -> Dict[CommentId, int]:
        """Count direct replies per comment (batch query)."""
        if not comment_ids:
            return {}

        stmt = (
            select(comments_table.c.parent_id, func.count().label("reply_count"))
            .where(comments_table.c.parent_id.in_(comment_ids))
            .group_by(comments_table.c.parent_id)
        )
        result = await self.session.execute(stmt)
        return {CommentId(row.parent_id): row.reply_count for row in result.fetchall()}

    async def count_by_posts(self, post_ids: Sequence[PostId]) -> Dict[PostId, int]:
        """Count comments per post (batch query)."""
        if not post_ids:
            return {}

        stmt = (
            select(comments_table.c.post_id, func.count().label("comment_count"))
            .where(comments_table.c.post_id.in_(post_ids))
            .group_by(comments_table.c.post_id)
        )
        result = await self.session.execute(stmt)
        return {PostId(row.post_id): row.comment_count for row in result.fetchall()}

    async def find_by_author(
        self, author_id: UserId, limit: int, offset: int
    ) -> List[Comment]:
        """Find a user's comments newest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.author_id == author_id)
            .order_by(desc(comments_table.c.created_at), desc(comments_table.c.id))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_by_author(self, author_id: UserId) -> int:
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.author_id == author_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_subtree_ids(self, comment_id: CommentId) -> List[CommentId]:
        """IDs of a comment and its transitive replies (recursive CTE)."""
        subtree = (
            select(comments_table.c.id)
            .where(comments_table.c.id == comment_id)
            .cte("subtree", recursive=True)
        )
        subtree = subtree.union_all(
            select(comments_table.c.id).where(
                comments_table.c.parent_id == subtree.c.id
            )
        )
        result = await self.session.execute(select(subtree.c.id))
        return [CommentId(row.id) for row in result.fetchall()]

    async def find_ids_by_post(self, post_id: PostId) -> List[CommentId]:
        """IDs of every comment on a post."""
        stmt = select(comments_table.c.id).where(comments_table.c.post_id == post_id)
        result = await self.session.execute(stmt)
        return [CommentId(row.id) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = comments_table.insert().values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def update(
        self, comment_id: CommentId, comment_update: CommentUpdate
    ) -> Optional[Comment]:
        """Apply the set fields of ``comment_update`` and bump ``updated_at``."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(**comment_update.model_dump(exclude_none=True), updated_at=func.now())
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else None

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete comments (hard delete)."""
        if not comment_ids:
            return 0

        stmt = delete(comments_table).where(comments_table.c.id.in_(comment_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def adjust_vote_count(
        self, comment_id: int, direction: VoteDirection, delta: int
    ) -> None:
        """Atomically move a vote counter (minimum 0)."""
        await self.session.execute(
            vote_counter_update(comments_table, comment_id, direction, delta)
        )
        await self.session.flush()
