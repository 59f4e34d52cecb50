"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Post, PostUpdate
from agora.domain.repository import PostRepository
from agora.domain.value import Category, PostId, PostType, UserId, VoteDirection
from agora.persistence.mappers import post_to_dict, row_to_post
from agora.persistence.repository.counters import vote_counter_update
from agora.persistence.tables import posts_id_seq, posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def next_id(self) -> PostId:
        """Reserve the next post ID."""
        result = await self.session.execute(select(posts_id_seq.next_value()))
        return PostId(result.scalar_one())

    async def find_by_id(self, post_id: int) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def lock_by_id(self, post_id: int) -> Optional[Post]:
        """Find a post by ID with ``SELECT ... FOR UPDATE``."""
        stmt = select(posts_table).where(posts_table.c.id == post_id).with_for_update()
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    def _filtered(
        self,
        stmt,
        post_type: Optional[PostType],
        category: Optional[Category],
        author_id: Optional[UserId],
        query: Optional[str],
    ):
        if post_type is not None:
            stmt = stmt.where(posts_table.c.type == post_type.value)
        if category is not None:
            stmt = stmt.where(posts_table.c.category == category.root)
        if author_id is not None:
            stmt = stmt.where(posts_table.c.author_id == author_id)
        if query:
            # autoescape keeps % and _ in the query literal
            stmt = stmt.where(
                or_(
                    posts_table.c.title.icontains(query, autoescape=True),
                    posts_table.c.body.icontains(query, autoescape=True),
                )
            )
        return stmt

    async def find_page(
        self,
        limit: int,
        offset: int,
        post_type: Optional[PostType] = None,
        category: Optional[Category] = None,
        author_id: Optional[UserId] = None,
        query: Optional[str] = None,
    ) -> List[Post]:
        """Find posts newest first with filtering and pagination."""
        with logfire.span(
            "post_repository.find_page",
            limit=limit,
            offset=offset,
            post_type=post_type.value if post_type else None,
            category=category.root if category else None,
            author_id=author_id,
            query=query,
        ):
            stmt = self._filtered(
                select(posts_table), post_type, category, author_id, query
            )
            stmt = (
                stmt.order_by(desc(posts_table.c.created_at), desc(posts_table.c.id))
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]
            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(
        self,
        post_type: Optional[PostType] = None,
        category: Optional[Category] = None,
        author_id: Optional[UserId] = None,
        query: Optional[str] = None,
    ) -> int:
        """Count posts matching the given filters."""
        stmt = self._filtered(
            select(func.count()).select_from(posts_table),
            post_type,
            category,
            author_id,
            query,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, post: Post) -> Post:
        """Insert a new post."""
        with logfire.span("post_repository.save", post_id=post.id, title=post.title):
            stmt = posts_table.insert().values(**post_to_dict(post))
            await self.session.execute(stmt)
            await self.session.flush()
            return post

    async def update(self, post_id: PostId, post_update: PostUpdate) -> Optional[Post]:
        """Apply the set fields of ``post_update`` and bump ``updated_at``."""
        with logfire.span("post_repository.update", post_id=post_id):
            values = post_update.model_dump(exclude_none=True)
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post_id)
                .values(**values, updated_at=func.now())
                .returning(posts_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()

            if row is None:
                logfire.warn("Post not found for update", post_id=post_id)
                return None
            return row_to_post(row._asdict())

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete)."""
        stmt = delete(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def adjust_vote_count(
        self, post_id: int, direction: VoteDirection, delta: int
    ) -> None:
        """Atomically move a vote counter (minimum 0)."""
        await self.session.execute(
            vote_counter_update(posts_table, post_id, direction, delta)
        )
        await self.session.flush()
