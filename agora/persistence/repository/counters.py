"""Counter updates shared by the post and comment repositories."""

from sqlalchemy import Table, update
from sqlalchemy.sql.dml import Update

from agora.domain.value import VoteDirection


def vote_counter_update(
    table: Table, entity_id: int, direction: VoteDirection, delta: int
) -> Update:
    """Build an in-place ``upvotes``/``downvotes`` increment.

    Decrements carry a ``> 0`` guard so a counter never drops below zero.
    """
    column = table.c.upvotes if direction == VoteDirection.UPVOTE else table.c.downvotes
    stmt = update(table).where(table.c.id == entity_id).values({column: column + delta})
    if delta < 0:
        stmt = stmt.where(column > 0)
    return stmt
