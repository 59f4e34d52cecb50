"""comment_author_index

Index comments by author for per-user comment listings.

Revision ID: 8b41e6d2c7a9
Revises: 3f2c9a71d0b4
Create Date: 2026-10-16 14:03:18.271950

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8b41e6d2c7a9"
down_revision: Union[str, Sequence[str], None] = "3f2c9a71d0b4"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_index("idx_comments_author_id", "comments", ["author_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_comments_author_id", table_name="comments")
