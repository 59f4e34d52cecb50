"""initial_schema

Create the Agora schema:
- Posts (text and poll posts, denormalized vote counters)
- Comments (threaded through parent_id)
- Vote ledgers for posts and comments (one row per user and target)
- Polls, poll options and poll ballots

User accounts live with the identity provider; author and user IDs are
stored without a foreign key.

Revision ID: 3f2c9a71d0b4
Revises:
Create Date: 2026-10-16 09:12:40.518204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2c9a71d0b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=nullable,
        server_default=None if nullable else sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE vote_direction AS ENUM ('upvote', 'downvote');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE post_type AS ENUM ('text', 'poll');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # IDs are drawn from sequences before insert
    for name in ("posts", "comments", "polls", "poll_options"):
        op.execute(f"CREATE SEQUENCE IF NOT EXISTS {name}_id_seq")

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        sa.Column(
            "id",
            sa.BigInteger(),
            server_default=sa.text("nextval('posts_id_seq')"),
            nullable=False,
        ),
        sa.Column("author_id", sa.BigInteger(), nullable=False),
        sa.Column("author_username", sa.String(50), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("body", sa.Text(), nullable=False, server_default=""),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column(
            "type",
            postgresql.ENUM("text", "poll", name="post_type", create_type=False),
            nullable=False,
            server_default="text",
        ),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("upvotes >= 0", name="posts_upvotes_non_negative"),
        sa.CheckConstraint("downvotes >= 0", name="posts_downvotes_non_negative"),
    )
    op.create_index("idx_posts_created_at", "posts", [sa.text("created_at DESC")])
    op.create_index("idx_posts_author_id", "posts", ["author_id"])
    op.create_index("idx_posts_category", "posts", ["category"])

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.BigInteger(),
            server_default=sa.text("nextval('comments_id_seq')"),
            nullable=False,
        ),
        sa.Column("post_id", sa.BigInteger(), nullable=False),
        sa.Column("parent_id", sa.BigInteger(), nullable=True),
        sa.Column("author_id", sa.BigInteger(), nullable=False),
        sa.Column("author_username", sa.String(50), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("upvotes >= 0", name="comments_upvotes_non_negative"),
        sa.CheckConstraint("downvotes >= 0", name="comments_downvotes_non_negative"),
    )
    op.create_index(
        "idx_comments_post_parent", "comments", ["post_id", "parent_id"]
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])

    # ========================================================================
    # VOTE LEDGERS
    # ========================================================================
    for votable, target in (("post", "posts"), ("comment", "comments")):
        op.create_table(
            f"{votable}_votes",
            sa.Column("user_id", sa.BigInteger(), nullable=False),
            sa.Column("votable_id", sa.BigInteger(), nullable=False),
            sa.Column(
                "direction",
                postgresql.ENUM(
                    "upvote", "downvote", name="vote_direction", create_type=False
                ),
                nullable=False,
            ),
            _timestamp("created_at"),
            sa.ForeignKeyConstraint(
                ["votable_id"], [f"{target}.id"], ondelete="CASCADE"
            ),
            sa.PrimaryKeyConstraint(
                "user_id", "votable_id", name=f"pk_{votable}_votes"
            ),
        )
        op.create_index(
            f"idx_{votable}_votes_votable", f"{votable}_votes", ["votable_id"]
        )

    # ========================================================================
    # POLLS tables
    # ========================================================================
    op.create_table(
        "polls",
        sa.Column(
            "id",
            sa.BigInteger(),
            server_default=sa.text("nextval('polls_id_seq')"),
            nullable=False,
        ),
        sa.Column("post_id", sa.BigInteger(), nullable=False),
        sa.Column(
            "multiple_choice", sa.Boolean(), nullable=False, server_default="false"
        ),
        _timestamp("expires_at", nullable=True),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", name="uq_polls_post_id"),
    )

    op.create_table(
        "poll_options",
        sa.Column(
            "id",
            sa.BigInteger(),
            server_default=sa.text("nextval('poll_options_id_seq')"),
            nullable=False,
        ),
        sa.Column("poll_id", sa.BigInteger(), nullable=False),
        sa.Column("text", sa.String(200), nullable=False),
        sa.Column("vote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["poll_id"], ["polls.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "vote_count >= 0", name="poll_options_vote_count_non_negative"
        ),
    )
    op.create_index("idx_poll_options_poll_id", "poll_options", ["poll_id"])

    op.create_table(
        "poll_votes",
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("poll_id", sa.BigInteger(), nullable=False),
        sa.Column("option_id", sa.BigInteger(), nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["poll_id"], ["polls.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["option_id"], ["poll_options.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("user_id", "option_id", name="pk_poll_votes"),
    )
    op.create_index(
        "idx_poll_votes_user_poll", "poll_votes", ["user_id", "poll_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("poll_votes")
    op.drop_table("poll_options")
    op.drop_table("polls")
    op.drop_table("comment_votes")
    op.drop_table("post_votes")
    op.drop_table("comments")
    op.drop_table("posts")

    for name in ("poll_options", "polls", "comments", "posts"):
        op.execute(f"DROP SEQUENCE IF EXISTS {name}_id_seq")

    op.execute("DROP TYPE IF EXISTS post_type")
    op.execute("DROP TYPE IF EXISTS vote_direction")
