"""SQLAlchemy table definitions for Agora.

These table definitions are used by the repositories through SQLAlchemy Core.
They match the schema defined in Alembic migrations.

User accounts live with the identity provider, so ``author_id`` and
``user_id`` columns are plain integers without a foreign key.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    Sequence,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# IDs are reserved up front by the repositories (next_id), then inserted
posts_id_seq = Sequence("posts_id_seq", metadata=metadata)
comments_id_seq = Sequence("comments_id_seq", metadata=metadata)
polls_id_seq = Sequence("polls_id_seq", metadata=metadata)
poll_options_id_seq = Sequence("poll_options_id_seq", metadata=metadata)

vote_direction_enum = Enum(
    "upvote", "downvote", name="vote_direction", create_type=False
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", BigInteger, posts_id_seq, primary_key=True),
    Column("author_id", BigInteger, nullable=False),
    Column("author_username", String(50), nullable=False),  # Denormalized from token
    Column("title", String(300), nullable=False),
    Column("body", Text, nullable=False, server_default=""),
    Column("category", String(50), nullable=False),
    Column(
        "type",
        Enum("text", "poll", name="post_type", create_type=False),
        nullable=False,
        server_default="text",
    ),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("upvotes >= 0", name="posts_upvotes_non_negative"),
    CheckConstraint("downvotes >= 0", name="posts_downvotes_non_negative"),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_category", posts_table.c.category)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", BigInteger, comments_id_seq, primary_key=True),
    Column(
        "post_id", BigInteger, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "parent_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("author_id", BigInteger, nullable=False),
    Column("author_username", String(50), nullable=False),
    Column("body", Text, nullable=False),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("upvotes >= 0", name="comments_upvotes_non_negative"),
    CheckConstraint("downvotes >= 0", name="comments_downvotes_non_negative"),
)

# Tree reads: roots of a post, then children of a whole level
Index("idx_comments_post_parent", comments_table.c.post_id, comments_table.c.parent_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# VOTE LEDGER TABLES (one per votable type, so targets can cascade)
# ============================================================================
post_votes_table = Table(
    "post_votes",
    metadata,
    Column("user_id", BigInteger, nullable=False),
    Column(
        "votable_id",
        BigInteger,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("direction", vote_direction_enum, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("user_id", "votable_id", name="pk_post_votes"),
)

Index("idx_post_votes_votable", post_votes_table.c.votable_id)

comment_votes_table = Table(
    "comment_votes",
    metadata,
    Column("user_id", BigInteger, nullable=False),
    Column(
        "votable_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("direction", vote_direction_enum, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("user_id", "votable_id", name="pk_comment_votes"),
)

Index("idx_comment_votes_votable", comment_votes_table.c.votable_id)

# ============================================================================
# POLLS TABLES
# ============================================================================
polls_table = Table(
    "polls",
    metadata,
    Column("id", BigInteger, polls_id_seq, primary_key=True),
    Column(
        "post_id",
        BigInteger,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
    Column("multiple_choice", Boolean, nullable=False, server_default="false"),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

poll_options_table = Table(
    "poll_options",
    metadata,
    Column("id", BigInteger, poll_options_id_seq, primary_key=True),
    Column(
        "poll_id", BigInteger, ForeignKey("polls.id", ondelete="CASCADE"), nullable=False
    ),
    Column("text", String(200), nullable=False),
    Column("vote_count", Integer, nullable=False, server_default="0"),
    CheckConstraint("vote_count >= 0", name="poll_options_vote_count_non_negative"),
)

Index("idx_poll_options_poll_id", poll_options_table.c.poll_id)

poll_votes_table = Table(
    "poll_votes",
    metadata,
    Column("user_id", BigInteger, nullable=False),
    Column(
        "poll_id", BigInteger, ForeignKey("polls.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "option_id",
        BigInteger,
        ForeignKey("poll_options.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("user_id", "option_id", name="pk_poll_votes"),
)

Index("idx_poll_votes_user_poll", poll_votes_table.c.user_id, poll_votes_table.c.poll_id)
