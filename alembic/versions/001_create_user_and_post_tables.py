"""Create user and post tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates `user` (unique login name, bcrypt hash) and `post` (owned by
       a user, cascade-deleted with it).
How:   Portable column types; runs on PostgreSQL and SQLite.

Rollback: downgrade() drops both tables (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),

        # Login name; uniqueness is enforced here, not in application code
        sa.Column("user_name", sa.String(100), nullable=False),

        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_name"),
    )

    op.create_table(
        "post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),

        # Deleting a user removes their posts
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
    )

    # Backs newest-first listing and LIMIT/OFFSET paging
    op.create_index(
        "idx_post_created_at",
        "post",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    """Drop both tables. Posts go first because they reference users."""
    op.drop_index("idx_post_created_at", table_name="post")
    op.drop_table("post")
    op.drop_table("user")
