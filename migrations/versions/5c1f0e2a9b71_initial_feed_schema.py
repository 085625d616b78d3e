"""initial feed schema

Revision ID: 5c1f0e2a9b71
Revises:
Create Date: 2025-11-03 09:12:40.518204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1f0e2a9b71"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create category, item and vote tables."""
    op.create_table(
        "category",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "item",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("thumbnail_url", sa.Text(), nullable=True),
        sa.Column("platform", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("rank_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.CheckConstraint("rank_score >= 0", name="ck_item_rank_score_non_negative"),
        sa.CheckConstraint(
            "platform IS NULL OR platform IN "
            "('pc', 'xbox', 'playstation', 'switch', 'mobile', 'other')",
            name="ck_item_platform",
        ),
        sa.ForeignKeyConstraint(["category_id"], ["category.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_item_created_at", "item", ["created_at"])
    op.create_index("ix_item_rank_score", "item", ["rank_score"])
    op.create_index("ix_item_category_id", "item", ["category_id"])

    op.create_table(
        "vote",
        sa.Column("item_id", sa.Integer(), nullable=False),
        sa.Column("voter_id", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["item_id"], ["item.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("item_id", "voter_id"),
    )
    op.create_index("ix_vote_item_id", "vote", ["item_id"])
    op.create_index("ix_vote_voter_id_created_at", "vote", ["voter_id", "created_at"])


def downgrade() -> None:
    """Drop the feed schema."""
    op.drop_index("ix_vote_voter_id_created_at", table_name="vote")
    op.drop_index("ix_vote_item_id", table_name="vote")
    op.drop_table("vote")
    op.drop_index("ix_item_category_id", table_name="item")
    op.drop_index("ix_item_rank_score", table_name="item")
    op.drop_index("ix_item_created_at", table_name="item")
    op.drop_table("item")
    op.drop_table("category")
