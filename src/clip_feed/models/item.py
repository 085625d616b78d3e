"""SQLAlchemy models for feed items and their categories."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from clip_feed.db.session import Base
from clip_feed.db.time import utcnow

PLATFORMS = ("pc", "xbox", "playstation", "switch", "mobile", "other")


class Category(Base):
    """Game category used to filter the feed (e.g. a single title)."""

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class Item(Base):
    """A submitted clip and its cached aggregate rank score.

    Rows are created and hidden by the upload and moderation collaborators;
    this service only reads them and rewrites ``rank_score`` through the
    vote ledger.
    """

    __tablename__ = "item"
    __table_args__ = (
        CheckConstraint("rank_score >= 0", name="ck_item_rank_score_non_negative"),
        CheckConstraint(
            "platform IS NULL OR platform IN (" + ", ".join(f"'{p}'" for p in PLATFORMS) + ")",
            name="ck_item_platform",
        ),
        Index("ix_item_created_at", "created_at"),
        Index("ix_item_rank_score", "rank_score"),
        Index("ix_item_category_id", "category_id"),
    )

    # Monotonically assigned; the last tiebreaker of every feed ordering.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    category_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("category.id", ondelete="SET NULL"),
        nullable=True,
    )
    video_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    platform: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Sum of active voter weights; written only by the vote ledger.
    rank_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    category: Mapped[Category | None] = relationship("Category", lazy="selectin")
