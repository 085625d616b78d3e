# src/clip_feed/models/vote.py
"""Models capturing voting interactions on items."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from clip_feed.db.session import Base
from clip_feed.db.time import utcnow


class Vote(Base):
    """One voter's vote on one item.

    Votes are only ever inserted or deleted. The weight is not stored: the
    ledger resolves it from the voter weight policy at resummation time.
    """

    __tablename__ = "vote"
    __table_args__ = (
        Index("ix_vote_item_id", "item_id"),
        Index("ix_vote_voter_id_created_at", "voter_id", "created_at"),
    )

    # Composite primary key prevents duplicate votes from the same voter.
    item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("item.id", ondelete="CASCADE"),
        primary_key=True,
    )
    voter_id: Mapped[str] = mapped_column(Text, primary_key=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
