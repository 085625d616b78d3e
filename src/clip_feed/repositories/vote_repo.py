"""Data access helpers for vote rows."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from clip_feed.models import Vote

__all__ = ["VoteRepository"]


class VoteRepository:
    """Thin wrapper around database access for votes."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, item_id: int, voter_id: str) -> bool:
        stmt = select(func.count()).select_from(Vote).where(
            Vote.item_id == item_id,
            Vote.voter_id == voter_id,
        )
        return bool(self.session.execute(stmt).scalar_one())

    def add(self, item_id: int, voter_id: str, created_at: datetime) -> Vote:
        """Insert a vote row and flush so unique-key conflicts surface here."""
        vote = Vote(item_id=item_id, voter_id=voter_id, created_at=created_at)
        self.session.add(vote)
        self.session.flush()
        return vote

    def remove(self, item_id: int, voter_id: str) -> bool:
        """Delete the vote for the pair. Returns True when a row was deleted."""
        vote = self.session.execute(
            select(Vote).where(Vote.item_id == item_id, Vote.voter_id == voter_id)
        ).scalars().first()
        if vote is None:
            return False
        self.session.delete(vote)
        self.session.flush()
        return True

    def count_cast_between(self, voter_id: str, start: datetime, end: datetime) -> int:
        """Count the voter's live vote rows created in ``[start, end)``.

        Undone votes are deleted rows and no longer count, so undoing a vote
        made today frees one unit of that day's quota. Cast-and-undo churn is
        therefore not limited by the daily quota.
        """
        stmt = select(func.count()).select_from(Vote).where(
            Vote.voter_id == voter_id,
            Vote.created_at >= start,
            Vote.created_at < end,
        )
        return int(self.session.execute(stmt).scalar_one())
