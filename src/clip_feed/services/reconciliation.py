"""Caller-side helpers for optimistic vote counts.

Clients show a vote immediately and settle it once the server answers. The
client never knows its own weight, so every optimistic change is exactly one
unit; a displayed count can be off until the next feed refetch brings back the
real ``rank_score``. That drift is expected.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from clip_feed.core.errors import NotFound, QuotaExceeded


class VoteOutcome(str, Enum):
    """Server outcomes a caller has to tell apart."""

    SUCCESS = "success"
    ALREADY_VOTED = "already_voted"
    QUOTA_EXCEEDED = "quota_exceeded"
    NOT_FOUND = "not_found"
    FAILED = "failed"


def classify_cast(result: Mapping[str, Any] | None) -> VoteOutcome:
    """Classify a cast response body. ``None`` means the request failed."""
    if result is None:
        return VoteOutcome.FAILED
    if result.get("voted") is True:
        return VoteOutcome.SUCCESS
    error = result.get("error")
    if error == QuotaExceeded.code:
        return VoteOutcome.QUOTA_EXCEEDED
    if error is None and result.get("voted") is False:
        return VoteOutcome.ALREADY_VOTED
    return VoteOutcome.FAILED


def classify_undo(result: Mapping[str, Any] | None) -> VoteOutcome:
    """Classify an undo response body. ``None`` means the request failed."""
    if result is None:
        return VoteOutcome.FAILED
    if result.get("unvoted") is True:
        return VoteOutcome.SUCCESS
    if result.get("error") == NotFound.code:
        return VoteOutcome.NOT_FOUND
    return VoteOutcome.FAILED


_MESSAGES = {
    VoteOutcome.ALREADY_VOTED: "You have already voted for this clip",
    VoteOutcome.QUOTA_EXCEEDED: "Daily vote limit reached",
    VoteOutcome.NOT_FOUND: "You have not voted for this clip",
    VoteOutcome.FAILED: "Failed to vote. Please try again.",
}


@dataclass(frozen=True)
class OptimisticVoteState:
    """What a client displays for one item, plus the state to roll back to."""

    count: int
    has_voted: bool
    pending: OptimisticVoteState | None = None
    error: str | None = None

    def begin_cast(self) -> OptimisticVoteState:
        """Show the vote before the server confirms it."""
        return OptimisticVoteState(
            count=self.count + 1,
            has_voted=True,
            pending=replace(self, pending=None, error=None),
        )

    def begin_undo(self) -> OptimisticVoteState:
        """Hide the vote before the server confirms the undo."""
        return OptimisticVoteState(
            count=max(0, self.count - 1),
            has_voted=False,
            pending=replace(self, pending=None, error=None),
        )

    def settle_cast(self, outcome: VoteOutcome) -> OptimisticVoteState:
        """Keep or roll back a pending cast."""
        base = self.pending or self
        if outcome is VoteOutcome.SUCCESS:
            return replace(self, pending=None, error=None)
        if outcome is VoteOutcome.ALREADY_VOTED:
            # The server count already includes this vote.
            return replace(base, has_voted=True, error=_MESSAGES[outcome])
        return replace(base, error=_MESSAGES[outcome])

    def settle_undo(self, outcome: VoteOutcome) -> OptimisticVoteState:
        """Keep or roll back a pending undo."""
        base = self.pending or self
        if outcome is VoteOutcome.SUCCESS:
            return replace(self, pending=None, error=None)
        if outcome is VoteOutcome.NOT_FOUND:
            # Nothing was removed server side, so the count never included it.
            return replace(base, has_voted=False, error=_MESSAGES[outcome])
        return replace(base, error=_MESSAGES[outcome])
