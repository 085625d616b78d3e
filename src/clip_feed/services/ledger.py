"""Weighted, idempotent vote ledger.

The ledger owns every vote row and is the only writer of ``Item.rank_score``.
Each cast or undo runs as one transaction that locks the target item row,
changes the vote set, and re-derives the item's score from scratch:

    rank_score = max(0, sum(weight(voter) for every vote on the item))

Re-deriving instead of adding or subtracting a delta means the score also
picks up weight policy changes the next time the item is touched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session

from clip_feed.core.errors import (
    AuthRequired,
    NotFound,
    QuotaExceeded,
    TransientStoreError,
    ValidationError,
)
from clip_feed.core.settings import settings
from clip_feed.db.time import utc_day_bounds, utcnow
from clip_feed.repositories.item_repo import ItemRepository
from clip_feed.repositories.vote_repo import VoteRepository
from clip_feed.schemas.vote import CastVoteResult, UndoVoteResult
from clip_feed.services.weights import VoterWeightPolicy, get_weight_policy

logger = logging.getLogger(__name__)


class VoteLedger:
    """Apply casts and undos and keep item rank scores consistent with them."""

    def __init__(
        self,
        weights: VoterWeightPolicy | None = None,
        *,
        daily_limit: int | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Create a ledger.

        Args:
            weights: Voter weight policy; built from settings when omitted.
            daily_limit: New votes a non-elevated voter may cast per UTC day.
            clock: Source of "now", injectable for tests.
        """
        self.weights = weights or get_weight_policy()
        self.daily_limit = settings.daily_vote_limit if daily_limit is None else daily_limit
        self._clock = clock

    def voter_weight(self, voter_id: str) -> int:
        """Return the weight ``voter_id`` contributes to an item's score."""
        return self.weights.weight(voter_id)

    def cast_vote(self, db: Session, item_id: int, voter_id: str) -> CastVoteResult:
        """Record a vote by ``voter_id`` on ``item_id``.

        Returns:
            ``voted=True`` when a new vote was stored, ``voted=False`` when the
            pair already had one, or ``error="quota_exceeded"`` when the voter
            used up today's allowance.

        Raises:
            AuthRequired: If no voter identity was supplied.
            ValidationError: If the item identifier is not a positive integer.
            NotFound: If the item does not exist or is hidden.
            TransientStoreError: If the store failed; the call can be retried.
        """
        self._check_request(item_id, voter_id)
        items = ItemRepository(db)
        votes = VoteRepository(db)

        with self._unit_of_work(db):
            item = items.lock(item_id)
            if item is None or not item.visible:
                raise NotFound(f"Item {item_id} not found")

            if votes.exists(item_id, voter_id):
                return CastVoteResult(voted=False)

            now = self._clock()
            if self._over_daily_limit(votes, voter_id, now):
                logger.warning("Daily vote limit reached for voter %s", voter_id)
                return CastVoteResult(voted=False, error=QuotaExceeded.code)

            try:
                votes.add(item_id, voter_id, now)
            except IntegrityError:
                # Lost a race with an identical cast; that one counted.
                db.rollback()
                logger.info("Duplicate vote by %s on item %s ignored", voter_id, item_id)
                return CastVoteResult(voted=False)

            item.rank_score = self._resum(items, item_id)
            logger.debug("Item %s rank score now %s", item_id, item.rank_score)
            return CastVoteResult(voted=True)

    def undo_vote(self, db: Session, item_id: int, voter_id: str) -> UndoVoteResult:
        """Remove the vote by ``voter_id`` on ``item_id``.

        A missing vote is an ordinary outcome reported as
        ``error="not_found"``. Hidden items accept undos.

        Raises:
            AuthRequired: If no voter identity was supplied.
            ValidationError: If the item identifier is not a positive integer.
            TransientStoreError: If the store failed; the call can be retried.
        """
        self._check_request(item_id, voter_id)
        items = ItemRepository(db)
        votes = VoteRepository(db)

        with self._unit_of_work(db):
            item = items.lock(item_id)
            if item is None or not votes.remove(item_id, voter_id):
                return UndoVoteResult(unvoted=False, error=NotFound.code)

            item.rank_score = self._resum(items, item_id)
            logger.debug("Item %s rank score now %s", item_id, item.rank_score)
            return UndoVoteResult(unvoted=True)

    def has_voted(self, db: Session, item_id: int, voter_id: str) -> bool:
        """Return True when the voter currently has a vote on the item."""
        self._check_request(item_id, voter_id)
        try:
            return VoteRepository(db).exists(item_id, voter_id)
        except (OperationalError, InterfaceError) as err:
            raise TransientStoreError("Vote store unavailable") from err

    def recount(self, db: Session, item_id: int) -> int:
        """Re-derive one item's rank score from its votes and return it.

        Raises:
            NotFound: If the item does not exist.
        """
        return self._recount(db, item_id)[1]

    def recount_all(self, db: Session) -> int:
        """Re-derive every item's rank score. Returns how many items changed.

        Each item is recounted in its own transaction so votes on other items
        are never blocked for the length of the sweep.
        """
        with self._unit_of_work(db):
            item_ids = ItemRepository(db).list_ids()

        changed = 0
        for item_id in item_ids:
            try:
                before, after = self._recount(db, item_id)
            except NotFound:
                continue
            if after != before:
                logger.info("Corrected rank score of item %s: %s -> %s", item_id, before, after)
                changed += 1
        return changed

    def _check_request(self, item_id: int, voter_id: str) -> None:
        if not voter_id:
            raise AuthRequired("A voter identity is required")
        if isinstance(item_id, bool) or not isinstance(item_id, int) or item_id < 1:
            raise ValidationError(f"Invalid item id: {item_id!r}")

    def _over_daily_limit(self, votes: VoteRepository, voter_id: str, now: datetime) -> bool:
        if self.weights.is_elevated(voter_id):
            return False
        start, end = utc_day_bounds(now)
        return votes.count_cast_between(voter_id, start, end) >= self.daily_limit

    def _recount(self, db: Session, item_id: int) -> tuple[int, int]:
        items = ItemRepository(db)
        with self._unit_of_work(db):
            item = items.lock(item_id)
            if item is None:
                raise NotFound(f"Item {item_id} not found")
            before = item.rank_score
            item.rank_score = self._resum(items, item_id)
            return before, item.rank_score

    def _resum(self, items: ItemRepository, item_id: int) -> int:
        return max(0, items.sum_vote_weights(item_id, self.voter_weight))

    @contextmanager
    def _unit_of_work(self, db: Session) -> Iterator[None]:
        """Commit on normal exit, roll back on any exception."""
        try:
            yield
            db.commit()
        except (OperationalError, InterfaceError) as err:
            db.rollback()
            logger.error("Vote store failure: %s", err)
            raise TransientStoreError("Vote store unavailable") from err
        except Exception:
            db.rollback()
            raise


def get_vote_ledger() -> VoteLedger:
    """Return a vote ledger configured from application settings."""
    return VoteLedger()
