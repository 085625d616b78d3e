"""Data access helpers for working with feed items."""
from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from sqlalchemy import ColumnElement, literal, select, tuple_
from sqlalchemy.orm import Session

from clip_feed.models import Item, Vote
from clip_feed.schemas.feed import SortMode

__all__ = ["ItemRepository", "sort_columns"]


def sort_columns(sort_mode: SortMode) -> tuple[ColumnElement[Any], ...]:
    """Return the sort key columns for ``sort_mode``, most significant first.

    Every column is ordered descending. ``Item.id`` closes each key so the
    ordering is total.
    """
    if sort_mode is SortMode.RANKED:
        return (Item.rank_score, Item.created_at, Item.id)
    return (Item.created_at, Item.id)


class ItemRepository:
    """Thin wrapper around database access for item entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, item_id: int) -> Item | None:
        """Return an item by identifier, visible or not."""
        return self.session.get(Item, item_id)

    def get_visible(self, item_id: int) -> Item | None:
        """Return an item only when it is visible."""
        result = self.session.execute(
            select(Item).where(Item.id == item_id, Item.visible.is_(True))
        )
        return result.scalars().first()

    def lock(self, item_id: int) -> Item | None:
        """Load an item while holding its row lock until the transaction ends.

        Dialects without row locks (SQLite) ignore ``FOR UPDATE``; their
        writers are already serialized by the database lock.
        """
        result = self.session.execute(
            select(Item)
            .where(Item.id == item_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    def list_page(
        self,
        *,
        sort_mode: SortMode,
        limit: int,
        category_id: int | None = None,
        after: Sequence[Any] | None = None,
    ) -> list[Item]:
        """Return visible items in feed order.

        Args:
            sort_mode: Feed ordering to apply.
            limit: Maximum number of rows to return.
            category_id: Optional category equality filter.
            after: Sort key of the previous page's last item. Only rows whose
                key compares strictly lower are returned.
        """
        columns = sort_columns(sort_mode)
        stmt = select(Item).where(Item.visible.is_(True))
        if category_id is not None:
            stmt = stmt.where(Item.category_id == category_id)
        if after is not None:
            # One row-value comparison over the same columns as ORDER BY.
            bound = tuple_(
                *(literal(value, column.type) for column, value in zip(columns, after, strict=True))
            )
            stmt = stmt.where(tuple_(*columns) < bound)
        stmt = stmt.order_by(*(column.desc() for column in columns)).limit(limit)
        result = self.session.execute(stmt)
        return list(result.scalars())

    def sum_vote_weights(self, item_id: int, weight_of: Callable[[str], int]) -> int:
        """Return the summed weight of every active vote on an item.

        Args:
            item_id: Item whose votes are summed.
            weight_of: Callable resolving a voter id to its weight.
        """
        voter_ids = self.session.execute(
            select(Vote.voter_id).where(Vote.item_id == item_id)
        ).scalars()
        return sum(weight_of(voter_id) for voter_id in voter_ids)

    def list_ids(self) -> list[int]:
        """Return every item identifier in ascending order."""
        return list(self.session.execute(select(Item.id).order_by(Item.id)).scalars())
