"""Feed query planner: ordered, filtered, keyset-paginated reads."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from clip_feed.core.errors import TransientStoreError, ValidationError
from clip_feed.core.settings import settings
from clip_feed.models import Item
from clip_feed.repositories.item_repo import ItemRepository
from clip_feed.schemas.feed import FeedPage, ItemResponse, SortMode
from clip_feed.services import cursor as cursor_codec

logger = logging.getLogger(__name__)

MIN_PAGE_SIZE = 1

# Names the original web client used for the ranked ordering.
_SORT_ALIASES = {"votes": SortMode.RANKED, "top": SortMode.RANKED}


def parse_sort_mode(value: SortMode | str) -> SortMode:
    """Resolve a sort mode name.

    Raises:
        ValidationError: If the name is not a known ordering.
    """
    if isinstance(value, SortMode):
        return value
    if isinstance(value, str):
        name = value.strip().lower()
        if name in _SORT_ALIASES:
            return _SORT_ALIASES[name]
        try:
            return SortMode(name)
        except ValueError:
            pass
    raise ValidationError(f"Unknown sort mode: {value!r}")


def sort_key(item: Item, sort_mode: SortMode) -> tuple[Any, ...]:
    """Return the comparison key the feed orders ``item`` by (descending)."""
    if sort_mode is SortMode.RANKED:
        return (item.rank_score, item.created_at, item.id)
    return (item.created_at, item.id)


class FeedQueryPlanner:
    """Build and run one page of the feed."""

    def __init__(self, *, default_limit: int | None = None, max_limit: int | None = None) -> None:
        self.max_limit = max_limit or settings.feed_max_limit
        self.default_limit = min(default_limit or settings.feed_default_limit, self.max_limit)

    def clamp_limit(self, limit: int | None) -> int:
        """Clamp a requested page size into ``[1, max_limit]``.

        Raises:
            ValidationError: If ``limit`` is not an integer.
        """
        if limit is None:
            return self.default_limit
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValidationError(f"Invalid limit: {limit!r}")
        return min(max(limit, MIN_PAGE_SIZE), self.max_limit)

    def list_feed(
        self,
        db: Session,
        *,
        sort_mode: SortMode | str = SortMode.RANKED,
        category_id: int | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> FeedPage:
        """Return one page of visible items and the cursor for the next one.

        Args:
            db: Database session.
            sort_mode: ``ranked`` (score, then newest) or ``newest``.
            category_id: Optional category equality filter.
            cursor: Token from the previous page. Unusable tokens restart the
                feed from the first page.
            limit: Requested page size, clamped to ``[1, max_limit]``.

        Returns:
            The page. ``next_cursor`` is set only when the page is full; a
            short page ends the feed.

        Raises:
            ValidationError: On a bad sort mode, limit or category id.
            TransientStoreError: If the store is unavailable.
        """
        mode = parse_sort_mode(sort_mode)
        page_size = self.clamp_limit(limit)
        if category_id is not None and (
            isinstance(category_id, bool) or not isinstance(category_id, int) or category_id < 1
        ):
            raise ValidationError(f"Invalid category id: {category_id!r}")

        boundary = cursor_codec.decode(cursor, mode)
        if cursor and boundary is None:
            logger.debug("Cursor not usable for %s feed; serving first page", mode.value)

        try:
            rows = ItemRepository(db).list_page(
                sort_mode=mode,
                limit=page_size,
                category_id=category_id,
                after=boundary.key() if boundary is not None else None,
            )
        except (OperationalError, InterfaceError) as err:
            logger.error("Feed query failed: %s", err)
            raise TransientStoreError("Feed store unavailable") from err

        next_cursor = None
        if len(rows) == page_size:
            next_cursor = cursor_codec.encode(rows[-1], mode)

        return FeedPage(
            items=[ItemResponse.model_validate(row) for row in rows],
            next_cursor=next_cursor,
        )


def get_feed_planner() -> FeedQueryPlanner:
    """Return a feed planner configured from application settings."""
    return FeedQueryPlanner()
