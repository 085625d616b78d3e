"""Feed endpoints for listing items in ranked or newest order."""

from fastapi import APIRouter, HTTPException, Query, status

from clip_feed.core.errors import TransientStoreError, ValidationError
from clip_feed.schemas.feed import FeedPage

from ..dependencies import FeedPlannerDep, SessionDep

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=FeedPage)
async def list_feed(
    db: SessionDep,
    planner: FeedPlannerDep,
    sort: str = Query("ranked", description="'ranked' or 'newest'"),
    category_id: int | None = Query(None, description="Only items in this category"),
    cursor: str | None = Query(None, description="next_cursor from the previous page"),
    limit: int | None = Query(None, description="Page size, clamped to 1..50"),
) -> FeedPage:
    """Return one page of the feed.

    A cursor the server cannot use restarts the feed at the first page rather
    than failing the request.
    """
    try:
        return planner.list_feed(
            db,
            sort_mode=sort,
            category_id=category_id,
            cursor=cursor,
            limit=limit,
        )
    except ValidationError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    except TransientStoreError as err:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Feed temporarily unavailable",
        ) from err
