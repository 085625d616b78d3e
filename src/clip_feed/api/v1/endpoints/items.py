"""Single-item read endpoint."""

from fastapi import APIRouter, HTTPException, Path, status

from clip_feed.repositories.item_repo import ItemRepository
from clip_feed.schemas.feed import ItemResponse

from ..dependencies import SessionDep

router = APIRouter(prefix="/items", tags=["items"])


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(
    db: SessionDep,
    item_id: int = Path(..., gt=0),
) -> ItemResponse:
    """Return a visible item with its current rank score."""
    item = ItemRepository(db).get_visible(item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return ItemResponse.model_validate(item)
