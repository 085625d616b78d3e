# src/clip_feed/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Clip Feed API."""

from fastapi import APIRouter, HTTPException, Path, Response, status
from fastapi.responses import JSONResponse

from clip_feed.core.errors import NotFound, QuotaExceeded, TransientStoreError, ValidationError
from clip_feed.schemas.vote import CastVoteResult, MyVoteResponse, UndoVoteResult, VoteCreate

from ..dependencies import CurrentVoterDep, LedgerDep, SessionDep

router = APIRouter(prefix="/votes", tags=["votes"])

# Vote results are per-caller and must never be served from a cache.
NO_STORE = {"Cache-Control": "no-store"}


def _translate(err: Exception) -> HTTPException:
    if isinstance(err, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err))
    if isinstance(err, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Vote store temporarily unavailable; retry the request",
        headers=NO_STORE,
    )


@router.post(
    "/",
    response_model=CastVoteResult,
    response_model_exclude_none=True,
    responses={
        status.HTTP_201_CREATED: {"model": CastVoteResult},
        status.HTTP_429_TOO_MANY_REQUESTS: {"model": CastVoteResult},
    },
)
async def cast_vote(
    vote_data: VoteCreate,
    voter_id: CurrentVoterDep,
    db: SessionDep,
    ledger: LedgerDep,
    response: Response,
) -> CastVoteResult | JSONResponse:
    """Cast a vote on an item.

    Returns 201 with ``voted=true`` for a new vote, 200 with ``voted=false``
    when the caller had already voted, and 429 with
    ``error="quota_exceeded"`` once the daily limit is reached.
    """
    try:
        result = ledger.cast_vote(db, vote_data.item_id, voter_id)
    except (ValidationError, NotFound, TransientStoreError) as err:
        raise _translate(err) from err

    if result.error == QuotaExceeded.code:
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=result.model_dump(exclude_none=True),
            headers=NO_STORE,
        )

    response.headers.update(NO_STORE)
    response.status_code = status.HTTP_201_CREATED if result.voted else status.HTTP_200_OK
    return result


@router.delete("/{item_id}", response_model=UndoVoteResult, response_model_exclude_none=True)
async def undo_vote(
    voter_id: CurrentVoterDep,
    db: SessionDep,
    ledger: LedgerDep,
    response: Response,
    item_id: int = Path(..., gt=0),
) -> UndoVoteResult:
    """Remove the caller's vote on an item.

    A missing vote is answered with 200 and ``error="not_found"`` so retries
    of a successful undo stay harmless.
    """
    try:
        result = ledger.undo_vote(db, item_id, voter_id)
    except (ValidationError, TransientStoreError) as err:
        raise _translate(err) from err

    response.headers.update(NO_STORE)
    return result


@router.get("/{item_id}/my-vote", response_model=MyVoteResponse)
async def get_my_vote(
    voter_id: CurrentVoterDep,
    db: SessionDep,
    ledger: LedgerDep,
    response: Response,
    item_id: int = Path(..., gt=0),
) -> MyVoteResponse:
    """Report whether the caller currently has a vote on an item."""
    try:
        voted = ledger.has_voted(db, item_id, voter_id)
    except (ValidationError, TransientStoreError) as err:
        raise _translate(err) from err

    response.headers.update(NO_STORE)
    return MyVoteResponse(voted=voted)
