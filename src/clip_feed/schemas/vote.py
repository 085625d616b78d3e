"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote."""

    item_id: int = Field(..., gt=0, description="Identifier of the item to vote for")


class CastVoteResult(BaseModel):
    """Outcome of a cast.

    ``voted`` is False both for an existing vote and for a rejected one; only
    the latter carries ``error``.
    """

    voted: bool
    error: Literal["quota_exceeded"] | None = None


class UndoVoteResult(BaseModel):
    """Outcome of an undo."""

    unvoted: bool
    error: Literal["not_found"] | None = None


class MyVoteResponse(BaseModel):
    """Whether the caller currently has a vote on an item."""

    voted: bool
