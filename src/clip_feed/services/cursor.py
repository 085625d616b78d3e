"""Opaque continuation tokens for keyset pagination.

A cursor carries the sort key of the last item on a page. Tokens are
unsigned and held by clients, so :func:`decode` treats every token as
untrusted input and falls back to the first page instead of failing.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from clip_feed.db.time import as_utc
from clip_feed.models import Item
from clip_feed.schemas.feed import SortMode

logger = logging.getLogger(__name__)

# Largest value a signed 64-bit column accepts.
_MAX_KEY = 2**63 - 1

# Real tokens are well under 200 characters.
MAX_TOKEN_LENGTH = 512


class CursorBoundary(BaseModel):
    """Decoded sort key of the last item on the previous page."""

    sort_mode: SortMode = Field(alias="m")
    rank_score: int | None = Field(default=None, alias="r", ge=0, le=_MAX_KEY)
    created_at: datetime = Field(alias="c")
    id: int = Field(alias="i", ge=1, le=_MAX_KEY)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("created_at")
    @classmethod
    def _normalize_timezone(cls, value: datetime) -> datetime:
        try:
            return as_utc(value)
        except OverflowError as err:
            # Offsets on dates at the calendar edges have no UTC equivalent.
            raise ValueError("created_at is out of range") from err

    @model_validator(mode="after")
    def _require_rank_for_ranked(self) -> CursorBoundary:
        if self.sort_mode is SortMode.RANKED and self.rank_score is None:
            raise ValueError("ranked cursors must carry a rank score")
        return self

    def key(self) -> tuple[Any, ...]:
        """Return the boundary as a tuple aligned with the feed's sort columns."""
        if self.sort_mode is SortMode.RANKED:
            return (self.rank_score, self.created_at, self.id)
        return (self.created_at, self.id)


def encode(item: Item, sort_mode: SortMode) -> str:
    """Encode the sort key of ``item`` under ``sort_mode`` as an opaque token."""
    payload: dict[str, Any] = {"m": sort_mode.value}
    if sort_mode is SortMode.RANKED:
        payload["r"] = int(item.rank_score)
    payload["c"] = as_utc(item.created_at).isoformat()
    payload["i"] = int(item.id)
    raw = json.dumps(payload, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def decode(token: str | None, sort_mode: SortMode) -> CursorBoundary | None:
    """Decode a token issued for ``sort_mode``.

    Returns None, meaning "start from the first page", when the token is
    missing, malformed, incomplete, or was issued for another sort mode.
    """
    if not token:
        return None
    if len(token) > MAX_TOKEN_LENGTH:
        logger.debug("Ignoring oversized cursor (%d characters)", len(token))
        return None

    padding = "=" * (-len(token) % 4)
    try:
        raw = base64.urlsafe_b64decode(token + padding)
        data = json.loads(raw)
    except (binascii.Error, ValueError, RecursionError):
        logger.debug("Ignoring undecodable cursor %r", token)
        return None

    if not isinstance(data, dict):
        logger.debug("Ignoring cursor with non-object payload %r", token)
        return None

    try:
        boundary = CursorBoundary.model_validate(data)
    except ValidationError:
        logger.debug("Ignoring cursor with invalid fields %r", token)
        return None

    if boundary.sort_mode is not sort_mode:
        logger.debug("Ignoring %s cursor on %s feed", boundary.sort_mode.value, sort_mode.value)
        return None
    return boundary
