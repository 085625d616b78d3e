"""Tests for the pagination cursor codec."""

import base64
import json
from datetime import UTC, datetime
from types import SimpleNamespace

import pytest

from clip_feed.schemas.feed import SortMode
from clip_feed.services import cursor

CREATED = datetime(2024, 5, 1, 9, 30, 15, 123456, tzinfo=UTC)


def _token(payload: object) -> str:
    raw = json.dumps(payload).encode()
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def _item(rank_score: int = 7, created_at: datetime = CREATED, item_id: int = 42) -> SimpleNamespace:
    return SimpleNamespace(rank_score=rank_score, created_at=created_at, id=item_id)


def test_ranked_cursor_carries_full_sort_key() -> None:
    token = cursor.encode(_item(), SortMode.RANKED)
    boundary = cursor.decode(token, SortMode.RANKED)

    assert boundary is not None
    assert boundary.key() == (7, CREATED, 42)


def test_newest_cursor_omits_rank_score() -> None:
    token = cursor.encode(_item(), SortMode.NEWEST)
    boundary = cursor.decode(token, SortMode.NEWEST)

    assert boundary is not None
    assert boundary.rank_score is None
    assert boundary.key() == (CREATED, 42)


def test_token_is_url_safe_without_padding() -> None:
    token = cursor.encode(_item(), SortMode.RANKED)

    assert "=" not in token
    assert "+" not in token and "/" not in token


def test_naive_timestamps_are_treated_as_utc() -> None:
    naive = CREATED.replace(tzinfo=None)
    token = cursor.encode(_item(created_at=naive), SortMode.NEWEST)
    boundary = cursor.decode(token, SortMode.NEWEST)

    assert boundary is not None
    assert boundary.created_at == CREATED


@pytest.mark.parametrize("token", [None, ""])
def test_missing_token_means_first_page(token: str | None) -> None:
    assert cursor.decode(token, SortMode.RANKED) is None


@pytest.mark.parametrize(
    "token",
    [
        "not base64 at all!!",
        "%%%",
        base64.urlsafe_b64encode(b"not json").decode(),
        _token([1, 2, 3]),
        _token("ranked"),
        _token({"m": "ranked", "c": CREATED.isoformat(), "i": 3}),
        _token({"m": "ranked", "r": 5, "c": "yesterday", "i": 3}),
        _token({"m": "ranked", "r": -1, "c": CREATED.isoformat(), "i": 3}),
        _token({"m": "ranked", "r": 5, "c": CREATED.isoformat(), "i": 0}),
        _token({"m": "ranked", "r": 5, "c": CREATED.isoformat(), "i": 2**70}),
        _token({"m": "trending", "r": 5, "c": CREATED.isoformat(), "i": 3}),
        _token({"m": "ranked", "r": 1, "c": "0001-01-01T00:00:00+01:00", "i": 1}),
        _token({"m": "ranked", "r": 1, "c": "9999-12-31T23:59:59-01:00", "i": 1}),
    ],
)
def test_unusable_tokens_fall_back_to_first_page(token: str) -> None:
    assert cursor.decode(token, SortMode.RANKED) is None


def test_cursor_from_other_sort_mode_is_ignored() -> None:
    token = cursor.encode(_item(), SortMode.NEWEST)

    assert cursor.decode(token, SortMode.RANKED) is None


def _raw_token(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


@pytest.mark.parametrize("depth", [300, 5000])
def test_deeply_nested_payload_falls_back_to_first_page(depth: int) -> None:
    assert cursor.decode(_raw_token(b"[" * depth), SortMode.RANKED) is None


def test_oversized_token_is_ignored() -> None:
    padded = {"m": "ranked", "r": 5, "c": CREATED.isoformat(), "i": 3, "x": "a" * 600}
    token = _token(padded)

    assert len(token) > cursor.MAX_TOKEN_LENGTH
    assert cursor.decode(token, SortMode.RANKED) is None
