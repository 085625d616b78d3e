# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from clip_feed.api.v1.dependencies import get_vote_ledger_dep
from clip_feed.core.security import create_access_token
from clip_feed.db.session import Base, make_engine
from clip_feed.db.session import get_db as app_get_session
from clip_feed.main import app as fastapi_app
from clip_feed.models import Category, Item
from clip_feed.services.ledger import VoteLedger
from clip_feed.services.weights import VoterWeightPolicy

TEST_DB_URL = "sqlite://"

ELEVATED_VOTER = "voter-elevated"
ELEVATED_WEIGHT = 5

# Items default to distinct, strictly decreasing timestamps unless a test pins them.
BASE_TIME = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
_ITEM_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = make_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # The ledger commits its own transactions, so tests run against a real
    # session and the tables are emptied afterwards.
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def weight_policy() -> VoterWeightPolicy:
    """Default weight 1 plus one elevated voter."""
    return VoterWeightPolicy(default=1, overrides={ELEVATED_VOTER: ELEVATED_WEIGHT})


@pytest.fixture()
def ledger(weight_policy: VoterWeightPolicy) -> VoteLedger:
    return VoteLedger(weight_policy, daily_limit=200)


@pytest.fixture()
def use_ledger(app: FastAPI, ledger: VoteLedger) -> Iterator[VoteLedger]:
    """Route API requests through the test ledger."""
    app.dependency_overrides[get_vote_ledger_dep] = lambda: ledger
    try:
        yield ledger
    finally:
        app.dependency_overrides.pop(get_vote_ledger_dep, None)


@pytest.fixture()
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Return a factory building bearer headers for a voter id."""

    def _headers(voter_id: str) -> dict[str, str]:
        token = create_access_token(voter_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def category(db_session: Session) -> Iterator[Category]:
    """Create a default test category."""
    category = Category(name="Rocket League")
    db_session.add(category)
    db_session.commit()
    yield category


@pytest.fixture()
def make_item(db_session: Session) -> Callable[..., Item]:
    """Return a factory that persists an item and returns it."""

    def _make(**overrides: Any) -> Item:
        n = next(_ITEM_COUNTER)
        fields: dict[str, Any] = {
            "title": f"Clip {n}",
            "video_url": f"https://videos.example/{n}.mp4",
            "platform": "pc",
            "created_at": BASE_TIME - timedelta(minutes=n),
            "rank_score": 0,
            "visible": True,
        }
        fields.update(overrides)
        item = Item(**fields)
        db_session.add(item)
        db_session.commit()
        return item

    return _make


@pytest.fixture()
def test_item(make_item: Callable[..., Item]) -> Item:
    """Create a baseline visible item."""
    return make_item(title="Baseline clip")
