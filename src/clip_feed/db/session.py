"""Engine and session factory for the item and vote store."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from clip_feed.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base for the ``category``, ``item`` and ``vote`` tables."""


# Models register on Base.metadata at import; migrations and tests read it.
import clip_feed.models  # noqa: E402,F401


def make_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine for ``url``.

    SQLite connections are shared across request threads, so same-thread
    checking is turned off for that dialect.
    """
    if url.startswith("sqlite"):
        connect_args = dict(kwargs.pop("connect_args", {}))
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    return create_engine(url, **kwargs)


engine = make_engine(settings.database_url, pool_pre_ping=True, echo=settings.sql_debug)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session; the ledger and planner manage its transactions."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
