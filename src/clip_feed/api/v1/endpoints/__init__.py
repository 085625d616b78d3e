# src/clip_feed/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .feed import router as feed_router
from .items import router as items_router
from .votes import router as votes_router

__all__ = [
    "feed_router",
    "items_router",
    "votes_router",
]
