# src/clip_feed/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import feed_router, items_router, votes_router

__all__ = [
    "feed_router",
    "items_router",
    "votes_router",
]
