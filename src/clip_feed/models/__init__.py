# src/clip_feed/models/__init__.py
"""SQLAlchemy models for the Clip Feed application."""

from .item import Category, Item
from .vote import Vote

__all__ = [
    "Category", "Item",
    "Vote",
]
