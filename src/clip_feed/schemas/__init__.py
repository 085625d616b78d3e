# src/clip_feed/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .feed import CategoryResponse, FeedPage, ItemResponse, SortMode
from .vote import CastVoteResult, MyVoteResponse, UndoVoteResult, VoteCreate

__all__ = [
    "CategoryResponse", "FeedPage", "ItemResponse", "SortMode",
    "CastVoteResult", "MyVoteResponse", "UndoVoteResult", "VoteCreate",
]
