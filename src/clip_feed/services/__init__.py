# src/clip_feed/services/__init__.py
"""Business logic services for the Clip Feed application."""

from .feed import FeedQueryPlanner
from .ledger import VoteLedger
from .weights import VoterWeightPolicy

__all__ = [
    "FeedQueryPlanner",
    "VoteLedger",
    "VoterWeightPolicy",
]
