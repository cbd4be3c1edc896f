# src/storycred/votes/__init__.py

"""
Community voting for StoryCred.
One vote per user per story, applied optimistically and rolled back on store failure.
"""

from .aggregator import VoteAggregator, VoteResult, VoteStatus
from .store import InMemoryStoryStore, StoryStore

__all__ = [
    "InMemoryStoryStore",
    "StoryStore",
    "VoteAggregator",
    "VoteResult",
    "VoteStatus",
]
