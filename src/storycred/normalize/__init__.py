# src/storycred/normalize/__init__.py

"""
Normalization layer for StoryCred.
Defines the story data model and converts raw records into validated stories.
"""

from .schema import (
    AnalysisResult,
    Explanation,
    Factor,
    Story,
    Tally,
    VerificationStatus,
    VoteChoice,
    VoteRecord,
)
from .transformer import StoryNormalizer, load_stories, normalize_raw_story

__all__ = [
    "AnalysisResult",
    "Explanation",
    "Factor",
    "Story",
    "Tally",
    "VerificationStatus",
    "VoteChoice",
    "VoteRecord",
    "StoryNormalizer",
    "load_stories",
    "normalize_raw_story",
]
