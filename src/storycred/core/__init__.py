# src/storycred/core/__init__.py

"""
Core orchestration for StoryCred.
Manages configuration and the analysis/voting facade.
"""

from .config import StoryCredConfig, load_config
from .engine import StoryAnalysisEngine

__all__ = [
    "StoryCredConfig",
    "load_config",
    "StoryAnalysisEngine",
]
