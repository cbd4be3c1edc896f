# src/storycred/votes/store.py

import logging
import threading
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from storycred.errors import InvalidInputError, StoryNotFoundError
from storycred.normalize.schema import Story, VoteChoice
from storycred.normalize.transformer import load_stories

logger = logging.getLogger(__name__)


class StoryStore(ABC):
    """
    Canonical holder of stories and their vote counts.

    Implementations own persistence. `increment_vote` must be atomic for a
    single counter and should enforce its own timeout, raising TimeoutError
    or StoreError when the write cannot be confirmed.
    """

    @abstractmethod
    def get_story(self, story_id: str) -> Story:
        """Return the story, or raise StoryNotFoundError."""

    @abstractmethod
    def increment_vote(self, story_id: str, choice: VoteChoice) -> int:
        """Add one vote to `choice` and return the new count for that choice."""

    @abstractmethod
    def list_stories(self) -> List[Story]:
        """Return every story currently held, in insertion order."""


class InMemoryStoryStore(StoryStore):
    """
    Thread-safe in-process story store.

    Used as the reference store and in tests. `latency` simulates a slow
    backend by sleeping before each vote write.
    """

    def __init__(self, stories: Optional[Iterable[Story]] = None, latency: float = 0.0):
        """
        Initialize the store.

        Args:
            stories: Initial stories (ids must be unique)
            latency: Seconds to sleep before each increment
        """
        self.latency = latency
        self._stories: Dict[str, Story] = {}
        self._lock = threading.Lock()
        for story in stories or []:
            self.add_story(story)

    @classmethod
    def from_file(
        cls, path: Union[str, Path], latency: float = 0.0
    ) -> "InMemoryStoryStore":
        """Create a store seeded from a YAML or JSON story file."""
        return cls(load_stories(path), latency=latency)

    def add_story(self, story: Story) -> None:
        with self._lock:
            if story.id in self._stories:
                raise InvalidInputError(f"Duplicate story id: {story.id}")
            self._stories[story.id] = story

    def get_story(self, story_id: str) -> Story:
        with self._lock:
            story = self._stories.get(story_id)
        if story is None:
            raise StoryNotFoundError(story_id)
        return story

    def increment_vote(self, story_id: str, choice: VoteChoice) -> int:
        if self.latency:
            time.sleep(self.latency)

        with self._lock:
            story = self._stories.get(story_id)
            if story is None:
                raise StoryNotFoundError(story_id)
            votes = story.votes.incremented(choice)
            self._stories[story_id] = story.with_votes(votes)

        new_count = votes.count(choice)
        logger.debug(f"Store: story {story_id} {VoteChoice(choice).value} -> {new_count}")
        return new_count

    def list_stories(self) -> List[Story]:
        with self._lock:
            return list(self._stories.values())
