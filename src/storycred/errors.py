# src/storycred/errors.py

"""
Exception taxonomy for StoryCred.

Vote-path failures are normally reported as VoteResult values; these classes
are what VoteResult.raise_for_error() raises, and what analysis and store
calls raise directly.
"""

from typing import Optional


class StoryCredError(Exception):
    """Base class for all StoryCred errors."""


class InvalidInputError(StoryCredError, ValueError):
    """A story or vote request violates the documented value domains."""


class StoryNotFoundError(StoryCredError, LookupError):
    """The referenced story does not exist in the store."""

    def __init__(self, story_id: str):
        super().__init__(f"Story not found: {story_id}")
        self.story_id = story_id


class StoreError(StoryCredError):
    """Raised by a story store when a read or write cannot be completed."""


class AlreadyVotedError(StoryCredError):
    """The user already holds a vote record for this story."""

    def __init__(self, user_id: str, story_id: str):
        super().__init__(f"User {user_id} has already voted on story {story_id}")
        self.user_id = user_id
        self.story_id = story_id


class PersistenceFailedError(StoryCredError):
    """
    The store rejected or timed out on a vote increment.

    The optimistic tally change has already been rolled back when this is raised.
    """

    def __init__(self, story_id: str, cause: Optional[BaseException] = None):
        message = f"Failed to persist vote for story {story_id}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.story_id = story_id
        self.cause = cause
