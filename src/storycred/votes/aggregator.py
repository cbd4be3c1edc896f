# src/storycred/votes/aggregator.py

import logging
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, Field

from storycred.errors import (
    AlreadyVotedError,
    InvalidInputError,
    PersistenceFailedError,
    StoryNotFoundError,
)
from storycred.normalize.schema import (
    AnalysisResult,
    Story,
    Tally,
    VoteChoice,
    VoteRecord,
)
from storycred.votes.store import StoryStore

logger = logging.getLogger(__name__)

PairKey = Tuple[str, str]


class VoteStatus(str, Enum):
    ACCEPTED = "accepted"
    ALREADY_VOTED = "already_voted"
    PERSISTENCE_FAILED = "persistence_failed"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"


class VoteResult(BaseModel):
    status: VoteStatus
    user_id: str
    story_id: str
    choice: Optional[VoteChoice] = None
    tally: Optional[Tally] = Field(
        None, description="Tally after the call; unchanged unless status is accepted"
    )
    error: Optional[str] = None
    cause: Optional[BaseException] = Field(default=None, exclude=True, repr=False)
    story: Optional[Story] = Field(
        None, description="Post-vote story snapshot, set only when accepted"
    )
    analysis: Optional[AnalysisResult] = None

    @property
    def ok(self) -> bool:
        return self.status == VoteStatus.ACCEPTED

    def raise_for_error(self) -> None:
        """Raise the exception matching a non-accepted status; no-op on success."""
        if self.status == VoteStatus.ACCEPTED:
            return
        if self.status == VoteStatus.ALREADY_VOTED:
            raise AlreadyVotedError(self.user_id, self.story_id)
        if self.status == VoteStatus.PERSISTENCE_FAILED:
            raise PersistenceFailedError(self.story_id, self.cause) from self.cause
        if self.status == VoteStatus.NOT_FOUND:
            raise StoryNotFoundError(self.story_id)
        raise InvalidInputError(self.error or "Invalid vote request")

    class Config:
        frozen = True
        arbitrary_types_allowed = True


class _PairLock:
    """Lock for one (user_id, story_id) pair plus the number of calls using it."""

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class VoteAggregator:
    """
    Applies single-user votes to story tallies with one-vote-per-user semantics.

    Each vote is applied optimistically to an in-memory tally view, then
    persisted through the injected StoryStore. A failed or interrupted write
    is rolled back so the view only ever reflects persisted votes.

    Calls for the same (user_id, story_id) pair are serialized by a per-pair
    lock held across apply/persist/commit-or-rollback; the first call to
    persist successfully wins and later callers get ALREADY_VOTED. Calls for
    different pairs proceed concurrently and only contend on the short state
    lock guarding the tally views and vote records.
    """

    def __init__(self, store: StoryStore):
        self.store = store
        self._records: Dict[PairKey, VoteRecord] = {}
        self._tallies: Dict[str, Tally] = {}
        self._stories: Dict[str, Story] = {}
        self._state_lock = threading.Lock()
        self._pair_locks: Dict[PairKey, _PairLock] = {}
        self._pair_locks_guard = threading.Lock()

    def cast_vote(self, user_id: str, story_id: str, choice: Any) -> VoteResult:
        """
        Record one user's vote on a story.

        Args:
            user_id: Opaque voter identifier
            story_id: Story being voted on
            choice: VoteChoice or its string value

        Returns:
            VoteResult; status is ACCEPTED only when the store confirmed the write.
        """
        invalid = self._validate_request(user_id, story_id, choice)
        if invalid is not None:
            return invalid

        choice = VoteChoice(choice)
        key = (user_id, story_id)

        with self._locked_pair(key):
            with self._state_lock:
                existing = self._records.get(key)
                cached = self._tallies.get(story_id)
            if existing is not None:
                logger.warning(
                    f"User {user_id} already voted {existing.choice.value} "
                    f"on story {story_id}; ignoring {choice.value}"
                )
                return VoteResult(
                    status=VoteStatus.ALREADY_VOTED,
                    user_id=user_id,
                    story_id=story_id,
                    choice=choice,
                    tally=cached,
                    error=f"User {user_id} has already voted on story {story_id}",
                )

            try:
                self._load_tally(story_id)
            except StoryNotFoundError as e:
                logger.warning(f"Vote by {user_id} rejected: {e}")
                return VoteResult(
                    status=VoteStatus.NOT_FOUND,
                    user_id=user_id,
                    story_id=story_id,
                    choice=choice,
                    error=str(e),
                )
            except Exception as e:
                logger.error(f"Failed to read story {story_id} before voting: {e}")
                return VoteResult(
                    status=VoteStatus.PERSISTENCE_FAILED,
                    user_id=user_id,
                    story_id=story_id,
                    choice=choice,
                    error=str(e),
                    cause=e,
                )

            record = VoteRecord(user_id=user_id, story_id=story_id, choice=choice)
            self._apply(record)

            try:
                new_count = self.store.increment_vote(story_id, choice)
            except StoryNotFoundError as e:
                tally = self._rollback(record)
                logger.error(f"Story {story_id} vanished during vote, rolled back: {e}")
                return VoteResult(
                    status=VoteStatus.NOT_FOUND,
                    user_id=user_id,
                    story_id=story_id,
                    choice=choice,
                    tally=tally,
                    error=str(e),
                )
            except Exception as e:
                tally = self._rollback(record)
                logger.error(
                    f"Vote by {user_id} on story {story_id} failed to persist, "
                    f"rolled back: {e}"
                )
                return VoteResult(
                    status=VoteStatus.PERSISTENCE_FAILED,
                    user_id=user_id,
                    story_id=story_id,
                    choice=choice,
                    tally=tally,
                    error=str(e),
                    cause=e,
                )
            except BaseException:
                self._rollback(record)
                logger.error(
                    f"Vote by {user_id} on story {story_id} interrupted, rolled back"
                )
                raise

            with self._state_lock:
                tally = self._tallies[story_id]
                story = self._stories[story_id].with_votes(tally)

        logger.info(
            f"Vote accepted: user {user_id} -> {choice.value} on story {story_id} "
            f"(store count {new_count})"
        )
        return VoteResult(
            status=VoteStatus.ACCEPTED,
            user_id=user_id,
            story_id=story_id,
            choice=choice,
            tally=tally,
            story=story,
        )

    def tally(self, story_id: str) -> Tally:
        """Current tally view for a story, loading it from the store on first use."""
        return self._load_tally(story_id)

    def story(self, story_id: str) -> Story:
        """Story from the store carrying this aggregator's tally view."""
        story = self.store.get_story(story_id)
        return story.with_votes(self.tally(story_id))

    def has_voted(self, user_id: str, story_id: str) -> bool:
        with self._state_lock:
            return (user_id, story_id) in self._records

    def vote_of(self, user_id: str, story_id: str) -> Optional[VoteChoice]:
        with self._state_lock:
            record = self._records.get((user_id, story_id))
        return record.choice if record else None

    def records(self) -> List[VoteRecord]:
        with self._state_lock:
            return list(self._records.values())

    @contextmanager
    def _locked_pair(self, key: PairKey) -> Iterator[None]:
        # Entries live only while some call holds or waits on them
        with self._pair_locks_guard:
            entry = self._pair_locks.get(key)
            if entry is None:
                entry = self._pair_locks[key] = _PairLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._pair_locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._pair_locks[key]

    def _load_tally(self, story_id: str) -> Tally:
        with self._state_lock:
            tally = self._tallies.get(story_id)
        if tally is not None:
            return tally

        story = self.store.get_story(story_id)
        with self._state_lock:
            self._stories.setdefault(story_id, story)
            return self._tallies.setdefault(story_id, story.votes)

    def _apply(self, record: VoteRecord) -> None:
        with self._state_lock:
            self._tallies[record.story_id] = self._tallies[record.story_id].incremented(
                record.choice
            )
            self._records[record.key] = record

    def _rollback(self, record: VoteRecord) -> Tally:
        with self._state_lock:
            self._records.pop(record.key, None)
            tally = self._tallies[record.story_id].incremented(record.choice, -1)
            self._tallies[record.story_id] = tally
            return tally

    def _validate_request(
        self, user_id: Any, story_id: Any, choice: Any
    ) -> Optional[VoteResult]:
        problem = None
        if not isinstance(user_id, str) or not user_id.strip():
            problem = "user_id must be a non-empty string"
        elif not isinstance(story_id, str) or not story_id.strip():
            problem = "story_id must be a non-empty string"
        else:
            try:
                VoteChoice(choice)
            except ValueError:
                problem = (
                    f"Invalid vote choice {choice!r}; expected one of "
                    f"{[c.value for c in VoteChoice]}"
                )

        if problem is None:
            return None
        logger.warning(f"Rejected vote request: {problem}")
        return VoteResult(
            status=VoteStatus.INVALID_INPUT,
            user_id=str(user_id),
            story_id=str(story_id),
            error=problem,
        )
