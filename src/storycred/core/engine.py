# src/storycred/core/engine.py

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from storycred.core.config import StoryCredConfig
from storycred.credibility.explanation import build_explanation
from storycred.credibility.factors import FactorCalculator
from storycred.errors import InvalidInputError
from storycred.normalize.schema import (
    AnalysisResult,
    Story,
    VerificationStatus,
    VoteChoice,
)
from storycred.normalize.transformer import StoryNormalizer
from storycred.report.alerts import Alert, AlertSeverity, build_alerts, filter_alerts
from storycred.votes.aggregator import VoteAggregator, VoteResult
from storycred.votes.store import InMemoryStoryStore, StoryStore

logger = logging.getLogger(__name__)

# Binary rule-based sentiment, not a continuous model output
FAKE_SENTIMENT = -0.8
DEFAULT_SENTIMENT = 0.6

TOPIC_SUFFIX = ["Misinformation", "Fact Checking"]


class StoryAnalysisEngine:
    """
    Facade over credibility analysis and community voting.

    Analysis is a pure function of the supplied story. Votes are delegated to
    a VoteAggregator bound to the injected store, and every accepted vote is
    followed by a fresh analysis of the post-vote story.
    """

    def __init__(self, store: StoryStore, config: Optional[StoryCredConfig] = None):
        """
        Initialize the engine.

        Args:
            store: Story store the vote aggregator reads from and writes to
            config: Validated configuration (defaults if omitted)
        """
        self.config = config or StoryCredConfig()
        self.store = store
        self.calculator = FactorCalculator(
            multi_source_score=self.config.scoring.multi_source_score,
            single_source_score=self.config.scoring.single_source_score,
            score_precision=self.config.scoring.score_precision,
        )
        self.normalizer = StoryNormalizer()
        self.aggregator = VoteAggregator(store)

    @classmethod
    def from_config(cls, config: StoryCredConfig) -> "StoryAnalysisEngine":
        """Build an engine over an in-memory store seeded per config."""
        if config.store.seed_path:
            store = InMemoryStoryStore.from_file(
                config.store.seed_path, latency=config.store.latency_seconds
            )
        else:
            store = InMemoryStoryStore(latency=config.store.latency_seconds)
        return cls(store, config)

    def analyze(self, story: Union[Story, Mapping[str, Any], str]) -> AnalysisResult:
        """
        Analyze a story's credibility.

        Args:
            story: Story, or a raw record to validate first

        Returns:
            AnalysisResult with sentiment, topics, entities, score and explanation.

        Raises:
            InvalidInputError: If a raw record fails validation.
        """
        story = self.normalizer.normalize(story)
        sentiment = (
            FAKE_SENTIMENT
            if story.verification_status == VerificationStatus.FAKE
            else DEFAULT_SENTIMENT
        )
        result = AnalysisResult(
            sentiment=sentiment,
            topics=[story.category] + TOPIC_SUFFIX,
            entities=[story.region] + list(story.sources),
            credibility_score=story.confidence,
            explanation=build_explanation(story, self.calculator),
        )
        logger.debug(f"Analyzed story {story.id}")
        return result

    def cast_vote(self, user_id: str, story_id: str, choice: Union[VoteChoice, str]) -> VoteResult:
        """
        Cast a vote and, when accepted, re-analyze the updated story.

        Returns:
            VoteResult; `analysis` is populated only for accepted votes.
        """
        result = self.aggregator.cast_vote(user_id, story_id, choice)
        if not result.ok:
            return result

        # Post-vote snapshot from the aggregator; no second store read after commit
        return result.model_copy(update={"analysis": self.analyze(result.story)})

    def get_story(self, story_id: str) -> Story:
        """Story with the live tally, as seen by the vote aggregator."""
        return self.aggregator.story(story_id)

    def list_stories(
        self, status: Optional[Union[VerificationStatus, str]] = None
    ) -> List[Story]:
        """All stories with live tallies, optionally filtered by verification status."""
        if status is not None:
            try:
                status = VerificationStatus(status)
            except ValueError as e:
                raise InvalidInputError(f"Unknown verification status: {status!r}") from e
        stories = []
        for story in self.store.list_stories():
            if status is not None and story.verification_status != status:
                continue
            stories.append(story.with_votes(self.aggregator.tally(story.id)))
        return stories

    def analyze_all(
        self, status: Optional[Union[VerificationStatus, str]] = None
    ) -> Dict[str, AnalysisResult]:
        """Analysis per story id, in store order."""
        return {story.id: self.analyze(story) for story in self.list_stories(status)}

    def build_alerts(
        self, severity: Optional[Union[AlertSeverity, str]] = None
    ) -> List[Alert]:
        """Misinformation alerts for every stored story, optionally of one severity."""
        alerts = build_alerts(
            self.list_stories(),
            calculator=self.calculator,
            high_threshold=self.config.alerts.high_threshold,
            medium_threshold=self.config.alerts.medium_threshold,
        )
        return filter_alerts(alerts, severity)
