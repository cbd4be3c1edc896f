# src/storycred/credibility/factors.py

import logging
import math
from typing import Dict, List, Union

from storycred.normalize.schema import Factor, Story, Tally, VoteChoice

logger = logging.getLogger(__name__)

SOURCE_RELIABILITY = "Source Reliability"
SPREAD_ANALYSIS = "Spread Analysis"
COMMUNITY_CONSENSUS = "Community Consensus"

FACTOR_NAMES = (SOURCE_RELIABILITY, SPREAD_ANALYSIS, COMMUNITY_CONSENSUS)

NO_VOTES_SCORE = 0.0
NO_VOTES_DESCRIPTION = "No votes yet"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def format_number(value: Union[int, float]) -> str:
    """Render a number the way it was supplied: 60.0 -> '60', 12.5 -> '12.5'."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class FactorCalculator:
    """
    Derives the three explanatory credibility factors for a story.

    Factors are snapshots recomputed on every call and always returned in the
    same order: source reliability, spread analysis, community consensus.
    """

    def __init__(
        self,
        multi_source_score: float = 0.8,
        single_source_score: float = 0.4,
        score_precision: int = 3,
    ):
        """
        Initialize calculator with configurable parameters.

        Args:
            multi_source_score: Source reliability when a story has more than one source
            single_source_score: Source reliability for zero or one source
            score_precision: Decimal places kept on every factor score
        """
        self.multi_source_score = multi_source_score
        self.single_source_score = single_source_score
        self.score_precision = score_precision

    def compute(self, story: Story) -> List[Factor]:
        """
        Compute the ordered factor list for a story.

        Args:
            story: Validated Story

        Returns:
            Exactly three Factor objects in fixed order.
        """
        factors = [
            self._source_reliability(story),
            self._spread_analysis(story),
            self._community_consensus(story.votes),
        ]
        logger.debug(
            f"Factors for story {story.id}: "
            + ", ".join(f"{f.name}={f.score}" for f in factors)
        )
        return factors

    def _round(self, score: float) -> float:
        return round(score, self.score_precision)

    def _source_reliability(self, story: Story) -> Factor:
        count = len(story.sources)
        score = self.multi_source_score if count > 1 else self.single_source_score
        noun = "source" if count == 1 else "sources"
        return Factor(
            name=SOURCE_RELIABILITY,
            score=self._round(score),
            description=f"Story has {count} {noun}",
        )

    def _spread_analysis(self, story: Story) -> Factor:
        return Factor(
            name=SPREAD_ANALYSIS,
            score=self._round(1 - story.spread / 100),
            description=(
                f"Story has spread to {format_number(story.spread)}% "
                "of potential audience"
            ),
        )

    def _community_consensus(self, votes: Tally) -> Factor:
        total = votes.total
        if total == 0:
            return Factor(
                name=COMMUNITY_CONSENSUS,
                score=NO_VOTES_SCORE,
                description=NO_VOTES_DESCRIPTION,
            )

        ratio = votes.credible / total
        return Factor(
            name=COMMUNITY_CONSENSUS,
            score=self._round(ratio),
            description=f"{round_half_up(ratio * 100)}% of voters find it credible",
        )


_default_calculator = FactorCalculator()


def compute_factors(story: Story) -> List[Factor]:
    """Compute factors with the default scoring parameters."""
    return _default_calculator.compute(story)


def vote_percentages(votes: Tally) -> Dict[str, int]:
    """
    Per-choice share of the tally as whole percentages.

    Each share is rounded independently, so the three values need not sum to 100.
    All shares are 0 when nobody has voted yet.
    """
    total = votes.total
    if total == 0:
        return {choice.value: 0 for choice in VoteChoice}
    return {
        choice.value: round_half_up(votes.count(choice) / total * 100)
        for choice in VoteChoice
    }
