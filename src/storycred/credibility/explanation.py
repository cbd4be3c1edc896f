# src/storycred/credibility/explanation.py

from typing import List, Optional

from storycred.credibility.conclusion import synthesize_conclusion
from storycred.credibility.factors import FactorCalculator, compute_factors, round_half_up
from storycred.normalize.schema import Explanation, Story


def evidence_lines(story: Story) -> List[str]:
    """Fixed-order evidence strings: status, confidence percentage, category."""
    return [
        f"Verification Status: {story.verification_status.value}",
        f"Confidence Score: {round_half_up(story.confidence * 100)}%",
        f"Category: {story.category}",
    ]


def build_explanation(
    story: Story, calculator: Optional[FactorCalculator] = None
) -> Explanation:
    """
    Assemble factors, evidence and conclusion for a story.

    Args:
        story: Validated Story
        calculator: Factor calculator to use (default scoring parameters if omitted)

    Returns:
        Explanation with presentation-stable ordering.
    """
    factors = calculator.compute(story) if calculator else compute_factors(story)
    return Explanation(
        factors=factors,
        evidence=evidence_lines(story),
        conclusion=synthesize_conclusion(story.verification_status),
    )
