# src/storycred/report/alerts.py

import logging
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel

from storycred.credibility.conclusion import synthesize_conclusion
from storycred.credibility.explanation import evidence_lines
from storycred.credibility.factors import FactorCalculator, compute_factors
from storycred.errors import InvalidInputError
from storycred.normalize.schema import Explanation, Story

logger = logging.getLogger(__name__)


class AlertSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Alert(BaseModel):
    id: str
    title: str
    description: str
    severity: AlertSeverity
    category: str
    timestamp: Optional[datetime] = None
    explanation: Explanation

    class Config:
        frozen = True


def classify_severity(
    confidence: float, high_threshold: float = 0.8, medium_threshold: float = 0.5
) -> AlertSeverity:
    """Severity from story confidence; both thresholds are exclusive."""
    if confidence > high_threshold:
        return AlertSeverity.HIGH
    if confidence > medium_threshold:
        return AlertSeverity.MEDIUM
    return AlertSeverity.LOW


def build_alert(
    story: Story,
    calculator: Optional[FactorCalculator] = None,
    high_threshold: float = 0.8,
    medium_threshold: float = 0.5,
) -> Alert:
    """
    Summarize a story as a misinformation alert.

    Args:
        story: Validated Story
        calculator: Factor calculator (default scoring parameters if omitted)
        high_threshold: Confidence above which the alert is high severity
        medium_threshold: Confidence above which the alert is medium severity

    Returns:
        Alert carrying its own explanation.
    """
    factors = calculator.compute(story) if calculator else compute_factors(story)
    return Alert(
        id=story.id,
        title=story.title,
        description=story.description,
        severity=classify_severity(story.confidence, high_threshold, medium_threshold),
        category=story.category,
        timestamp=story.date_detected,
        explanation=Explanation(
            factors=factors,
            evidence=evidence_lines(story),
            conclusion=synthesize_conclusion(story.verification_status),
        ),
    )


def build_alerts(
    stories: Iterable[Story],
    calculator: Optional[FactorCalculator] = None,
    high_threshold: float = 0.8,
    medium_threshold: float = 0.5,
) -> List[Alert]:
    alerts = [
        build_alert(story, calculator, high_threshold, medium_threshold)
        for story in stories
    ]
    logger.info(f"Built {len(alerts)} alerts")
    return alerts


def filter_alerts(
    alerts: Iterable[Alert], severity: Optional[Union[AlertSeverity, str]] = None
) -> List[Alert]:
    """Keep alerts of one severity; None keeps everything."""
    if severity is None:
        return list(alerts)
    try:
        severity = AlertSeverity(severity)
    except ValueError as e:
        raise InvalidInputError(f"Unknown alert severity: {severity!r}") from e
    return [alert for alert in alerts if alert.severity == severity]
