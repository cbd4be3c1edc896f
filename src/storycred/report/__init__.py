# src/storycred/report/__init__.py

"""
Reporting for StoryCred.
Builds misinformation alert summaries from tracked stories.
"""

from .alerts import Alert, AlertSeverity, build_alert, build_alerts, classify_severity, filter_alerts

__all__ = [
    "Alert",
    "AlertSeverity",
    "build_alert",
    "build_alerts",
    "classify_severity",
    "filter_alerts",
]
