# src/storycred/credibility/__init__.py

"""
Credibility scoring for StoryCred.
Derives explanatory factors, evidence and a conclusion from a story's signals.
"""

from .conclusion import synthesize_conclusion
from .explanation import build_explanation
from .factors import FactorCalculator, compute_factors, vote_percentages

__all__ = [
    "FactorCalculator",
    "build_explanation",
    "compute_factors",
    "synthesize_conclusion",
    "vote_percentages",
]
