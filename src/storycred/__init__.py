# src/storycred/__init__.py

"""
StoryCred
Credibility scoring and community consensus for circulating news stories.
"""

__version__ = "0.1.0"
__author__ = "StoryCred Development Team"

# No direct exports from root; subpackages are accessed explicitly
# e.g., from storycred.credibility import compute_factors
