# tests/conftest.py

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from storycred.normalize.schema import Story, Tally, VerificationStatus


@pytest.fixture
def sample_story():
    """The science story from the bundled sample data."""
    return Story(
        id="1",
        title="Breaking News: Major Scientific Discovery",
        description="Scientists have made a groundbreaking discovery in quantum computing.",
        sources=["reliable-news.com", "science-journal.org"],
        verification_status=VerificationStatus.INVESTIGATING,
        confidence=0.7,
        spread=60,
        category="Science",
        votes=Tally(credible=45, suspicious=20, fake=5),
    )


@pytest.fixture
def sample_data_path():
    return Path(__file__).parent.parent / "data" / "sample_stories.yaml"
