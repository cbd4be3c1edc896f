# tests/unit/test_credibility.py

import pytest

from storycred.credibility.conclusion import (
    CONCLUSIONS,
    FALSE_CONCLUSION,
    UNDER_INVESTIGATION_CONCLUSION,
    synthesize_conclusion,
)
from storycred.credibility.explanation import build_explanation, evidence_lines
from storycred.credibility.factors import (
    COMMUNITY_CONSENSUS,
    FACTOR_NAMES,
    NO_VOTES_DESCRIPTION,
    FactorCalculator,
    compute_factors,
    format_number,
    round_half_up,
    vote_percentages,
)
from storycred.errors import InvalidInputError
from storycred.normalize.schema import Story, Tally, VerificationStatus


def _story(**overrides):
    fields = dict(
        id="s1",
        sources=["a", "b"],
        spread=60,
        confidence=0.7,
        verification_status=VerificationStatus.INVESTIGATING,
        votes=Tally(credible=45, suspicious=20, fake=5),
        category="Science",
    )
    fields.update(overrides)
    return Story(**fields)


class TestFactorCalculator:
    """Test factor derivation from story signals."""

    def test_reference_scenario(self):
        """Two sources, 60% spread, 45/20/5 votes."""
        source, spread, consensus = compute_factors(_story())

        assert source.score == 0.8
        assert source.description == "Story has 2 sources"
        assert spread.score == 0.4
        assert spread.description == "Story has spread to 60% of potential audience"
        assert consensus.score == 0.643
        assert consensus.description == "64% of voters find it credible"

    def test_fixed_order_and_count(self):
        """Test three factors in presentation order regardless of input."""
        stories = [
            _story(),
            _story(sources=[], spread=0, votes=Tally()),
            _story(sources=["x"], spread=100, votes=Tally(fake=9)),
        ]
        for story in stories:
            factors = compute_factors(story)
            assert len(factors) == 3
            assert tuple(f.name for f in factors) == FACTOR_NAMES

    def test_single_source(self):
        source = compute_factors(_story(sources=["only.example"]))[0]
        assert source.score == 0.4
        assert source.description == "Story has 1 source"

    def test_no_sources(self):
        source = compute_factors(_story(sources=[]))[0]
        assert source.score == 0.4
        assert source.description == "Story has 0 sources"

    def test_duplicate_sources_counted(self):
        source = compute_factors(_story(sources=["a", "a"]))[0]
        assert source.score == 0.8

    def test_fractional_spread_verbatim(self):
        spread = compute_factors(_story(spread=12.5))[1]
        assert spread.score == 0.875
        assert spread.description == "Story has spread to 12.5% of potential audience"

    def test_spread_extremes(self):
        assert compute_factors(_story(spread=0))[1].score == 1.0
        assert compute_factors(_story(spread=100))[1].score == 0.0

    def test_no_votes_fallback(self):
        """Test zero total votes gives a defined score instead of dividing by zero."""
        consensus = compute_factors(_story(votes=Tally()))[2]
        assert consensus.name == COMMUNITY_CONSENSUS
        assert consensus.score == 0.0
        assert consensus.description == NO_VOTES_DESCRIPTION

    def test_consensus_bounds(self):
        tallies = [
            Tally(credible=1),
            Tally(fake=1),
            Tally(credible=1, suspicious=1, fake=1),
            Tally(credible=999, suspicious=1),
        ]
        for tally in tallies:
            score = compute_factors(_story(votes=tally))[2].score
            assert 0.0 <= score <= 1.0

    def test_unanimous_consensus(self):
        consensus = compute_factors(_story(votes=Tally(credible=3)))[2]
        assert consensus.score == 1.0
        assert consensus.description == "100% of voters find it credible"

    def test_half_percent_rounds_up(self):
        # 1/8 = 12.5% -> 13%
        consensus = compute_factors(_story(votes=Tally(credible=1, fake=7)))[2]
        assert consensus.description == "13% of voters find it credible"

    def test_custom_parameters(self):
        calculator = FactorCalculator(
            multi_source_score=0.9, single_source_score=0.2, score_precision=2
        )
        source, _, consensus = calculator.compute(_story())
        assert source.score == 0.9
        assert consensus.score == 0.64

    def test_deterministic(self):
        story = _story()
        assert compute_factors(story) == compute_factors(story)


class TestHelpers:
    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(64.2857) == 64
        assert round_half_up(70.00000000000001) == 70

    def test_format_number(self):
        assert format_number(60) == "60"
        assert format_number(60.0) == "60"
        assert format_number(12.5) == "12.5"

    def test_vote_percentages(self):
        assert vote_percentages(Tally(credible=45, suspicious=20, fake=5)) == {
            "credible": 64,
            "suspicious": 29,
            "fake": 7,
        }

    def test_vote_percentages_no_votes(self):
        assert vote_percentages(Tally()) == {"credible": 0, "suspicious": 0, "fake": 0}


class TestConclusion:
    """Test the three-way conclusion mapping."""

    def test_fake(self):
        assert "identified as false" in synthesize_conclusion(VerificationStatus.FAKE)

    def test_real(self):
        assert "verified as true" in synthesize_conclusion(VerificationStatus.REAL)

    def test_investigating(self):
        assert "under investigation" in synthesize_conclusion("investigating")

    def test_debunked_collapses_with_unverified(self):
        """Debunked deliberately shares the under-investigation wording."""
        debunked = synthesize_conclusion("debunked")
        assert debunked == synthesize_conclusion("unverified")
        assert debunked == synthesize_conclusion("investigating")
        assert debunked == UNDER_INVESTIGATION_CONCLUSION

    def test_fake_differs_from_debunked(self):
        assert synthesize_conclusion("fake") != synthesize_conclusion("debunked")
        assert synthesize_conclusion("fake") == FALSE_CONCLUSION

    def test_every_status_mapped(self):
        assert set(CONCLUSIONS) == set(VerificationStatus)

    def test_unknown_status(self):
        with pytest.raises(InvalidInputError, match="Unknown verification status"):
            synthesize_conclusion("satire")


class TestExplanation:
    """Test explanation assembly."""

    def test_build_explanation(self):
        story = _story()
        explanation = build_explanation(story)

        assert explanation.factors == compute_factors(story)
        assert explanation.evidence == [
            "Verification Status: investigating",
            "Confidence Score: 70%",
            "Category: Science",
        ]
        assert explanation.conclusion == UNDER_INVESTIGATION_CONCLUSION

    def test_evidence_for_fake_story(self):
        story = _story(verification_status=VerificationStatus.FAKE, confidence=0.95, category="Health")
        assert evidence_lines(story) == [
            "Verification Status: fake",
            "Confidence Score: 95%",
            "Category: Health",
        ]
        assert build_explanation(story).conclusion == FALSE_CONCLUSION

    def test_custom_calculator(self):
        calculator = FactorCalculator(multi_source_score=0.95)
        explanation = build_explanation(_story(), calculator)
        assert explanation.factors[0].score == 0.95
