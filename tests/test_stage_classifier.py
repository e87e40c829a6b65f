"""
Tests for keyword-based sales stage classification
"""

import pytest

from saleshub.analysis.errors import InvalidArgument
from saleshub.analysis.stage_classifier import (
    PROGRESSION_OPPORTUNITIES,
    STAGE_KEYWORDS,
    STAGE_NEXT_STEPS,
    classify_stage,
    count_stage_matches,
)


class TestClassifyStage:

    def test_prospecting_only(self):
        transcript = "hello, just reaching out for the first time"
        matches = count_stage_matches(transcript)
        # "hello", "hi" (in "reaching") and "first time"
        assert matches["Prospecting"] == 3
        assert all(count == 0 for stage, count in matches.items() if stage != "Prospecting")

        result = classify_stage(transcript)
        assert result.current_stage == "Prospecting"
        assert result.confidence_score == 50
        assert result.next_steps == STAGE_NEXT_STEPS["Prospecting"]

    def test_last_matching_stage_wins(self):
        result = classify_stage("hi there, hello, we are new here. ready to sign the agreement")
        # Prospecting has more hits but Closing is declared later
        assert count_stage_matches("hi there, hello, we are new here. ready to sign the agreement")["Prospecting"] >= 3
        assert result.current_stage == "Closing"
        assert result.next_steps == "Follow up - ensure implementation and satisfaction"

    def test_confidence_uses_winning_stage_keywords(self):
        result = classify_stage("Can we get a discount compared to the alternative?")
        assert result.current_stage == "Negotiation"
        # "discount", "compare", "alternative"
        assert result.confidence_score == 50

    def test_confidence_rounding(self):
        result = classify_stage("send me a quote")
        assert result.current_stage == "Proposal"
        assert result.confidence_score == 17

    def test_no_keywords_defaults_to_prospecting(self):
        result = classify_stage("zzz")
        assert result.current_stage == "Prospecting"
        assert result.confidence_score == 0

    def test_missing_transcript_uses_placeholder(self):
        result = classify_stage()
        assert result.current_stage == "Prospecting"
        assert result.confidence_score == 0
        assert classify_stage(None) == result

    def test_case_insensitive(self):
        assert classify_stage("WHAT IS THE PRICE").current_stage == "Proposal"

    def test_progression_opportunities_are_fixed(self):
        for transcript in ("hello", "quote", "sign"):
            result = classify_stage(transcript)
            assert result.progression_opportunities == list(PROGRESSION_OPPORTUNITIES)

    def test_to_dict(self):
        data = classify_stage("send me a quote").to_dict()
        assert data == {
            "current_stage": "Proposal",
            "confidence_score": 17,
            "next_steps": "Negotiate terms - address objections and finalize details",
            "progression_opportunities": [
                "Speed up sales cycle",
                "Improve conversion rate",
                "Reduce sales cost"
            ]
        }

    def test_idempotent(self):
        transcript = "Our current problem is the price"
        assert classify_stage(transcript).to_dict() == classify_stage(transcript).to_dict()

    def test_non_string_transcript(self):
        with pytest.raises(InvalidArgument):
            classify_stage(123)


def test_keyword_tables_cover_every_stage():
    assert list(STAGE_KEYWORDS) == [
        "Prospecting", "Qualification", "Needs Analysis",
        "Proposal", "Negotiation", "Closing"
    ]
    assert set(STAGE_NEXT_STEPS) == set(STAGE_KEYWORDS)
    for keywords in STAGE_KEYWORDS.values():
        assert 5 <= len(keywords) <= 6
