"""Tests for trust_check/payload.py."""

from datetime import datetime, timezone

import pytest

from trust_check import build_report
from trust_check.payload import (
    DEFAULT_HIDDEN_CONTRIBUTION,
    Participant,
    format_payload,
    intensity_profile,
    pattern_code,
    primary_focus,
    urgency_level,
)
from trust_check.responses import ITEM_COUNT, AssessmentResponses
from trust_check.settings import EngineSettings

SUBMITTED = datetime(2024, 1, 2, 9, 30, tzinfo=timezone.utc)


def _report(answers: list[int | None]):
    return build_report(AssessmentResponses.from_lists(answers), hook=lambda e: None)


def _payload(answers=None, include_raw_data=True, participant=None) -> dict:
    report = _report(answers or [3] * ITEM_COUNT)
    payload = format_payload(
        report,
        participant or Participant(name="Sam", email="sam@example.com", company="Acme"),
        settings=EngineSettings(assessment_version="v5", include_raw_data=include_raw_data),
        submitted_at=SUBMITTED,
    )
    return payload.to_json_dict()


class TestPayloadShape:
    def test_top_level_keys(self):
        data = _payload()
        assert set(data) == {
            "participant",
            "trustChallenges",
            "trustStrengths",
            "patternAnalysis",
            "reportMetadata",
            "processingHints",
            "rawAssessmentData",
            "incompleteDimensions",
        }

    def test_participant(self):
        participant = _payload()["participant"]
        assert participant == {
            "name": "Sam",
            "email": "sam@example.com",
            "company": "Acme",
            "submissionDate": "2024-01-02T09:30:00+00:00",
            "assessmentVersion": "v5",
        }

    def test_challenges(self):
        challenges = _payload()["trustChallenges"]
        assert challenges["top3"][0] == {
            "name": "Emotional Volatility",
            "score": 50,
            "severity": "Moderate Tension",
            "category": "CONTAMINATE",
            "rank": 1,
        }
        assert challenges["allScores"]["Micromanaging"] == 50
        assert challenges["severityBreakdown"] == {"critical": 0, "active": 0, "moderate": 9, "background": 0}
        assert challenges["densityPattern"]["type"] == "CONCENTRATED"
        assert challenges["summary"]["totalQuestions"] == 45

    def test_strengths(self):
        strengths = _payload()["trustStrengths"]
        assert len(strengths["emerging"]) == 9
        assert strengths["cornerstone"] == []
        assert strengths["patternAnalysis"]["dominantPattern"] == "Balanced"
        assert strengths["summary"]["strongestFoundation"] == {"name": "Authentic Presence", "score": 50}

    def test_pattern_analysis(self):
        analysis = _payload()["patternAnalysis"]
        assert analysis["combinationKey"] == "EmotionalVolatility-Micromanaging-UndercurrentofNegativity"
        assert analysis["relationships"][0]["challengeName"] == "Emotional Volatility"
        assert analysis["relationships"][0]["strengthName"] == "Emotional Wisdom"
        assert analysis["trustLandscape"]["metrics"]["balanceRatio"] == pytest.approx(1.0)
        assert analysis["keyInsights"][0]["type"] == "density"


class TestRawData:
    def test_included_by_default(self):
        raw = _payload()["rawAssessmentData"]
        assert raw["responses"] == [3] * ITEM_COUNT
        assert raw["questionOrder"] == list(range(ITEM_COUNT))
        assert raw["questionsAnswered"] == ITEM_COUNT

    def test_omitted_when_disabled(self):
        assert "rawAssessmentData" not in _payload(include_raw_data=False)


class TestMetadata:
    def test_all_threes(self):
        meta = _payload()["reportMetadata"]
        assert meta["patternCode"] == "EV-UoN-M"
        assert meta["intensityProfile"] == "EARLY_WARNING"
        assert meta["recommendationLevel"] == "MODERATE"
        sections = meta["customSections"]
        assert sections["hiddenContribution"] == "emotional_regulation_modeling"
        assert sections["transformationPath"] == "targeted_dual_approach"
        assert sections["immediateAction"] == "daily_emotional_check_ins"
        assert sections["openingTone"] == "appreciative_growth"

    def test_crisis(self):
        data = _payload([5] * ITEM_COUNT)
        meta = data["reportMetadata"]
        assert meta["intensityProfile"] == "CRISIS_MODE"
        assert meta["recommendationLevel"] == "INTENSIVE"
        assert meta["narrativeParameters"]["urgency"] == pytest.approx(1.0)
        assert meta["narrativeParameters"]["actionOrientation"] == pytest.approx(0.8)
        assert data["processingHints"]["urgencyLevel"] == "immediate"
        assert data["processingHints"]["toneGuidance"] == "compassionate_urgency"
        assert data["processingHints"]["primaryFocus"] == (
            "Address critical Emotional Volatility using available strengths"
        )

    def test_helpers(self):
        assert intensity_profile(1, 0) == "ACTIVE_TENSIONS"
        assert intensity_profile(0, 3) == "ACTIVE_TENSIONS"
        assert intensity_profile(0, 1) == "EMERGING_CONCERNS"
        assert urgency_level(0, 2) == "moderate"
        assert urgency_level(0, 0) == "low"


class TestHints:
    def test_leverage_from_cornerstone(self):
        answers = [1] * 10 + [3] * 35
        hints = _payload(answers)["processingHints"]
        assert [s["name"] for s in hints["strengthLeverage"]] == ["Authentic Presence", "Constructive Energy"]
        assert hints["hopeFactors"]["cornerstoneCount"] == 2
        assert hints["hopeFactors"]["strongestFoundation"] == "Authentic Presence"
        assert hints["primaryFocus"] == (
            "Leverage Authentic Presence to prevent escalation of Emotional Volatility"
        )


class TestIncompleteSubmission:
    def test_nothing_answered(self):
        report = _report([None] * ITEM_COUNT)
        assert pattern_code(report) == ""
        assert primary_focus(report).startswith("Complete the assessment")
        data = format_payload(
            report, settings=EngineSettings(), submitted_at=SUBMITTED
        ).to_json_dict()
        assert data["trustChallenges"]["top3"] == []
        assert data["trustChallenges"]["densityPattern"] is None
        assert data["reportMetadata"]["customSections"]["hiddenContribution"] == DEFAULT_HIDDEN_CONTRIBUTION
        assert len(data["incompleteDimensions"]["challenges"]) == 9
        assert data["participant"]["name"] is None

    def test_lists_incomplete_dimensions(self):
        answers: list[int | None] = [3] * ITEM_COUNT
        answers[0] = None
        data = _payload(answers)
        assert data["incompleteDimensions"] == {
            "challenges": ["Inauthenticity"],
            "strengths": ["Authentic Presence"],
        }
        assert data["trustChallenges"]["allScores"]["Inauthenticity"] is None
