"""Tests for trust_check/engine/relationships.py."""

import pytest

from trust_check.dimensions import Category, RiskDimension, StrengthDimension
from trust_check.engine.architecture import FoundationEntry, build_architecture
from trust_check.engine.ranking import RankedDimension, analyze_density, select_top3
from trust_check.engine.relationships import (
    analyze_relationships,
    assess_landscape,
    calculate_tension,
    combination_key,
    generate_insights,
    identify_compensation_patterns,
    is_compensation,
    relationship_insight,
)
from trust_check.engine.scorer import score_all
from trust_check.responses import AssessmentResponses


def _scores(levels: dict[int, int | None], default: int = 3):
    answers: list[int | None] = []
    for block in range(9):
        answers.extend([levels.get(block, default)] * 5)
    return score_all(AssessmentResponses.from_lists(answers), hook=lambda e: None)


def _ranked(name: RiskDimension, index: int, category: Category, rank: int = 1) -> RankedDimension:
    return RankedDimension(
        name=name,
        kind="risk",
        raw_total=5 + index // 5,
        index=index,
        category=category,
        rank=rank,
    )


def _cornerstone(name: StrengthDimension, score: int) -> FoundationEntry:
    return FoundationEntry(name=name, score=score, description="d", guidance="g")


class TestTension:
    @pytest.mark.parametrize(
        "risk, strength, expected",
        [
            (80, 40, "high"),
            (40, 80, "high"),
            (60, 40, "medium"),
            (40, 59, "low"),
            (50, 50, "low"),
        ],
    )
    def test_thresholds(self, risk, strength, expected):
        assert calculate_tension(risk, strength) == expected


class TestRelationshipInsight:
    def test_strong_foundation(self):
        text = relationship_insight(RiskDimension.MICROMANAGING, 20, StrengthDimension.EMPOWERED_AUTONOMY, 80)
        assert "provides a strong foundation" in text

    def test_overwhelming(self):
        text = relationship_insight(RiskDimension.MICROMANAGING, 80, StrengthDimension.EMPOWERED_AUTONOMY, 20)
        assert "is overwhelming" in text

    def test_in_tension(self):
        text = relationship_insight(RiskDimension.MICROMANAGING, 50, StrengthDimension.EMPOWERED_AUTONOMY, 50)
        assert "in tension" in text


class TestAnalyzeRelationships:
    def test_pairs_with_opposites(self):
        scores = _scores({})
        rels = analyze_relationships(select_top3(scores.risks, hook=lambda e: None), scores.strengths)
        assert [(r.risk, r.strength) for r in rels] == [
            (RiskDimension.EMOTIONAL_VOLATILITY, StrengthDimension.EMOTIONAL_WISDOM),
            (RiskDimension.UNDERCURRENT_OF_NEGATIVITY, StrengthDimension.CONSTRUCTIVE_ENERGY),
            (RiskDimension.MICROMANAGING, StrengthDimension.EMPOWERED_AUTONOMY),
        ]
        assert all(r.tension == "low" for r in rels)
        assert rels[0].risk_tier == "Moderate Tension"
        assert rels[0].strength_tier == "Emerging"

    def test_skips_missing_strength(self):
        scores = _scores({})
        top = select_top3(scores.risks, hook=lambda e: None)
        strengths = [s for s in scores.strengths if s.name != StrengthDimension.EMOTIONAL_WISDOM]
        rels = analyze_relationships(top, strengths)
        assert len(rels) == 2
        assert RiskDimension.EMOTIONAL_VOLATILITY not in [r.risk for r in rels]

    def test_high_tension(self):
        scores = _scores({6: 5})
        rels = analyze_relationships(select_top3(scores.risks, hook=lambda e: None), scores.strengths)
        assert rels[0].risk_score == 100
        assert rels[0].strength_score == 0
        assert rels[0].tension == "high"


class TestCompensation:
    def test_flagged(self):
        assert is_compensation(StrengthDimension.EMPOWERED_AUTONOMY, 85, RiskDimension.MICROMANAGING, 70)

    def test_strength_not_high_enough(self):
        assert not is_compensation(StrengthDimension.EMPOWERED_AUTONOMY, 75, RiskDimension.MICROMANAGING, 70)

    def test_thresholds_are_strict(self):
        assert not is_compensation(StrengthDimension.EMPOWERED_AUTONOMY, 80, RiskDimension.MICROMANAGING, 70)
        assert not is_compensation(StrengthDimension.EMPOWERED_AUTONOMY, 85, RiskDimension.MICROMANAGING, 60)

    def test_unlisted_pair(self):
        assert not is_compensation(StrengthDimension.AUTHENTIC_PRESENCE, 95, RiskDimension.MICROMANAGING, 95)

    def test_identify_patterns(self):
        top = [
            _ranked(RiskDimension.MICROMANAGING, 70, Category.CONTROL, rank=1),
            _ranked(RiskDimension.EMOTIONAL_VOLATILITY, 65, Category.CONTAMINATE, rank=2),
        ]
        cornerstone = [
            _cornerstone(StrengthDimension.EMPOWERED_AUTONOMY, 85),
            _cornerstone(StrengthDimension.EMOTIONAL_WISDOM, 80),
        ]
        patterns = identify_compensation_patterns(top, cornerstone)
        assert len(patterns) == 1
        assert patterns[0].strength == StrengthDimension.EMPOWERED_AUTONOMY
        assert patterns[0].risk == RiskDimension.MICROMANAGING
        assert "overcompensating" in patterns[0].insight

    def test_only_top3_risks_checked(self):
        cornerstone = [_cornerstone(StrengthDimension.EMPOWERED_AUTONOMY, 90)]
        top = [_ranked(RiskDimension.INAUTHENTICITY, 90, Category.CONCEAL)]
        assert identify_compensation_patterns(top, cornerstone) == []


class TestLandscape:
    def test_thriving(self):
        landscape = assess_landscape(critical_count=0, cornerstone_count=3, challenge_average=30, strength_average=70)
        assert landscape.landscape_type == "Thriving"
        assert landscape.balance == "Strength-Dominant"

    def test_struggling(self):
        landscape = assess_landscape(critical_count=2, cornerstone_count=1, challenge_average=70, strength_average=30)
        assert landscape.landscape_type == "Struggling"
        assert landscape.balance == "Challenge-Heavy"

    def test_healthy(self):
        landscape = assess_landscape(critical_count=1, cornerstone_count=2, challenge_average=40, strength_average=60)
        assert landscape.landscape_type == "Healthy"
        assert landscape.balance == "Stable-Growing"

    def test_first_rule_wins(self):
        """3 cornerstones and no critical also satisfies Healthy; Thriving wins."""
        assert assess_landscape(0, 5, 20, 80).landscape_type == "Thriving"

    def test_developing(self):
        landscape = assess_landscape(critical_count=3, cornerstone_count=6, challenge_average=50, strength_average=50)
        assert landscape.landscape_type == "Developing"
        assert landscape.balance == "Balanced"
        assert landscape.description

    def test_metrics(self):
        metrics = assess_landscape(1, 2, 40, 60).metrics
        assert metrics.balance_ratio == pytest.approx(1.5)
        assert metrics.critical_challenges == 1
        assert metrics.cornerstone_strengths == 2

    def test_zero_challenge_average(self):
        metrics = assess_landscape(0, 9, 0, 100).metrics
        assert metrics.balance_ratio == pytest.approx(100.0)


class TestCombinationKey:
    def test_sorted_and_stripped(self):
        scores = _scores({})
        key = combination_key(select_top3(scores.risks, hook=lambda e: None))
        assert key == "EmotionalVolatility-Micromanaging-UndercurrentofNegativity"

    def test_order_independent(self):
        a = _ranked(RiskDimension.CLOSED_MINDEDNESS, 90, Category.CONCEAL, 1)
        b = _ranked(RiskDimension.LACK_OF_FOLLOW_THROUGH, 80, Category.COLLAPSE, 2)
        assert combination_key([a, b]) == combination_key([b, a]) == "Closed-Mindedness-LackofFollow-Through"


class TestInsights:
    def test_ordering_and_types(self):
        scores = _scores({6: 5, 0: 1})
        top = select_top3(scores.risks, hook=lambda e: None)
        arch = build_architecture(scores.strengths)
        rels = analyze_relationships(top, scores.strengths)
        landscape = assess_landscape(1, len(arch.cornerstone), 50, 50)
        insights = generate_insights(analyze_density(top), arch, rels, landscape)
        assert [i.type for i in insights] == ["density", "leverage", "tension", "landscape"]
        assert insights[1].priority == "medium"
        assert "Authentic Presence (100)" in insights[1].insight
        assert insights[-1].insight.startswith("Your trust landscape is")

    def test_no_density_no_leverage(self):
        landscape = assess_landscape(0, 0, 0, 0)
        arch = build_architecture([])
        insights = generate_insights(None, arch, [], landscape)
        assert [i.type for i in insights] == ["landscape"]
