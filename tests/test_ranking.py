"""Tests for trust_check/engine/ranking.py."""

import pytest

from trust_check.dimensions import Category, RiskDimension, classify_risk_tier
from trust_check.engine.ranking import (
    analyze_density,
    bucket_by_severity,
    rank_key,
    select_top3,
    summarize_risks,
)
from trust_check.engine.scorer import DimensionScore, score_all
from trust_check.observability import EventCollector
from trust_check.responses import ITEM_COUNT, AssessmentResponses

# Block positions, see dimensions._RISK_CATEGORIES
INAUTH, UON, LOFT, RELUCT, SELF, MICRO, EV, HOARD, CLOSED = range(9)


def _quiet(event):
    pass


def _by_block(levels: dict[int, int | None], default: int = 3) -> AssessmentResponses:
    """Uniform answers per block; risk index = 25 * (answer - 1)."""
    answers: list[int | None] = []
    for block in range(9):
        answers.extend([levels.get(block, default)] * 5)
    assert len(answers) == ITEM_COUNT
    return AssessmentResponses.from_lists(answers)


def _risks(levels: dict[int, int | None], default: int = 3):
    return score_all(_by_block(levels, default), hook=_quiet).risks


def _make_risk(name: RiskDimension, index: int, category: Category, tag: str) -> DimensionScore:
    """Hand-built risk score; *tag* tells otherwise identical scores apart."""
    return DimensionScore(
        name=name,
        kind="risk",
        raw_total=5 + index // 5,
        index=index,
        tier=classify_risk_tier(index),
        category=category,
        description=tag,
    )


class TestTrueTies:
    def test_identical_keys_keep_input_order(self):
        first = _make_risk(RiskDimension.MICROMANAGING, 75, Category.CONTROL, "first")
        second = _make_risk(RiskDimension.MICROMANAGING, 75, Category.CONTROL, "second")
        assert rank_key(first) == rank_key(second)

        top = select_top3([first, second], hook=_quiet)
        assert [r.description for r in top] == ["first", "second"]
        assert [r.rank for r in top] == [1, 2]

        swapped = select_top3([second, first], hook=_quiet)
        assert [r.description for r in swapped] == ["second", "first"]

    def test_tie_below_higher_score(self):
        leader = _make_risk(RiskDimension.LACK_OF_FOLLOW_THROUGH, 90, Category.COLLAPSE, "leader")
        a = _make_risk(RiskDimension.INAUTHENTICITY, 60, Category.CONCEAL, "a")
        b = _make_risk(RiskDimension.INAUTHENTICITY, 60, Category.CONCEAL, "b")
        c = _make_risk(RiskDimension.INAUTHENTICITY, 60, Category.CONCEAL, "c")
        top = select_top3([a, b, leader, c], hook=_quiet)
        assert [r.description for r in top] == ["leader", "a", "b"]


class TestSelectTop3:
    def test_all_threes_tie_break(self):
        top = select_top3(_risks({}), hook=_quiet)
        assert [r.name for r in top] == [
            RiskDimension.EMOTIONAL_VOLATILITY,
            RiskDimension.UNDERCURRENT_OF_NEGATIVITY,
            RiskDimension.MICROMANAGING,
        ]
        assert [r.rank for r in top] == [1, 2, 3]
        assert all(r.index == 50 for r in top)

    def test_index_dominates_category(self):
        top = select_top3(_risks({LOFT: 5}), hook=_quiet)
        assert top[0].name == RiskDimension.LACK_OF_FOLLOW_THROUGH
        assert top[0].index == 100

    def test_category_breaks_equal_index(self):
        top = select_top3(_risks({INAUTH: 4, MICRO: 4}, default=2), hook=_quiet)
        assert [r.name for r in top] == [
            RiskDimension.MICROMANAGING,
            RiskDimension.INAUTHENTICITY,
            RiskDimension.EMOTIONAL_VOLATILITY,
        ]
        assert [r.index for r in top] == [75, 75, 25]

    def test_within_category_order(self):
        top = select_top3(_risks({SELF: 5, MICRO: 5, HOARD: 5}, default=1), hook=_quiet)
        assert [r.name for r in top] == [
            RiskDimension.MICROMANAGING,
            RiskDimension.INFORMATION_HOARDING,
            RiskDimension.EXCESSIVE_SELF_RELIANCE,
        ]

    def test_deterministic(self):
        scores = _risks({UON: 4, CLOSED: 4, LOFT: 2})
        first = select_top3(scores, hook=_quiet)
        second = select_top3(list(reversed(scores)), hook=_quiet)
        assert [r.name for r in first] == [r.name for r in second]

    def test_incomplete_never_eligible(self):
        top = select_top3(_risks({EV: None}), hook=_quiet)
        assert RiskDimension.EMOTIONAL_VOLATILITY not in [r.name for r in top]
        assert [r.name for r in top] == [
            RiskDimension.UNDERCURRENT_OF_NEGATIVITY,
            RiskDimension.MICROMANAGING,
            RiskDimension.INFORMATION_HOARDING,
        ]

    def test_fewer_than_three_complete(self):
        levels = {block: None for block in range(9)}
        levels[LOFT] = 4
        top = select_top3(_risks(levels), hook=_quiet)
        assert len(top) == 1
        assert top[0].rank == 1

    def test_rank_key_rejects_strength(self):
        strength = score_all(_by_block({}), hook=_quiet).strengths[0]
        with pytest.raises(ValueError):
            rank_key(strength)

    def test_emits_ranked_event(self):
        collector = EventCollector()
        select_top3(_risks({}), hook=collector)
        assert collector.stages() == ["ranked"]
        assert collector.events[0].detail["eligible"] == 9


class TestBucketBySeverity:
    def test_partition(self):
        buckets = bucket_by_severity(_risks({INAUTH: 5, UON: 4, LOFT: 3, RELUCT: 2, SELF: 1}))
        counts = buckets.counts()
        assert counts == {
            "Critical Pressure Points": 1,
            "Active Friction": 1,
            "Moderate Tension": 5,
            "Background Static": 2,
        }
        assert sum(counts.values()) == 9

    def test_each_dimension_in_exactly_one_bucket(self):
        scores = _risks({MICRO: 5, EV: 4, CLOSED: 2})
        seen = [s.name for members in bucket_by_severity(scores).by_tier().values() for s in members]
        assert sorted(seen) == sorted(s.name for s in scores)

    def test_sorted_descending_within_tier(self):
        responses = AssessmentResponses.from_lists(
            [5, 5, 5, 5, 4] + [5] * 5 + [1] * 35
        )
        buckets = bucket_by_severity(score_all(responses, hook=_quiet).risks)
        assert [s.index for s in buckets.critical] == [100, 95]

    def test_incomplete_excluded(self):
        buckets = bucket_by_severity(_risks({EV: None}))
        assert sum(buckets.counts().values()) == 8


class TestAnalyzeDensity:
    def test_concentrated(self):
        density = analyze_density(select_top3(_risks({}), hook=_quiet))
        assert density.type == "CONCENTRATED"
        assert density.dominant_category is None

    def test_dispersed(self):
        density = analyze_density(select_top3(_risks({INAUTH: 4, MICRO: 4}, default=2), hook=_quiet))
        assert density.type == "DISPERSED"

    def test_deep_pattern(self):
        top = select_top3(_risks({INAUTH: 5, RELUCT: 5, CLOSED: 5}, default=1), hook=_quiet)
        assert [r.name for r in top] == [
            RiskDimension.INAUTHENTICITY,
            RiskDimension.CLOSED_MINDEDNESS,
            RiskDimension.RELUCTANCE_TO_TAKE_ON_CHALLENGES,
        ]
        density = analyze_density(top)
        assert density.type == "DEEP PATTERN"
        assert density.dominant_category == Category.CONCEAL
        assert "psychological safety" in density.insight

    def test_empty(self):
        assert analyze_density(()) is None


class TestSummarizeRisks:
    def test_summary(self):
        summary = summarize_risks(_risks({INAUTH: 5, SELF: 1}), questions_answered=45)
        assert summary.total_questions == 45
        assert summary.highest_score == 100
        assert summary.lowest_score == 0
        # (100 + 0 + 7 * 50) / 9 = 50
        assert summary.average_score == 50

    def test_nothing_complete(self):
        summary = summarize_risks(_risks({b: None for b in range(9)}), questions_answered=0)
        assert summary.average_score == 0
        assert summary.highest_score is None
        assert summary.lowest_score is None
