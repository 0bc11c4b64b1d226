"""Risk ranking — top-3 selection, severity buckets and density pattern.

Top-3 ordering is a three-level key:

1. index, descending
2. category priority (CONTAMINATE > CONTROL > CONCEAL > COLLAPSE)
3. within-category priority (unlisted dimensions rank 0)

Dimensions equal on all three keys keep their block order (stable sort);
such ties cannot be broken further and are not an error.

Incomplete dimensions are never ranked or bucketed.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from trust_check.dimensions import (
    CATEGORY_PRIORITY,
    DEEP_PATTERN_INSIGHTS,
    RISK_TIERS,
    Category,
    RiskDimension,
    RiskTier,
    classify_risk_tier,
    within_category_priority,
)
from trust_check.engine.scorer import DimensionScore, average_index
from trust_check.observability import EventHook, emit
from trust_check.responses import ITEM_COUNT

TOP_N = 3


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
DensityType = Literal["DISPERSED", "CONCENTRATED", "DEEP PATTERN"]


class RankedDimension(DimensionScore):
    """A risk score with its position in the top-3."""

    rank: int = Field(ge=1, le=TOP_N)


class SeverityBuckets(BaseModel):
    """All complete risk scores partitioned by severity tier."""

    model_config = ConfigDict(frozen=True)

    critical: tuple[DimensionScore, ...] = ()
    active: tuple[DimensionScore, ...] = ()
    moderate: tuple[DimensionScore, ...] = ()
    background: tuple[DimensionScore, ...] = ()

    def by_tier(self) -> dict[RiskTier, tuple[DimensionScore, ...]]:
        return dict(zip(RISK_TIERS, (self.critical, self.active, self.moderate, self.background)))

    def counts(self) -> dict[RiskTier, int]:
        return {tier: len(members) for tier, members in self.by_tier().items()}


class DensityPattern(BaseModel):
    """How concentrated the top-3 are across categories."""

    model_config = ConfigDict(frozen=True)

    type: DensityType
    description: str
    insight: str
    dominant_category: Category | None = None


class RiskSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_questions: int = ITEM_COUNT
    questions_answered: int = Field(ge=0, le=ITEM_COUNT)
    average_score: int = Field(ge=0, le=100)
    highest_score: int | None = None
    lowest_score: int | None = None


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------
def rank_key(score: DimensionScore) -> tuple[int, int, int]:
    """Sort key: ascending order of this key is the ranking order."""
    if not isinstance(score.name, RiskDimension) or score.category is None:
        raise ValueError(f"'{score.name}' is not a risk dimension")
    return (
        -score.require_index(),
        -CATEGORY_PRIORITY[score.category],
        -within_category_priority(score.name),
    )


def select_top3(
    scores: Iterable[DimensionScore],
    hook: EventHook | None = None,
) -> tuple[RankedDimension, ...]:
    """Return the 3 highest-ranked complete risk dimensions.

    Fewer than 3 are returned only when fewer than 3 dimensions are complete.
    """
    eligible = [s for s in scores if s.complete]
    ordered = sorted(eligible, key=rank_key)
    top = tuple(
        RankedDimension.model_validate({**s.model_dump(), "rank": i})
        for i, s in enumerate(ordered[:TOP_N], start=1)
    )
    emit(
        hook,
        "ranked",
        top3=[f"{r.name.value} ({r.index})" for r in top],
        eligible=len(eligible),
    )
    return top


# ---------------------------------------------------------------------------
# Bucketing
# ---------------------------------------------------------------------------
def bucket_by_severity(scores: Iterable[DimensionScore]) -> SeverityBuckets:
    """Place every complete risk score into exactly one tier bucket."""
    buckets: dict[RiskTier, list[DimensionScore]] = {tier: [] for tier in RISK_TIERS}
    for s in scores:
        if not s.complete:
            continue
        buckets[classify_risk_tier(s.require_index())].append(s)

    def _sorted(tier: RiskTier) -> tuple[DimensionScore, ...]:
        return tuple(sorted(buckets[tier], key=lambda s: -s.require_index()))

    return SeverityBuckets(
        critical=_sorted("Critical Pressure Points"),
        active=_sorted("Active Friction"),
        moderate=_sorted("Moderate Tension"),
        background=_sorted("Background Static"),
    )


# ---------------------------------------------------------------------------
# Density
# ---------------------------------------------------------------------------
def analyze_density(top3: Sequence[DimensionScore]) -> DensityPattern | None:
    """Classify the category spread of the top-3.

    Returns ``None`` only when there is nothing ranked at all.
    """
    if not top3:
        return None

    categories: list[Category] = []
    for s in top3:
        if s.category is not None and s.category not in categories:
            categories.append(s.category)

    if len(categories) >= 3:
        return DensityPattern(
            type="DISPERSED",
            description="Your trust challenges span multiple domains",
            insight=(
                "Your trust challenges touch multiple aspects of team life, suggesting "
                "systemic healing is needed across several dimensions."
            ),
        )
    if len(categories) == 2:
        return DensityPattern(
            type="CONCENTRATED",
            description="A focused wound needs targeted healing",
            insight=(
                "Your trust challenges cluster in specific areas, allowing for focused "
                "intervention strategies."
            ),
        )
    dominant = categories[0]
    return DensityPattern(
        type="DEEP PATTERN",
        description="A profound pattern requires dedicated attention",
        insight=DEEP_PATTERN_INSIGHTS[dominant],
        dominant_category=dominant,
    )


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------
def summarize_risks(scores: Sequence[DimensionScore], questions_answered: int) -> RiskSummary:
    values = [s.require_index() for s in scores if s.complete]
    return RiskSummary(
        questions_answered=questions_answered,
        average_score=average_index(scores),
        highest_score=max(values) if values else None,
        lowest_score=min(values) if values else None,
    )
