"""Risk ↔ strength relationship analysis.

Pairs each top-3 risk with its fixed opposite strength, flags compensation
dynamics, and classifies the overall trust landscape.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from trust_check.dimensions import (
    COMPENSATION_PAIRS,
    COMPENSATION_RISK_FLOOR,
    COMPENSATION_STRENGTH_FLOOR,
    OPPOSITES,
    RiskDimension,
    RiskTier,
    StrengthDimension,
    StrengthTier,
)
from trust_check.engine.architecture import FoundationEntry, StrengthArchitecture
from trust_check.engine.ranking import DensityPattern, RankedDimension, SeverityBuckets
from trust_check.engine.scorer import DimensionScore
from trust_check.observability import EventHook, emit


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
Tension = Literal["high", "medium", "low"]
LandscapeType = Literal["Thriving", "Struggling", "Healthy", "Developing"]
Balance = Literal["Strength-Dominant", "Challenge-Heavy", "Stable-Growing", "Balanced"]
InsightType = Literal["density", "leverage", "tension", "landscape"]


class Relationship(BaseModel):
    """A top-3 risk paired with its opposite strength."""

    model_config = ConfigDict(frozen=True)

    risk: RiskDimension
    risk_score: int = Field(ge=0, le=100)
    risk_tier: RiskTier | None = None
    strength: StrengthDimension
    strength_score: int = Field(ge=0, le=100)
    strength_tier: StrengthTier | None = None
    tension: Tension
    insight: str


class CompensationPattern(BaseModel):
    """A high strength that may be overcompensating for a high risk."""

    model_config = ConfigDict(frozen=True)

    type: Literal["compensation"] = "compensation"
    strength: StrengthDimension
    strength_score: int = Field(ge=0, le=100)
    risk: RiskDimension
    risk_score: int = Field(ge=0, le=100)
    insight: str


class LandscapeMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    challenge_average: int
    strength_average: int
    balance_ratio: float
    critical_challenges: int
    cornerstone_strengths: int


class TrustLandscape(BaseModel):
    model_config = ConfigDict(frozen=True)

    balance: Balance
    landscape_type: LandscapeType
    description: str
    metrics: LandscapeMetrics


class Insight(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: InsightType
    insight: str
    priority: Literal["high", "medium"]


class PatternAnalysis(BaseModel):
    """Everything the analyzer derives from the top-3 and the strengths."""

    model_config = ConfigDict(frozen=True)

    combination_key: str
    relationships: tuple[Relationship, ...]
    compensation_patterns: tuple[CompensationPattern, ...]
    trust_landscape: TrustLandscape
    insights: tuple[Insight, ...]


# ---------------------------------------------------------------------------
# Pair-level rules
# ---------------------------------------------------------------------------
def calculate_tension(risk_score: int, strength_score: int) -> Tension:
    difference = abs(risk_score - strength_score)
    if difference >= 40:
        return "high"
    if difference >= 20:
        return "medium"
    return "low"


def relationship_insight(
    risk: RiskDimension,
    risk_score: int,
    strength: StrengthDimension,
    strength_score: int,
) -> str:
    diff = strength_score - risk_score
    if diff > 20:
        return (
            f"Your {strength.value} ({strength_score}) provides a strong foundation "
            f"to address {risk.value} ({risk_score})"
        )
    if diff < -20:
        return (
            f"{risk.value} ({risk_score}) is overwhelming your {strength.value} "
            f"({strength_score}) - this requires focused attention"
        )
    return (
        f"{risk.value} and {strength.value} are in tension "
        f"({risk_score} vs {strength_score}) - balanced approach needed"
    )


def is_compensation(
    strength: StrengthDimension,
    strength_score: int,
    risk: RiskDimension,
    risk_score: int,
) -> bool:
    """Strength > 80 and risk > 60 (strict) for a listed pair."""
    return (
        risk in COMPENSATION_PAIRS.get(strength, frozenset())
        and strength_score > COMPENSATION_STRENGTH_FLOOR
        and risk_score > COMPENSATION_RISK_FLOOR
    )


def combination_key(top3: Sequence[DimensionScore]) -> str:
    """Order-independent identifier for the top-3 combination."""
    return "-".join(sorted("".join(s.name.value.split()) for s in top3))


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------
def analyze_relationships(
    top3: Sequence[RankedDimension],
    strengths: Sequence[DimensionScore],
) -> list[Relationship]:
    """One relationship per top-3 risk whose opposite strength is complete."""
    by_name = {s.name: s for s in strengths}
    relationships: list[Relationship] = []
    for risk in top3:
        risk_name = RiskDimension(risk.name)
        opposite = OPPOSITES[risk_name]
        strength = by_name.get(opposite)
        if strength is None or not strength.complete:
            continue
        risk_score = risk.require_index()
        strength_score = strength.require_index()
        relationships.append(Relationship(
            risk=risk_name,
            risk_score=risk_score,
            risk_tier=risk.tier,
            strength=opposite,
            strength_score=strength_score,
            strength_tier=strength.tier,
            tension=calculate_tension(risk_score, strength_score),
            insight=relationship_insight(risk_name, risk_score, opposite, strength_score),
        ))
    return relationships


def identify_compensation_patterns(
    top3: Sequence[RankedDimension],
    cornerstone: Sequence[FoundationEntry],
) -> list[CompensationPattern]:
    """Check only Cornerstone strengths × top-3 risks."""
    patterns: list[CompensationPattern] = []
    for strength in cornerstone:
        for risk in top3:
            risk_name = RiskDimension(risk.name)
            risk_score = risk.require_index()
            if not is_compensation(strength.name, strength.score, risk_name, risk_score):
                continue
            patterns.append(CompensationPattern(
                strength=strength.name,
                strength_score=strength.score,
                risk=risk_name,
                risk_score=risk_score,
                insight=(
                    f"Your high {strength.name.value} ({strength.score}) may be "
                    f"overcompensating for {risk_name.value} ({risk_score}), creating "
                    "internal tension"
                ),
            ))
    return patterns


def assess_landscape(
    critical_count: int,
    cornerstone_count: int,
    challenge_average: int,
    strength_average: int,
) -> TrustLandscape:
    """Classify the landscape; the first matching rule wins."""
    balance: Balance = "Balanced"
    landscape_type: LandscapeType = "Developing"
    description = "Foundations and challenges are still taking shape"

    if cornerstone_count >= 3 and critical_count == 0:
        balance, landscape_type = "Strength-Dominant", "Thriving"
        description = "Strong foundation with manageable growth areas"
    elif critical_count >= 2 and cornerstone_count <= 1:
        balance, landscape_type = "Challenge-Heavy", "Struggling"
        description = "Significant challenges require immediate attention"
    elif cornerstone_count >= 2 and critical_count <= 1:
        balance, landscape_type = "Stable-Growing", "Healthy"
        description = "Good foundation with targeted improvement opportunities"

    return TrustLandscape(
        balance=balance,
        landscape_type=landscape_type,
        description=description,
        metrics=LandscapeMetrics(
            challenge_average=challenge_average,
            strength_average=strength_average,
            balance_ratio=strength_average / max(challenge_average, 1),
            critical_challenges=critical_count,
            cornerstone_strengths=cornerstone_count,
        ),
    )


def generate_insights(
    density: DensityPattern | None,
    architecture: StrengthArchitecture,
    relationships: Sequence[Relationship],
    landscape: TrustLandscape,
) -> list[Insight]:
    insights: list[Insight] = []

    if density is not None:
        insights.append(Insight(type="density", insight=density.insight, priority="high"))

    if architecture.cornerstone:
        top = architecture.cornerstone[0]
        insights.append(Insight(
            type="leverage",
            insight=(
                f"Your strongest foundation, {top.name.value} ({top.score}), can be "
                "leveraged to address your primary challenges."
            ),
            priority="medium",
        ))

    insights.extend(
        Insight(
            type="tension",
            insight=(
                f"High tension between {rel.risk.value} ({rel.risk_score}) and "
                f"{rel.strength.value} ({rel.strength_score}) suggests internal conflict "
                "requiring attention."
            ),
            priority="high",
        )
        for rel in relationships
        if rel.tension == "high"
    )

    insights.append(Insight(
        type="landscape",
        insight=f"Your trust landscape is {landscape.landscape_type}: {landscape.description}",
        priority="medium",
    ))
    return insights


def analyze_patterns(
    top3: Sequence[RankedDimension],
    strengths: Sequence[DimensionScore],
    severity: SeverityBuckets,
    architecture: StrengthArchitecture,
    density: DensityPattern | None,
    challenge_average: int,
    strength_average: int,
    hook: EventHook | None = None,
) -> PatternAnalysis:
    """Run every relationship rule and bundle the results."""
    relationships = analyze_relationships(top3, strengths)
    compensation = identify_compensation_patterns(top3, architecture.cornerstone)
    landscape = assess_landscape(
        critical_count=len(severity.critical),
        cornerstone_count=len(architecture.cornerstone),
        challenge_average=challenge_average,
        strength_average=strength_average,
    )
    analysis = PatternAnalysis(
        combination_key=combination_key(top3),
        relationships=tuple(relationships),
        compensation_patterns=tuple(compensation),
        trust_landscape=landscape,
        insights=tuple(generate_insights(density, architecture, relationships, landscape)),
    )
    emit(
        hook,
        "analyzed",
        combination_key=analysis.combination_key,
        relationships=len(analysis.relationships),
        compensation_patterns=len(analysis.compensation_patterns),
        landscape=landscape.landscape_type,
    )
    return analysis
