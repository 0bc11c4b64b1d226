"""Trust architecture — strength tiers, culture patterns and trust bridges.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from trust_check.dimensions import (
    LEVEL_GUIDANCE,
    STRENGTH_CLUSTERS,
    STRENGTH_DIMENSIONS,
    STRENGTH_TIERS,
    StrengthDimension,
    StrengthTier,
    classify_strength_tier,
)
from trust_check.engine.scorer import DimensionScore, average_index


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
CulturePattern = Literal["Learning Culture", "Execution Culture", "Relational Culture", "Balanced"]


class FoundationEntry(BaseModel):
    """A strength placed in the architecture, with level guidance."""

    model_config = ConfigDict(frozen=True)

    name: StrengthDimension
    score: int = Field(ge=0, le=100)
    description: str
    guidance: str


class StrengthArchitecture(BaseModel):
    """All complete strength scores partitioned by level."""

    model_config = ConfigDict(frozen=True)

    cornerstone: tuple[FoundationEntry, ...] = ()
    solid: tuple[FoundationEntry, ...] = ()
    emerging: tuple[FoundationEntry, ...] = ()
    fragile: tuple[FoundationEntry, ...] = ()

    def by_tier(self) -> dict[StrengthTier, tuple[FoundationEntry, ...]]:
        return dict(zip(STRENGTH_TIERS, (self.cornerstone, self.solid, self.emerging, self.fragile)))

    def counts(self) -> dict[StrengthTier, int]:
        return {tier: len(members) for tier, members in self.by_tier().items()}


class StrengthPatterns(BaseModel):
    model_config = ConfigDict(frozen=True)

    clusters: dict[str, int]
    dominant_pattern: CulturePattern
    pattern_description: str
    foundation_count: dict[str, int]


class TrustBridge(BaseModel):
    """A Cornerstone or Solid strength that can carry growth elsewhere."""

    model_config = ConfigDict(frozen=True)

    foundation: StrengthDimension
    score: int = Field(ge=0, le=100)
    bridge_potential: str


class StrongestFoundation(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: StrengthDimension
    score: int = Field(ge=0, le=100)


class StrengthSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_foundations: int = len(STRENGTH_DIMENSIONS)
    average_strength: int = Field(ge=0, le=100)
    strongest_foundation: StrongestFoundation | None = None
    trust_signature: tuple[FoundationEntry, ...] = ()


_PATTERN_TEXT: dict[CulturePattern, str] = {
    "Learning Culture": (
        "Your team excels at authenticity, curiosity, and growth - the hallmarks of a "
        "learning organization."
    ),
    "Execution Culture": (
        "Your team has strong systems for delivery, transparency, and autonomy - building "
        "trust through consistent results."
    ),
    "Relational Culture": (
        "Your team prioritizes emotional connection, positive energy, and collaboration - "
        "trust flows through relationships."
    ),
    "Balanced": "Your trust strengths are evenly distributed across different dimensions.",
}

# cluster name → pattern, in precedence order
_CLUSTER_PATTERNS: tuple[tuple[str, CulturePattern], ...] = (
    ("presence", "Learning Culture"),
    ("reliability", "Execution Culture"),
    ("harmony", "Relational Culture"),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def guidance_for(tier: StrengthTier, name: StrengthDimension) -> str:
    return LEVEL_GUIDANCE[tier].format(name=name.value)


def build_architecture(scores: Iterable[DimensionScore]) -> StrengthArchitecture:
    """Bucket complete strength scores into Cornerstone / Solid / Emerging / Fragile."""
    tiers: dict[StrengthTier, list[FoundationEntry]] = {tier: [] for tier in STRENGTH_TIERS}
    for s in scores:
        if not s.complete or not isinstance(s.name, StrengthDimension):
            continue
        index = s.require_index()
        tier = classify_strength_tier(index)
        tiers[tier].append(FoundationEntry(
            name=s.name,
            score=index,
            description=STRENGTH_DIMENSIONS[s.name].description,
            guidance=guidance_for(tier, s.name),
        ))

    def _sorted(tier: StrengthTier) -> tuple[FoundationEntry, ...]:
        return tuple(sorted(tiers[tier], key=lambda f: -f.score))

    return StrengthArchitecture(
        cornerstone=_sorted("Cornerstone"),
        solid=_sorted("Solid"),
        emerging=_sorted("Emerging"),
        fragile=_sorted("Fragile"),
    )


def analyze_strength_patterns(architecture: StrengthArchitecture) -> StrengthPatterns:
    """Detect a dominant culture from Cornerstone + Solid strengths."""
    strong = {f.name for f in (*architecture.cornerstone, *architecture.solid)}
    clusters = {
        cluster: sum(1 for name in members if name in strong)
        for cluster, members in STRENGTH_CLUSTERS.items()
    }

    dominant: CulturePattern = "Balanced"
    for cluster, pattern in _CLUSTER_PATTERNS:
        if clusters[cluster] >= 2:
            dominant = pattern
            break

    return StrengthPatterns(
        clusters=clusters,
        dominant_pattern=dominant,
        pattern_description=_PATTERN_TEXT[dominant],
        foundation_count={tier.lower(): n for tier, n in architecture.counts().items()},
    )


def identify_trust_bridges(scores: Iterable[DimensionScore]) -> list[TrustBridge]:
    """Return Cornerstone and Solid strengths, strongest first."""
    bridges = [
        TrustBridge(
            foundation=s.name,
            score=s.require_index(),
            bridge_potential=STRENGTH_DIMENSIONS[s.name].bridge_potential,
        )
        for s in scores
        if s.complete
        and isinstance(s.name, StrengthDimension)
        and classify_strength_tier(s.require_index()) in ("Cornerstone", "Solid")
    ]
    return sorted(bridges, key=lambda b: -b.score)


def strongest_foundation(scores: Sequence[DimensionScore]) -> StrongestFoundation | None:
    """First strength with the strictly highest score above 0."""
    best: StrongestFoundation | None = None
    for s in scores:
        if not s.complete or not isinstance(s.name, StrengthDimension):
            continue
        index = s.require_index()
        if index > (best.score if best else 0):
            best = StrongestFoundation(name=s.name, score=index)
    return best


def summarize_strengths(
    scores: Sequence[DimensionScore],
    architecture: StrengthArchitecture,
) -> StrengthSummary:
    return StrengthSummary(
        average_strength=average_index(scores),
        strongest_foundation=strongest_foundation(scores),
        trust_signature=architecture.cornerstone[:3],
    )
