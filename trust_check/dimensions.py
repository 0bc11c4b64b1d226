"""Dimension definitions and fixed rule tables.

Defines the 9 risk dimensions (trust challenges) and their 9 opposite
strength dimensions (trust foundations). Dimension *i* owns survey items
``5i..5i+4``; each strength shares its block with its opposite risk.

Every lookup table used by the engine lives here as read-only data so rule
changes stay local to this module.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field

from trust_check.responses import ITEM_COUNT


ITEMS_PER_DIMENSION = 5


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class _NamedEnum(str, Enum):
    def __str__(self) -> str:
        return self.value


class Category(_NamedEnum):
    """Trust Triage category of a risk dimension."""

    CONTAMINATE = "CONTAMINATE"
    CONTROL = "CONTROL"
    CONCEAL = "CONCEAL"
    COLLAPSE = "COLLAPSE"


class RiskDimension(_NamedEnum):
    INAUTHENTICITY = "Inauthenticity"
    UNDERCURRENT_OF_NEGATIVITY = "Undercurrent of Negativity"
    LACK_OF_FOLLOW_THROUGH = "Lack of Follow-Through"
    RELUCTANCE_TO_TAKE_ON_CHALLENGES = "Reluctance to Take on Challenges"
    EXCESSIVE_SELF_RELIANCE = "Excessive Self-Reliance"
    MICROMANAGING = "Micromanaging"
    EMOTIONAL_VOLATILITY = "Emotional Volatility"
    INFORMATION_HOARDING = "Information Hoarding"
    CLOSED_MINDEDNESS = "Closed-Mindedness"


class StrengthDimension(_NamedEnum):
    AUTHENTIC_PRESENCE = "Authentic Presence"
    CONSTRUCTIVE_ENERGY = "Constructive Energy"
    RELIABLE_DELIVERY = "Reliable Delivery"
    COURAGEOUS_GROWTH = "Courageous Growth"
    COLLABORATIVE_POWER = "Collaborative Power"
    EMPOWERED_AUTONOMY = "Empowered Autonomy"
    EMOTIONAL_WISDOM = "Emotional Wisdom"
    GENEROUS_TRANSPARENCY = "Generous Transparency"
    CURIOUS_EXPANSION = "Curious Expansion"


DimensionKind = Literal["risk", "strength"]

RiskTier = Literal[
    "Critical Pressure Points",
    "Active Friction",
    "Moderate Tension",
    "Background Static",
]
StrengthTier = Literal["Cornerstone", "Solid", "Emerging", "Fragile"]


# ---------------------------------------------------------------------------
# Definition models
# ---------------------------------------------------------------------------
class RiskDefinition(BaseModel):
    """A risk dimension: its category and the 5 items it is scored from."""

    model_config = ConfigDict(frozen=True)

    name: RiskDimension
    category: Category
    item_indices: tuple[int, ...] = Field(
        ..., min_length=ITEMS_PER_DIMENSION, max_length=ITEMS_PER_DIMENSION
    )


class StrengthDefinition(BaseModel):
    """A strength dimension, scored from the same items as its opposite risk."""

    model_config = ConfigDict(frozen=True)

    name: StrengthDimension
    opposite: RiskDimension
    item_indices: tuple[int, ...] = Field(
        ..., min_length=ITEMS_PER_DIMENSION, max_length=ITEMS_PER_DIMENSION
    )
    description: str = Field(..., min_length=5)
    bridge_potential: str = Field(..., min_length=5)


def _block(position: int) -> tuple[int, ...]:
    start = position * ITEMS_PER_DIMENSION
    return tuple(range(start, start + ITEMS_PER_DIMENSION))


# ---------------------------------------------------------------------------
# Registries (block order)
# ---------------------------------------------------------------------------
_RISK_CATEGORIES: tuple[tuple[RiskDimension, Category], ...] = (
    (RiskDimension.INAUTHENTICITY, Category.CONCEAL),
    (RiskDimension.UNDERCURRENT_OF_NEGATIVITY, Category.CONTAMINATE),
    (RiskDimension.LACK_OF_FOLLOW_THROUGH, Category.COLLAPSE),
    (RiskDimension.RELUCTANCE_TO_TAKE_ON_CHALLENGES, Category.CONCEAL),
    (RiskDimension.EXCESSIVE_SELF_RELIANCE, Category.CONTROL),
    (RiskDimension.MICROMANAGING, Category.CONTROL),
    (RiskDimension.EMOTIONAL_VOLATILITY, Category.CONTAMINATE),
    (RiskDimension.INFORMATION_HOARDING, Category.CONTROL),
    (RiskDimension.CLOSED_MINDEDNESS, Category.CONCEAL),
)

RISK_DIMENSIONS: Mapping[RiskDimension, RiskDefinition] = MappingProxyType({
    name: RiskDefinition(name=name, category=category, item_indices=_block(i))
    for i, (name, category) in enumerate(_RISK_CATEGORIES)
})

_STRENGTH_TABLE: tuple[tuple[StrengthDimension, RiskDimension, str, str], ...] = (
    (
        StrengthDimension.AUTHENTIC_PRESENCE,
        RiskDimension.INAUTHENTICITY,
        "The courage to show up genuinely and create space for others to do the same",
        "Can create safety for vulnerability and honest feedback",
    ),
    (
        StrengthDimension.CONSTRUCTIVE_ENERGY,
        RiskDimension.UNDERCURRENT_OF_NEGATIVITY,
        "The ability to transform challenges into growth opportunities and maintain hope",
        "Can transform challenges into growth opportunities",
    ),
    (
        StrengthDimension.RELIABLE_DELIVERY,
        RiskDimension.LACK_OF_FOLLOW_THROUGH,
        "Consistent follow-through that builds confidence and momentum",
        "Can build confidence for taking larger risks",
    ),
    (
        StrengthDimension.COURAGEOUS_GROWTH,
        RiskDimension.RELUCTANCE_TO_TAKE_ON_CHALLENGES,
        "Embracing stretch opportunities and supporting others through uncertainty",
        "Can inspire others to embrace stretch opportunities",
    ),
    (
        StrengthDimension.COLLABORATIVE_POWER,
        RiskDimension.EXCESSIVE_SELF_RELIANCE,
        "Leveraging collective wisdom and celebrating interdependence",
        "Can reduce isolation and increase collective intelligence",
    ),
    (
        StrengthDimension.EMPOWERED_AUTONOMY,
        RiskDimension.MICROMANAGING,
        "Trusting others with outcomes while providing support for success",
        "Can reduce micromanagement while maintaining support",
    ),
    (
        StrengthDimension.EMOTIONAL_WISDOM,
        RiskDimension.EMOTIONAL_VOLATILITY,
        "Navigating emotions skillfully to deepen rather than derail relationships",
        "Can create stability for difficult conversations",
    ),
    (
        StrengthDimension.GENEROUS_TRANSPARENCY,
        RiskDimension.INFORMATION_HOARDING,
        "Sharing knowledge and resources freely to multiply collective intelligence",
        "Can build trust through open information sharing",
    ),
    (
        StrengthDimension.CURIOUS_EXPANSION,
        RiskDimension.CLOSED_MINDEDNESS,
        "Approaching different perspectives with genuine openness and learning orientation",
        "Can create openness to new ideas and approaches",
    ),
)

STRENGTH_DIMENSIONS: Mapping[StrengthDimension, StrengthDefinition] = MappingProxyType({
    name: StrengthDefinition(
        name=name,
        opposite=opposite,
        item_indices=RISK_DIMENSIONS[opposite].item_indices,
        description=description,
        bridge_potential=bridge,
    )
    for name, opposite, description, bridge in _STRENGTH_TABLE
})

# risk → opposite strength
OPPOSITES: Mapping[RiskDimension, StrengthDimension] = MappingProxyType({
    d.opposite: d.name for d in STRENGTH_DIMENSIONS.values()
})


# ---------------------------------------------------------------------------
# Tie-break tables (Trust Triage Protocol)
# ---------------------------------------------------------------------------
CATEGORY_PRIORITY: Mapping[Category, int] = MappingProxyType({
    Category.CONTAMINATE: 4,
    Category.CONTROL: 3,
    Category.CONCEAL: 2,
    Category.COLLAPSE: 1,
})

# Dimensions missing from a category's table rank 0 within it.
WITHIN_CATEGORY_PRIORITY: Mapping[Category, Mapping[RiskDimension, int]] = MappingProxyType({
    Category.CONTAMINATE: MappingProxyType({
        RiskDimension.EMOTIONAL_VOLATILITY: 2,
        RiskDimension.UNDERCURRENT_OF_NEGATIVITY: 1,
    }),
    Category.CONTROL: MappingProxyType({
        RiskDimension.MICROMANAGING: 3,
        RiskDimension.INFORMATION_HOARDING: 2,
        RiskDimension.EXCESSIVE_SELF_RELIANCE: 1,
    }),
    Category.CONCEAL: MappingProxyType({
        RiskDimension.INAUTHENTICITY: 3,
        RiskDimension.CLOSED_MINDEDNESS: 2,
        RiskDimension.RELUCTANCE_TO_TAKE_ON_CHALLENGES: 1,
    }),
})


def within_category_priority(name: RiskDimension) -> int:
    category = RISK_DIMENSIONS[name].category
    return WITHIN_CATEGORY_PRIORITY.get(category, {}).get(name, 0)


# ---------------------------------------------------------------------------
# Tier thresholds (shared by risk severity and strength level)
# ---------------------------------------------------------------------------
TIER_THRESHOLDS: tuple[int, int, int] = (80, 60, 40)

RISK_TIERS: tuple[RiskTier, ...] = (
    "Critical Pressure Points",
    "Active Friction",
    "Moderate Tension",
    "Background Static",
)
STRENGTH_TIERS: tuple[StrengthTier, ...] = ("Cornerstone", "Solid", "Emerging", "Fragile")


def tier_position(index: int) -> int:
    """Return 0 (highest tier) .. 3 (lowest tier) for a 0–100 index."""
    for position, threshold in enumerate(TIER_THRESHOLDS):
        if index >= threshold:
            return position
    return len(TIER_THRESHOLDS)


def classify_risk_tier(index: int) -> RiskTier:
    return RISK_TIERS[tier_position(index)]


def classify_strength_tier(index: int) -> StrengthTier:
    return STRENGTH_TIERS[tier_position(index)]


# ---------------------------------------------------------------------------
# Relationship tables
# ---------------------------------------------------------------------------
# strength → risks it may be overcompensating for
COMPENSATION_PAIRS: Mapping[StrengthDimension, frozenset[RiskDimension]] = MappingProxyType({
    StrengthDimension.EMPOWERED_AUTONOMY: frozenset({RiskDimension.MICROMANAGING}),
    StrengthDimension.COLLABORATIVE_POWER: frozenset({RiskDimension.EXCESSIVE_SELF_RELIANCE}),
    StrengthDimension.EMOTIONAL_WISDOM: frozenset({RiskDimension.EMOTIONAL_VOLATILITY}),
    StrengthDimension.CONSTRUCTIVE_ENERGY: frozenset({RiskDimension.UNDERCURRENT_OF_NEGATIVITY}),
})
COMPENSATION_STRENGTH_FLOOR = 80
COMPENSATION_RISK_FLOOR = 60

DEEP_PATTERN_INSIGHTS: Mapping[Category, str] = MappingProxyType({
    Category.CONTAMINATE: (
        "Emotional wounds dominate your trust landscape, indicating that nervous "
        "system healing must come before strategic changes."
    ),
    Category.CONTROL: (
        "Control has become your team's primary trust wound, suggesting that shared "
        "ownership and letting go are your most urgent work."
    ),
    Category.CONCEAL: (
        "Hidden patterns dominate your trust challenges, suggesting that psychological "
        "safety and transparency are your primary focus areas."
    ),
    Category.COLLAPSE: (
        "Follow-through challenges are central to your trust erosion, indicating that "
        "reliability and commitment systems need rebuilding."
    ),
})

# Strength clusters used for culture-pattern detection.
STRENGTH_CLUSTERS: Mapping[str, tuple[StrengthDimension, ...]] = MappingProxyType({
    "presence": (
        StrengthDimension.AUTHENTIC_PRESENCE,
        StrengthDimension.CURIOUS_EXPANSION,
        StrengthDimension.COURAGEOUS_GROWTH,
    ),
    "reliability": (
        StrengthDimension.RELIABLE_DELIVERY,
        StrengthDimension.GENEROUS_TRANSPARENCY,
        StrengthDimension.EMPOWERED_AUTONOMY,
    ),
    "harmony": (
        StrengthDimension.CONSTRUCTIVE_ENERGY,
        StrengthDimension.EMOTIONAL_WISDOM,
        StrengthDimension.COLLABORATIVE_POWER,
    ),
})

LEVEL_GUIDANCE: Mapping[str, str] = MappingProxyType({
    "Cornerstone": "This is a superpower for your team. Leverage {name} to support growth in other areas.",
    "Solid": "This is reliable ground to build from. Use {name} as a bridge to strengthen emerging areas.",
    "Emerging": "Trust wants to grow here. Nurture {name} with attention and practice.",
    "Fragile": "This foundation needs gentle beginning work. Start with small, consistent practices in {name}.",
})


def _check_tables() -> None:
    covered = sorted(i for d in RISK_DIMENSIONS.values() for i in d.item_indices)
    if covered != list(range(ITEM_COUNT)):
        raise RuntimeError("Risk dimension blocks must cover items 0..44 exactly once")


_check_tables()
