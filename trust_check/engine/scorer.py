"""Dimension scorer — raw responses to 0–100 risk and strength indices.

Risk and strength scoring are mirror images over the same 5 items:

- risk:     reverse-scored item → ``6 − raw``, otherwise ``raw``
- strength: reverse-scored item → ``raw``,     otherwise ``6 − raw``

so for a fully answered block ``risk.index + strength.index == 100``.

A block with any unanswered item yields an *incomplete* score: no raw total,
no index, no tier. Nothing downstream ever sees a made-up number.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Iterable
import math

from pydantic import BaseModel, ConfigDict, Field

from trust_check.dimensions import (
    ITEMS_PER_DIMENSION,
    RISK_DIMENSIONS,
    STRENGTH_DIMENSIONS,
    Category,
    DimensionKind,
    RiskDefinition,
    RiskDimension,
    RiskTier,
    StrengthDefinition,
    StrengthDimension,
    StrengthTier,
    classify_risk_tier,
    classify_strength_tier,
)
from trust_check.errors import IncompleteDimensionError, MalformedInputError
from trust_check.observability import EventHook, emit
from trust_check.responses import ITEM_COUNT, LIKERT_MAX, LIKERT_MIN, AssessmentResponses


RAW_MIN = ITEMS_PER_DIMENSION * LIKERT_MIN
RAW_MAX = ITEMS_PER_DIMENSION * LIKERT_MAX
_REFLECT = LIKERT_MIN + LIKERT_MAX  # 6


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class ItemScore(BaseModel):
    """Per-item contribution to a dimension."""

    model_config = ConfigDict(frozen=True)

    index: int
    response: int | None
    reverse_scored: bool
    scored_value: int | None = Field(default=None, ge=LIKERT_MIN, le=LIKERT_MAX)


class DimensionScore(BaseModel):
    """Score for one risk or strength dimension."""

    model_config = ConfigDict(frozen=True)

    name: RiskDimension | StrengthDimension
    kind: DimensionKind
    raw_total: int | None = Field(default=None, ge=RAW_MIN, le=RAW_MAX)
    index: int | None = Field(default=None, ge=0, le=100)
    tier: RiskTier | StrengthTier | None = None
    category: Category | None = None  # risk only
    description: str | None = None  # strength only
    item_scores: tuple[ItemScore, ...] = ()
    missing_items: tuple[int, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.missing_items

    def require_index(self) -> int:
        """Return the index, or raise if the dimension is incomplete."""
        if self.index is None:
            raise IncompleteDimensionError(self.name.value, list(self.missing_items))
        return self.index


class ScoreSet(BaseModel):
    """All 9 risk and 9 strength scores, in block order."""

    model_config = ConfigDict(frozen=True)

    risks: tuple[DimensionScore, ...]
    strengths: tuple[DimensionScore, ...]

    @property
    def incomplete(self) -> list[DimensionScore]:
        return [s for s in (*self.risks, *self.strengths) if not s.complete]


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------
def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def normalize(raw_total: int) -> int:
    """Map a 5–25 raw total onto 0–100, rounding halves up."""
    return round_half_up(((raw_total - RAW_MIN) / (RAW_MAX - RAW_MIN)) * 100)


def average_index(scores: Iterable[DimensionScore]) -> int:
    """Rounded mean of the complete indices; 0 when none are complete."""
    values = [s.require_index() for s in scores if s.complete]
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def _item_scores(
    responses: AssessmentResponses,
    indices: tuple[int, ...],
    reflect_reversed: bool,
) -> list[ItemScore]:
    scored: list[ItemScore] = []
    for idx in indices:
        item = responses.item(idx)
        value: int | None = None
        if item.response is not None:
            reflect = item.reverse_scored if reflect_reversed else not item.reverse_scored
            value = _REFLECT - item.response if reflect else item.response
        scored.append(ItemScore(
            index=idx,
            response=item.response,
            reverse_scored=item.reverse_scored,
            scored_value=value,
        ))
    return scored


def _require_full_length(responses: AssessmentResponses) -> None:
    if len(responses.items) != ITEM_COUNT:
        raise MalformedInputError(
            f"Invalid assessment data: must have exactly {ITEM_COUNT} responses, "
            f"got {len(responses.items)}"
        )


def _totals(scored: list[ItemScore]) -> tuple[int | None, int | None, tuple[int, ...]]:
    missing = tuple(s.index for s in scored if s.scored_value is None)
    if missing:
        return None, None, missing
    raw_total = sum(s.scored_value for s in scored if s.scored_value is not None)
    return raw_total, normalize(raw_total), ()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def score_risk_dimension(
    responses: AssessmentResponses,
    dimension: RiskDefinition,
) -> DimensionScore:
    """Score one risk dimension (higher = more erosion)."""
    _require_full_length(responses)
    scored = _item_scores(responses, dimension.item_indices, reflect_reversed=True)
    raw_total, index, missing = _totals(scored)
    return DimensionScore(
        name=dimension.name,
        kind="risk",
        raw_total=raw_total,
        index=index,
        tier=classify_risk_tier(index) if index is not None else None,
        category=dimension.category,
        item_scores=tuple(scored),
        missing_items=missing,
    )


def score_strength_dimension(
    responses: AssessmentResponses,
    dimension: StrengthDefinition,
) -> DimensionScore:
    """Score one strength dimension (higher = stronger foundation)."""
    _require_full_length(responses)
    scored = _item_scores(responses, dimension.item_indices, reflect_reversed=False)
    raw_total, index, missing = _totals(scored)
    return DimensionScore(
        name=dimension.name,
        kind="strength",
        raw_total=raw_total,
        index=index,
        tier=classify_strength_tier(index) if index is not None else None,
        description=dimension.description,
        item_scores=tuple(scored),
        missing_items=missing,
    )


def score_all(
    responses: AssessmentResponses,
    hook: EventHook | None = None,
) -> ScoreSet:
    """Score every risk and strength dimension."""
    _require_full_length(responses)
    result = ScoreSet(
        risks=tuple(score_risk_dimension(responses, d) for d in RISK_DIMENSIONS.values()),
        strengths=tuple(
            score_strength_dimension(responses, d) for d in STRENGTH_DIMENSIONS.values()
        ),
    )
    emit(
        hook,
        "scored",
        risk_count=len(result.risks),
        strength_count=len(result.strengths),
        incomplete=[s.name.value for s in result.incomplete],
        questions_answered=responses.answered_count,
    )
    return result
