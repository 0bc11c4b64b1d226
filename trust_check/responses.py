"""Response model for a single Trust Foundation Check submission.

A submission is exactly 45 Likert items (1–5). Each item may be unanswered
and may be flagged as reverse-scored. Items are immutable once loaded.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, model_validator

from trust_check.errors import MalformedInputError


ITEM_COUNT = 45
LIKERT_MIN = 1
LIKERT_MAX = 5


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class Item(BaseModel):
    """One survey item: its position, raw answer and reverse-scoring flag."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    index: int = Field(..., ge=0, lt=ITEM_COUNT)
    # strict: booleans and floats are not answers
    response: StrictInt | None = Field(default=None, ge=LIKERT_MIN, le=LIKERT_MAX)
    reverse_scored: bool = Field(default=False, alias="reverseScored")

    @property
    def answered(self) -> bool:
        return self.response is not None


class AssessmentResponses(BaseModel):
    """The full, index-addressed set of 45 items.

    Direct construction reports shape errors as pydantic
    ``ValidationError``; use :func:`load_responses` or :meth:`from_lists`
    to get :class:`MalformedInputError` instead.
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[Item, ...]

    @model_validator(mode="after")
    def validate_shape(self) -> AssessmentResponses:
        if len(self.items) != ITEM_COUNT:
            raise ValueError(
                f"must have exactly {ITEM_COUNT} items, got {len(self.items)}"
            )
        for position, item in enumerate(self.items):
            if item.index != position:
                raise ValueError(
                    f"item at position {position} has index {item.index}"
                )
        return self

    @classmethod
    def from_lists(
        cls,
        responses: Sequence[int | None],
        reverse_flags: Sequence[bool] | None = None,
    ) -> AssessmentResponses:
        """Build from parallel answer / reverse-flag lists."""
        if reverse_flags is None:
            reverse_flags = [False] * len(responses)
        if len(reverse_flags) != len(responses):
            raise MalformedInputError(
                f"Got {len(responses)} responses but {len(reverse_flags)} reverse flags"
            )
        return load_responses([
            {"response": r, "reverse_scored": bool(flag)}
            for r, flag in zip(responses, reverse_flags)
        ])

    def item(self, index: int) -> Item:
        return self.items[index]

    @property
    def answered_count(self) -> int:
        return sum(1 for it in self.items if it.answered)

    def raw_responses(self) -> list[int | None]:
        return [it.response for it in self.items]

    def reverse_flags(self) -> list[bool]:
        return [it.reverse_scored for it in self.items]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_responses(
    items: Sequence[Item | Mapping[str, Any] | None],
) -> AssessmentResponses:
    """Validate a raw 45-slot sequence into :class:`AssessmentResponses`.

    Each slot may be ``None`` (unanswered, not reversed), an :class:`Item`,
    or a mapping with ``response`` and ``reverse_scored``/``reverseScored``.

    Raises:
        MalformedInputError: not a sized sequence, wrong length, a slot that is
            not a mapping, bad index or out-of-range answer.
    """
    if items is None or isinstance(items, (str, bytes, Mapping)):
        raise MalformedInputError("Assessment data must be a sequence of items")
    try:
        items = list(items)
    except TypeError as exc:
        raise MalformedInputError("Assessment data must be a sequence of items") from exc
    if len(items) != ITEM_COUNT:
        raise MalformedInputError(
            f"Invalid assessment data: must have exactly {ITEM_COUNT} responses, got {len(items)}"
        )

    try:
        built: list[Item] = []
        for position, entry in enumerate(items):
            if entry is None:
                built.append(Item(index=position))
            elif isinstance(entry, Item):
                built.append(entry)
            elif isinstance(entry, Mapping):
                built.append(Item.model_validate({"index": position, **entry}))
            else:
                raise MalformedInputError(
                    f"Invalid assessment data: item {position} must be a mapping, "
                    f"got {type(entry).__name__}"
                )
        return AssessmentResponses(items=tuple(built))
    except ValidationError as exc:
        raise MalformedInputError(f"Invalid assessment data: {exc}") from exc
