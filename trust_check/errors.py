"""Exception taxonomy for trust assessment scoring."""

from __future__ import annotations


class TrustCheckError(Exception):
    """Base class for all scoring errors."""


class MalformedInputError(TrustCheckError, ValueError):
    """The submission does not have the shape the engine requires.

    Raised for a response sequence that is not exactly 45 items long,
    out-of-range responses, mismatched item indices, or unparseable text.
    """


class IncompleteDimensionError(TrustCheckError):
    """A numeric value was requested from a dimension with unanswered items."""

    def __init__(self, dimension: str, missing_items: list[int]) -> None:
        self.dimension = dimension
        self.missing_items = list(missing_items)
        super().__init__(
            f"Dimension '{dimension}' is incomplete; unanswered items: {self.missing_items}"
        )
