"""Trust Foundation Check scoring and analysis."""

from .engine.report import TrustReport, build_report
from .errors import IncompleteDimensionError, MalformedInputError, TrustCheckError
from .responses import AssessmentResponses, Item, load_responses

__all__ = [
    "AssessmentResponses",
    "IncompleteDimensionError",
    "Item",
    "MalformedInputError",
    "TrustCheckError",
    "TrustReport",
    "build_report",
    "load_responses",
]
