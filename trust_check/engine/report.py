"""Result aggregator — one frozen report per submission.

``build_report`` is the single entry point adapters use: it runs scorer →
ranking / architecture → relationships and freezes the outcome.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from trust_check.dimensions import RiskDimension, StrengthDimension
from trust_check.engine.architecture import (
    StrengthArchitecture,
    StrengthPatterns,
    StrengthSummary,
    TrustBridge,
    analyze_strength_patterns,
    build_architecture,
    identify_trust_bridges,
    summarize_strengths,
)
from trust_check.engine.ranking import (
    DensityPattern,
    RankedDimension,
    RiskSummary,
    SeverityBuckets,
    analyze_density,
    bucket_by_severity,
    select_top3,
    summarize_risks,
)
from trust_check.engine.relationships import PatternAnalysis, analyze_patterns
from trust_check.engine.scorer import DimensionScore, score_all
from trust_check.observability import EventHook, emit
from trust_check.responses import AssessmentResponses


class TrustReport(BaseModel):
    """Immutable diagnostic report for one submission."""

    model_config = ConfigDict(frozen=True)

    responses: AssessmentResponses

    # challenges
    risk_scores: tuple[DimensionScore, ...]
    top3: tuple[RankedDimension, ...]
    severity: SeverityBuckets
    density: DensityPattern | None
    risk_summary: RiskSummary

    # foundations
    strength_scores: tuple[DimensionScore, ...]
    architecture: StrengthArchitecture
    strength_patterns: StrengthPatterns
    trust_bridges: tuple[TrustBridge, ...]
    strength_summary: StrengthSummary

    # cross-analysis
    patterns: PatternAnalysis

    incomplete_risks: tuple[RiskDimension, ...] = ()
    incomplete_strengths: tuple[StrengthDimension, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.incomplete_risks and not self.incomplete_strengths

    def risk(self, name: RiskDimension | str) -> DimensionScore:
        key = RiskDimension(name)
        return next(s for s in self.risk_scores if s.name == key)

    def strength(self, name: StrengthDimension | str) -> DimensionScore:
        key = StrengthDimension(name)
        return next(s for s in self.strength_scores if s.name == key)


def build_report(
    responses: AssessmentResponses,
    *,
    hook: EventHook | None = None,
) -> TrustReport:
    """Score, rank and analyse *responses*.

    Args:
        responses: A validated 45-item submission.
        hook: Receives a :class:`ScoringEvent` at each stage boundary.
            Defaults to :func:`trust_check.observability.log_event`.

    Raises:
        MalformedInputError: If *responses* does not hold exactly 45 items.
    """
    scores = score_all(responses, hook=hook)

    top3 = select_top3(scores.risks, hook=hook)
    severity = bucket_by_severity(scores.risks)
    density = analyze_density(top3)
    risk_summary = summarize_risks(scores.risks, responses.answered_count)

    architecture = build_architecture(scores.strengths)
    strength_summary = summarize_strengths(scores.strengths, architecture)

    patterns = analyze_patterns(
        top3,
        scores.strengths,
        severity,
        architecture,
        density,
        challenge_average=risk_summary.average_score,
        strength_average=strength_summary.average_strength,
        hook=hook,
    )

    report = TrustReport(
        responses=responses,
        risk_scores=scores.risks,
        top3=top3,
        severity=severity,
        density=density,
        risk_summary=risk_summary,
        strength_scores=scores.strengths,
        architecture=architecture,
        strength_patterns=analyze_strength_patterns(architecture),
        trust_bridges=tuple(identify_trust_bridges(scores.strengths)),
        strength_summary=strength_summary,
        patterns=patterns,
        incomplete_risks=tuple(RiskDimension(s.name) for s in scores.risks if not s.complete),
        incomplete_strengths=tuple(
            StrengthDimension(s.name) for s in scores.strengths if not s.complete
        ),
    )
    emit(
        hook,
        "report_built",
        top3=[r.name.value for r in top3],
        landscape=patterns.trust_landscape.landscape_type,
        incomplete=len(report.incomplete_risks) + len(report.incomplete_strengths),
    )
    return report
