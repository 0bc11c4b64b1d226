"""Narrative payload formatter.

Shapes a :class:`TrustReport` into the camelCase document consumed by the
AI-narrative pipeline: participant info, challenge and foundation views,
pattern insights, routing metadata, processing hints and a raw-data echo.

Nothing here feeds back into scoring.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from trust_check.dimensions import Category, RiskDimension
from trust_check.engine.architecture import FoundationEntry
from trust_check.engine.report import TrustReport
from trust_check.responses import ITEM_COUNT
from trust_check.settings import EngineSettings, load_settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Routing tables
# ---------------------------------------------------------------------------
HIDDEN_CONTRIBUTION: Mapping[RiskDimension, str] = MappingProxyType({
    RiskDimension.EMOTIONAL_VOLATILITY: "emotional_regulation_modeling",
    RiskDimension.MICROMANAGING: "trust_and_delegate",
    RiskDimension.INAUTHENTICITY: "vulnerability_and_presence",
    RiskDimension.INFORMATION_HOARDING: "transparency_and_sharing",
    RiskDimension.CLOSED_MINDEDNESS: "curiosity_and_openness",
})
DEFAULT_HIDDEN_CONTRIBUTION = "leadership_awareness_pattern"

IMMEDIATE_ACTION: Mapping[RiskDimension, str] = MappingProxyType({
    RiskDimension.EMOTIONAL_VOLATILITY: "daily_emotional_check_ins",
    RiskDimension.MICROMANAGING: "weekly_delegation_practice",
    RiskDimension.INAUTHENTICITY: "vulnerability_practice",
    RiskDimension.INFORMATION_HOARDING: "transparent_communication_habit",
    RiskDimension.UNDERCURRENT_OF_NEGATIVITY: "gratitude_and_wins_focus",
})
DEFAULT_IMMEDIATE_ACTION = "trust_building_conversation"

RECOMMENDATION_LEVEL: Mapping[str, str] = MappingProxyType({
    "Struggling": "INTENSIVE",
    "Developing": "MODERATE",
    "Healthy": "MAINTENANCE",
    "Thriving": "OPTIMIZATION",
})

TRANSFORMATION_PATH: Mapping[str, str] = MappingProxyType({
    "DEEP PATTERN": "focused_category_healing",
    "CONCENTRATED": "targeted_dual_approach",
})
DEFAULT_TRANSFORMATION_PATH = "systemic_multi_dimensional"


# ---------------------------------------------------------------------------
# Payload models
# ---------------------------------------------------------------------------
class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Participant(_CamelModel):
    name: str | None = None
    email: str | None = None
    company: str | None = None


class ParticipantOut(Participant):
    submission_date: str
    assessment_version: str


class ChallengeOut(_CamelModel):
    name: str
    score: int
    severity: str
    category: Category
    rank: int


class SeverityBreakdown(_CamelModel):
    critical: int = 0
    active: int = 0
    moderate: int = 0
    background: int = 0


class DensityOut(_CamelModel):
    type: str
    description: str
    insight: str
    dominant_category: Category | None = None


class RiskSummaryOut(_CamelModel):
    total_questions: int
    questions_answered: int
    average_score: int
    highest_score: int | None = None
    lowest_score: int | None = None


class TrustChallenges(_CamelModel):
    top3: list[ChallengeOut]
    all_scores: dict[str, int | None]
    severity_breakdown: SeverityBreakdown
    density_pattern: DensityOut | None
    summary: RiskSummaryOut


class FoundationOut(_CamelModel):
    name: str
    score: int
    description: str
    guidance: str


class StrengthPatternOut(_CamelModel):
    clusters: dict[str, int]
    dominant_pattern: str
    pattern_description: str
    foundation_count: dict[str, int]


class BridgeOut(_CamelModel):
    foundation: str
    score: int
    bridge_potential: str


class StrongestOut(_CamelModel):
    name: str
    score: int


class StrengthSummaryOut(_CamelModel):
    total_foundations: int
    average_strength: int
    strongest_foundation: StrongestOut | None
    trust_signature: list[FoundationOut]


class TrustStrengths(_CamelModel):
    cornerstone: list[FoundationOut]
    solid: list[FoundationOut]
    emerging: list[FoundationOut]
    fragile: list[FoundationOut]
    all_scores: dict[str, int | None]
    pattern_analysis: StrengthPatternOut
    trust_bridges: list[BridgeOut]
    summary: StrengthSummaryOut


class RelationshipOut(_CamelModel):
    challenge_name: str
    challenge_score: int
    strength_name: str
    strength_score: int
    tension: str
    insight: str


class CompensationOut(_CamelModel):
    type: str = "compensation"
    strength: str
    strength_score: int
    challenge: str
    challenge_score: int
    insight: str


class LandscapeMetricsOut(_CamelModel):
    challenge_average: int
    strength_average: int
    balance_ratio: float
    critical_challenges: int
    cornerstone_strengths: int


class LandscapeOut(_CamelModel):
    balance: str
    landscape_type: str
    description: str
    metrics: LandscapeMetricsOut


class InsightOut(_CamelModel):
    type: str
    insight: str
    priority: str


class PatternInsights(_CamelModel):
    combination_key: str
    relationships: list[RelationshipOut]
    compensation_patterns: list[CompensationOut]
    trust_landscape: LandscapeOut
    key_insights: list[InsightOut]


class NarrativeParameters(_CamelModel):
    urgency: float = Field(ge=0.0, le=1.0)
    hope_emphasis: float = Field(ge=0.0, le=1.0)
    action_orientation: float = Field(ge=0.0, le=1.0)
    strength_leverage: list[str]


class CustomSections(_CamelModel):
    opening_tone: str
    hidden_contribution: str
    transformation_path: str
    immediate_action: str


class ReportMetadata(_CamelModel):
    pattern_code: str
    intensity_profile: str
    narrative_parameters: NarrativeParameters
    recommendation_level: str
    custom_sections: CustomSections


class LeverageOut(_CamelModel):
    name: str
    score: int
    leverage_point: str


class HopeFactors(_CamelModel):
    cornerstone_count: int
    solid_count: int
    strongest_foundation: str | None
    growth_potential: int


class ProcessingHints(_CamelModel):
    primary_focus: str
    tone_guidance: str
    strength_leverage: list[LeverageOut]
    urgency_level: str
    hope_factors: HopeFactors


class RawAssessmentData(_CamelModel):
    responses: list[int | None]
    question_order: list[int]
    total_questions: int = ITEM_COUNT
    questions_answered: int


class IncompleteDimensions(_CamelModel):
    challenges: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)


class NarrativePayload(_CamelModel):
    """Complete document handed to the narrative pipeline."""

    participant: ParticipantOut
    trust_challenges: TrustChallenges
    trust_strengths: TrustStrengths
    pattern_analysis: PatternInsights
    report_metadata: ReportMetadata
    processing_hints: ProcessingHints
    raw_assessment_data: RawAssessmentData | None = None
    incomplete_dimensions: IncompleteDimensions

    def to_json_dict(self) -> dict[str, Any]:
        """JSON-ready dict; ``rawAssessmentData`` is dropped when not collected."""
        exclude = {"raw_assessment_data"} if self.raw_assessment_data is None else None
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)


# ---------------------------------------------------------------------------
# Derived routing values
# ---------------------------------------------------------------------------
def pattern_code(report: TrustReport) -> str:
    """Initials of each top-3 name, e.g. ``EV-UoN-M``."""
    return "-".join(
        "".join(word[0] for word in r.name.value.split(" ") if word)
        for r in report.top3
    )


def intensity_profile(critical: int, active: int) -> str:
    if critical >= 2:
        return "CRISIS_MODE"
    if critical == 1 or active >= 3:
        return "ACTIVE_TENSIONS"
    if active >= 1:
        return "EMERGING_CONCERNS"
    return "EARLY_WARNING"


def urgency_level(critical: int, active: int) -> str:
    if critical >= 2:
        return "immediate"
    if critical == 1 or active >= 3:
        return "high"
    if active >= 1:
        return "moderate"
    return "low"


def opening_tone(critical: int) -> str:
    if critical >= 2:
        return "gentle_urgent"
    if critical == 1:
        return "direct_compassionate"
    return "appreciative_growth"


def tone_guidance(critical: int) -> str:
    if critical >= 2:
        return "compassionate_urgency"
    if critical == 1:
        return "direct_supportive"
    return "encouraging_growth"


def primary_focus(report: TrustReport) -> str:
    if not report.top3:
        return "Complete the assessment to identify a primary focus"
    top = report.top3[0]
    cornerstone = report.architecture.cornerstone
    top_strength = cornerstone[0].name.value if cornerstone else None
    if top.require_index() >= 80:
        return f"Address critical {top.name.value} using {top_strength or 'available strengths'}"
    return f"Leverage {top_strength or 'strengths'} to prevent escalation of {top.name.value}"


def _foundation(entry: FoundationEntry) -> FoundationOut:
    return FoundationOut(
        name=entry.name.value,
        score=entry.score,
        description=entry.description,
        guidance=entry.guidance,
    )


# ---------------------------------------------------------------------------
# Section builders
# ---------------------------------------------------------------------------
def _challenges(report: TrustReport) -> TrustChallenges:
    counts = report.severity
    density = report.density
    summary = report.risk_summary
    return TrustChallenges(
        top3=[
            ChallengeOut(
                name=r.name.value,
                score=r.require_index(),
                severity=r.tier or "",
                category=r.category,
                rank=r.rank,
            )
            for r in report.top3
        ],
        all_scores={s.name.value: s.index for s in report.risk_scores},
        severity_breakdown=SeverityBreakdown(
            critical=len(counts.critical),
            active=len(counts.active),
            moderate=len(counts.moderate),
            background=len(counts.background),
        ),
        density_pattern=DensityOut(**density.model_dump()) if density else None,
        summary=RiskSummaryOut(**summary.model_dump()),
    )


def _strengths(report: TrustReport) -> TrustStrengths:
    arch = report.architecture
    patterns = report.strength_patterns
    summary = report.strength_summary
    strongest = summary.strongest_foundation
    return TrustStrengths(
        cornerstone=[_foundation(f) for f in arch.cornerstone],
        solid=[_foundation(f) for f in arch.solid],
        emerging=[_foundation(f) for f in arch.emerging],
        fragile=[_foundation(f) for f in arch.fragile],
        all_scores={s.name.value: s.index for s in report.strength_scores},
        pattern_analysis=StrengthPatternOut(**patterns.model_dump()),
        trust_bridges=[
            BridgeOut(foundation=b.foundation.value, score=b.score, bridge_potential=b.bridge_potential)
            for b in report.trust_bridges
        ],
        summary=StrengthSummaryOut(
            total_foundations=summary.total_foundations,
            average_strength=summary.average_strength,
            strongest_foundation=(
                StrongestOut(name=strongest.name.value, score=strongest.score) if strongest else None
            ),
            trust_signature=[_foundation(f) for f in summary.trust_signature],
        ),
    )


def _pattern_insights(report: TrustReport) -> PatternInsights:
    analysis = report.patterns
    landscape = analysis.trust_landscape
    return PatternInsights(
        combination_key=analysis.combination_key,
        relationships=[
            RelationshipOut(
                challenge_name=rel.risk.value,
                challenge_score=rel.risk_score,
                strength_name=rel.strength.value,
                strength_score=rel.strength_score,
                tension=rel.tension,
                insight=rel.insight,
            )
            for rel in analysis.relationships
        ],
        compensation_patterns=[
            CompensationOut(
                strength=c.strength.value,
                strength_score=c.strength_score,
                challenge=c.risk.value,
                challenge_score=c.risk_score,
                insight=c.insight,
            )
            for c in analysis.compensation_patterns
        ],
        trust_landscape=LandscapeOut(
            balance=landscape.balance,
            landscape_type=landscape.landscape_type,
            description=landscape.description,
            metrics=LandscapeMetricsOut(**landscape.metrics.model_dump()),
        ),
        key_insights=[InsightOut(**i.model_dump()) for i in analysis.insights],
    )


def _metadata(report: TrustReport) -> ReportMetadata:
    critical = len(report.severity.critical)
    active = len(report.severity.active)
    cornerstone = report.architecture.cornerstone
    top = RiskDimension(report.top3[0].name) if report.top3 else None
    density_type = report.density.type if report.density else ""
    return ReportMetadata(
        pattern_code=pattern_code(report),
        intensity_profile=intensity_profile(critical, active),
        narrative_parameters=NarrativeParameters(
            urgency=min(critical / 3, 1),
            hope_emphasis=min(len(cornerstone) / 3, 1),
            action_orientation=0.8 if critical > 0 else 0.5,
            strength_leverage=[f.name.value for f in cornerstone[:2]],
        ),
        recommendation_level=RECOMMENDATION_LEVEL.get(
            report.patterns.trust_landscape.landscape_type, "MODERATE"
        ),
        custom_sections=CustomSections(
            opening_tone=opening_tone(critical),
            hidden_contribution=HIDDEN_CONTRIBUTION.get(top, DEFAULT_HIDDEN_CONTRIBUTION),
            transformation_path=TRANSFORMATION_PATH.get(density_type, DEFAULT_TRANSFORMATION_PATH),
            immediate_action=IMMEDIATE_ACTION.get(top, DEFAULT_IMMEDIATE_ACTION),
        ),
    )


def _hints(report: TrustReport) -> ProcessingHints:
    critical = len(report.severity.critical)
    active = len(report.severity.active)
    arch = report.architecture
    return ProcessingHints(
        primary_focus=primary_focus(report),
        tone_guidance=tone_guidance(critical),
        strength_leverage=[
            LeverageOut(name=f.name.value, score=f.score, leverage_point=f.guidance)
            for f in arch.cornerstone[:2]
        ],
        urgency_level=urgency_level(critical, active),
        hope_factors=HopeFactors(
            cornerstone_count=len(arch.cornerstone),
            solid_count=len(arch.solid),
            strongest_foundation=arch.cornerstone[0].name.value if arch.cornerstone else None,
            growth_potential=len(arch.emerging),
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def format_payload(
    report: TrustReport,
    participant: Participant | None = None,
    settings: EngineSettings | None = None,
    submitted_at: datetime | None = None,
) -> NarrativePayload:
    """Shape *report* for the narrative pipeline."""
    settings = settings or load_settings()
    participant = participant or Participant()
    submitted_at = submitted_at or datetime.now(timezone.utc)

    raw = None
    if settings.include_raw_data:
        raw = RawAssessmentData(
            responses=report.responses.raw_responses(),
            question_order=list(range(ITEM_COUNT)),
            questions_answered=report.responses.answered_count,
        )

    payload = NarrativePayload(
        participant=ParticipantOut(
            **participant.model_dump(),
            submission_date=submitted_at.isoformat(),
            assessment_version=settings.assessment_version,
        ),
        trust_challenges=_challenges(report),
        trust_strengths=_strengths(report),
        pattern_analysis=_pattern_insights(report),
        report_metadata=_metadata(report),
        processing_hints=_hints(report),
        raw_assessment_data=raw,
        incomplete_dimensions=IncompleteDimensions(
            challenges=[d.value for d in report.incomplete_risks],
            strengths=[d.value for d in report.incomplete_strengths],
        ),
    )
    logger.info(
        "Payload ready: participant=%s top3=%d cornerstone=%d combination=%s",
        participant.name or "(anonymous)",
        len(payload.trust_challenges.top3),
        len(payload.trust_strengths.cornerstone),
        payload.pattern_analysis.combination_key,
    )
    return payload
