"""🧭 Trust Foundation Check — Streamlit dashboard.

Five tabs:
1. Responses    – paste the submission text or answer item by item
2. Challenges   – risk indices, top-3, severity tiers, density pattern
3. Foundations  – strength indices, architecture, culture pattern, bridges
4. Patterns     – risk ↔ strength relationships, compensation, landscape
5. Payload      – the narrative payload as JSON
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
import plotly.graph_objects as go  # type: ignore[import-untyped]
import streamlit as st

from trust_check.dimensions import RISK_DIMENSIONS, STRENGTH_DIMENSIONS
from trust_check.engine.report import TrustReport, build_report
from trust_check.errors import MalformedInputError
from trust_check.observability import EventCollector
from trust_check.parsing import parse_assessment_text
from trust_check.payload import Participant, format_payload
from trust_check.responses import ITEM_COUNT, AssessmentResponses
from trust_check.settings import configure_logging, load_settings

load_dotenv()
_SETTINGS = load_settings()
configure_logging(_SETTINGS)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Trust Foundation Check", page_icon="🧭", layout="wide")
st.title("🧭 Trust Foundation Check")

_TIER_COLORS = {
    "Critical Pressure Points": "#C0392B",
    "Active Friction": "#E67E22",
    "Moderate Tension": "#F1C40F",
    "Background Static": "#95A5A6",
    "Cornerstone": "#27AE60",
    "Solid": "#2980B9",
    "Emerging": "#8E44AD",
    "Fragile": "#BDC3C7",
}


# ---------------------------------------------------------------------------
# Session-state helpers
# ---------------------------------------------------------------------------
def _get_report() -> TrustReport | None:
    report: TrustReport | None = st.session_state.get("trust_report")
    return report


def _set_report(responses: AssessmentResponses) -> None:
    collector = EventCollector()
    st.session_state.trust_report = build_report(responses, hook=collector)
    st.session_state.trust_events = [e.model_dump() for e in collector.events]


def _bar(names: list[str], values: list[int | None], tiers: list[str | None], title: str) -> go.Figure:
    fig = go.Figure(go.Bar(
        x=[v if v is not None else 0 for v in values],
        y=names,
        orientation="h",
        marker_color=[_TIER_COLORS.get(t or "", "#DDDDDD") for t in tiers],
        text=[str(v) if v is not None else "incomplete" for v in values],
        textposition="auto",
    ))
    fig.update_layout(title=title, xaxis_range=[0, 100], height=420, yaxis_autorange="reversed")
    return fig


tab1, tab2, tab3, tab4, tab5 = st.tabs([
    "📝 Responses",
    "⚡ Challenges",
    "💪 Foundations",
    "🔗 Patterns",
    "📤 Payload",
])


# =========================================================================
# Tab 1 — Responses
# =========================================================================
with tab1:
    mode = st.radio("Input mode", ["Paste text", "Answer items"], horizontal=True)

    if mode == "Paste text":
        text = st.text_area(
            "Submission text",
            height=300,
            placeholder="Q1: ...\nResponse: 4 - Agree\nQ2 (R): ...\nResponse: 2 - Disagree",
        )
        if st.button("Score submission", type="primary"):
            try:
                _set_report(parse_assessment_text(text))
                st.success("Assessment scored successfully")
            except MalformedInputError as exc:
                logger.warning("Rejected submission: %s", exc)
                st.error(str(exc))
    else:
        answers: list[int | None] = []
        reverse: list[bool] = []
        for definition in RISK_DIMENSIONS.values():
            with st.expander(f"{definition.name.value} (items {definition.item_indices[0] + 1}–{definition.item_indices[-1] + 1})"):
                for idx in definition.item_indices:
                    c1, c2 = st.columns([4, 1])
                    value = c1.select_slider(
                        f"Q{idx + 1}",
                        options=["—", 1, 2, 3, 4, 5],
                        value=3,
                        key=f"q_{idx}",
                    )
                    flag = c2.checkbox("(R)", key=f"r_{idx}")
                    answers.append(None if value == "—" else int(value))
                    reverse.append(flag)
        if len(answers) == ITEM_COUNT and st.button("Score answers", type="primary"):
            try:
                _set_report(AssessmentResponses.from_lists(answers, reverse))
                st.success("Assessment scored successfully")
            except MalformedInputError as exc:
                st.error(str(exc))

    report = _get_report()
    if report is not None and not report.complete:
        st.warning(
            "Incomplete dimensions (excluded from ranking): "
            + ", ".join(d.value for d in report.incomplete_risks)
        )


report = _get_report()

# =========================================================================
# Tab 2 — Challenges
# =========================================================================
with tab2:
    if report is None:
        st.info("Score a submission first.")
    else:
        st.plotly_chart(
            _bar(
                [s.name.value for s in report.risk_scores],
                [s.index for s in report.risk_scores],
                [s.tier for s in report.risk_scores],
                "Trust challenge indices",
            ),
            use_container_width=True,
        )
        st.subheader("Top 3 trust challenges")
        cols = st.columns(3)
        for col, ranked in zip(cols, report.top3):
            col.metric(f"#{ranked.rank} {ranked.name.value}", ranked.index, ranked.tier, delta_color="off")
            col.caption(ranked.category.value if ranked.category else "")
        if report.density is not None:
            st.markdown(f"**{report.density.type}** — {report.density.description}")
            st.write(report.density.insight)
        for tier, members in report.severity.by_tier().items():
            st.markdown(f"**{tier}**: " + (", ".join(f"{m.name.value} ({m.index})" for m in members) or "—"))


# =========================================================================
# Tab 3 — Foundations
# =========================================================================
with tab3:
    if report is None:
        st.info("Score a submission first.")
    else:
        st.plotly_chart(
            _bar(
                [s.name.value for s in report.strength_scores],
                [s.index for s in report.strength_scores],
                [s.tier for s in report.strength_scores],
                "Trust foundation indices",
            ),
            use_container_width=True,
        )
        patterns = report.strength_patterns
        st.markdown(f"**{patterns.dominant_pattern}** — {patterns.pattern_description}")
        for tier, entries in report.architecture.by_tier().items():
            with st.expander(f"{tier} ({len(entries)})"):
                for entry in entries:
                    st.markdown(f"**{entry.name.value}** ({entry.score}) — {STRENGTH_DIMENSIONS[entry.name].description}")
                    st.caption(entry.guidance)
        if report.trust_bridges:
            st.subheader("Trust bridges")
            for bridge in report.trust_bridges:
                st.write(f"{bridge.foundation.value} ({bridge.score}): {bridge.bridge_potential}")


# =========================================================================
# Tab 4 — Patterns
# =========================================================================
with tab4:
    if report is None:
        st.info("Score a submission first.")
    else:
        analysis = report.patterns
        landscape = analysis.trust_landscape
        c1, c2, c3 = st.columns(3)
        c1.metric("Landscape", landscape.landscape_type)
        c2.metric("Balance", landscape.balance)
        c3.metric("Balance ratio", f"{landscape.metrics.balance_ratio:.2f}")
        st.caption(f"Combination key: `{analysis.combination_key}`")

        for rel in analysis.relationships:
            icon = {"high": "🔴", "medium": "🟠", "low": "🟢"}[rel.tension]
            st.markdown(f"{icon} **{rel.risk.value}** ({rel.risk_score}) ↔ **{rel.strength.value}** ({rel.strength_score})")
            st.caption(rel.insight)

        for comp in analysis.compensation_patterns:
            st.warning(comp.insight)

        st.subheader("Key insights")
        for insight in analysis.insights:
            st.write(f"[{insight.priority}] {insight.insight}")


# =========================================================================
# Tab 5 — Payload
# =========================================================================
with tab5:
    if report is None:
        st.info("Score a submission first.")
    else:
        c1, c2, c3 = st.columns(3)
        participant = Participant(
            name=c1.text_input("Name") or None,
            email=c2.text_input("Email") or None,
            company=c3.text_input("Company") or None,
        )
        payload = format_payload(report, participant, settings=_SETTINGS)
        st.json(payload.to_json_dict())
        with st.expander("Engine events"):
            st.json(st.session_state.get("trust_events", []))
