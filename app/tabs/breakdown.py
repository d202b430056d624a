import streamlit as st
import pandas as pd
import plotly.graph_objects as go

from config.constants import MODEL_SCOPE_DISCLAIMER, REGULATORY_DISCLAIMER
from core.models import ComputationBreakdown, ScenarioParameters
from core.multipliers import (
    escalation_categories,
    format_multiplier,
    multiplier_affects,
    multiplier_documentation,
    region_assumptions,
    region_description,
    region_impact_summary,
    regulatory_impact_description,
    time_escalation_description,
    workload_examples,
    workload_impact_description,
)
from services.export import (
    assumptions_to_markdown,
    breakdown_to_csv,
    breakdown_to_frame,
    breakdown_to_json,
    breakdown_to_markdown,
)


def _kpi(col, label: str, value: float, sub: str = "") -> None:
    with col:
        st.markdown(
            f"<div class='kpi-card'><div class='kpi-label'>{label}</div>"
            f"<div class='kpi-value'>${value:,.0f}</div>"
            f"<div class='kpi-sub'>{sub}</div></div>",
            unsafe_allow_html=True,
        )


def _waterfall(breakdown: ComputationBreakdown) -> go.Figure:
    t = breakdown.totals
    fig = go.Figure(go.Waterfall(
        orientation="v",
        measure=["absolute", "relative", "relative", "relative", "relative", "total"],
        x=["Base TCO", "Adjustments", "Compliance", "Security", "Risk (EAL)", "Grand Total"],
        y=[t.base_tco, t.adjustments, t.compliance, t.security, t.risk, 0],
        text=[f"${v:,.0f}" for v in (
            t.base_tco, t.adjustments, t.compliance, t.security, t.risk, t.grand_total,
        )],
        textposition="outside",
        connector={"line": {"color": "#5A7A90"}},
        increasing={"marker": {"color": "#E84C4C"}},
        decreasing={"marker": {"color": "#1DB87A"}},
        totals={"marker": {"color": "#071A2F"}},
    ))
    fig.update_layout(
        height=420, margin=dict(t=30, b=20, l=20, r=20),
        yaxis_title="USD / year", showlegend=False,
        plot_bgcolor="rgba(0,0,0,0)", paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def _changed_multipliers(entry: dict) -> None:
    changed = {name: v for name, v in entry["multipliers"].items() if v != 1.0}
    if not changed:
        st.caption("No adjustments")
        return
    for name, value in changed.items():
        st.caption(
            f"{name.title()} {format_multiplier(value)} · affects "
            f"{', '.join(multiplier_affects(name))}"
        )


def _render_assumptions(scenario: ScenarioParameters, breakdown: ComputationBreakdown) -> None:
    docs = multiplier_documentation(
        scenario.region, scenario.time, scenario.workload, scenario.regulatory_intensity,
    )

    st.markdown(f"**Region** — {region_description(scenario.region)}")
    st.caption(region_impact_summary(scenario.region))
    for line in region_assumptions(scenario.region):
        st.markdown(f"- {line}")
    _changed_multipliers(docs["region"])

    st.markdown(f"**Time** — {docs['time']['source']}")
    st.text(time_escalation_description(scenario.time))
    _changed_multipliers(docs["time"])
    st.caption(docs["time"]["note"])
    st.dataframe(pd.DataFrame(escalation_categories()), use_container_width=True, hide_index=True)

    st.markdown(f"**Workload** — {docs['workload']['source']}")
    st.text(workload_impact_description(scenario.workload))
    st.caption("Typical workloads: " + "; ".join(workload_examples(scenario.workload)))
    _changed_multipliers(docs["workload"])

    st.markdown(f"**Regulatory** — {docs['regulatory']['source']}")
    st.text(regulatory_impact_description(scenario.regulatory_intensity))
    _changed_multipliers(docs["regulatory"])
    st.caption(docs["regulatory"]["note"])

    m = breakdown.multipliers.combined
    st.markdown(
        f"Combined (applied): energy ×{m.energy:.3f}, labor ×{m.labor:.3f}, "
        f"cooling ×{m.cooling:.3f}"
    )
    st.caption(REGULATORY_DISCLAIMER)


def render(scenario: ScenarioParameters, breakdown: ComputationBreakdown) -> None:
    """Render the Cost Breakdown tab."""
    st.header(f"Cost Breakdown — {scenario.name}")
    if scenario.description:
        st.caption(scenario.description)

    t = breakdown.totals
    k1, k2, k3, k4 = st.columns(4)
    _kpi(k1, "Grand Total", t.grand_total, "base + all scenario layers")
    _kpi(k2, "Base TCO", t.base_tco, "externally priced")
    _kpi(k3, "Adjustments", t.adjustments, "region × time × workload")
    _kpi(k4, "Compliance + Security + Risk", t.compliance + t.security + t.risk)

    st.plotly_chart(_waterfall(breakdown), use_container_width=True)

    # ── Line items ────────────────────────────────────────────────────────
    with st.container(border=True):
        st.markdown("**Line items**")
        frame = breakdown_to_frame(breakdown).drop(columns=["Scenario"])
        st.dataframe(frame, use_container_width=True, hide_index=True)

    # ── Assumptions ───────────────────────────────────────────────────────
    with st.expander("🔍 Assumptions & multipliers", expanded=False):
        _render_assumptions(scenario, breakdown)

    # ── Exports ───────────────────────────────────────────────────────────
    c1, c2, c3, c4 = st.columns(4)
    slug = scenario.name.lower().replace(" ", "_")
    c1.download_button(
        "⬇ JSON", breakdown_to_json(scenario, breakdown),
        file_name=f"{slug}_breakdown.json", mime="application/json", use_container_width=True,
    )
    c2.download_button(
        "⬇ CSV", breakdown_to_csv(breakdown),
        file_name=f"{slug}_breakdown.csv", mime="text/csv", use_container_width=True,
    )
    c3.download_button(
        "⬇ Markdown", breakdown_to_markdown(scenario, breakdown),
        file_name=f"{slug}_breakdown.md", mime="text/markdown", use_container_width=True,
    )
    c4.download_button(
        "⬇ Assumptions", assumptions_to_markdown(scenario),
        file_name=f"{slug}_assumptions.md", mime="text/markdown", use_container_width=True,
    )
    st.caption(MODEL_SCOPE_DISCLAIMER)
