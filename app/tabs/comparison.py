import streamlit as st
import plotly.graph_objects as go

from core.analysis import compare_scenarios
from core.costs import ComplianceSettings
from core.engine import compute_scenario_tco
from core.models import BaseTCOInput, ComputationContext
from core.risk import RiskModelConfig
from services.export import comparison_to_csv, comparison_to_frame
from services.repository import ScenarioRepository

_CATEGORIES = (
    ("Base TCO", "base_tco"),
    ("Adjustments", "adjustments"),
    ("Compliance", "compliance"),
    ("Security", "security"),
    ("Risk (EAL)", "risk"),
)


def render(
    repo: ScenarioRepository,
    base_tco: BaseTCOInput,
    context: ComputationContext,
    risk_config: RiskModelConfig,
    compliance_settings: ComplianceSettings,
) -> None:
    """Render the Scenario Comparison tab."""
    st.header("Scenario Comparison")
    scenarios = repo.list()
    if len(scenarios) < 2:
        st.info("Add at least two scenarios to the library to compare them.")
        return

    ids = [s.id for s in scenarios]
    names = {s.id: s.name for s in scenarios}
    baseline = repo.baseline()
    default_a = baseline.id if baseline else ids[0]
    stored = [i for i in st.session_state.compare_ids if i in ids]
    a_default = stored[0] if len(stored) == 2 else default_a
    b_default = stored[1] if len(stored) == 2 else next(i for i in ids if i != a_default)

    c1, c2 = st.columns(2)
    with c1:
        a_id = st.selectbox("Scenario A", ids, index=ids.index(a_default), format_func=names.get)
    with c2:
        b_id = st.selectbox("Scenario B", ids, index=ids.index(b_default), format_func=names.get)
    st.session_state.compare_ids = [a_id, b_id]

    scenario_a, scenario_b = repo.get(a_id), repo.get(b_id)
    kwargs = {"risk_config": risk_config, "compliance_settings": compliance_settings}
    comparison = compare_scenarios(
        compute_scenario_tco(base_tco, scenario_a, context, **kwargs),
        compute_scenario_tco(base_tco, scenario_b, context, **kwargs),
        scenario_a, scenario_b,
    )

    d = comparison.deltas
    pct = comparison.percentage_change
    k1, k2, k3 = st.columns(3)
    k1.metric("Scenario A total", f"${comparison.breakdown_a.totals.grand_total:,.0f}")
    k2.metric("Scenario B total", f"${comparison.breakdown_b.totals.grand_total:,.0f}")
    k3.metric(
        "Δ Grand total", f"${d.grand_total:,.0f}",
        delta=None if pct is None else f"{pct:+.2f}%", delta_color="inverse",
        help="Percentage change is N/A when scenario A totals zero." if pct is None else None,
    )

    fig = go.Figure()
    for label, breakdown, colour in (
        (scenario_a.name, comparison.breakdown_a, "#4A6FA5"),
        (scenario_b.name, comparison.breakdown_b, "#00C2A8"),
    ):
        fig.add_trace(go.Bar(
            x=[c for c, _ in _CATEGORIES],
            y=[getattr(breakdown.totals, attr) for _, attr in _CATEGORIES],
            name=label, marker_color=colour,
        ))
    fig.update_layout(
        barmode="group", height=380, margin=dict(t=20, b=20, l=20, r=20),
        yaxis_title="USD / year",
        plot_bgcolor="rgba(0,0,0,0)", paper_bgcolor="rgba(0,0,0,0)",
    )
    st.plotly_chart(fig, use_container_width=True)

    st.dataframe(comparison_to_frame(comparison), use_container_width=True, hide_index=True)

    if comparison.parameter_differences:
        st.markdown("**Parameter differences**")
        for diff in comparison.parameter_differences:
            st.markdown(f"- {diff.parameter}: {diff.value_a} → {diff.value_b}")
    else:
        st.caption("The two scenarios share every compared parameter.")

    st.download_button(
        "⬇ Comparison CSV", comparison_to_csv(comparison),
        file_name="scenario_comparison.csv", mime="text/csv",
    )
