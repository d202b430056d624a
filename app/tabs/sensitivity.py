import streamlit as st
import pandas as pd
import plotly.graph_objects as go

from core.analysis import SensitivityResult, sensitivity_table
from core.costs import ComplianceSettings
from core.models import BaseTCOInput, ComputationContext, ScenarioParameters
from core.risk import RiskModelConfig


def _tornado(results: list[SensitivityResult]) -> go.Figure:
    # plotly draws the first category at the bottom; reverse for tornado order
    ordered = list(reversed(results))
    labels = [r.summary()["label"] for r in ordered]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        y=labels, x=[r.delta_low for r in ordered], orientation="h",
        name="−perturbation", marker_color="#1DB87A",
    ))
    fig.add_trace(go.Bar(
        y=labels, x=[r.delta_high for r in ordered], orientation="h",
        name="+perturbation", marker_color="#E84C4C",
    ))
    fig.update_layout(
        barmode="overlay", height=320, margin=dict(t=20, b=20, l=20, r=20),
        xaxis_title="Δ grand total (USD)",
        plot_bgcolor="rgba(0,0,0,0)", paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def render(
    scenario: ScenarioParameters,
    base_tco: BaseTCOInput,
    context: ComputationContext,
    risk_config: RiskModelConfig,
    compliance_settings: ComplianceSettings,
) -> None:
    """Render the Sensitivity Analysis tab."""
    st.header("Sensitivity Analysis")
    st.caption(
        "Each input is moved down and up by the same fraction while everything else "
        "stays fixed; the full model is re-run for each case."
    )

    st.slider(
        "Perturbation (±%)", 5.0, 50.0, step=5.0, key="perturbation_pct",
    )
    fraction = float(st.session_state.perturbation_pct) / 100.0

    results = sensitivity_table(
        base_tco, scenario, context, fraction,
        risk_config=risk_config, compliance_settings=compliance_settings,
    )

    st.plotly_chart(_tornado(results), use_container_width=True)

    rows = []
    for r in results:
        s = r.summary()
        pct = s["percentageImpact"]
        rows.append({
            "Parameter":      s["label"],
            "Base value":     f"${s['baseValue']:,.0f}",
            "Low total":      f"${s['resultLow']:,.0f}",
            "Base total":     f"${s['resultBase']:,.0f}",
            "High total":     f"${s['resultHigh']:,.0f}",
            "Δ low":          f"${s['deltaLow']:,.0f}",
            "Δ high":         f"${s['deltaHigh']:,.0f}",
            "Swing (% base)": "N/A" if pct is None else f"{pct:.2f}%",
        })
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    st.info(
        "Security investment moves only the general annual budget, so it acts through "
        "the risk model: more investment lowers expected annual loss."
    )
