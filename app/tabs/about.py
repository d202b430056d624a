import streamlit as st
import pandas as pd

from config.constants import (
    AI_ACCELERATED_MULTIPLIERS,
    MODEL_SCOPE_DISCLAIMER,
    REGULATORY_DISCLAIMER,
    REGULATORY_PARAMETERS,
    TIME_SCENARIO_DISCLAIMER,
    WORKLOAD_DISCLAIMER,
    WORKLOAD_PARAMETERS,
)
from core.models import Region
from core.multipliers import (
    escalation_categories,
    region_assumptions,
    region_description,
    region_impact_summary,
)

_GOALS = [
    "Scenario parameters for structural variation (region, time, workload, regulation)",
    "Assumptions that are explicit, exportable and testable",
    "Comparative scenario analysis (A/B)",
    "Transparent cost breakdown with traceable calculations",
    "Sensitivity analysis for key parameters",
]

_NON_GOALS = [
    ("No forecasting or prediction", "CPI/energy price prediction and demand forecasting are out of scope"),
    ("No legal encoding", "No GDPR article logic, no checklists implying legal compliance"),
    ("No application-level workload simulation", "No performance modeling or trace-based analysis"),
    ('No "absolute realism" claims', "Results are comparative and scenario-based, not predictions"),
]


def render() -> None:
    st.header("ℹ️ Model Scope")

    col1, col2 = st.columns([1, 1])

    with col1:
        st.subheader("Purpose")
        st.markdown(
            "A comparative scenario tool for data-center Total Cost of Ownership. "
            "It models structural variation across regions, time periods, workload "
            "classes and regulatory environments on top of an externally priced base."
        )
        st.subheader("Goals")
        for g in _GOALS:
            st.markdown(f"- ✅ {g}")

    with col2:
        st.subheader("Explicitly Out of Scope")
        for item, detail in _NON_GOALS:
            st.markdown(f"- ❌ **{item}** — {detail}")

    st.markdown("---")
    st.subheader("Regions")
    for region in Region:
        st.markdown(f"**{region.value}** — {region_description(region)}")
        st.caption(region_impact_summary(region))
        with st.expander(f"{region.value} assumptions"):
            for line in region_assumptions(region):
                st.markdown(f"- {line}")

    st.subheader("Workload classes")
    for level, cfg in WORKLOAD_PARAMETERS.items():
        st.markdown(f"**{level}** — {cfg['description']}")
        st.caption("Examples: " + "; ".join(cfg["examples"]))
    st.markdown(f"**AI-accelerated** — {AI_ACCELERATED_MULTIPLIERS['description']}")
    st.caption("Examples: " + "; ".join(AI_ACCELERATED_MULTIPLIERS["examples"]))

    st.subheader("Cost escalation")
    st.markdown("Only OPEX categories escalate with the scenario year; CAPEX is a one-time purchase.")
    st.dataframe(pd.DataFrame(escalation_categories()), use_container_width=True, hide_index=True)

    st.subheader("Regulatory intensity")
    for level, cfg in REGULATORY_PARAMETERS.items():
        st.markdown(f"**{level}** — {cfg['description']}")

    with st.expander("Disclaimers"):
        for text in (TIME_SCENARIO_DISCLAIMER, WORKLOAD_DISCLAIMER, REGULATORY_DISCLAIMER):
            st.caption(text)

    st.info(MODEL_SCOPE_DISCLAIMER)
