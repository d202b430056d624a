import streamlit as st
import logging
from typing import Optional, Tuple

from config.constants import (
    MAX_ESCALATION_RATE,
    MAX_SCENARIO_YEAR,
    MAX_SHOCK_FACTOR,
    MIN_SCENARIO_YEAR,
    MIN_SHOCK_FACTOR,
)
from core.builders import (
    as_baseline,
    renamed,
    with_region,
    with_regulatory_intensity,
    with_risk,
    with_security,
    with_time,
    with_workload,
)
from core.costs import ComplianceSettings
from core.models import (
    BaseTCOInput,
    ComputationContext,
    Region,
    RegulatoryIntensity,
    ScenarioParameters,
    WorkloadClass,
)
from services.repository import ScenarioRepository

logger = logging.getLogger(__name__)

_BASE_LABELS = {
    "land":               "Land & Building",
    "servers":            "Servers",
    "storage":            "Storage",
    "network":            "Network",
    "power_distribution": "Power Distribution",
    "energy":             "Energy",
    "software":           "Software",
    "labor":              "Labor",
}


def render_sidebar(
    repo: ScenarioRepository,
    hourly_rate: float,
) -> Tuple[Optional[ScenarioParameters], BaseTCOInput, ComputationContext, ComplianceSettings]:
    """
    Renders the full sidebar and returns the current computation inputs.
    Returns: (active_scenario, base_tco, context, compliance_settings)
    """
    with st.sidebar:
        st.subheader("Scenario")
        scenario = _render_scenario_selector(repo)
        if scenario is not None:
            with st.expander("✏️ Edit Scenario", expanded=False):
                _render_scenario_editor(repo, scenario)

        st.markdown("---")
        base_tco = _render_base_inputs()

        st.markdown("---")
        context, compliance = _render_context_inputs(hourly_rate)

    return scenario, base_tco, context, compliance


def _render_scenario_selector(repo: ScenarioRepository) -> Optional[ScenarioParameters]:
    scenarios = repo.list()
    if not scenarios:
        st.info("No scenarios yet. Create one in the Library tab.")
        return None

    ids = [s.id for s in scenarios]
    labels = {s.id: f"{'⭐ ' if s.is_baseline else ''}{s.name}" for s in scenarios}
    current = st.session_state.get("active_scenario_id")
    index = ids.index(current) if current in ids else 0

    chosen = st.selectbox(
        "Active scenario", ids, index=index,
        format_func=lambda sid: labels[sid],
    )
    st.session_state.active_scenario_id = chosen
    return repo.get(chosen)


def _render_scenario_editor(repo: ScenarioRepository, scenario: ScenarioParameters) -> None:
    """Form over every scenario field; Save rebuilds the record through the builders."""
    t, w, sec, r = scenario.time, scenario.workload, scenario.security, scenario.risk

    with st.form(key=f"edit_{scenario.id}"):
        name = st.text_input("Name", value=scenario.name)
        description = st.text_area("Description", value=scenario.description or "")

        region = st.selectbox(
            "Region", [x.value for x in Region],
            index=[x.value for x in Region].index(scenario.region.value),
        )
        year = st.number_input(
            "Year", MIN_SCENARIO_YEAR, MAX_SCENARIO_YEAR, value=t.year, step=1,
        )
        escalation_pct = st.slider(
            "Annual escalation (%)", 0.0, MAX_ESCALATION_RATE * 100,
            value=float(t.escalation_rate * 100), step=0.5,
        )
        shock_enabled = st.checkbox("Energy price shock", value=t.shock_enabled)
        shock_factor = st.slider(
            "Shock factor", MIN_SHOCK_FACTOR, MAX_SHOCK_FACTOR,
            value=float(t.shock_factor or 1.5), step=0.1,
        )

        utilization = st.selectbox(
            "Workload class", [x.value for x in WorkloadClass],
            index=[x.value for x in WorkloadClass].index(w.utilization_class.value),
        )
        ai_enabled = st.checkbox("AI-accelerated workloads", value=w.ai_enabled)
        regulatory = st.selectbox(
            "Regulatory intensity", [x.value for x in RegulatoryIntensity],
            index=[x.value for x in RegulatoryIntensity].index(scenario.regulatory_intensity.value),
        )

        st.markdown("**Security controls**")
        investment = st.number_input("Annual security investment ($)", 0.0, value=sec.annual_investment, step=10_000.0)
        siem = st.number_input("SIEM per node ($)", 0.0, value=sec.siem_per_node, step=50.0)
        iam = st.number_input("IAM per user ($)", 0.0, value=sec.iam_per_user, step=10.0)
        enc = st.number_input("Encryption per TB ($)", 0.0, value=sec.encryption_per_tb, step=5.0)
        ir = st.number_input("IR retainer ($)", 0.0, value=sec.incident_response_retainer, step=5_000.0)
        users = st.number_input("Users", 0, value=sec.user_count, step=1)

        st.markdown("**Risk model**")
        prob = st.slider("Base incident probability", 0.0, 1.0, value=r.base_incident_probability, step=0.01)
        impact = st.number_input("Average impact cost ($)", 0.0, value=r.average_impact_cost, step=50_000.0)
        max_red = st.slider("Max security reduction", 0.0, 1.0, value=r.max_security_reduction, step=0.05)

        baseline = st.checkbox("Use as baseline", value=scenario.is_baseline)
        submitted = st.form_submit_button("💾 Save scenario", use_container_width=True)

    if not submitted:
        return

    try:
        updated = renamed(scenario, name, description or None)
        updated = with_region(updated, region)
        updated = with_time(
            updated, year=int(year), escalation_rate=escalation_pct / 100.0,
            shock_enabled=shock_enabled, shock_factor=shock_factor,
        )
        updated = with_workload(updated, utilization_class=utilization, ai_enabled=ai_enabled)
        updated = with_regulatory_intensity(updated, regulatory)
        updated = with_security(
            updated, annual_investment=investment, siem_per_node=siem, iam_per_user=iam,
            encryption_per_tb=enc, incident_response_retainer=ir, user_count=int(users),
        )
        updated = with_risk(
            updated, base_incident_probability=prob, average_impact_cost=impact,
            max_security_reduction=max_red,
        )
        updated = as_baseline(updated, baseline)
    except ValueError as exc:
        st.error(str(exc))
        return

    if baseline:
        # at most one baseline in the library
        for other in repo.list():
            if other.is_baseline and other.id != updated.id:
                repo.save(as_baseline(other, False))
    repo.save(updated)
    logger.info("Scenario %s saved", updated.id)
    st.rerun()


def _render_base_inputs() -> BaseTCOInput:
    st.subheader("Base TCO (USD / year)")
    values = dict(st.session_state.base_tco)
    with st.expander("Infrastructure costs", expanded=False):
        for key, label in _BASE_LABELS.items():
            values[key] = st.number_input(
                label, min_value=0.0, value=float(values[key]), step=10_000.0, key=f"base_{key}",
            )
    st.session_state.base_tco = values
    base = BaseTCOInput(**values)
    st.caption(f"Base total: ${base.total:,.0f}")
    return base


def _render_context_inputs(hourly_rate: float) -> Tuple[ComputationContext, ComplianceSettings]:
    with st.expander("⚙️ Advanced Settings"):
        st.session_state.node_count = int(st.number_input(
            "Nodes", min_value=0, value=int(st.session_state.node_count), step=10,
        ))
        st.session_state.total_storage_tb = float(st.number_input(
            "Storage (TB)", min_value=0.0, value=float(st.session_state.total_storage_tb), step=50.0,
        ))
        st.session_state.include_training_tooling = st.checkbox(
            "Include compliance training & tooling",
            value=st.session_state.include_training_tooling,
        )
        st.session_state.employee_count = int(st.number_input(
            "Employees (training)", min_value=0, value=int(st.session_state.employee_count), step=10,
            disabled=not st.session_state.include_training_tooling,
        ))

    context = ComputationContext(
        node_count=st.session_state.node_count,
        total_storage_tb=st.session_state.total_storage_tb,
    )
    compliance = ComplianceSettings(
        hourly_rate=hourly_rate,
        include_training_and_tooling=st.session_state.include_training_tooling,
        employee_count=st.session_state.employee_count,
    )
    return context, compliance
