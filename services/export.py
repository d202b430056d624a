"""
ScenarioTCO Export Service.

Renders scenarios and computed breakdowns for reproducible reporting.
Every function returns a string payload, so st.download_button() and
scripts can use the same output.

Public API
----------
scenario_to_json(scenario) -> str
scenarios_to_json(scenarios) -> str
breakdown_to_json(scenario, breakdown) -> str
breakdown_to_frame(breakdown) -> pd.DataFrame
breakdown_to_csv(breakdown) -> str
comparison_to_frame(comparison) -> pd.DataFrame
comparison_to_csv(comparison) -> str
breakdown_to_markdown(scenario, breakdown) -> str
assumptions_to_markdown(scenario) -> str
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Iterable, Optional

import pandas as pd

from config.constants import (
    MODEL_SCOPE_DISCLAIMER,
    REGULATORY_DISCLAIMER,
    STORAGE_VERSION,
    TIME_SCENARIO_DISCLAIMER,
    WORKLOAD_DISCLAIMER,
)
from core.analysis import percentage_of
from core.models import ComputationBreakdown, ScenarioParameters
from core.multipliers import escalation_categories, region_assumptions

_COMPARISON_ROWS: tuple[tuple[str, str], ...] = (
    ("Base TCO",    "base_tco"),
    ("Adjustments", "adjustments"),
    ("Compliance",  "compliance"),
    ("Security",    "security"),
    ("Risk (EAL)",  "risk"),
    ("Grand Total", "grand_total"),
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _usd(value: float, decimals: int = 2) -> str:
    return f"${value:,.{decimals}f}"


def _pct(value: float, decimals: int = 1) -> str:
    return f"{value * 100:.{decimals}f}%"


def _format_change(pct: Optional[float]) -> str:
    return "N/A" if pct is None else f"{pct:.2f}%"


# ── JSON ─────────────────────────────────────────────────────────────────────

def scenario_to_json(scenario: ScenarioParameters) -> str:
    return json.dumps(
        {
            "version": STORAGE_VERSION,
            "type": "single_scenario",
            "exportedAt": _now(),
            "scenario": scenario.to_dict(),
        },
        indent=2,
    )


def scenarios_to_json(scenarios: Iterable[ScenarioParameters]) -> str:
    items = [s.to_dict() for s in scenarios]
    return json.dumps(
        {
            "version": STORAGE_VERSION,
            "type": "multiple_scenarios",
            "exportedAt": _now(),
            "count": len(items),
            "scenarios": items,
        },
        indent=2,
    )


def breakdown_to_json(scenario: ScenarioParameters, breakdown: ComputationBreakdown) -> str:
    """Scenario plus its full breakdown in one reproducible document."""
    return json.dumps(
        {
            "version": STORAGE_VERSION,
            "type": "computation_result",
            "exportedAt": _now(),
            "scenario": scenario.to_dict(),
            "breakdown": breakdown.to_dict(),
        },
        indent=2,
    )


# ── CSV ──────────────────────────────────────────────────────────────────────

def breakdown_to_frame(breakdown: ComputationBreakdown) -> pd.DataFrame:
    """One row per line item: Scenario, Category, Item, Value."""
    b, a = breakdown.base_tco, breakdown.adjustments
    c, s, r, t = (
        breakdown.compliance_costs, breakdown.security_costs,
        breakdown.risk_costs, breakdown.totals,
    )
    items: list[tuple[str, str, float]] = [
        ("Base TCO", "Land", b.land),
        ("Base TCO", "Servers", b.servers),
        ("Base TCO", "Storage", b.storage),
        ("Base TCO", "Network", b.network),
        ("Base TCO", "Power Distribution", b.power_distribution),
        ("Base TCO", "Energy", b.energy),
        ("Base TCO", "Software", b.software),
        ("Base TCO", "Labor", b.labor),
        ("Base TCO", "Total", t.base_tco),
        ("Adjustments", "Energy Adjustment", a.energy_adjustment),
        ("Adjustments", "Labor Adjustment", a.labor_adjustment),
        ("Adjustments", "Cooling Adjustment", a.cooling_adjustment),
        ("Adjustments", "Total", a.total),
        ("Compliance", "Audit Costs", c.audit_costs),
        ("Compliance", "Documentation", c.documentation_costs),
        ("Compliance", "Advisory", c.advisory_costs),
        ("Compliance", "Certification", c.certification_costs),
        ("Compliance", "Training", c.training_costs),
        ("Compliance", "Tooling", c.tooling_costs),
        ("Compliance", "Total", c.total),
        ("Security", "SIEM", s.siem_costs),
        ("Security", "IAM", s.iam_costs),
        ("Security", "Encryption", s.encryption_costs),
        ("Security", "Incident Response", s.incident_response_costs),
        ("Security", "Total", s.total),
        ("Risk", "Expected Annual Loss", r.expected_annual_loss),
        ("Risk", "Adjusted Probability", r.adjusted_probability),
        ("Risk", "Security Reduction", r.security_reduction_factor),
        ("Totals", "Base TCO", t.base_tco),
        ("Totals", "Adjustments", t.adjustments),
        ("Totals", "Compliance", t.compliance),
        ("Totals", "Security", t.security),
        ("Totals", "Risk", t.risk),
        ("Totals", "Grand Total", t.grand_total),
    ]
    return pd.DataFrame(
        [(breakdown.scenario_name, cat, item, value) for cat, item, value in items],
        columns=["Scenario", "Category", "Item", "Value"],
    )


def breakdown_to_csv(breakdown: ComputationBreakdown) -> str:
    return breakdown_to_frame(breakdown).to_csv(index=False)


def comparison_to_frame(comparison) -> pd.DataFrame:
    """Category, Scenario A, Scenario B, Delta, % Change.

    ``comparison`` is a core.analysis.ScenarioComparison.  The first row
    carries the scenario names; % Change is "N/A" when A's value is zero.
    """
    ta, tb = comparison.breakdown_a.totals, comparison.breakdown_b.totals
    rows = [("Scenario Name", comparison.scenario_a.name, comparison.scenario_b.name, "", "")]
    for label, attr in _COMPARISON_ROWS:
        va, vb = getattr(ta, attr), getattr(tb, attr)
        delta = vb - va
        rows.append((
            label, f"{va:.2f}", f"{vb:.2f}", f"{delta:.2f}",
            _format_change(percentage_of(delta, va)),
        ))
    return pd.DataFrame(rows, columns=["Category", "Scenario A", "Scenario B", "Delta", "% Change"])


def comparison_to_csv(comparison) -> str:
    return comparison_to_frame(comparison).to_csv(index=False)


# ── Markdown ─────────────────────────────────────────────────────────────────

def _table(header: tuple[str, str], rows: list[tuple[str, str]]) -> list[str]:
    out = [f"| {header[0]} | {header[1]} |", "|---|---|"]
    out.extend(f"| {k} | {v} |" for k, v in rows)
    out.append("")
    return out


def breakdown_to_markdown(scenario: ScenarioParameters, breakdown: ComputationBreakdown) -> str:
    """Appendix-style document: parameters, multipliers, every cost layer."""
    t = scenario.time
    m = breakdown.multipliers.combined
    b, a = breakdown.base_tco, breakdown.adjustments
    c, s, r, tot = (
        breakdown.compliance_costs, breakdown.security_costs,
        breakdown.risk_costs, breakdown.totals,
    )

    lines = [f"# Scenario: {scenario.name}", "", f"*Exported: {_now()}*", ""]
    if scenario.description:
        lines += ["## Description", "", scenario.description, ""]

    params = [
        ("Region", scenario.region.value),
        ("Year", str(t.year)),
        ("Escalation Rate", _pct(t.escalation_rate)),
        ("Shock Enabled", "Yes" if t.shock_enabled else "No"),
    ]
    if t.shock_enabled and t.shock_factor is not None:
        params.append(("Shock Factor", f"{(t.shock_factor - 1) * 100:.0f}%"))
    params += [
        ("Workload Class", scenario.workload.utilization_class.value),
        ("AI Workloads", "Enabled" if scenario.workload.ai_enabled else "Disabled"),
        ("Regulatory Intensity", scenario.regulatory_intensity.value),
        ("Security Investment", _usd(scenario.security.annual_investment, 0)),
    ]
    lines += ["## Parameters", ""] + _table(("Parameter", "Value"), params)

    lines += ["## Multipliers Applied", ""] + _table(("Category", "Multiplier"), [
        ("Energy", f"×{m.energy:.3f}"),
        ("Labor", f"×{m.labor:.3f}"),
        ("Compliance", f"×{m.compliance:.3f}"),
        ("Cooling", f"×{m.cooling:.3f}"),
        ("Monitoring", f"×{m.monitoring:.3f}"),
    ])

    lines += ["## Cost Breakdown", "", "### Base TCO", ""] + _table(("Component", "Cost"), [
        ("Land & Building", _usd(b.land)),
        ("Servers", _usd(b.servers)),
        ("Storage", _usd(b.storage)),
        ("Network", _usd(b.network)),
        ("Power Distribution", _usd(b.power_distribution)),
        ("Energy", _usd(b.energy)),
        ("Software", _usd(b.software)),
        ("Labor", _usd(b.labor)),
        ("**Total**", f"**{_usd(tot.base_tco)}**"),
    ])
    lines += ["### Scenario Adjustments", ""] + _table(("Adjustment", "Amount"), [
        ("Energy", _usd(a.energy_adjustment)),
        ("Labor", _usd(a.labor_adjustment)),
        ("Cooling", _usd(a.cooling_adjustment)),
        ("**Total**", f"**{_usd(a.total)}**"),
    ])
    compliance_rows = [
        ("Audit Costs", _usd(c.audit_costs)),
        ("Documentation", _usd(c.documentation_costs)),
        ("Advisory", _usd(c.advisory_costs)),
        ("Certification", _usd(c.certification_costs)),
    ]
    if c.training_costs or c.tooling_costs:
        compliance_rows += [("Training", _usd(c.training_costs)), ("Tooling", _usd(c.tooling_costs))]
    compliance_rows.append(("**Total**", f"**{_usd(c.total)}**"))
    lines += ["### Compliance Costs", ""] + _table(("Item", "Cost"), compliance_rows)
    lines += ["### Security Costs", ""] + _table(("Item", "Cost"), [
        ("SIEM/Monitoring", _usd(s.siem_costs)),
        ("IAM/MFA", _usd(s.iam_costs)),
        ("Encryption/KMS", _usd(s.encryption_costs)),
        ("Incident Response", _usd(s.incident_response_costs)),
        ("**Total**", f"**{_usd(s.total)}**"),
    ])
    lines += ["### Risk Model", ""] + _table(("Parameter", "Value"), [
        ("Base Probability", _pct(r.base_incident_probability)),
        ("Security Reduction", _pct(r.security_reduction_factor)),
        ("Adjusted Probability", _pct(r.adjusted_probability, 2)),
        ("Average Impact", _usd(r.average_impact_cost, 0)),
        ("**Expected Annual Loss**", f"**{_usd(r.expected_annual_loss, 0)}**"),
    ])

    lines += ["## Grand Total", ""] + _table(("Category", "Amount"), [
        ("Base TCO", _usd(tot.base_tco)),
        ("+ Adjustments", _usd(tot.adjustments)),
        ("+ Compliance", _usd(tot.compliance)),
        ("+ Security", _usd(tot.security)),
        ("+ Risk (EAL)", _usd(tot.risk)),
        ("**= Grand Total**", f"**{_usd(tot.grand_total, 0)}**"),
    ])

    lines += [
        "---",
        "",
        "*This document was automatically generated for reproducibility.*",
        f"*Scenario ID: {scenario.id}*",
        f"*Calculated: {breakdown.calculated_at}*",
    ]
    return "\n".join(lines)


def assumptions_to_markdown(scenario: ScenarioParameters) -> str:
    t, w = scenario.time, scenario.workload
    shock = (
        f"{(t.shock_factor - 1) * 100:.0f}%"
        if t.shock_enabled and t.shock_factor is not None else "Off"
    )
    lines = [
        f"# Assumptions: {scenario.name}",
        "",
        f"*Exported: {_now()}*",
        "",
        "## Model Scope",
        "",
        "This is a scenario-based TCO model for comparative analysis.",
        "",
        "### Explicitly Not Modeled:",
        "- No forecasting or prediction (CPI/energy price prediction)",
        "- No legal encoding (no GDPR article logic)",
        "- No application-level workload simulation",
        '- No "absolute realism" claims',
        "",
        "## Active Parameters",
        "",
        "| Parameter | Value | Description |",
        "|---|---|---|",
        f"| Region | {scenario.region.value} | Geographic region for cost multipliers |",
        f"| Year | {t.year} | Scenario time index (baseline: 2024) |",
        f"| Escalation | {_pct(t.escalation_rate)} | Annual OPEX escalation rate |",
        f"| Shock | {shock} | Energy price shock factor |",
        f"| Workload | {w.utilization_class.value}{' + AI' if w.ai_enabled else ''} "
        "| Workload utilization class |",
        f"| Regulatory | {scenario.regulatory_intensity.value} | Regulatory compliance intensity |",
        f"| Security | {_usd(scenario.security.annual_investment, 0)} | Annual security investment |",
        "",
        f"## Region Assumptions ({scenario.region.value})",
        "",
        *(f"- {line}" for line in region_assumptions(scenario.region)),
        "",
        "## Cost Escalation",
        "",
        "| Category | Type | Escalates | Energy shock |",
        "|---|---|---|---|",
        *(
            f"| {row['Category']} | {row['Type']} | {row['Escalates']} | {row['Energy shock']} |"
            for row in escalation_categories()
        ),
        "",
        "## Disclaimers",
        "",
        f"- {TIME_SCENARIO_DISCLAIMER}",
        f"- {WORKLOAD_DISCLAIMER}",
        f"- {REGULATORY_DISCLAIMER}",
        "",
        MODEL_SCOPE_DISCLAIMER,
    ]
    return "\n".join(lines)
