# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Axis Multiplier Resolvers
# © 2026 Aparajita Parihar. All rights reserved.
#
# One resolver per scenario axis (region · time · workload · regulatory).
# Each returns a MultiplierSet in which only the fields that axis affects
# differ from 1.0.  combine_multipliers() takes the field-wise product.
#
#   escalation_factor = (1 + rate) ^ (year − BASELINE_YEAR),  clamped to 1.0
#                       for years at or before the baseline (no deflation)
#
# This file has ZERO Streamlit and ZERO network imports.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from typing import Iterable

from config.constants import (
    AI_ACCELERATED_MULTIPLIERS,
    BASELINE_YEAR,
    COST_ESCALATION_CATEGORIES,
    REGION_DESCRIPTIONS,
    REGION_MULTIPLIERS,
    REGULATORY_PARAMETERS,
    WORKLOAD_PARAMETERS,
)
from core.models import (
    MultiplierSet,
    Region,
    RegulatoryIntensity,
    TimeMultipliers,
    TimeParameters,
    WorkloadParameters,
)


# ─────────────────────────────────────────────────────────────────────────────
# RESOLVERS
# ─────────────────────────────────────────────────────────────────────────────

def get_region_multipliers(region: Region) -> MultiplierSet:
    """Energy, labor and compliance factors for a region."""
    cfg = REGION_MULTIPLIERS[Region(region).value]
    return MultiplierSet(
        energy=cfg["energy"],
        labor=cfg["labor"],
        compliance=cfg["compliance"],
    )


def escalation_factor(year: int, escalation_rate: float) -> float:
    """Compounded OPEX escalation from the baseline year.

    Years at or before BASELINE_YEAR return exactly 1.0.
    """
    years = year - BASELINE_YEAR
    if years <= 0:
        return 1.0
    return (1.0 + escalation_rate) ** years


def effective_shock_factor(time: TimeParameters) -> float:
    if not time.shock_enabled:
        return 1.0
    return time.shock_factor or 1.0


def get_time_multipliers(time: TimeParameters) -> TimeMultipliers:
    """Escalation applies to energy, labor and cooling; the shock to energy only."""
    factor = escalation_factor(time.year, time.escalation_rate)
    shock = effective_shock_factor(time)
    return TimeMultipliers(
        escalation_factor=factor,
        shock_factor=shock,
        multipliers=MultiplierSet(
            energy=factor * shock,
            labor=factor,
            cooling=factor,
        ),
    )


def get_workload_multipliers(workload: WorkloadParameters) -> MultiplierSet:
    """Class multipliers, stacked with the AI-accelerated set when enabled."""
    cfg = WORKLOAD_PARAMETERS[workload.utilization_class.value]
    energy, cooling, monitoring = cfg["energy"], cfg["cooling"], cfg["monitoring"]
    if workload.ai_enabled:
        ai = AI_ACCELERATED_MULTIPLIERS
        energy *= ai["energy"]
        cooling *= ai["cooling"]
        monitoring *= ai["monitoring"]
    return MultiplierSet(energy=energy, cooling=cooling, monitoring=monitoring)


def get_regulatory_multipliers(intensity: RegulatoryIntensity) -> MultiplierSet:
    cfg = REGULATORY_PARAMETERS[RegulatoryIntensity(intensity).value]
    return MultiplierSet(compliance=cfg["compliance_multiplier"])


# ─────────────────────────────────────────────────────────────────────────────
# COMBINER
# ─────────────────────────────────────────────────────────────────────────────

def combine_multipliers(multiplier_sets: Iterable[MultiplierSet]) -> MultiplierSet:
    """Field-wise product of the given sets; the empty product is the identity."""
    energy = labor = compliance = cooling = monitoring = 1.0
    for m in multiplier_sets:
        energy *= m.energy
        labor *= m.labor
        compliance *= m.compliance
        cooling *= m.cooling
        monitoring *= m.monitoring
    return MultiplierSet(
        energy=energy,
        labor=labor,
        compliance=compliance,
        cooling=cooling,
        monitoring=monitoring,
    )


# ─────────────────────────────────────────────────────────────────────────────
# DOCUMENTATION HELPERS — assumption transparency panel
# ─────────────────────────────────────────────────────────────────────────────

_AFFECTS: dict[str, list[str]] = {
    "energy":     ["Power costs", "Energy consumption costs", "Data center electricity"],
    "labor":      ["Workforce costs", "Salaries and benefits", "Contractor costs"],
    "compliance": ["Compliance overhead", "Built-in regulatory costs"],
    "cooling":    ["Cooling infrastructure", "HVAC costs", "PUE-related costs"],
    "monitoring": ["Security monitoring", "SIEM costs", "Logging infrastructure"],
}


def format_multiplier(value: float) -> str:
    """1.15 → '+15.0%', 0.85 → '-15.0%', 1.0 → '±0%'."""
    if value == 1.0:
        return "±0%"
    pct = (value - 1.0) * 100.0
    sign = "+" if pct > 0 else ""
    return f"{sign}{pct:.1f}%"


def multiplier_affects(name: str) -> list[str]:
    try:
        return list(_AFFECTS[name])
    except KeyError:
        raise KeyError(
            f"Unknown multiplier '{name}'. Available multipliers: {list(_AFFECTS.keys())}"
        )


def region_description(region: Region) -> str:
    return REGION_DESCRIPTIONS[Region(region).value]


def region_assumptions(region: Region) -> list[str]:
    return list(REGION_MULTIPLIERS[Region(region).value]["assumptions"])


def workload_examples(workload: WorkloadParameters) -> list[str]:
    """Typical workloads for the class, followed by AI examples when enabled."""
    examples = list(WORKLOAD_PARAMETERS[workload.utilization_class.value]["examples"])
    if workload.ai_enabled:
        examples.extend(AI_ACCELERATED_MULTIPLIERS["examples"])
    return examples


def escalation_categories() -> list[dict]:
    """One row per cost category: OPEX rows escalate, CAPEX rows never do."""
    return [
        {
            "Category": name.replace("_", " ").title(),
            "Type": cfg["category"],
            "Escalates": "Yes" if cfg["escalates"] else "No",
            "Energy shock": "Yes" if cfg["shock_applies"] else "No",
            "Description": cfg["description"],
        }
        for name, cfg in COST_ESCALATION_CATEGORIES.items()
    ]


def region_impact_summary(region: Region) -> str:
    m = get_region_multipliers(region)
    parts = []
    for label, value in (("Energy", m.energy), ("Labor", m.labor), ("Compliance", m.compliance)):
        if value != 1.0:
            parts.append(f"{label}: {format_multiplier(value)}")
    return ", ".join(parts) if parts else "No adjustments (baseline)"


def time_escalation_description(time: TimeParameters) -> str:
    years = time.year - BASELINE_YEAR
    factor = escalation_factor(time.year, time.escalation_rate)
    lines = [
        f"Year {time.year} ({years:+d} years from {BASELINE_YEAR} baseline)",
        f"Escalation rate: {time.escalation_rate * 100:.1f}% per year",
        f"Cumulative escalation: {(factor - 1.0) * 100:.1f}%",
    ]
    if time.shock_enabled:
        lines.append(
            f"Energy shock factor: {(effective_shock_factor(time) - 1.0) * 100:.0f}% additional increase"
        )
    return "\n".join(lines)


def workload_impact_description(workload: WorkloadParameters) -> str:
    m = get_workload_multipliers(workload)
    head = f"Workload: {workload.utilization_class.value}"
    if workload.ai_enabled:
        head += " + AI"
    lines = [head]
    for label, value in (("Energy", m.energy), ("Cooling", m.cooling), ("Monitoring", m.monitoring)):
        if value != 1.0:
            lines.append(f"{label}: {format_multiplier(value)}")
    return "\n".join(lines)


def regulatory_impact_description(intensity: RegulatoryIntensity) -> str:
    key = RegulatoryIntensity(intensity).value
    cfg = REGULATORY_PARAMETERS[key]

    freq = cfg["audit_frequency"]
    if freq == 0.5:
        audits = "Every 2 years"
    elif freq == 1.0:
        audits = "Annual"
    else:
        audits = f"{freq:g}x per year"

    mult = cfg["compliance_multiplier"]
    if mult == 1.0:
        overhead = "Baseline"
    elif mult < 1.0:
        overhead = f"{(1.0 - mult) * 100:.0f}% below baseline"
    else:
        overhead = f"{(mult - 1.0) * 100:.0f}% above baseline"

    lines = [
        f"Regulatory Intensity: {key}",
        "",
        cfg["description"],
        "",
        f"• Audit frequency: {audits}",
        f"• Documentation hours: {cfg['documentation_hours']}/year",
        f"• Compliance overhead: {overhead}",
        f"• External advisory: {'Included' if cfg['external_advisory_included'] else 'Not included'}",
        "",
        "Typical scenarios:",
    ]
    lines.extend(f"  • {s}" for s in cfg["typical_scenarios"])
    return "\n".join(lines)


def multiplier_documentation(
    region: Region,
    time: TimeParameters,
    workload: WorkloadParameters,
    regulatory_intensity: RegulatoryIntensity,
) -> dict:
    """Per-axis multipliers with their sources, for the assumptions panel.

    The ``combined`` entry here includes the regulatory axis for display; the
    adjustment layer itself combines region, time and workload only.
    """
    region_m = get_region_multipliers(region)
    time_m = get_time_multipliers(time)
    workload_m = get_workload_multipliers(workload)
    reg_m = get_regulatory_multipliers(regulatory_intensity)
    combined = combine_multipliers([region_m, time_m.multipliers, workload_m, reg_m])

    return {
        "region": {
            "source": f"Region: {Region(region).value}",
            "multipliers": region_m.to_dict(),
            "affects": ["Energy", "Labor", "Compliance"],
        },
        "time": {
            "source": f"Year {time.year} ({time.year - BASELINE_YEAR} years from baseline)",
            "escalation_rate": time.escalation_rate,
            "shock_enabled": time.shock_enabled,
            "shock_factor": time.shock_factor,
            "multipliers": time_m.multipliers.to_dict(),
            "affects": ["Energy (OPEX)", "Labor (OPEX)", "Cooling (OPEX)"],
            "note": "CAPEX items do not escalate",
        },
        "workload": {
            "source": (
                f"{workload.utilization_class.value} utilization"
                f"{' + AI' if workload.ai_enabled else ''}"
            ),
            "multipliers": workload_m.to_dict(),
            "affects": ["Energy consumption", "Cooling", "Monitoring"],
        },
        "regulatory": {
            "source": f"Regulatory intensity: {RegulatoryIntensity(regulatory_intensity).value}",
            "multipliers": reg_m.to_dict(),
            "affects": ["Compliance overhead"],
            "note": "Most compliance costs are explicit line items",
        },
        "combined": {
            "description": "Combined effect of all multipliers",
            "multipliers": combined.to_dict(),
        },
    }
