# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Adjustment, Compliance & Security Cost Layers
# © 2026 Aparajita Parihar. All rights reserved.
#
#   energy_adjustment  = base.energy × (m.energy − 1)
#   labor_adjustment   = base.labor  × (m.labor  − 1)
#   cooling_adjustment = base.power_distribution × 0.4 × (m.cooling − 1)
#
#   compliance = audits + documentation + advisory + certification
#                [+ training + tooling when ComplianceSettings opts in]
#
#   security   = SIEM/node + IAM/user + encryption/TB + IR retainer
#
# DISCLAIMER: compliance figures are a COST model, not a compliance check.
# This file has ZERO Streamlit and ZERO network imports.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from dataclasses import dataclass

from config.constants import (
    BASE_CERTIFICATION_COST_USD,
    COMPLIANCE_TOOLING_USD,
    COOLING_SHARE_OF_POWER_DISTRIBUTION,
    COST_PER_AUDIT_USD,
    DEFAULT_EMPLOYEE_COUNT,
    DOCUMENTATION_HOURLY_RATE_USD,
    EXTERNAL_ADVISORY_RETAINER_USD,
    REGULATORY_PARAMETERS,
    TRAINING_PER_EMPLOYEE_USD,
)
from core.models import (
    Adjustments,
    BaseTCOInput,
    ComplianceCosts,
    ComputationContext,
    MultiplierSet,
    RegulatoryIntensity,
    SecurityCosts,
    SecurityParameters,
)


# ─────────────────────────────────────────────────────────────────────────────
# ADJUSTMENT LAYER
# ─────────────────────────────────────────────────────────────────────────────

def apply_multipliers(base: BaseTCOInput, multipliers: MultiplierSet) -> Adjustments:
    """Dollar deltas of the combined multipliers against the base costs.

    ``multipliers`` must be the region × time × workload product; the
    regulatory axis is priced in the compliance layer only.  Results may be
    negative for deflationary scenarios.
    """
    energy_adj = base.energy * (multipliers.energy - 1.0)
    labor_adj = base.labor * (multipliers.labor - 1.0)
    cooling_portion = base.power_distribution * COOLING_SHARE_OF_POWER_DISTRIBUTION
    cooling_adj = cooling_portion * (multipliers.cooling - 1.0)

    return Adjustments(
        energy_adjustment=energy_adj,
        labor_adjustment=labor_adj,
        cooling_adjustment=cooling_adj,
        total=energy_adj + labor_adj + cooling_adj,
        cooling_share=COOLING_SHARE_OF_POWER_DISTRIBUTION,
    )


# ─────────────────────────────────────────────────────────────────────────────
# COMPLIANCE LAYER
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ComplianceSettings:
    """Calibration for the compliance calculator.

    Training and tooling are priced only when ``include_training_and_tooling``
    is set; otherwise both line items are reported as zero.
    """

    hourly_rate: float = DOCUMENTATION_HOURLY_RATE_USD
    include_training_and_tooling: bool = False
    employee_count: int = DEFAULT_EMPLOYEE_COUNT


def calculate_compliance_costs(
    intensity: RegulatoryIntensity,
    settings: ComplianceSettings | None = None,
) -> ComplianceCosts:
    s = settings or ComplianceSettings()
    cfg = REGULATORY_PARAMETERS[RegulatoryIntensity(intensity).value]
    multiplier = cfg["compliance_multiplier"]

    audit = cfg["audit_frequency"] * COST_PER_AUDIT_USD
    documentation = cfg["documentation_hours"] * s.hourly_rate
    advisory = EXTERNAL_ADVISORY_RETAINER_USD if cfg["external_advisory_included"] else 0.0
    certification = BASE_CERTIFICATION_COST_USD * multiplier

    if s.include_training_and_tooling:
        training = TRAINING_PER_EMPLOYEE_USD * s.employee_count
        tooling = COMPLIANCE_TOOLING_USD * multiplier
        employees = s.employee_count
    else:
        training = tooling = 0.0
        employees = 0

    return ComplianceCosts(
        audit_costs=audit,
        documentation_costs=documentation,
        advisory_costs=advisory,
        certification_costs=certification,
        training_costs=training,
        tooling_costs=tooling,
        total=audit + documentation + advisory + certification + training + tooling,
        audit_frequency=cfg["audit_frequency"],
        cost_per_audit=COST_PER_AUDIT_USD,
        documentation_hours=cfg["documentation_hours"],
        hourly_rate=s.hourly_rate,
        compliance_multiplier=multiplier,
        employee_count=employees,
    )


# ─────────────────────────────────────────────────────────────────────────────
# SECURITY LAYER
# ─────────────────────────────────────────────────────────────────────────────

def calculate_security_costs(
    security: SecurityParameters,
    context: ComputationContext,
) -> SecurityCosts:
    """Itemised security controls scaled by infrastructure size.

    The scenario's general ``annual_investment`` is a separate budget and is
    not part of this total.
    """
    siem = security.siem_per_node * context.node_count
    iam = security.iam_per_user * security.user_count
    encryption = security.encryption_per_tb * context.total_storage_tb
    incident_response = security.incident_response_retainer

    return SecurityCosts(
        siem_costs=siem,
        iam_costs=iam,
        encryption_costs=encryption,
        incident_response_costs=incident_response,
        total=siem + iam + encryption + incident_response,
        node_count=context.node_count,
        user_count=security.user_count,
        total_storage_tb=context.total_storage_tb,
    )
