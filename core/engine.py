# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Scenario Computation Engine
# © 2026 Aparajita Parihar. All rights reserved.
#
# Layered TCO calculation with transparent intermediate results:
#   1. Base TCO         — externally priced totals, never re-multiplied
#   2. Adjustments      — region × time × workload multipliers as dollar deltas
#   3. Compliance       — explicit line items from regulatory intensity
#   4. Security         — itemised controls scaled by infrastructure
#   5. Risk             — expected annual loss after security reduction
#   grand_total = base + adjustments + compliance + security + risk
#
# Pure functions: no I/O, no shared state, inputs are never mutated.
# This file has ZERO Streamlit and ZERO network imports.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from core.costs import (
    ComplianceSettings,
    apply_multipliers,
    calculate_compliance_costs,
    calculate_security_costs,
)
from core.models import (
    AppliedMultipliers,
    BaseTCOInput,
    ComputationBreakdown,
    ComputationContext,
    ScenarioParameters,
    Totals,
)
from core.multipliers import (
    combine_multipliers,
    get_region_multipliers,
    get_regulatory_multipliers,
    get_time_multipliers,
    get_workload_multipliers,
)
from core.risk import RiskModelConfig, calculate_risk_costs

logger = logging.getLogger(__name__)


def compute_scenario_tco(
    base_tco: BaseTCOInput,
    scenario: ScenarioParameters,
    context: ComputationContext,
    *,
    risk_config: RiskModelConfig | None = None,
    compliance_settings: ComplianceSettings | None = None,
) -> ComputationBreakdown:
    """
    Public entry point of the engine.

    Produces a fresh ComputationBreakdown exposing every intermediate value
    (per-axis multipliers, each adjustment term, each compliance, security
    and risk sub-item) so the result can be audited and exported verbatim.

    The regulatory multiplier is reported but NOT folded into the combined
    set used for adjustments; it is priced by the compliance layer alone.
    """
    region_m = get_region_multipliers(scenario.region)
    time_m = get_time_multipliers(scenario.time)
    workload_m = get_workload_multipliers(scenario.workload)
    regulatory_m = get_regulatory_multipliers(scenario.regulatory_intensity)

    combined = combine_multipliers([region_m, time_m.multipliers, workload_m])

    adjustments = apply_multipliers(base_tco, combined)
    compliance = calculate_compliance_costs(scenario.regulatory_intensity, compliance_settings)
    security = calculate_security_costs(scenario.security, context)

    total_security_investment = security.total + scenario.security.annual_investment
    risk = calculate_risk_costs(scenario.risk, total_security_investment, risk_config)

    base_total = base_tco.total
    grand_total = (
        base_total
        + adjustments.total
        + compliance.total
        + security.total
        + risk.expected_annual_loss
    )

    logger.debug(
        "scenario %s (%s): base=%.2f adj=%.2f compliance=%.2f security=%.2f risk=%.2f total=%.2f",
        scenario.id, scenario.name, base_total, adjustments.total,
        compliance.total, security.total, risk.expected_annual_loss, grand_total,
    )

    return ComputationBreakdown(
        scenario_id=scenario.id,
        scenario_name=scenario.name,
        base_tco=base_tco,
        multipliers=AppliedMultipliers(
            region=region_m,
            time=time_m,
            workload=workload_m,
            regulatory=regulatory_m,
            combined=combined,
        ),
        adjustments=adjustments,
        compliance_costs=compliance,
        security_costs=security,
        risk_costs=risk,
        totals=Totals(
            base_tco=base_total,
            adjustments=adjustments.total,
            compliance=compliance.total,
            security=security.total,
            risk=risk.expected_annual_loss,
            grand_total=grand_total,
        ),
        calculated_at=datetime.now(timezone.utc).isoformat(),
    )


def compute_many(
    base_tco: BaseTCOInput,
    scenarios: Iterable[ScenarioParameters],
    context: ComputationContext,
    *,
    risk_config: RiskModelConfig | None = None,
    compliance_settings: ComplianceSettings | None = None,
) -> dict[str, ComputationBreakdown]:
    """Breakdowns for several scenarios over the same base, keyed by scenario id."""
    return {
        s.id: compute_scenario_tco(
            base_tco, s, context,
            risk_config=risk_config,
            compliance_settings=compliance_settings,
        )
        for s in scenarios
    }
