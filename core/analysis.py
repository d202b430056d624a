# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Sensitivity Analysis & Scenario Comparison
# © 2026 Aparajita Parihar. All rights reserved.
#
# Both analyses are pure consumers of compute_scenario_tco():
#   • calculate_sensitivity() re-runs the full pipeline on low/base/high
#     clones of one input (base energy, base labor, or security investment).
#   • compare_scenarios() diffs two breakdowns category by category.
#
# Percentage values are None when the reference total is zero.
# This file has ZERO Streamlit and ZERO network imports.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Union

from config.constants import DEFAULT_PERTURBATION_FRACTION, SENSITIVITY_PARAMETERS
from core.costs import ComplianceSettings
from core.engine import compute_scenario_tco
from core.models import (
    BaseTCOInput,
    ComputationBreakdown,
    ComputationContext,
    ScenarioParameters,
)
from core.risk import RiskModelConfig

logger = logging.getLogger(__name__)

_PARAMETER_LABELS: dict[str, str] = {
    "energy":   "Energy Cost",
    "labor":    "Labor Cost",
    "security": "Security Investment",
}


def percentage_of(delta: float, reference: float) -> Optional[float]:
    """delta / reference × 100, or None when the reference is zero."""
    if reference == 0:
        return None
    return delta / reference * 100.0


# ─────────────────────────────────────────────────────────────────────────────
# SENSITIVITY
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SensitivityResult:
    parameter: str
    perturbation_fraction: float
    base_value: float
    low_value: float
    high_value: float
    low: ComputationBreakdown
    base: ComputationBreakdown
    high: ComputationBreakdown

    @property
    def delta_low(self) -> float:
        return self.low.totals.grand_total - self.base.totals.grand_total

    @property
    def delta_high(self) -> float:
        return self.high.totals.grand_total - self.base.totals.grand_total

    @property
    def spread(self) -> float:
        return self.high.totals.grand_total - self.low.totals.grand_total

    @property
    def percentage_impact(self) -> Optional[float]:
        """Low-to-high swing as a share of the base grand total."""
        return percentage_of(self.spread, self.base.totals.grand_total)

    def summary(self) -> dict:
        return {
            "parameter": self.parameter,
            "label": _PARAMETER_LABELS[self.parameter],
            "perturbation": self.perturbation_fraction,
            "baseValue": self.base_value,
            "perturbedValueLow": self.low_value,
            "perturbedValueHigh": self.high_value,
            "resultLow": self.low.totals.grand_total,
            "resultBase": self.base.totals.grand_total,
            "resultHigh": self.high.totals.grand_total,
            "deltaLow": self.delta_low,
            "deltaHigh": self.delta_high,
            "percentageImpact": self.percentage_impact,
        }


def _perturbed_inputs(
    base_tco: BaseTCOInput,
    scenario: ScenarioParameters,
    parameter: str,
    fraction: float,
) -> tuple[float, tuple, tuple]:
    """Return (base value, (low base, low scenario), (high base, high scenario))."""
    lo, hi = 1.0 - fraction, 1.0 + fraction

    if parameter == "energy":
        v = base_tco.energy
        return v, (replace(base_tco, energy=v * lo), scenario), (replace(base_tco, energy=v * hi), scenario)

    if parameter == "labor":
        v = base_tco.labor
        return v, (replace(base_tco, labor=v * lo), scenario), (replace(base_tco, labor=v * hi), scenario)

    # security: only the general investment pool moves, so only the risk
    # layer reacts; itemised security line items stay fixed.
    v = scenario.security.annual_investment
    low_s = replace(scenario, security=replace(scenario.security, annual_investment=v * lo))
    high_s = replace(scenario, security=replace(scenario.security, annual_investment=v * hi))
    return v, (base_tco, low_s), (base_tco, high_s)


def calculate_sensitivity(
    base_tco: BaseTCOInput,
    scenario: ScenarioParameters,
    context: ComputationContext,
    parameter: str,
    perturbation_fraction: float = DEFAULT_PERTURBATION_FRACTION,
    *,
    risk_config: RiskModelConfig | None = None,
    compliance_settings: ComplianceSettings | None = None,
) -> SensitivityResult:
    """
    Re-run the full pipeline at −fraction, 0 and +fraction of one input.

    Parameters
    ----------
    parameter : "energy" | "labor" | "security"
    perturbation_fraction : relative perturbation, default 0.20 (±20 %)

    Raises
    ------
    ValueError
        If ``parameter`` is not one of the supported names.
    """
    if parameter not in SENSITIVITY_PARAMETERS:
        raise ValueError(
            f"Unknown sensitivity parameter '{parameter}'. "
            f"Available parameters: {list(SENSITIVITY_PARAMETERS)}"
        )

    base_value, (low_b, low_s), (high_b, high_s) = _perturbed_inputs(
        base_tco, scenario, parameter, perturbation_fraction
    )
    kwargs = {"risk_config": risk_config, "compliance_settings": compliance_settings}

    result = SensitivityResult(
        parameter=parameter,
        perturbation_fraction=perturbation_fraction,
        base_value=base_value,
        low_value=base_value * (1.0 - perturbation_fraction),
        high_value=base_value * (1.0 + perturbation_fraction),
        low=compute_scenario_tco(low_b, low_s, context, **kwargs),
        base=compute_scenario_tco(base_tco, scenario, context, **kwargs),
        high=compute_scenario_tco(high_b, high_s, context, **kwargs),
    )
    logger.debug(
        "sensitivity %s ±%.0f%% for %s: low=%.2f high=%.2f",
        parameter, perturbation_fraction * 100, scenario.id, result.delta_low, result.delta_high,
    )
    return result


def sensitivity_table(
    base_tco: BaseTCOInput,
    scenario: ScenarioParameters,
    context: ComputationContext,
    perturbation_fraction: float = DEFAULT_PERTURBATION_FRACTION,
    **kwargs,
) -> list[SensitivityResult]:
    """All supported parameters, largest absolute swing first (tornado order)."""
    results = [
        calculate_sensitivity(base_tco, scenario, context, p, perturbation_fraction, **kwargs)
        for p in SENSITIVITY_PARAMETERS
    ]
    return sorted(results, key=lambda r: abs(r.spread), reverse=True)


# ─────────────────────────────────────────────────────────────────────────────
# COMPARISON
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ScenarioDeltas:
    base_tco: float
    adjustments: float
    compliance: float
    security: float
    risk: float
    grand_total: float
    percentage_change: Optional[float]

    def to_dict(self) -> dict:
        return {
            "baseTCO": self.base_tco,
            "adjustments": self.adjustments,
            "compliance": self.compliance,
            "security": self.security,
            "risk": self.risk,
            "grandTotal": self.grand_total,
            "percentageChange": self.percentage_change,
        }


@dataclass(frozen=True)
class ParameterDifference:
    parameter: str
    value_a: Union[str, int, float]
    value_b: Union[str, int, float]

    def to_dict(self) -> dict:
        return {"parameter": self.parameter, "valueA": self.value_a, "valueB": self.value_b}


@dataclass(frozen=True)
class ScenarioComparison:
    scenario_a: ScenarioParameters
    scenario_b: ScenarioParameters
    breakdown_a: ComputationBreakdown
    breakdown_b: ComputationBreakdown
    deltas: ScenarioDeltas
    parameter_differences: tuple[ParameterDifference, ...]

    @property
    def percentage_change(self) -> Optional[float]:
        return self.deltas.percentage_change

    def to_dict(self) -> dict:
        return {
            "scenarioA": {
                "id": self.scenario_a.id,
                "name": self.scenario_a.name,
                "parameters": self.scenario_a.to_dict(),
                "breakdown": self.breakdown_a.to_dict(),
            },
            "scenarioB": {
                "id": self.scenario_b.id,
                "name": self.scenario_b.name,
                "parameters": self.scenario_b.to_dict(),
                "breakdown": self.breakdown_b.to_dict(),
            },
            "deltas": self.deltas.to_dict(),
            "parameterDifferences": [d.to_dict() for d in self.parameter_differences],
        }


def _ai_label(enabled: bool) -> str:
    return "Enabled" if enabled else "Disabled"


def parameter_differences(
    scenario_a: ScenarioParameters,
    scenario_b: ScenarioParameters,
) -> tuple[ParameterDifference, ...]:
    """Human-readable differences over a fixed set of scalar fields."""
    checks = (
        ("Region", scenario_a.region.value, scenario_b.region.value),
        ("Year", scenario_a.time.year, scenario_b.time.year),
        ("Workload Class",
         scenario_a.workload.utilization_class.value,
         scenario_b.workload.utilization_class.value),
        ("AI Mode", _ai_label(scenario_a.workload.ai_enabled), _ai_label(scenario_b.workload.ai_enabled)),
        ("Regulatory Intensity",
         scenario_a.regulatory_intensity.value,
         scenario_b.regulatory_intensity.value),
        ("Security Investment",
         scenario_a.security.annual_investment,
         scenario_b.security.annual_investment),
    )
    return tuple(ParameterDifference(name, a, b) for name, a, b in checks if a != b)


def compare_scenarios(
    breakdown_a: ComputationBreakdown,
    breakdown_b: ComputationBreakdown,
    scenario_a: ScenarioParameters,
    scenario_b: ScenarioParameters,
) -> ScenarioComparison:
    """Per-category deltas (B − A) plus the list of differing parameters.

    ``percentage_change`` is None when scenario A's grand total is zero.
    """
    ta, tb = breakdown_a.totals, breakdown_b.totals
    delta_grand = tb.grand_total - ta.grand_total

    deltas = ScenarioDeltas(
        base_tco=tb.base_tco - ta.base_tco,
        adjustments=tb.adjustments - ta.adjustments,
        compliance=tb.compliance - ta.compliance,
        security=tb.security - ta.security,
        risk=tb.risk - ta.risk,
        grand_total=delta_grand,
        percentage_change=percentage_of(delta_grand, ta.grand_total),
    )
    if deltas.percentage_change is None:
        logger.info(
            "Scenario %s has a zero grand total; percentage change is undefined.",
            scenario_a.id,
        )

    return ScenarioComparison(
        scenario_a=scenario_a,
        scenario_b=scenario_b,
        breakdown_a=breakdown_a,
        breakdown_b=breakdown_b,
        deltas=deltas,
        parameter_differences=parameter_differences(scenario_a, scenario_b),
    )
