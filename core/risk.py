# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Risk Model (Expected Annual Loss)
# © 2026 Aparajita Parihar. All rights reserved.
#
#   ratio      = ln(1 + I / reference) / ln(1 + max_investment / reference)
#   reduction  = min(max_security_reduction, ratio × max_security_reduction)
#   p_adjusted = p_base × (1 − reduction)
#   EAL        = p_adjusted × average_impact_cost
#
# Logarithmic diminishing returns, capped at max_security_reduction so no
# level of spend claims to eliminate risk.
# This file has ZERO Streamlit and ZERO network imports.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import math
from dataclasses import dataclass

from config.constants import RISK_MAX_INVESTMENT_USD, RISK_REFERENCE_INVESTMENT_USD
from core.models import RiskCosts, RiskParameters


@dataclass(frozen=True)
class RiskModelConfig:
    reference_investment: float = RISK_REFERENCE_INVESTMENT_USD
    max_investment: float = RISK_MAX_INVESTMENT_USD

    def __post_init__(self) -> None:
        if self.reference_investment <= 0:
            raise ValueError("reference_investment must be > 0.")
        if self.max_investment <= 0:
            raise ValueError("max_investment must be > 0.")

    @classmethod
    def from_settings(cls, settings) -> "RiskModelConfig":
        return cls(
            reference_investment=settings.risk_reference_investment,
            max_investment=settings.risk_max_investment,
        )


def investment_ratio(investment: float, config: RiskModelConfig | None = None) -> float:
    """Normalised log-scale effectiveness; exactly 1.0 at max_investment."""
    cfg = config or RiskModelConfig()
    return (
        math.log1p(investment / cfg.reference_investment)
        / math.log1p(cfg.max_investment / cfg.reference_investment)
    )


def security_reduction_factor(
    investment: float,
    max_security_reduction: float,
    config: RiskModelConfig | None = None,
) -> float:
    ratio = investment_ratio(investment, config)
    return min(max_security_reduction, ratio * max_security_reduction)


def calculate_risk_costs(
    risk: RiskParameters,
    total_security_investment: float,
    config: RiskModelConfig | None = None,
) -> RiskCosts:
    """Expected annual loss after the security-driven probability reduction.

    ``total_security_investment`` is the itemised security total plus the
    scenario's general annual investment.
    """
    cfg = config or RiskModelConfig()
    ratio = investment_ratio(total_security_investment, cfg)
    reduction = security_reduction_factor(
        total_security_investment, risk.max_security_reduction, cfg
    )
    adjusted = risk.base_incident_probability * (1.0 - reduction)

    return RiskCosts(
        expected_annual_loss=adjusted * risk.average_impact_cost,
        adjusted_probability=adjusted,
        security_reduction_factor=reduction,
        investment_ratio=ratio,
        base_incident_probability=risk.base_incident_probability,
        security_investment=total_security_investment,
        average_impact_cost=risk.average_impact_cost,
        reference_investment=cfg.reference_investment,
        max_investment=cfg.max_investment,
    )
