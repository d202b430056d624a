# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Scenario & Breakdown Data Model
# © 2026 Aparajita Parihar. All rights reserved.
#
# Immutable records shared by the engine, the builders, the repository and
# the export service.  Every record exposes to_dict(), which produces the
# stable camelCase shape consumed by exports and persisted scenario files.
#
# This file has ZERO Streamlit and ZERO network imports.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional


# ─────────────────────────────────────────────────────────────────────────────
# ENUMERATIONS
# ─────────────────────────────────────────────────────────────────────────────

class Region(str, Enum):
    US = "US"
    EU = "EU"
    GLOBAL = "Global"


class WorkloadClass(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class RegulatoryIntensity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# ─────────────────────────────────────────────────────────────────────────────
# SCENARIO PARAMETERS
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TimeParameters:
    year: int
    escalation_rate: float
    shock_enabled: bool = False
    shock_factor: Optional[float] = None

    def to_dict(self) -> dict:
        out = {
            "year": self.year,
            "escalationRate": self.escalation_rate,
            "shockEnabled": self.shock_enabled,
        }
        if self.shock_factor is not None:
            out["shockFactor"] = self.shock_factor
        return out


@dataclass(frozen=True)
class WorkloadParameters:
    utilization_class: WorkloadClass
    ai_enabled: bool = False

    def to_dict(self) -> dict:
        return {
            "utilizationClass": self.utilization_class.value,
            "aiEnabled": self.ai_enabled,
        }


@dataclass(frozen=True)
class SecurityParameters:
    annual_investment: float
    siem_per_node: float
    iam_per_user: float
    encryption_per_tb: float
    incident_response_retainer: float
    user_count: int

    def to_dict(self) -> dict:
        return {
            "annualInvestment": self.annual_investment,
            "siemPerNode": self.siem_per_node,
            "iamPerUser": self.iam_per_user,
            "encryptionPerTB": self.encryption_per_tb,
            "incidentResponseRetainer": self.incident_response_retainer,
            "userCount": self.user_count,
        }


@dataclass(frozen=True)
class RiskParameters:
    base_incident_probability: float
    average_impact_cost: float
    max_security_reduction: float

    def to_dict(self) -> dict:
        return {
            "baseIncidentProbability": self.base_incident_probability,
            "averageImpactCost": self.average_impact_cost,
            "maxSecurityReduction": self.max_security_reduction,
        }


@dataclass(frozen=True)
class ScenarioParameters:
    """A complete, immutable what-if scenario.

    Instances are produced by the builders in ``core.builders``; callers never
    assemble partially-filled records.
    """

    id: str
    name: str
    region: Region
    time: TimeParameters
    workload: WorkloadParameters
    regulatory_intensity: RegulatoryIntensity
    security: SecurityParameters
    risk: RiskParameters
    is_baseline: bool
    created_at: str
    updated_at: str
    description: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "id": self.id,
            "name": self.name,
            "region": self.region.value,
            "time": self.time.to_dict(),
            "workload": self.workload.to_dict(),
            "regulatoryIntensity": self.regulatory_intensity.value,
            "security": self.security.to_dict(),
            "risk": self.risk.to_dict(),
            "isBaseline": self.is_baseline,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.description is not None:
            out["description"] = self.description
        return out


# ─────────────────────────────────────────────────────────────────────────────
# ENGINE INPUTS
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BaseTCOInput:
    """Pre-priced infrastructure totals in USD, supplied by the caller."""

    land: float = 0.0
    servers: float = 0.0
    storage: float = 0.0
    network: float = 0.0
    power_distribution: float = 0.0
    energy: float = 0.0
    software: float = 0.0
    labor: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.land + self.servers + self.storage + self.network
            + self.power_distribution + self.energy + self.software + self.labor
        )

    def to_dict(self) -> dict:
        return {
            "land": self.land,
            "servers": self.servers,
            "storage": self.storage,
            "network": self.network,
            "powerDistribution": self.power_distribution,
            "energy": self.energy,
            "software": self.software,
            "labor": self.labor,
        }


@dataclass(frozen=True)
class ComputationContext:
    """Infrastructure scale used by the per-unit security costs."""

    node_count: int = 0
    total_storage_tb: float = 0.0

    def to_dict(self) -> dict:
        return {"nodeCount": self.node_count, "totalStorageTB": self.total_storage_tb}


# ─────────────────────────────────────────────────────────────────────────────
# MULTIPLIERS
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MultiplierSet:
    energy: float = 1.0
    labor: float = 1.0
    compliance: float = 1.0
    cooling: float = 1.0
    monitoring: float = 1.0

    @classmethod
    def identity(cls) -> "MultiplierSet":
        return cls()

    def is_identity(self) -> bool:
        return all(getattr(self, f.name) == 1.0 for f in fields(self))

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class TimeMultipliers:
    escalation_factor: float
    shock_factor: float
    multipliers: MultiplierSet

    def to_dict(self) -> dict:
        return {
            "escalationFactor": self.escalation_factor,
            "shockFactor": self.shock_factor,
            "multipliers": self.multipliers.to_dict(),
        }


@dataclass(frozen=True)
class AppliedMultipliers:
    region: MultiplierSet
    time: TimeMultipliers
    workload: MultiplierSet
    regulatory: MultiplierSet
    combined: MultiplierSet

    def to_dict(self) -> dict:
        return {
            "region": self.region.to_dict(),
            "time": self.time.to_dict(),
            "workload": self.workload.to_dict(),
            "regulatory": {"complianceMultiplier": self.regulatory.compliance},
            "combined": self.combined.to_dict(),
        }


# ─────────────────────────────────────────────────────────────────────────────
# COST LAYERS
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Adjustments:
    energy_adjustment: float
    labor_adjustment: float
    cooling_adjustment: float
    total: float
    cooling_share: float

    def to_dict(self) -> dict:
        return {
            "energyAdjustment": self.energy_adjustment,
            "laborAdjustment": self.labor_adjustment,
            "coolingAdjustment": self.cooling_adjustment,
            "total": self.total,
            "coolingShare": self.cooling_share,
        }


@dataclass(frozen=True)
class ComplianceCosts:
    audit_costs: float
    documentation_costs: float
    advisory_costs: float
    certification_costs: float
    training_costs: float
    tooling_costs: float
    total: float
    audit_frequency: float
    cost_per_audit: float
    documentation_hours: float
    hourly_rate: float
    compliance_multiplier: float
    employee_count: int

    def to_dict(self) -> dict:
        return {
            "auditCosts": self.audit_costs,
            "documentationCosts": self.documentation_costs,
            "advisoryCosts": self.advisory_costs,
            "certificationCosts": self.certification_costs,
            "trainingCosts": self.training_costs,
            "toolingCosts": self.tooling_costs,
            "total": self.total,
            "breakdown": {
                "auditFrequency": self.audit_frequency,
                "costPerAudit": self.cost_per_audit,
                "documentationHours": self.documentation_hours,
                "hourlyRate": self.hourly_rate,
                "complianceMultiplier": self.compliance_multiplier,
                "employeeCount": self.employee_count,
            },
        }


@dataclass(frozen=True)
class SecurityCosts:
    siem_costs: float
    iam_costs: float
    encryption_costs: float
    incident_response_costs: float
    total: float
    node_count: int
    user_count: int
    total_storage_tb: float

    def to_dict(self) -> dict:
        return {
            "siemCosts": self.siem_costs,
            "iamCosts": self.iam_costs,
            "encryptionCosts": self.encryption_costs,
            "incidentResponseCosts": self.incident_response_costs,
            "total": self.total,
            "breakdown": {
                "nodeCount": self.node_count,
                "userCount": self.user_count,
                "totalStorageTB": self.total_storage_tb,
            },
        }


@dataclass(frozen=True)
class RiskCosts:
    expected_annual_loss: float
    adjusted_probability: float
    security_reduction_factor: float
    investment_ratio: float
    base_incident_probability: float
    security_investment: float
    average_impact_cost: float
    reference_investment: float
    max_investment: float

    def to_dict(self) -> dict:
        return {
            "expectedAnnualLoss": self.expected_annual_loss,
            "adjustedProbability": self.adjusted_probability,
            "securityReductionFactor": self.security_reduction_factor,
            "breakdown": {
                "baseIncidentProbability": self.base_incident_probability,
                "securityInvestment": self.security_investment,
                "averageImpactCost": self.average_impact_cost,
                "investmentRatio": self.investment_ratio,
                "referenceInvestment": self.reference_investment,
                "maxInvestment": self.max_investment,
            },
        }


@dataclass(frozen=True)
class Totals:
    base_tco: float
    adjustments: float
    compliance: float
    security: float
    risk: float
    grand_total: float

    def to_dict(self) -> dict:
        return {
            "baseTCO": self.base_tco,
            "adjustments": self.adjustments,
            "compliance": self.compliance,
            "security": self.security,
            "risk": self.risk,
            "grandTotal": self.grand_total,
        }


@dataclass(frozen=True)
class ComputationBreakdown:
    """Fully itemised result of one engine run.

    ``calculated_at`` is informational and excluded from equality, so two
    runs over identical inputs compare equal.
    """

    scenario_id: str
    scenario_name: str
    base_tco: BaseTCOInput
    multipliers: AppliedMultipliers
    adjustments: Adjustments
    compliance_costs: ComplianceCosts
    security_costs: SecurityCosts
    risk_costs: RiskCosts
    totals: Totals
    calculated_at: str = field(default="", compare=False)

    def to_dict(self) -> dict:
        base = self.base_tco.to_dict()
        base["total"] = self.totals.base_tco
        return {
            "scenarioId": self.scenario_id,
            "scenarioName": self.scenario_name,
            "baseTCO": base,
            "multipliers": self.multipliers.to_dict(),
            "adjustments": self.adjustments.to_dict(),
            "complianceCosts": self.compliance_costs.to_dict(),
            "securityCosts": self.security_costs.to_dict(),
            "riskCosts": self.risk_costs.to_dict(),
            "totals": self.totals.to_dict(),
            "calculatedAt": self.calculated_at,
        }
