# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Canonical Constants Registry
# © 2026 Aparajita Parihar. All rights reserved.
#
# Single source of truth for all multiplier tables, regulatory parameters,
# security/risk defaults and model constants.
# All modules MUST import from here; never redefine constants locally.
#
# Values are scenario parameters for comparative analysis, NOT predictions.
# Baselines: US region = 1.0 · Medium workload = 1.0 · Medium regulation = 1.0
# · year 2024 = no escalation.
#
# This file has ZERO Streamlit, ZERO network, and ZERO side-effect imports.
# It is safe to import in any context, including unit tests without a
# running Streamlit server.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

# ─────────────────────────────────────────────────────────────────────────────
# REGION MULTIPLIERS
# Each entry: energy / labor / compliance factors plus documented assumptions.
# Cooling and monitoring are not region-dependent in this model.
# ─────────────────────────────────────────────────────────────────────────────

REGION_MULTIPLIERS: dict[str, dict] = {
    "US": {
        "energy":     1.0,
        "labor":      1.0,
        "compliance": 1.0,
        "assumptions": [
            "Baseline reference region",
            "Average US commercial electricity rates",
            "US labor market rates (Bureau of Labor Statistics)",
            "Standard SOC2/HIPAA compliance level",
        ],
    },
    "EU": {
        "energy":     1.35,
        "labor":      1.15,
        "compliance": 1.4,
        "assumptions": [
            "EU electricity ~35% higher than US average (Eurostat data)",
            "Western European tech salaries ~15% higher than US average",
            "GDPR compliance overhead adds ~40% to compliance costs",
            "Additional regulatory frameworks (NIS2, DORA) increase compliance burden",
        ],
    },
    "Global": {
        "energy":     1.1,
        "labor":      0.85,
        "compliance": 1.15,
        "assumptions": [
            "Weighted average across regions",
            "Includes lower-cost regions (APAC, LATAM)",
            "Labor cost reduction from global distribution",
            "Moderate compliance overhead for multi-region operations",
        ],
    },
}

REGION_DESCRIPTIONS: dict[str, str] = {
    "US":     "United States - Baseline reference with standard commercial rates",
    "EU":     "European Union - Higher energy costs, stricter compliance (GDPR, NIS2)",
    "Global": "Global distribution - Mixed cost profile with labor arbitrage",
}


# ─────────────────────────────────────────────────────────────────────────────
# TIME PARAMETERS
# Scenario time index, not a forecast. Only OPEX categories escalate.
# ─────────────────────────────────────────────────────────────────────────────

BASELINE_YEAR: int = 2024

DEFAULT_ESCALATION_RATE: float = 0.025   # 2.5 % / year
MIN_ESCALATION_RATE: float     = 0.0
MAX_ESCALATION_RATE: float     = 0.2

MIN_SCENARIO_YEAR: int = 2020
MAX_SCENARIO_YEAR: int = 2040

DEFAULT_SHOCK_FACTOR: float = 1.5
MIN_SHOCK_FACTOR: float     = 1.0
MAX_SHOCK_FACTOR: float     = 3.0

# category → (escalates, OPEX/CAPEX, description, energy shock applies)
COST_ESCALATION_CATEGORIES: dict[str, dict] = {
    "energy":            {"escalates": True,  "category": "OPEX",  "shock_applies": True,
                          "description": "Annual energy/electricity costs"},
    "labor":             {"escalates": True,  "category": "OPEX",  "shock_applies": False,
                          "description": "Annual workforce costs (salaries, benefits)"},
    "software_licenses": {"escalates": True,  "category": "OPEX",  "shock_applies": False,
                          "description": "Recurring software license fees"},
    "maintenance":       {"escalates": True,  "category": "OPEX",  "shock_applies": False,
                          "description": "Annual maintenance and support contracts"},
    "compliance":        {"escalates": True,  "category": "OPEX",  "shock_applies": False,
                          "description": "Recurring compliance and audit costs"},
    "servers":           {"escalates": False, "category": "CAPEX", "shock_applies": False,
                          "description": "Server hardware purchase"},
    "storage":           {"escalates": False, "category": "CAPEX", "shock_applies": False,
                          "description": "Storage hardware purchase"},
    "network":           {"escalates": False, "category": "CAPEX", "shock_applies": False,
                          "description": "Network equipment purchase"},
    "power_distribution": {"escalates": False, "category": "CAPEX", "shock_applies": False,
                           "description": "Power infrastructure (one-time)"},
    "building":          {"escalates": False, "category": "CAPEX", "shock_applies": False,
                          "description": "Land and building costs (one-time or amortized)"},
}


# ─────────────────────────────────────────────────────────────────────────────
# WORKLOAD CLASS MULTIPLIERS
# Coarse utilisation scenarios, no application-level simulation.
# AI_ACCELERATED_MULTIPLIERS stack multiplicatively on top of the class.
# ─────────────────────────────────────────────────────────────────────────────

WORKLOAD_PARAMETERS: dict[str, dict] = {
    "Low": {
        "energy":      0.6,
        "cooling":     0.7,
        "monitoring":  0.8,
        "description": "Low utilization - Development, testing, or standby systems",
        "examples": [
            "Development and test environments",
            "Disaster recovery standby",
            "Archive storage systems",
            "Batch processing during off-hours",
        ],
    },
    "Medium": {
        "energy":      1.0,
        "cooling":     1.0,
        "monitoring":  1.0,
        "description": "Medium utilization - Standard production workloads",
        "examples": [
            "Enterprise applications",
            "Web services and APIs",
            "Database servers",
            "Standard business workloads",
        ],
    },
    "High": {
        "energy":      1.4,
        "cooling":     1.3,
        "monitoring":  1.2,
        "description": "High utilization - Compute-intensive production workloads",
        "examples": [
            "High-traffic web applications",
            "Real-time analytics",
            "Scientific computing",
            "Financial trading systems",
        ],
    },
}

AI_ACCELERATED_MULTIPLIERS: dict = {
    "energy":      1.8,
    "cooling":     1.5,
    "monitoring":  1.3,
    "description": "AI/ML accelerated workloads - GPU-intensive processing",
    "examples": [
        "Large language model training",
        "Deep learning inference",
        "Computer vision processing",
        "AI/ML pipeline processing",
    ],
}


# ─────────────────────────────────────────────────────────────────────────────
# REGULATORY INTENSITY
# Abstract intensity levels. No legal encoding or article-level logic.
# ─────────────────────────────────────────────────────────────────────────────

REGULATORY_PARAMETERS: dict[str, dict] = {
    "Low": {
        "audit_frequency":            0.5,    # audits / year (every 2 years)
        "documentation_hours":        200,    # hours / year
        "compliance_multiplier":      0.7,
        "external_advisory_included": False,
        "description":                "Minimal compliance requirements",
        "typical_scenarios": [
            "Internal systems only",
            "No PII/sensitive data",
            "Single jurisdiction",
            "Non-regulated industry",
        ],
    },
    "Medium": {
        "audit_frequency":            1.0,
        "documentation_hours":        500,
        "compliance_multiplier":      1.0,
        "external_advisory_included": False,
        "description":                "Standard compliance requirements",
        "typical_scenarios": [
            "SOC2 Type II certification",
            "Basic data protection measures",
            "Single primary regulation",
            "B2B services with standard contracts",
        ],
    },
    "High": {
        "audit_frequency":            2.0,
        "documentation_hours":        1200,
        "compliance_multiplier":      1.5,
        "external_advisory_included": True,
        "description":                "Intensive compliance requirements",
        "typical_scenarios": [
            "Multiple overlapping regulations",
            "Cross-border data transfers",
            "Highly regulated industries (finance, healthcare)",
            "Government/public sector requirements",
        ],
    },
}

# Annual USD costs, independent of intensity
COST_PER_AUDIT_USD: float             = 75_000.0
EXTERNAL_ADVISORY_RETAINER_USD: float = 120_000.0
BASE_CERTIFICATION_COST_USD: float    = 50_000.0
DOCUMENTATION_HOURLY_RATE_USD: float  = 75.0
TRAINING_PER_EMPLOYEE_USD: float      = 500.0
COMPLIANCE_TOOLING_USD: float         = 25_000.0
DEFAULT_EMPLOYEE_COUNT: int           = 50


# ─────────────────────────────────────────────────────────────────────────────
# ADJUSTMENT LAYER
# ─────────────────────────────────────────────────────────────────────────────

# Share of the power-distribution base cost attributed to cooling
COOLING_SHARE_OF_POWER_DISTRIBUTION: float = 0.4


# ─────────────────────────────────────────────────────────────────────────────
# RISK MODEL — logarithmic diminishing returns on security spend
# ─────────────────────────────────────────────────────────────────────────────

RISK_REFERENCE_INVESTMENT_USD: float = 50_000.0    # curvature reference point
RISK_MAX_INVESTMENT_USD: float       = 500_000.0   # saturation point


# ─────────────────────────────────────────────────────────────────────────────
# SENSITIVITY ANALYSIS
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_PERTURBATION_FRACTION: float = 0.20
SENSITIVITY_PARAMETERS: tuple[str, ...] = ("energy", "labor", "security")


# ─────────────────────────────────────────────────────────────────────────────
# SCENARIO DEFAULTS
# Used by the scenario builders to produce complete records.
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_SCENARIO_VALUES: dict = {
    "region": "US",
    "time": {
        "year":            BASELINE_YEAR,
        "escalation_rate": DEFAULT_ESCALATION_RATE,
        "shock_factor":    DEFAULT_SHOCK_FACTOR,
        "shock_enabled":   False,
    },
    "workload": {
        "utilization_class": "Medium",
        "ai_enabled":        False,
    },
    "regulatory_intensity": "Medium",
    "security": {
        "annual_investment":          100_000.0,
        "siem_per_node":              500.0,
        "iam_per_user":               100.0,
        "encryption_per_tb":          50.0,
        "incident_response_retainer": 50_000.0,
        "user_count":                 50,
    },
    "risk": {
        "base_incident_probability": 0.15,
        "average_impact_cost":       500_000.0,
        "max_security_reduction":    0.8,
    },
    "is_baseline": False,
}


# ─────────────────────────────────────────────────────────────────────────────
# STORAGE / EXPORT
# ─────────────────────────────────────────────────────────────────────────────

STORAGE_VERSION: str = "1.0"


# ─────────────────────────────────────────────────────────────────────────────
# DISCLAIMERS
# ─────────────────────────────────────────────────────────────────────────────

TIME_SCENARIO_DISCLAIMER: str = (
    "This is a scenario time index, NOT a forecast. Escalation parameters are "
    "hypothetical what-if settings for comparative analysis. They do not "
    "incorporate CPI or inflation predictions, energy price forecasts, or "
    "market-specific trends."
)

WORKLOAD_DISCLAIMER: str = (
    "Workload classes are coarse utilization scenarios for comparative analysis. "
    "They do NOT represent application-level performance modeling, measured "
    "utilization, or workload trace analysis."
)

REGULATORY_DISCLAIMER: str = (
    "This is a compliance COST model, not a compliance CHECKER. It does not "
    "verify compliance with any regulation, provide legal advice, or encode "
    "specific regulatory requirements. Consult qualified legal and compliance "
    "professionals for actual regulatory requirements."
)

MODEL_SCOPE_DISCLAIMER: str = (
    "This tool provides comparative scenario analysis, not predictions. "
    "Results should be interpreted as relative comparisons between scenarios. "
    "Consult qualified professionals for regulatory and legal requirements."
)
