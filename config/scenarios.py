# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Preset & Regression Scenario Registry
# © 2026 Aparajita Parihar. All rights reserved.
#
# Single source of truth for:
#   • PRESET_SCENARIOS      — quick-start scenarios offered by the dashboard
#   • BASELINE_SCENARIO     — neutral scenario (identity multipliers)
#   • REGRESSION_SCENARIOS  — single-axis and extreme variants used to check
#                             the model stays non-negative and monotonic
#
# Ids are stable so stored comparisons and tests can refer to them.
# Anything shown to users as "their" scenario should be a duplicated() copy.
#
# This file has ZERO Streamlit and ZERO network imports.
# It is safe to import in unit tests and CLI contexts.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from core.builders import new_scenario
from core.models import ScenarioParameters

# Fixed so the registry is reproducible between runs.
_REGISTRY_TIMESTAMP = "2024-01-01T00:00:00+00:00"


def _registered(scenario_id: str, name: str, description: str, **overrides) -> ScenarioParameters:
    return new_scenario(
        name,
        scenario_id=scenario_id,
        description=description,
        created_at=_REGISTRY_TIMESTAMP,
        **overrides,
    )


# ─────────────────────────────────────────────────────────────────────────────
# PRESETS
# Keyed by display name.  Unspecified sections take DEFAULT_SCENARIO_VALUES.
# ─────────────────────────────────────────────────────────────────────────────

PRESET_SCENARIOS: dict[str, ScenarioParameters] = {
    s.name: s
    for s in (
        _registered(
            "preset-eu-2024-baseline", "EU 2024 Baseline",
            "European Union baseline scenario with standard compliance",
            region="EU",
            time={"year": 2024, "escalation_rate": 0.025},
        ),
        _registered(
            "preset-us-2024-baseline", "US 2024 Baseline",
            "United States baseline scenario",
            region="US",
            time={"year": 2024, "escalation_rate": 0.025},
        ),
        _registered(
            "preset-eu-2027-high-regulation", "EU 2027 High Regulation",
            "Future EU scenario with high regulatory requirements",
            region="EU",
            time={"year": 2027, "escalation_rate": 0.03},
            regulatory_intensity="High",
        ),
        _registered(
            "preset-us-ai-2025", "US AI Datacenter 2025",
            "AI-accelerated datacenter in the US",
            region="US",
            time={"year": 2025, "escalation_rate": 0.025},
            workload={"utilization_class": "High", "ai_enabled": True},
        ),
        _registered(
            "preset-global-ai-2026-shock", "Global AI 2026 + Energy Shock",
            "Global AI deployment with energy price shock scenario",
            region="Global",
            time={"year": 2026, "escalation_rate": 0.03, "shock_enabled": True, "shock_factor": 1.5},
            workload={"utilization_class": "High", "ai_enabled": True},
        ),
    )
}


def get_preset(name: str) -> ScenarioParameters:
    """Look up a preset by display name.

    Raises
    ------
    KeyError
        If ``name`` is not registered; the message lists available presets.
    """
    if name not in PRESET_SCENARIOS:
        raise KeyError(
            f"Unknown preset '{name}'. Available presets: {list(PRESET_SCENARIOS.keys())}"
        )
    return PRESET_SCENARIOS[name]


# ─────────────────────────────────────────────────────────────────────────────
# REGRESSION SET
# ─────────────────────────────────────────────────────────────────────────────

_NEUTRAL_TIME = {"year": 2024, "escalation_rate": 0.0, "shock_enabled": False, "shock_factor": 1.0}

_MINIMAL_SECURITY = {
    "annual_investment":          10_000.0,
    "siem_per_node":              100.0,
    "iam_per_user":               20.0,
    "encryption_per_tb":          10.0,
    "incident_response_retainer": 10_000.0,
    "user_count":                 50,
}

_MAXIMUM_SECURITY = {
    "annual_investment":          500_000.0,
    "siem_per_node":              2_000.0,
    "iam_per_user":               500.0,
    "encryption_per_tb":          200.0,
    "incident_response_retainer": 200_000.0,
    "user_count":                 50,
}

BASELINE_SCENARIO: ScenarioParameters = _registered(
    "regression-baseline", "Baseline (Neutral)",
    "All parameters at neutral/baseline values. Used for regression testing.",
    region="US",
    time=_NEUTRAL_TIME,
    workload={"utilization_class": "Medium", "ai_enabled": False},
    regulatory_intensity="Medium",
    is_baseline=True,
)

REGRESSION_SCENARIOS: dict[str, ScenarioParameters] = {
    # region
    "region_eu": _registered(
        "regression-region-eu", "Region: EU",
        "EU region with higher energy and compliance costs",
        region="EU",
    ),
    "region_global": _registered(
        "regression-region-global", "Region: Global",
        "Global distribution with mixed costs",
        region="Global",
    ),
    # time
    "time_2027": _registered(
        "regression-time-2027", "Time: 2027",
        "3 years from baseline with 2.5% escalation",
        time={"year": 2027, "escalation_rate": 0.025},
    ),
    "time_with_shock": _registered(
        "regression-time-shock", "Time: 2025 + Shock",
        "1 year from baseline with energy shock",
        time={"year": 2025, "escalation_rate": 0.025, "shock_enabled": True, "shock_factor": 1.5},
    ),
    "time_high_escalation": _registered(
        "regression-time-high-escalation", "Time: High Escalation",
        "6 years with high 5% escalation",
        time={"year": 2030, "escalation_rate": 0.05},
    ),
    # workload
    "workload_low": _registered(
        "regression-workload-low", "Workload: Low",
        "Low utilization workload",
        workload={"utilization_class": "Low"},
    ),
    "workload_high": _registered(
        "regression-workload-high", "Workload: High",
        "High utilization workload",
        workload={"utilization_class": "High"},
    ),
    "workload_ai": _registered(
        "regression-workload-ai", "Workload: Medium + AI",
        "Medium utilization with AI acceleration",
        workload={"utilization_class": "Medium", "ai_enabled": True},
    ),
    "workload_high_ai": _registered(
        "regression-workload-high-ai", "Workload: High + AI",
        "Maximum workload intensity",
        workload={"utilization_class": "High", "ai_enabled": True},
    ),
    # regulatory
    "regulatory_low": _registered(
        "regression-regulatory-low", "Regulatory: Low",
        "Minimal compliance requirements",
        regulatory_intensity="Low",
    ),
    "regulatory_high": _registered(
        "regression-regulatory-high", "Regulatory: High",
        "High compliance requirements",
        regulatory_intensity="High",
    ),
    # security
    "security_minimal": _registered(
        "regression-security-minimal", "Security: Minimal",
        "Minimal security investment",
        security=_MINIMAL_SECURITY,
    ),
    "security_maximum": _registered(
        "regression-security-maximum", "Security: Maximum",
        "Maximum security investment",
        security=_MAXIMUM_SECURITY,
    ),
    # extremes
    "extreme_minimum": _registered(
        "regression-extreme-minimum", "Extreme: All Minimum",
        "All parameters at minimum values",
        region="US",
        time=_NEUTRAL_TIME,
        workload={"utilization_class": "Low", "ai_enabled": False},
        regulatory_intensity="Low",
        security=_MINIMAL_SECURITY,
    ),
    "extreme_maximum": _registered(
        "regression-extreme-maximum", "Extreme: All Maximum",
        "All parameters at maximum values",
        region="EU",
        time={"year": 2030, "escalation_rate": 0.1, "shock_enabled": True, "shock_factor": 2.0},
        workload={"utilization_class": "High", "ai_enabled": True},
        regulatory_intensity="High",
        security=_MAXIMUM_SECURITY,
    ),
}


# ─────────────────────────────────────────────────────────────────────────────
# INTEGRITY ASSERTION (runs at import time)
# Raises AssertionError immediately if two registered scenarios share an id.
# ─────────────────────────────────────────────────────────────────────────────

def _assert_registry_integrity() -> None:
    seen: set[str] = set()
    for s in [*PRESET_SCENARIOS.values(), BASELINE_SCENARIO, *REGRESSION_SCENARIOS.values()]:
        assert s.id not in seen, (
            f"config/scenarios.py integrity error: duplicate scenario id '{s.id}'"
        )
        seen.add(s.id)
    assert BASELINE_SCENARIO.is_baseline, (
        "config/scenarios.py integrity error: BASELINE_SCENARIO must be flagged as baseline"
    )


_assert_registry_integrity()
