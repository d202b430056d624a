# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Scenario Builders
# © 2026 Aparajita Parihar. All rights reserved.
#
# The only sanctioned way to create or change a ScenarioParameters record.
# Every builder returns a NEW complete, validated record; nothing is merged
# in place and no call site relies on scattered runtime defaults.
#
#   new_scenario()          — defaults from config.constants + overrides
#   scenario_from_dict()    — complete record from a (partial) camelCase map
#   with_region() / with_time() / with_workload() / with_regulatory_intensity()
#   with_security() / with_risk() / renamed() / as_baseline()
#
# This file has ZERO Streamlit and ZERO network imports.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from config.constants import (
    DEFAULT_SCENARIO_VALUES,
    MAX_ESCALATION_RATE,
    MAX_SCENARIO_YEAR,
    MAX_SHOCK_FACTOR,
    MIN_ESCALATION_RATE,
    MIN_SCENARIO_YEAR,
    MIN_SHOCK_FACTOR,
)
from core.models import (
    Region,
    RegulatoryIntensity,
    RiskParameters,
    ScenarioParameters,
    SecurityParameters,
    TimeParameters,
    WorkloadClass,
    WorkloadParameters,
)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ─────────────────────────────────────────────────────────────────────────────
# VALIDATION
# ─────────────────────────────────────────────────────────────────────────────

def validate_scenario(scenario: ScenarioParameters) -> tuple[bool, str]:
    """Check conventional ranges. Returns ``(ok, message)``."""
    if not isinstance(scenario.id, str) or not scenario.id:
        return False, "Scenario id must not be empty."
    if not isinstance(scenario.name, str) or not scenario.name.strip():
        return False, "Scenario name must not be empty."

    t = scenario.time
    if not MIN_SCENARIO_YEAR <= t.year <= MAX_SCENARIO_YEAR:
        return False, f"Year must be between {MIN_SCENARIO_YEAR} and {MAX_SCENARIO_YEAR}."
    if not MIN_ESCALATION_RATE <= t.escalation_rate <= MAX_ESCALATION_RATE:
        return False, (
            f"Escalation rate must be between {MIN_ESCALATION_RATE} and {MAX_ESCALATION_RATE}."
        )
    if t.shock_factor is not None and not MIN_SHOCK_FACTOR <= t.shock_factor <= MAX_SHOCK_FACTOR:
        return False, f"Shock factor must be between {MIN_SHOCK_FACTOR} and {MAX_SHOCK_FACTOR}."

    sec = scenario.security
    for label, value in (
        ("Annual security investment", sec.annual_investment),
        ("SIEM cost per node", sec.siem_per_node),
        ("IAM cost per user", sec.iam_per_user),
        ("Encryption cost per TB", sec.encryption_per_tb),
        ("Incident response retainer", sec.incident_response_retainer),
        ("User count", sec.user_count),
    ):
        if value < 0:
            return False, f"{label} cannot be negative."

    r = scenario.risk
    if not 0.0 <= r.base_incident_probability <= 1.0:
        return False, "Base incident probability must be between 0 and 1."
    if not 0.0 <= r.max_security_reduction <= 1.0:
        return False, "Maximum security reduction must be between 0 and 1."
    if r.average_impact_cost < 0:
        return False, "Average impact cost cannot be negative."

    return True, "ok"


def _checked(scenario: ScenarioParameters) -> ScenarioParameters:
    ok, msg = validate_scenario(scenario)
    if not ok:
        raise ValueError(f"Invalid scenario '{scenario.name}': {msg}")
    return scenario


# ─────────────────────────────────────────────────────────────────────────────
# SECTION CONSTRUCTORS — defaults merged with explicit overrides
# ─────────────────────────────────────────────────────────────────────────────

def _merged(section: str, overrides: Optional[Mapping[str, Any]]) -> dict:
    values = dict(DEFAULT_SCENARIO_VALUES[section])
    for key, value in (overrides or {}).items():
        if key not in values:
            raise ValueError(
                f"Unknown {section} field '{key}'. Available fields: {list(values.keys())}"
            )
        values[key] = value
    return values


def _number(section: str, key: str, value: Any, kind=float):
    try:
        return kind(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid {section} field '{key}': {value!r} is not a number.") from exc


def _time(overrides) -> TimeParameters:
    if isinstance(overrides, TimeParameters):
        return overrides
    v = _merged("time", overrides)
    shock = v["shock_factor"]
    return TimeParameters(
        year=_number("time", "year", v["year"], int),
        escalation_rate=_number("time", "escalation_rate", v["escalation_rate"]),
        shock_enabled=bool(v["shock_enabled"]),
        shock_factor=None if shock is None else _number("time", "shock_factor", shock),
    )


def _workload(overrides) -> WorkloadParameters:
    if isinstance(overrides, WorkloadParameters):
        return overrides
    v = _merged("workload", overrides)
    return WorkloadParameters(
        utilization_class=WorkloadClass(v["utilization_class"]),
        ai_enabled=bool(v["ai_enabled"]),
    )


def _security(overrides) -> SecurityParameters:
    if isinstance(overrides, SecurityParameters):
        return overrides
    v = _merged("security", overrides)
    return SecurityParameters(
        annual_investment=_number("security", "annual_investment", v["annual_investment"]),
        siem_per_node=_number("security", "siem_per_node", v["siem_per_node"]),
        iam_per_user=_number("security", "iam_per_user", v["iam_per_user"]),
        encryption_per_tb=_number("security", "encryption_per_tb", v["encryption_per_tb"]),
        incident_response_retainer=_number(
            "security", "incident_response_retainer", v["incident_response_retainer"]
        ),
        user_count=_number("security", "user_count", v["user_count"], int),
    )


def _risk(overrides) -> RiskParameters:
    if isinstance(overrides, RiskParameters):
        return overrides
    v = _merged("risk", overrides)
    return RiskParameters(
        base_incident_probability=_number(
            "risk", "base_incident_probability", v["base_incident_probability"]
        ),
        average_impact_cost=_number("risk", "average_impact_cost", v["average_impact_cost"]),
        max_security_reduction=_number(
            "risk", "max_security_reduction", v["max_security_reduction"]
        ),
    )


# ─────────────────────────────────────────────────────────────────────────────
# PUBLIC BUILDERS
# ─────────────────────────────────────────────────────────────────────────────

def new_scenario(
    name: str,
    *,
    scenario_id: Optional[str] = None,
    description: Optional[str] = None,
    region: Region | str = DEFAULT_SCENARIO_VALUES["region"],
    time: TimeParameters | Mapping[str, Any] | None = None,
    workload: WorkloadParameters | Mapping[str, Any] | None = None,
    regulatory_intensity: RegulatoryIntensity | str = DEFAULT_SCENARIO_VALUES["regulatory_intensity"],
    security: SecurityParameters | Mapping[str, Any] | None = None,
    risk: RiskParameters | Mapping[str, Any] | None = None,
    is_baseline: bool = DEFAULT_SCENARIO_VALUES["is_baseline"],
    created_at: Optional[str] = None,
    updated_at: Optional[str] = None,
) -> ScenarioParameters:
    """
    Build a complete scenario from the registered defaults.

    Nested sections accept either a full dataclass or a mapping of the
    snake_case fields to override; unspecified fields take their defaults.

    Raises
    ------
    ValueError
        For unknown enum values, unknown section fields, or out-of-range
        values (see ``validate_scenario``).
    """
    stamp = now_iso()
    scenario = ScenarioParameters(
        id=scenario_id or str(uuid.uuid4()),
        name=name,
        description=description,
        region=Region(region),
        time=_time(time),
        workload=_workload(workload),
        regulatory_intensity=RegulatoryIntensity(regulatory_intensity),
        security=_security(security),
        risk=_risk(risk),
        is_baseline=bool(is_baseline),
        created_at=created_at or stamp,
        updated_at=updated_at or created_at or stamp,
    )
    return _checked(scenario)


def _touch(scenario: ScenarioParameters, **changes) -> ScenarioParameters:
    return _checked(replace(scenario, updated_at=now_iso(), **changes))


def with_region(scenario: ScenarioParameters, region: Region | str) -> ScenarioParameters:
    return _touch(scenario, region=Region(region))


def with_time(scenario: ScenarioParameters, **changes) -> ScenarioParameters:
    """e.g. ``with_time(s, year=2027, escalation_rate=0.03)``"""
    return _touch(scenario, time=replace(scenario.time, **changes))


def with_workload(scenario: ScenarioParameters, **changes) -> ScenarioParameters:
    if "utilization_class" in changes:
        changes["utilization_class"] = WorkloadClass(changes["utilization_class"])
    return _touch(scenario, workload=replace(scenario.workload, **changes))


def with_regulatory_intensity(
    scenario: ScenarioParameters, intensity: RegulatoryIntensity | str
) -> ScenarioParameters:
    return _touch(scenario, regulatory_intensity=RegulatoryIntensity(intensity))


def with_security(scenario: ScenarioParameters, **changes) -> ScenarioParameters:
    return _touch(scenario, security=replace(scenario.security, **changes))


def with_risk(scenario: ScenarioParameters, **changes) -> ScenarioParameters:
    return _touch(scenario, risk=replace(scenario.risk, **changes))


_UNCHANGED: Any = object()


def renamed(
    scenario: ScenarioParameters, name: str, description: Optional[str] = _UNCHANGED
) -> ScenarioParameters:
    """New name and, when given, a new description; pass None to clear it."""
    if description is _UNCHANGED:
        description = scenario.description
    return _touch(scenario, name=name, description=description)


def as_baseline(scenario: ScenarioParameters, is_baseline: bool = True) -> ScenarioParameters:
    return _touch(scenario, is_baseline=is_baseline)


def duplicated(scenario: ScenarioParameters, name: Optional[str] = None) -> ScenarioParameters:
    """Copy with a fresh id and timestamps; the copy is never the baseline."""
    stamp = now_iso()
    return _checked(replace(
        scenario,
        id=str(uuid.uuid4()),
        name=name or f"{scenario.name} (copy)",
        is_baseline=False,
        created_at=stamp,
        updated_at=stamp,
    ))


# ─────────────────────────────────────────────────────────────────────────────
# DICT CONVERSION — camelCase export shape → complete record
# ─────────────────────────────────────────────────────────────────────────────

_TIME_KEYS = {
    "year": "year",
    "escalationRate": "escalation_rate",
    "shockFactor": "shock_factor",
    "shockEnabled": "shock_enabled",
}
_WORKLOAD_KEYS = {"utilizationClass": "utilization_class", "aiEnabled": "ai_enabled"}
_SECURITY_KEYS = {
    "annualInvestment": "annual_investment",
    "siemPerNode": "siem_per_node",
    "iamPerUser": "iam_per_user",
    "encryptionPerTB": "encryption_per_tb",
    "incidentResponseRetainer": "incident_response_retainer",
    "userCount": "user_count",
}
_RISK_KEYS = {
    "baseIncidentProbability": "base_incident_probability",
    "averageImpactCost": "average_impact_cost",
    "maxSecurityReduction": "max_security_reduction",
}


def _section(data: Mapping[str, Any], key: str, names: dict[str, str]) -> dict:
    raw = data.get(key) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Scenario field '{key}' must be an object.")
    return {names[k]: v for k, v in raw.items() if k in names and v is not None}


def scenario_from_dict(data: Mapping[str, Any]) -> ScenarioParameters:
    """Build a complete scenario from the camelCase shape of ``to_dict()``.

    Missing fields are filled from the registered defaults; a missing id gets
    a fresh UUID.  Raises ValueError for malformed or out-of-range input.
    """
    if not isinstance(data, Mapping):
        raise ValueError("Scenario data must be an object.")
    return new_scenario(
        data.get("name") or "Untitled Scenario",
        scenario_id=data.get("id"),
        description=data.get("description"),
        region=data.get("region") or DEFAULT_SCENARIO_VALUES["region"],
        time=_section(data, "time", _TIME_KEYS),
        workload=_section(data, "workload", _WORKLOAD_KEYS),
        regulatory_intensity=(
            data.get("regulatoryIntensity") or DEFAULT_SCENARIO_VALUES["regulatory_intensity"]
        ),
        security=_section(data, "security", _SECURITY_KEYS),
        risk=_section(data, "risk", _RISK_KEYS),
        is_baseline=bool(data.get("isBaseline", False)),
        created_at=data.get("createdAt"),
        updated_at=data.get("updatedAt"),
    )
