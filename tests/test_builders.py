# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Scenario Builder Tests
# © 2026 Aparajita Parihar. All rights reserved.
# ═══════════════════════════════════════════════════════════════════════════════

import os
import sys
from dataclasses import FrozenInstanceError, replace

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from core.builders import (
    as_baseline,
    duplicated,
    new_scenario,
    renamed,
    scenario_from_dict,
    validate_scenario,
    with_region,
    with_regulatory_intensity,
    with_risk,
    with_security,
    with_time,
    with_workload,
)
from core.models import Region, RegulatoryIntensity, TimeParameters, WorkloadClass


# ─────────────────────────────────────────────────────────────────────────────
# new_scenario
# ─────────────────────────────────────────────────────────────────────────────

class TestNewScenario:
    def test_defaults_are_complete(self):
        s = new_scenario("Defaults")
        assert s.region is Region.US
        assert s.time == TimeParameters(year=2024, escalation_rate=0.025, shock_enabled=False, shock_factor=1.5)
        assert s.workload.utilization_class is WorkloadClass.MEDIUM
        assert s.workload.ai_enabled is False
        assert s.regulatory_intensity is RegulatoryIntensity.MEDIUM
        assert s.security.annual_investment == 100_000
        assert s.security.user_count == 50
        assert s.risk.base_incident_probability == 0.15
        assert s.is_baseline is False
        assert s.description is None

    def test_fresh_ids(self):
        assert new_scenario("A").id != new_scenario("A").id

    def test_timestamps(self):
        s = new_scenario("A", created_at="2024-01-01T00:00:00+00:00")
        assert s.created_at == s.updated_at == "2024-01-01T00:00:00+00:00"

    def test_partial_section_overrides(self):
        s = new_scenario("A", time={"year": 2030}, security={"user_count": 200})
        assert s.time.year == 2030
        assert s.time.escalation_rate == 0.025
        assert s.security.user_count == 200
        assert s.security.siem_per_node == 500

    def test_unknown_section_field(self):
        with pytest.raises(ValueError, match="Available fields"):
            new_scenario("A", time={"month": 3})

    def test_unknown_enum_value(self):
        with pytest.raises(ValueError):
            new_scenario("A", region="Mars")

    @pytest.mark.parametrize("kwargs,fragment", [
        ({"time": {"year": 2019}}, "Year must be between"),
        ({"time": {"escalation_rate": 0.5}}, "Escalation rate"),
        ({"time": {"shock_factor": 4.0}}, "Shock factor"),
        ({"security": {"siem_per_node": -1}}, "SIEM cost per node cannot be negative"),
        ({"risk": {"base_incident_probability": 1.5}}, "Base incident probability"),
        ({"risk": {"max_security_reduction": -0.1}}, "Maximum security reduction"),
        ({"risk": {"average_impact_cost": -5}}, "Average impact cost"),
    ])
    def test_out_of_range_rejected(self, kwargs, fragment):
        with pytest.raises(ValueError, match=fragment):
            new_scenario("Bad", **kwargs)

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError, match="name must not be empty"):
            new_scenario("   ")

    def test_records_are_frozen(self):
        s = new_scenario("A")
        with pytest.raises(FrozenInstanceError):
            s.name = "B"


class TestValidateScenario:
    def test_ok(self):
        ok, msg = validate_scenario(new_scenario("Fine"))
        assert ok is True
        assert msg == "ok"

    def test_reports_first_problem(self):
        s = replace(new_scenario("Fine"), time=TimeParameters(year=2050, escalation_rate=0.0))
        ok, msg = validate_scenario(s)
        assert ok is False
        assert "2040" in msg


# ─────────────────────────────────────────────────────────────────────────────
# UPDATE BUILDERS
# ─────────────────────────────────────────────────────────────────────────────

BASE = new_scenario("Base", created_at="2024-01-01T00:00:00+00:00")


class TestUpdates:
    def test_with_region(self):
        s = with_region(BASE, "EU")
        assert s.region is Region.EU
        assert BASE.region is Region.US
        assert s.id == BASE.id
        assert s.created_at == BASE.created_at
        assert s.updated_at != BASE.updated_at

    def test_with_time(self):
        s = with_time(BASE, year=2027, shock_enabled=True)
        assert (s.time.year, s.time.shock_enabled) == (2027, True)
        assert s.time.escalation_rate == BASE.time.escalation_rate

    def test_with_time_validates(self):
        with pytest.raises(ValueError, match="Year"):
            with_time(BASE, year=2100)

    def test_with_workload_coerces_class(self):
        s = with_workload(BASE, utilization_class="High", ai_enabled=True)
        assert s.workload.utilization_class is WorkloadClass.HIGH
        assert s.workload.ai_enabled is True

    def test_with_regulatory_intensity(self):
        assert with_regulatory_intensity(BASE, "Low").regulatory_intensity is RegulatoryIntensity.LOW

    def test_with_security_and_risk(self):
        s = with_risk(with_security(BASE, annual_investment=0.0), average_impact_cost=1_000_000)
        assert s.security.annual_investment == 0.0
        assert s.risk.average_impact_cost == 1_000_000
        assert BASE.security.annual_investment == 100_000

    def test_with_security_validates(self):
        with pytest.raises(ValueError, match="negative"):
            with_security(BASE, user_count=-1)

    def test_renamed_keeps_description(self):
        s = renamed(new_scenario("A", description="keep me"), "B")
        assert s.name == "B"
        assert s.description == "keep me"

    def test_renamed_none_clears_description(self):
        s = renamed(new_scenario("A", description="drop me"), "A", None)
        assert s.description is None

    def test_as_baseline(self):
        assert as_baseline(BASE).is_baseline is True
        assert as_baseline(as_baseline(BASE), False).is_baseline is False

    def test_duplicated(self):
        original = as_baseline(BASE)
        copy = duplicated(original)
        assert copy.id != original.id
        assert copy.name == "Base (copy)"
        assert copy.is_baseline is False
        assert copy.created_at != original.created_at
        assert (copy.region, copy.time, copy.security) == (original.region, original.time, original.security)
        assert duplicated(original, name="Mine").name == "Mine"


# ─────────────────────────────────────────────────────────────────────────────
# scenario_from_dict
# ─────────────────────────────────────────────────────────────────────────────

class TestFromDict:
    def test_round_trip(self):
        original = new_scenario(
            "Round trip", description="desc", region="Global",
            time={"year": 2026, "escalation_rate": 0.03, "shock_enabled": True, "shock_factor": 2.0},
            workload={"utilization_class": "High", "ai_enabled": True},
            regulatory_intensity="High",
            security={"encryption_per_tb": 75.0},
        )
        assert scenario_from_dict(original.to_dict()) == original

    def test_partial_fills_defaults(self):
        s = scenario_from_dict({"id": "x", "region": "EU", "time": {"year": 2028}})
        assert s.id == "x"
        assert s.name == "Untitled Scenario"
        assert s.region is Region.EU
        assert s.time.year == 2028
        assert s.time.escalation_rate == 0.025
        assert s.security.encryption_per_tb == 50.0
        assert s.is_baseline is False

    def test_unknown_camel_keys_ignored(self):
        s = scenario_from_dict({"name": "A", "security": {"encryptionPerTB": 80, "bogus": 1}})
        assert s.security.encryption_per_tb == 80.0

    def test_missing_id_gets_uuid(self):
        assert len(scenario_from_dict({"name": "A"}).id) == 36

    def test_non_mapping_rejected(self):
        with pytest.raises(ValueError):
            scenario_from_dict(["not", "a", "dict"])

    def test_non_mapping_section_rejected(self):
        with pytest.raises(ValueError, match="'time' must be an object"):
            scenario_from_dict({"name": "A", "time": 2027})

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            scenario_from_dict({"name": "A", "risk": {"baseIncidentProbability": 2}})

    @pytest.mark.parametrize("section, payload, field", [
        ("time", {"year": [2027]}, "year"),
        ("time", {"escalationRate": "fast"}, "escalation_rate"),
        ("security", {"userCount": {"n": 1}}, "user_count"),
        ("risk", {"averageImpactCost": [1]}, "average_impact_cost"),
    ])
    def test_wrong_json_type_names_field(self, section, payload, field):
        with pytest.raises(ValueError, match=f"Invalid {section} field '{field}'"):
            scenario_from_dict({"name": "A", section: payload})

    def test_non_string_name_rejected(self):
        with pytest.raises(ValueError, match="name must not be empty"):
            scenario_from_dict({"name": ["A"]})
