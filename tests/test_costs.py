# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Adjustment, Compliance & Security Cost Tests
# © 2026 Aparajita Parihar. All rights reserved.
# ═══════════════════════════════════════════════════════════════════════════════

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from core.costs import (
    ComplianceSettings,
    apply_multipliers,
    calculate_compliance_costs,
    calculate_security_costs,
)
from core.models import (
    BaseTCOInput,
    ComputationContext,
    MultiplierSet,
    RegulatoryIntensity,
    SecurityParameters,
)

BASE = BaseTCOInput(
    land=100_000, servers=500_000, storage=200_000, network=50_000,
    power_distribution=100_000, energy=200_000, software=150_000, labor=300_000,
)


# ─────────────────────────────────────────────────────────────────────────────
# ADJUSTMENTS
# ─────────────────────────────────────────────────────────────────────────────

class TestAdjustments:
    def test_identity_gives_zero(self):
        a = apply_multipliers(BASE, MultiplierSet.identity())
        assert a.total == 0.0
        assert a.energy_adjustment == 0.0
        assert a.labor_adjustment == 0.0
        assert a.cooling_adjustment == 0.0

    def test_each_term(self):
        a = apply_multipliers(BASE, MultiplierSet(energy=1.35, labor=1.15, cooling=1.3))
        assert a.energy_adjustment == pytest.approx(70_000)
        assert a.labor_adjustment == pytest.approx(45_000)
        assert a.cooling_adjustment == pytest.approx(100_000 * 0.4 * 0.3)
        assert a.total == pytest.approx(70_000 + 45_000 + 12_000)
        assert a.cooling_share == 0.4

    def test_compliance_and_monitoring_do_not_adjust(self):
        a = apply_multipliers(BASE, MultiplierSet(compliance=1.5, monitoring=1.3))
        assert a.total == 0.0

    def test_low_multipliers_give_negative_adjustment(self):
        a = apply_multipliers(BASE, MultiplierSet(energy=0.6, labor=0.85, cooling=0.7))
        assert a.energy_adjustment == pytest.approx(-80_000)
        assert a.labor_adjustment == pytest.approx(-45_000)
        assert a.total < 0

    def test_base_is_not_mutated(self):
        before = BASE.to_dict()
        apply_multipliers(BASE, MultiplierSet(energy=2.0))
        assert BASE.to_dict() == before


# ─────────────────────────────────────────────────────────────────────────────
# COMPLIANCE
# ─────────────────────────────────────────────────────────────────────────────

class TestCompliance:
    def test_low(self):
        c = calculate_compliance_costs(RegulatoryIntensity.LOW)
        assert c.audit_costs == pytest.approx(37_500)
        assert c.documentation_costs == pytest.approx(15_000)
        assert c.advisory_costs == 0.0
        assert c.certification_costs == pytest.approx(35_000)
        assert c.total == pytest.approx(87_500)

    def test_medium(self):
        c = calculate_compliance_costs(RegulatoryIntensity.MEDIUM)
        assert c.total == pytest.approx(75_000 + 37_500 + 50_000)

    def test_high_includes_advisory(self):
        c = calculate_compliance_costs(RegulatoryIntensity.HIGH)
        assert c.advisory_costs == 120_000
        assert c.total == pytest.approx(150_000 + 90_000 + 120_000 + 75_000)

    def test_training_and_tooling_off_by_default(self):
        c = calculate_compliance_costs("Medium")
        assert c.training_costs == 0.0
        assert c.tooling_costs == 0.0
        assert c.employee_count == 0

    def test_training_and_tooling_opt_in(self):
        settings = ComplianceSettings(include_training_and_tooling=True, employee_count=40)
        c = calculate_compliance_costs(RegulatoryIntensity.HIGH, settings)
        assert c.training_costs == pytest.approx(20_000)
        assert c.tooling_costs == pytest.approx(25_000 * 1.5)
        assert c.total == pytest.approx(435_000 + 20_000 + 37_500)

    def test_custom_hourly_rate(self):
        c = calculate_compliance_costs("Low", ComplianceSettings(hourly_rate=100.0))
        assert c.documentation_costs == pytest.approx(20_000)
        assert c.hourly_rate == 100.0

    def test_strictly_increasing_with_intensity(self):
        totals = [calculate_compliance_costs(level).total for level in ("Low", "Medium", "High")]
        assert totals[0] < totals[1] < totals[2]

    def test_unknown_intensity_rejected(self):
        with pytest.raises(ValueError):
            calculate_compliance_costs("Extreme")


# ─────────────────────────────────────────────────────────────────────────────
# SECURITY
# ─────────────────────────────────────────────────────────────────────────────

SECURITY = SecurityParameters(
    annual_investment=100_000, siem_per_node=500, iam_per_user=100,
    encryption_per_tb=50, incident_response_retainer=50_000, user_count=50,
)


class TestSecurity:
    def test_line_items(self):
        s = calculate_security_costs(SECURITY, ComputationContext(node_count=100, total_storage_tb=500))
        assert s.siem_costs == pytest.approx(50_000)
        assert s.iam_costs == pytest.approx(5_000)
        assert s.encryption_costs == pytest.approx(25_000)
        assert s.incident_response_costs == 50_000
        assert s.total == pytest.approx(130_000)

    def test_annual_investment_not_in_total(self):
        s = calculate_security_costs(SECURITY, ComputationContext())
        assert s.total == pytest.approx(5_000 + 50_000)

    def test_breakdown_echoes_context(self):
        s = calculate_security_costs(SECURITY, ComputationContext(node_count=7, total_storage_tb=2.5))
        d = s.to_dict()["breakdown"]
        assert d == {"nodeCount": 7, "userCount": 50, "totalStorageTB": 2.5}
