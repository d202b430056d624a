# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Scenario Computation Engine Tests
# © 2026 Aparajita Parihar. All rights reserved.
#
# Covers the layered pipeline end to end: decomposition, worked examples,
# regression-set plausibility (non-negative, monotonic) and purity.
# ═══════════════════════════════════════════════════════════════════════════════

import math
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config.scenarios import BASELINE_SCENARIO, PRESET_SCENARIOS, REGRESSION_SCENARIOS
from core.builders import new_scenario
from core.costs import ComplianceSettings
from core.engine import compute_many, compute_scenario_tco
from core.models import BaseTCOInput, ComputationContext, MultiplierSet
from core.risk import RiskModelConfig
from core.validation import check_monotonicity, check_non_negative_costs

BASE = BaseTCOInput(
    land=250_000, servers=1_200_000, storage=300_000, network=150_000,
    power_distribution=200_000, energy=450_000, software=350_000, labor=600_000,
)
CONTEXT = ComputationContext(node_count=100, total_storage_tb=500)


def _run(scenario, base=BASE, context=CONTEXT, **kwargs):
    return compute_scenario_tco(base, scenario, context, **kwargs)


def _fields(m: MultiplierSet) -> tuple:
    return (m.energy, m.labor, m.compliance, m.cooling, m.monitoring)


# ─────────────────────────────────────────────────────────────────────────────
# DECOMPOSITION
# ─────────────────────────────────────────────────────────────────────────────

class TestDecomposition:
    @pytest.mark.parametrize("key", sorted(REGRESSION_SCENARIOS))
    def test_grand_total_is_sum_of_layers(self, key):
        t = _run(REGRESSION_SCENARIOS[key]).totals
        assert t.grand_total == pytest.approx(
            t.base_tco + t.adjustments + t.compliance + t.security + t.risk
        )

    def test_base_total_is_sum_of_inputs(self):
        b = _run(BASELINE_SCENARIO)
        assert b.totals.base_tco == pytest.approx(3_500_000)
        assert b.to_dict()["baseTCO"]["total"] == pytest.approx(3_500_000)

    def test_risk_investment_includes_annual_budget(self):
        b = _run(BASELINE_SCENARIO)
        assert b.risk_costs.security_investment == pytest.approx(
            b.security_costs.total + BASELINE_SCENARIO.security.annual_investment
        )

    def test_regulatory_not_folded_into_adjustments(self):
        b = _run(REGRESSION_SCENARIOS["regulatory_high"])
        assert b.multipliers.regulatory.compliance == 1.5
        assert b.multipliers.combined.compliance == 1.0
        assert b.adjustments.total == 0.0

    def test_zero_base_and_context(self):
        b = _run(BASELINE_SCENARIO, base=BaseTCOInput(), context=ComputationContext())
        ratio = math.log(1 + 155_000 / 50_000) / math.log(11)
        eal = 0.15 * (1 - 0.8 * ratio) * 500_000
        assert b.totals.base_tco == 0.0
        assert b.totals.adjustments == 0.0
        assert b.totals.compliance == pytest.approx(162_500)
        assert b.totals.security == pytest.approx(55_000)
        assert b.totals.risk == pytest.approx(eal)
        assert b.totals.grand_total == pytest.approx(162_500 + 55_000 + eal)


# ─────────────────────────────────────────────────────────────────────────────
# WORKED EXAMPLES
# ─────────────────────────────────────────────────────────────────────────────

class TestWorkedExamples:
    def test_neutral_baseline_is_identity(self):
        b = _run(BASELINE_SCENARIO)
        assert _fields(b.multipliers.combined) == (1.0, 1.0, 1.0, 1.0, 1.0)
        assert b.adjustments.total == 0.0

    def test_eu_2027_energy(self):
        s = new_scenario("EU 2027", region="EU", time={"year": 2027, "escalation_rate": 0.025})
        combined = _run(s).multipliers.combined
        assert combined.energy == pytest.approx(1.35 * 1.025 ** 3)
        assert combined.energy == pytest.approx(1.454, abs=1e-3)

    def test_high_ai_energy(self):
        combined = _run(REGRESSION_SCENARIOS["workload_high_ai"]).multipliers.combined
        assert combined.energy == pytest.approx(2.52)

    def test_shock_preset(self):
        preset = PRESET_SCENARIOS["Global AI 2026 + Energy Shock"]
        combined = _run(preset).multipliers.combined
        assert combined.energy == pytest.approx(1.1 * 1.03 ** 2 * 1.5 * 1.4 * 1.8)
        assert combined.labor == pytest.approx(0.85 * 1.03 ** 2)

    def test_risk_config_changes_only_risk(self):
        default = _run(BASELINE_SCENARIO)
        custom = _run(
            BASELINE_SCENARIO,
            risk_config=RiskModelConfig(reference_investment=10_000, max_investment=1_000_000),
        )
        assert custom.totals.security == default.totals.security
        assert custom.totals.compliance == default.totals.compliance
        assert custom.totals.risk != pytest.approx(default.totals.risk)

    def test_compliance_settings_forwarded(self):
        b = _run(BASELINE_SCENARIO, compliance_settings=ComplianceSettings(include_training_and_tooling=True))
        assert b.compliance_costs.training_costs == pytest.approx(25_000)
        assert b.compliance_costs.tooling_costs == pytest.approx(25_000)


# ─────────────────────────────────────────────────────────────────────────────
# REGRESSION SET — plausibility
# ─────────────────────────────────────────────────────────────────────────────

class TestRegressionSet:
    @pytest.mark.parametrize("key", sorted(REGRESSION_SCENARIOS))
    def test_non_negative(self, key):
        ok, errors = check_non_negative_costs(_run(REGRESSION_SCENARIOS[key]))
        assert ok is True, errors

    @pytest.mark.parametrize("low,high", [
        ("workload_low", "workload_high"),
        ("workload_high", "workload_high_ai"),
        ("regulatory_low", "regulatory_high"),
        ("security_minimal", "security_maximum"),
        ("extreme_minimum", "extreme_maximum"),
    ])
    def test_monotonic_pairs(self, low, high):
        ok, msg = check_monotonicity(
            _run(REGRESSION_SCENARIOS[low]), _run(REGRESSION_SCENARIOS[high]), f"{low} -> {high}"
        )
        assert ok is True, msg

    @pytest.mark.parametrize("key", [
        "region_eu", "time_2027", "time_with_shock", "time_high_escalation",
        "workload_high", "workload_ai", "regulatory_high", "extreme_maximum",
    ])
    def test_costlier_than_baseline(self, key):
        ok, msg = check_monotonicity(_run(BASELINE_SCENARIO), _run(REGRESSION_SCENARIOS[key]), key)
        assert ok is True, msg

    def test_later_year_never_cheaper(self):
        totals = [
            _run(new_scenario(f"Y{y}", time={"year": y, "escalation_rate": 0.03})).totals.grand_total
            for y in (2022, 2024, 2026, 2030, 2040)
        ]
        assert totals == sorted(totals)

    def test_us_to_eu_costlier(self):
        us = _run(new_scenario("US", region="US"))
        eu = _run(new_scenario("EU", region="EU"))
        assert check_monotonicity(us, eu, "Region")[0] is True


# ─────────────────────────────────────────────────────────────────────────────
# PURITY
# ─────────────────────────────────────────────────────────────────────────────

class TestPurity:
    def test_inputs_not_mutated(self):
        scenario = PRESET_SCENARIOS["EU 2027 High Regulation"]
        before = (BASE.to_dict(), scenario.to_dict(), CONTEXT.to_dict())
        _run(scenario)
        assert (BASE.to_dict(), scenario.to_dict(), CONTEXT.to_dict()) == before

    def test_repeat_runs_compare_equal(self):
        a = _run(BASELINE_SCENARIO)
        b = _run(BASELINE_SCENARIO)
        assert a == b
        assert a.to_dict()["totals"] == b.to_dict()["totals"]

    def test_breakdown_carries_scenario_identity(self):
        b = _run(BASELINE_SCENARIO)
        assert b.scenario_id == "regression-baseline"
        assert b.scenario_name == "Baseline (Neutral)"
        assert b.calculated_at

    def test_compute_many_keys_by_id(self):
        results = compute_many(BASE, PRESET_SCENARIOS.values(), CONTEXT)
        assert set(results) == {s.id for s in PRESET_SCENARIOS.values()}
        for s in PRESET_SCENARIOS.values():
            assert results[s.id] == _run(s)
