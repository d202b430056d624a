# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Export Service Tests
# © 2026 Aparajita Parihar. All rights reserved.
# ═══════════════════════════════════════════════════════════════════════════════

import io
import json
import os
import sys

import pandas as pd
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config.constants import REGULATORY_DISCLAIMER
from config.scenarios import BASELINE_SCENARIO, PRESET_SCENARIOS
from core.analysis import compare_scenarios, percentage_of
from core.costs import ComplianceSettings
from core.engine import compute_scenario_tco
from core.models import BaseTCOInput, ComputationContext
from services.export import (
    assumptions_to_markdown,
    breakdown_to_csv,
    breakdown_to_frame,
    breakdown_to_json,
    breakdown_to_markdown,
    comparison_to_csv,
    comparison_to_frame,
    scenario_to_json,
    scenarios_to_json,
)

BASE = BaseTCOInput(
    land=250_000, servers=1_200_000, storage=300_000, network=150_000,
    power_distribution=200_000, energy=450_000, software=350_000, labor=600_000,
)
CONTEXT = ComputationContext(node_count=100, total_storage_tb=500)
SHOCK = PRESET_SCENARIOS["Global AI 2026 + Energy Shock"]


def _run(scenario, **kwargs):
    return compute_scenario_tco(BASE, scenario, CONTEXT, **kwargs)


# ─────────────────────────────────────────────────────────────────────────────
# JSON
# ─────────────────────────────────────────────────────────────────────────────

class TestJson:
    def test_single(self):
        doc = json.loads(scenario_to_json(SHOCK))
        assert doc["type"] == "single_scenario"
        assert doc["version"] == "1.0"
        assert doc["scenario"]["time"]["shockFactor"] == 1.5
        assert doc["scenario"]["security"]["encryptionPerTB"] == 50.0

    def test_multiple(self):
        doc = json.loads(scenarios_to_json(PRESET_SCENARIOS.values()))
        assert doc["type"] == "multiple_scenarios"
        assert doc["count"] == 5
        assert [s["name"] for s in doc["scenarios"]] == list(PRESET_SCENARIOS)

    def test_computation_result(self):
        doc = json.loads(breakdown_to_json(SHOCK, _run(SHOCK)))
        assert doc["type"] == "computation_result"
        assert doc["breakdown"]["scenarioId"] == SHOCK.id
        assert doc["breakdown"]["totals"]["grandTotal"] == pytest.approx(_run(SHOCK).totals.grand_total)
        assert set(doc["breakdown"]["multipliers"]) == {"region", "time", "workload", "regulatory", "combined"}


# ─────────────────────────────────────────────────────────────────────────────
# CSV
# ─────────────────────────────────────────────────────────────────────────────

class TestCsv:
    def test_breakdown_frame(self):
        b = _run(SHOCK)
        df = breakdown_to_frame(b)
        assert list(df.columns) == ["Scenario", "Category", "Item", "Value"]
        assert set(df["Scenario"]) == {SHOCK.name}
        assert list(df["Category"].unique()) == [
            "Base TCO", "Adjustments", "Compliance", "Security", "Risk", "Totals",
        ]
        grand = df[(df["Category"] == "Totals") & (df["Item"] == "Grand Total")]["Value"].iloc[0]
        assert grand == pytest.approx(b.totals.grand_total)

    def test_breakdown_csv_parses_back(self):
        b = _run(BASELINE_SCENARIO)
        df = pd.read_csv(io.StringIO(breakdown_to_csv(b)))
        assert breakdown_to_csv(b).splitlines()[0] == "Scenario,Category,Item,Value"
        row = df[(df["Category"] == "Compliance") & (df["Item"] == "Total")]
        assert row["Value"].iloc[0] == pytest.approx(162_500)

    def test_comparison_frame(self):
        a_s, b_s = PRESET_SCENARIOS["US 2024 Baseline"], PRESET_SCENARIOS["EU 2024 Baseline"]
        c = compare_scenarios(_run(a_s), _run(b_s), a_s, b_s)
        df = comparison_to_frame(c)
        assert list(df.columns) == ["Category", "Scenario A", "Scenario B", "Delta", "% Change"]
        assert df.iloc[0].tolist() == ["Scenario Name", a_s.name, b_s.name, "", ""]
        assert df["Category"].tolist()[1:] == [
            "Base TCO", "Adjustments", "Compliance", "Security", "Risk (EAL)", "Grand Total",
        ]
        grand = df.iloc[-1]
        assert grand["% Change"] == f"{c.percentage_change:.2f}%"
        assert df.iloc[1]["% Change"] == "0.00%"

    def test_comparison_zero_reference_is_na(self):
        a = _run(BASELINE_SCENARIO)
        assert a.totals.adjustments == 0.0
        c = compare_scenarios(a, _run(SHOCK), BASELINE_SCENARIO, SHOCK)
        df = comparison_to_frame(c)
        assert df[df["Category"] == "Adjustments"]["% Change"].iloc[0] == "N/A"

    def test_comparison_change_matches_percentage_of(self):
        c = compare_scenarios(_run(BASELINE_SCENARIO), _run(SHOCK), BASELINE_SCENARIO, SHOCK)
        df = comparison_to_frame(c).set_index("Category")
        ta, tb = c.breakdown_a.totals, c.breakdown_b.totals
        for label, attr in (("Base TCO", "base_tco"), ("Adjustments", "adjustments"), ("Grand Total", "grand_total")):
            va, vb = getattr(ta, attr), getattr(tb, attr)
            pct = percentage_of(vb - va, va)
            expected = "N/A" if pct is None else f"{pct:.2f}%"
            assert df.loc[label, "% Change"] == expected

    def test_comparison_change_uses_shared_policy(self, monkeypatch):
        monkeypatch.setattr("services.export.percentage_of", lambda delta, reference: None)
        c = compare_scenarios(_run(BASELINE_SCENARIO), _run(SHOCK), BASELINE_SCENARIO, SHOCK)
        assert set(comparison_to_frame(c)["% Change"].iloc[1:]) == {"N/A"}

    def test_comparison_csv(self):
        c = compare_scenarios(_run(BASELINE_SCENARIO), _run(SHOCK), BASELINE_SCENARIO, SHOCK)
        text = comparison_to_csv(c)
        assert text.splitlines()[0] == "Category,Scenario A,Scenario B,Delta,% Change"
        assert "Scenario Name,Baseline (Neutral)" in text


# ─────────────────────────────────────────────────────────────────────────────
# MARKDOWN
# ─────────────────────────────────────────────────────────────────────────────

class TestMarkdown:
    def test_breakdown_sections(self):
        md = breakdown_to_markdown(SHOCK, _run(SHOCK))
        for heading in (
            f"# Scenario: {SHOCK.name}",
            "## Description",
            "## Parameters",
            "## Multipliers Applied",
            "## Cost Breakdown",
            "### Risk Model",
            "## Grand Total",
        ):
            assert heading in md
        assert "| Shock Factor | 50% |" in md
        assert f"*Scenario ID: {SHOCK.id}*" in md

    def test_training_rows_only_when_priced(self):
        plain = breakdown_to_markdown(BASELINE_SCENARIO, _run(BASELINE_SCENARIO))
        assert "| Training |" not in plain
        priced = breakdown_to_markdown(
            BASELINE_SCENARIO,
            _run(BASELINE_SCENARIO, compliance_settings=ComplianceSettings(include_training_and_tooling=True)),
        )
        assert "| Training | $25,000.00 |" in priced

    def test_assumptions(self):
        md = assumptions_to_markdown(SHOCK)
        assert md.startswith(f"# Assumptions: {SHOCK.name}")
        assert "| Region | Global |" in md
        assert "| Workload | High + AI |" in md
        assert "| Shock | 50% |" in md
        assert REGULATORY_DISCLAIMER in md

    def test_assumptions_shock_off(self):
        assert "| Shock | Off |" in assumptions_to_markdown(BASELINE_SCENARIO)

    def test_assumptions_region_and_escalation(self):
        md = assumptions_to_markdown(SHOCK)
        assert "## Region Assumptions (Global)" in md
        assert "- Includes lower-cost regions (APAC, LATAM)" in md
        assert "| Energy | OPEX | Yes | Yes |" in md
        assert "| Servers | CAPEX | No | No |" in md
