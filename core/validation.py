# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Regression Checks
# © 2026 Aparajita Parihar. All rights reserved.
#
# Plausibility checks run over computed breakdowns:
#   check_non_negative_costs()  — every non-adjustment total ≥ 0
#   check_monotonicity()        — the "higher" setting never costs less
#   check_baseline_range()      — grand total inside an expected band
#   scenario_test_report()      — Markdown table of grand totals
#
# Adjustments may legitimately be negative (deflationary scenarios) and are
# not checked.
# This file has ZERO Streamlit and ZERO network imports.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from core.models import ComputationBreakdown


def check_non_negative_costs(breakdown: ComputationBreakdown) -> tuple[bool, list[str]]:
    t = breakdown.totals
    errors = [
        f"{label} is negative"
        for label, value in (
            ("Base TCO", t.base_tco),
            ("Compliance costs", t.compliance),
            ("Security costs", t.security),
            ("Risk costs", t.risk),
            ("Grand total", t.grand_total),
        )
        if value < 0
    ]
    return not errors, errors


def check_monotonicity(
    low: ComputationBreakdown,
    high: ComputationBreakdown,
    parameter_name: str,
) -> tuple[bool, str]:
    lo, hi = low.totals.grand_total, high.totals.grand_total
    if hi >= lo:
        return True, f"{parameter_name}: monotonicity check passed ({lo:,.2f} -> {hi:,.2f})"
    return False, (
        f"{parameter_name}: monotonicity violated, higher setting produced lower cost "
        f"({lo:,.2f} -> {hi:,.2f})"
    )


def check_baseline_range(
    breakdown: ComputationBreakdown,
    expected_min: float,
    expected_max: float,
) -> tuple[bool, str]:
    total = breakdown.totals.grand_total
    band = f"(expected ${expected_min:,.0f} - ${expected_max:,.0f})"
    if expected_min <= total <= expected_max:
        return True, f"Baseline in expected range: ${total:,.0f} {band}"
    return False, f"Baseline out of range: ${total:,.0f} {band}"


def scenario_test_report(breakdowns: Iterable[ComputationBreakdown]) -> str:
    lines = [
        "# Scenario Test Report",
        "",
        f"Generated: {datetime.now(timezone.utc).isoformat()}",
        "",
        "## Scenario Results",
        "",
        "| Scenario | Grand Total |",
        "|----------|-------------|",
    ]
    for b in breakdowns:
        lines.append(f"| {b.scenario_name} | ${b.totals.grand_total:,.0f} |")
    return "\n".join(lines) + "\n"
