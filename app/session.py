# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Session State Management
# © 2026 Aparajita Parihar. All rights reserved.
#
# Single responsibility: own the complete st.session_state initialisation
# contract for the dashboard, and the session-backed scenario repository.
#
# Rules:
#   • init_session() is idempotent: call it every run(), it never overwrites
#     existing values (uses setdefault exclusively).
#   • No module outside this file may write a NEW top-level session key
#     without first registering it here.
#   • Scenario records in session state are only ever replaced whole, through
#     SessionScenarioRepository.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

from typing import Iterable, MutableMapping, Optional

import streamlit as st

from config.constants import DEFAULT_EMPLOYEE_COUNT
from config.scenarios import PRESET_SCENARIOS
from core.builders import as_baseline, duplicated
from core.models import ScenarioParameters
from services.repository import ScenarioRepository

_SCENARIOS_KEY = "scenarios"

# Default infrastructure for a fresh session (USD, annualised).
DEFAULT_BASE_TCO: dict[str, float] = {
    "land":               250_000.0,
    "servers":            1_200_000.0,
    "storage":            300_000.0,
    "network":            150_000.0,
    "power_distribution": 200_000.0,
    "energy":             450_000.0,
    "software":           350_000.0,
    "labor":              600_000.0,
}
DEFAULT_NODE_COUNT: int = 100
DEFAULT_STORAGE_TB: float = 500.0


# ─────────────────────────────────────────────────────────────────────────────
# SESSION-BACKED REPOSITORY
# ─────────────────────────────────────────────────────────────────────────────

class SessionScenarioRepository(ScenarioRepository):
    """Scenarios kept in ``st.session_state`` for the life of the browser session.

    ``state`` defaults to ``st.session_state``; any mutable mapping works.
    """

    def __init__(self, state: Optional[MutableMapping] = None) -> None:
        self._state = st.session_state if state is None else state
        self._state.setdefault(_SCENARIOS_KEY, {})

    @property
    def _items(self) -> dict[str, ScenarioParameters]:
        return self._state[_SCENARIOS_KEY]

    def list(self) -> list[ScenarioParameters]:
        return list(self._items.values())

    def save(self, scenario: ScenarioParameters) -> None:
        items = dict(self._items)
        items[scenario.id] = scenario
        self._state[_SCENARIOS_KEY] = items

    def delete(self, scenario_id: str) -> bool:
        if scenario_id not in self._items:
            return False
        items = dict(self._items)
        del items[scenario_id]
        self._state[_SCENARIOS_KEY] = items
        return True

    def clear(self) -> None:
        self._state[_SCENARIOS_KEY] = {}


def seed_scenarios(repo: ScenarioRepository, presets: Iterable[ScenarioParameters]) -> int:
    """Copy presets into an empty repository; the first copy becomes the baseline."""
    if len(repo):
        return 0
    n = 0
    for i, preset in enumerate(presets):
        copy = duplicated(preset, name=preset.name)
        if i == 0:
            copy = as_baseline(copy)
        repo.save(copy)
        n += 1
    return n


# ─────────────────────────────────────────────────────────────────────────────
# SESSION STATE INITIALISATION
# ─────────────────────────────────────────────────────────────────────────────

def init_session() -> SessionScenarioRepository:
    """Idempotently initialise all dashboard session keys.

    Session key registry (authoritative):

    Scenario library
    ────────────────
    scenarios                 dict[str, ScenarioParameters]  id → scenario
    active_scenario_id        str | None   Scenario shown in the breakdown tab
    compare_ids               list[str]    [A, B] ids for the comparison tab

    Inputs
    ──────
    base_tco                  dict         BaseTCOInput fields (USD)
    node_count                int          Nodes covered by SIEM
    total_storage_tb          float        Storage covered by encryption
    include_training_tooling  bool         Opt-in compliance training/tooling
    employee_count            int          Staff count for compliance training

    Sensitivity
    ───────────
    perturbation_pct          float        ± perturbation in percent
    """
    ss = st.session_state
    repo = SessionScenarioRepository(ss)
    if seed_scenarios(repo, PRESET_SCENARIOS.values()):
        ss.setdefault("active_scenario_id", repo.list()[0].id)

    ss.setdefault("active_scenario_id", None)
    ss.setdefault("compare_ids", [])

    ss.setdefault("base_tco", dict(DEFAULT_BASE_TCO))
    ss.setdefault("node_count", DEFAULT_NODE_COUNT)
    ss.setdefault("total_storage_tb", DEFAULT_STORAGE_TB)
    ss.setdefault("include_training_tooling", False)
    ss.setdefault("employee_count", DEFAULT_EMPLOYEE_COUNT)

    ss.setdefault("perturbation_pct", 20.0)
    return repo
