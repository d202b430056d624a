# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Scenario Repository & JSON Import/Export
# © 2026 Aparajita Parihar. All rights reserved.
#
# Scenario persistence is injected, never global: the engine only sees
# ScenarioParameters values, and whoever owns a library of scenarios holds a
# ScenarioRepository.
#
#   InMemoryScenarioRepository  — tests, scripts
#   JsonFileScenarioRepository  — versioned JSON file, atomic replace on save
#   SessionScenarioRepository   — st.session_state (see app/session.py)
#
# Stored / imported shapes (version "1.0"):
#   store   {"version", "lastUpdated", "scenarios": [...]}
#   single  {"version", "exportedAt", "type": "single_scenario", "scenario"}
#   multi   {"version", "exportedAt", "type": "multiple_scenarios", "count", "scenarios"}
#   also accepted on import: a bare scenario object, a bare list
#
# This file has ZERO Streamlit and ZERO network imports.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import abc
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional

from config.constants import STORAGE_VERSION
from core.builders import scenario_from_dict
from core.models import Region, ScenarioParameters

logger = logging.getLogger(__name__)

_REQUIRED_SECTIONS = ("time", "workload", "security", "risk")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ─────────────────────────────────────────────────────────────────────────────
# STRUCTURAL CHECK & PARSING
# ─────────────────────────────────────────────────────────────────────────────

def is_scenario_like(data: Any) -> bool:
    """True if ``data`` carries the required fields of a stored scenario.

    Requires string id and name, a known region, and the four nested
    parameter objects.  Values inside the objects are checked later by the
    builders.
    """
    if not isinstance(data, dict):
        return False
    if not isinstance(data.get("id"), str) or not data["id"]:
        return False
    if not isinstance(data.get("name"), str) or not data["name"]:
        return False
    region = data.get("region")
    if not isinstance(region, str) or region not in {r.value for r in Region}:
        return False
    return all(isinstance(data.get(k), dict) for k in _REQUIRED_SECTIONS)


def parse_scenario(data: Any) -> ScenarioParameters:
    """Structural check followed by a full build.

    Raises
    ------
    ValueError
        If required fields are missing or a value is out of range.
    """
    if not is_scenario_like(data):
        raise ValueError(
            "Not a scenario object: expected string 'id' and 'name', a region in "
            f"{[r.value for r in Region]}, and objects {list(_REQUIRED_SECTIONS)}."
        )
    return scenario_from_dict(data)


def _parse_many(items: Iterable[Any]) -> list[ScenarioParameters]:
    """Build every valid entry; invalid entries are skipped with a warning."""
    out: list[ScenarioParameters] = []
    for i, item in enumerate(items):
        try:
            out.append(parse_scenario(item))
        except ValueError as exc:
            logger.warning("Skipping scenario entry %d: %s", i, exc)
    return out


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON: {exc}") from exc


# ─────────────────────────────────────────────────────────────────────────────
# IMPORT / EXPORT (interchange files)
# ─────────────────────────────────────────────────────────────────────────────

# Writers for both envelopes live in services/export.py
# (scenario_to_json / scenarios_to_json).

def import_scenario_json(text: str) -> ScenarioParameters:
    """Accepts a ``single_scenario`` envelope or a bare scenario object.

    Raises
    ------
    ValueError
        For malformed JSON, an unrecognised shape, or an invalid scenario.
    """
    data = _loads(text)
    if isinstance(data, dict) and data.get("type") == "single_scenario" and data.get("scenario"):
        return parse_scenario(data["scenario"])
    if isinstance(data, dict) and data.get("id") and data.get("name"):
        return parse_scenario(data)
    raise ValueError(
        "Unrecognised scenario JSON: expected a 'single_scenario' export "
        "or a scenario object with 'id' and 'name'."
    )


def import_scenarios_json(text: str) -> list[ScenarioParameters]:
    """Accepts a ``multiple_scenarios`` envelope, a bare list, or ``{"scenarios": [...]}``.

    Invalid entries are skipped; an unrecognised top-level shape yields [].
    Raises ValueError only for malformed JSON.
    """
    data = _loads(text)
    if isinstance(data, list):
        return _parse_many(data)
    if isinstance(data, dict) and isinstance(data.get("scenarios"), list):
        return _parse_many(data["scenarios"])
    logger.warning("No scenario list found in imported JSON.")
    return []


# ─────────────────────────────────────────────────────────────────────────────
# REPOSITORY CONTRACT
# ─────────────────────────────────────────────────────────────────────────────

class ScenarioRepository(abc.ABC):
    """
    Abstract store of scenarios keyed by id.

    Subclasses provide the four primitive operations; lookup with a helpful
    KeyError, baseline handling and the versioned wrapper are shared.
    """

    @abc.abstractmethod
    def list(self) -> list[ScenarioParameters]:
        """All stored scenarios in insertion order."""
        raise NotImplementedError

    @abc.abstractmethod
    def save(self, scenario: ScenarioParameters) -> None:
        """Insert, or replace the scenario with the same id."""
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, scenario_id: str) -> bool:
        """Remove by id. Returns False if nothing was stored under that id."""
        raise NotImplementedError

    @abc.abstractmethod
    def clear(self) -> None:
        raise NotImplementedError

    def get(self, scenario_id: str) -> ScenarioParameters:
        """
        Retrieve a stored scenario by id.

        Raises:
            KeyError: If no scenario has that id; the message lists the
                      stored ids.
        """
        for s in self.list():
            if s.id == scenario_id:
                return s
        raise KeyError(
            f"Scenario '{scenario_id}' not found. "
            f"Available scenarios: {[s.id for s in self.list()]}"
        )

    def __contains__(self, scenario_id: str) -> bool:
        return any(s.id == scenario_id for s in self.list())

    def __len__(self) -> int:
        return len(self.list())

    def save_many(self, scenarios: Iterable[ScenarioParameters]) -> int:
        n = 0
        for s in scenarios:
            self.save(s)
            n += 1
        return n

    def baseline(self) -> Optional[ScenarioParameters]:
        """The first scenario flagged as baseline, if any."""
        return next((s for s in self.list() if s.is_baseline), None)

    # ── versioned wrapper ────────────────────────────────────────────────────

    def serialize(self) -> dict:
        return {
            "version": STORAGE_VERSION,
            "lastUpdated": _now(),
            "scenarios": [s.to_dict() for s in self.list()],
        }

    @staticmethod
    def deserialize(wrapper: Any) -> list[ScenarioParameters]:
        """Scenarios from a stored wrapper.

        Raises ValueError if ``wrapper`` is not a wrapper object.  A version
        mismatch is logged and loading proceeds.
        """
        if not isinstance(wrapper, dict) or not isinstance(wrapper.get("scenarios", []), list):
            raise ValueError("Scenario store must be an object with a 'scenarios' list.")
        version = wrapper.get("version")
        if version != STORAGE_VERSION:
            logger.warning(
                "Scenario store version %r differs from %r; loading as-is.",
                version, STORAGE_VERSION,
            )
        return _parse_many(wrapper.get("scenarios", []))


# ─────────────────────────────────────────────────────────────────────────────
# IMPLEMENTATIONS
# ─────────────────────────────────────────────────────────────────────────────

class InMemoryScenarioRepository(ScenarioRepository):

    def __init__(self, scenarios: Iterable[ScenarioParameters] = ()) -> None:
        self._items: dict[str, ScenarioParameters] = {}
        self.save_many(scenarios)

    def list(self) -> list[ScenarioParameters]:
        return list(self._items.values())

    def save(self, scenario: ScenarioParameters) -> None:
        self._items[scenario.id] = scenario

    def delete(self, scenario_id: str) -> bool:
        return self._items.pop(scenario_id, None) is not None

    def clear(self) -> None:
        self._items.clear()


class JsonFileScenarioRepository(ScenarioRepository):
    """
    Scenarios persisted to a single JSON file.

    Every mutation rewrites the whole file through a temporary file in the
    same directory followed by os.replace, so readers never see a partial
    write.  A missing file is an empty store.
    """

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, ScenarioParameters]:
        if not self.path.exists():
            return {}
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError:
            logger.exception("Failed to read scenario store %s", self.path)
            raise
        try:
            wrapper = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Scenario store {self.path} is not valid JSON: {exc}") from exc
        return {s.id: s for s in self.deserialize(wrapper)}

    def _write(self, items: dict[str, ScenarioParameters]) -> None:
        wrapper = {
            "version": STORAGE_VERSION,
            "lastUpdated": _now(),
            "scenarios": [s.to_dict() for s in items.values()],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(wrapper, fh, indent=2)
            os.replace(tmp, self.path)
        except OSError:
            logger.exception("Failed to write scenario store %s", self.path)
            raise
        finally:
            if os.path.exists(tmp):
                os.unlink(tmp)
        logger.debug("Wrote %d scenario(s) to %s", len(items), self.path)

    def list(self) -> list[ScenarioParameters]:
        return list(self._read().values())

    def save(self, scenario: ScenarioParameters) -> None:
        items = self._read()
        items[scenario.id] = scenario
        self._write(items)

    def save_many(self, scenarios: Iterable[ScenarioParameters]) -> int:
        items = self._read()
        n = 0
        for s in scenarios:
            items[s.id] = s
            n += 1
        self._write(items)
        return n

    def delete(self, scenario_id: str) -> bool:
        items = self._read()
        if items.pop(scenario_id, None) is None:
            return False
        self._write(items)
        return True

    def clear(self) -> None:
        self._write({})
