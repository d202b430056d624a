# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Runtime Settings Tests
# © 2026 Aparajita Parihar. All rights reserved.
# ═══════════════════════════════════════════════════════════════════════════════

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config.settings import DEFAULT_SCENARIO_STORE, Settings, load_settings

_VARS = (
    "TCO_RISK_REFERENCE_INVESTMENT",
    "TCO_RISK_MAX_INVESTMENT",
    "TCO_DOCUMENTATION_HOURLY_RATE",
    "TCO_SCENARIO_STORE",
    "TCO_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = load_settings(env_path=None)
    assert s == Settings()
    assert s.risk_reference_investment == 50_000
    assert s.risk_max_investment == 500_000
    assert s.documentation_hourly_rate == 75.0
    assert s.scenario_store == DEFAULT_SCENARIO_STORE
    assert s.log_level == "WARNING"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TCO_RISK_REFERENCE_INVESTMENT", "20000")
    monkeypatch.setenv("TCO_RISK_MAX_INVESTMENT", "400000")
    monkeypatch.setenv("TCO_DOCUMENTATION_HOURLY_RATE", "90.5")
    monkeypatch.setenv("TCO_SCENARIO_STORE", str(tmp_path / "store.json"))
    monkeypatch.setenv("TCO_LOG_LEVEL", "debug")
    s = load_settings(env_path=None)
    assert s.risk_reference_investment == 20_000
    assert s.risk_max_investment == 400_000
    assert s.documentation_hourly_rate == 90.5
    assert s.scenario_store == str(tmp_path / "store.json")
    assert s.log_level == "DEBUG"


def test_blank_value_uses_default(monkeypatch):
    monkeypatch.setenv("TCO_RISK_MAX_INVESTMENT", "  ")
    assert load_settings(env_path=None).risk_max_investment == 500_000


def test_dotenv_file_read(monkeypatch, tmp_path):
    env = tmp_path / ".env"
    env.write_text("TCO_DOCUMENTATION_HOURLY_RATE=120\n", encoding="utf-8")
    # load_dotenv writes into os.environ; register the key so it is removed afterwards
    monkeypatch.setenv("TCO_DOCUMENTATION_HOURLY_RATE", "")
    monkeypatch.delenv("TCO_DOCUMENTATION_HOURLY_RATE")
    assert load_settings(env_path=str(env)).documentation_hourly_rate == 120.0


def test_process_env_wins_over_dotenv(monkeypatch, tmp_path):
    env = tmp_path / ".env"
    env.write_text("TCO_DOCUMENTATION_HOURLY_RATE=120\n", encoding="utf-8")
    monkeypatch.setenv("TCO_DOCUMENTATION_HOURLY_RATE", "80")
    assert load_settings(env_path=str(env)).documentation_hourly_rate == 80.0


@pytest.mark.parametrize("name,value", [
    ("TCO_RISK_REFERENCE_INVESTMENT", "lots"),
    ("TCO_RISK_MAX_INVESTMENT", "-5"),
    ("TCO_DOCUMENTATION_HOURLY_RATE", "0"),
])
def test_invalid_numbers(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        load_settings(env_path=None)


def test_inverted_risk_calibration(monkeypatch):
    monkeypatch.setenv("TCO_RISK_REFERENCE_INVESTMENT", "600000")
    with pytest.raises(ValueError, match="must be below"):
        load_settings(env_path=None)


def test_bad_log_level(monkeypatch):
    monkeypatch.setenv("TCO_LOG_LEVEL", "LOUD")
    with pytest.raises(ValueError, match="TCO_LOG_LEVEL"):
        load_settings(env_path=None)
