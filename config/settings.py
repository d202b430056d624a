# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Runtime Settings
# © 2026 Aparajita Parihar. All rights reserved.
#
# Environment-driven overrides for model calibration and storage.
# Reads a .env file from the project root (python-dotenv), then os.getenv.
#
#   TCO_RISK_REFERENCE_INVESTMENT   risk model curvature reference (USD)
#   TCO_RISK_MAX_INVESTMENT         risk model saturation point (USD)
#   TCO_DOCUMENTATION_HOURLY_RATE   compliance documentation rate (USD / h)
#   TCO_SCENARIO_STORE              path of the JSON scenario store
#   TCO_LOG_LEVEL                   logging level name (default WARNING)
#
# This file has ZERO Streamlit imports.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from config.constants import (
    DOCUMENTATION_HOURLY_RATE_USD,
    RISK_MAX_INVESTMENT_USD,
    RISK_REFERENCE_INVESTMENT_USD,
)

_ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_ENV_PATH = os.path.join(_ROOT_DIR, ".env")

DEFAULT_SCENARIO_STORE: str = os.path.join(_ROOT_DIR, ".tco_scenarios.json")


@dataclass(frozen=True)
class Settings:
    risk_reference_investment: float = RISK_REFERENCE_INVESTMENT_USD
    risk_max_investment: float = RISK_MAX_INVESTMENT_USD
    documentation_hourly_rate: float = DOCUMENTATION_HOURLY_RATE_USD
    scenario_store: str = DEFAULT_SCENARIO_STORE
    log_level: str = "WARNING"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}.")
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}.")
    return value


def load_settings(env_path: str | None = _ENV_PATH) -> Settings:
    """Build a Settings object from the environment.

    Values already present in the process environment win over the .env file.
    Raises ValueError for malformed numeric overrides or an inverted risk
    calibration (reference >= saturation point).
    """
    if env_path:
        load_dotenv(env_path, override=False)

    reference = _env_float("TCO_RISK_REFERENCE_INVESTMENT", RISK_REFERENCE_INVESTMENT_USD)
    maximum = _env_float("TCO_RISK_MAX_INVESTMENT", RISK_MAX_INVESTMENT_USD)
    if reference >= maximum:
        raise ValueError(
            "TCO_RISK_REFERENCE_INVESTMENT must be below TCO_RISK_MAX_INVESTMENT "
            f"({reference} >= {maximum})."
        )

    level = os.getenv("TCO_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"TCO_LOG_LEVEL must be a logging level name, got {level!r}.")

    return Settings(
        risk_reference_investment=reference,
        risk_max_investment=maximum,
        documentation_hourly_rate=_env_float(
            "TCO_DOCUMENTATION_HOURLY_RATE", DOCUMENTATION_HOURLY_RATE_USD
        ),
        scenario_store=os.getenv("TCO_SCENARIO_STORE", DEFAULT_SCENARIO_STORE),
        log_level=level,
    )


def configure_logging(settings: Settings) -> None:
    """Apply the configured level to the root logger (UI entry point only)."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
