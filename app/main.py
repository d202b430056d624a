# ═══════════════════════════════════════════════════════════════════════════════
# ScenarioTCO Platform — Data-Center Scenario TCO Dashboard
# © 2026 Aparajita Parihar. All rights reserved.
#
# Independent research project. Not affiliated with any institution.
# Not licensed for commercial use without written permission of the author.
#
# Platform Version : v1.0.0
# Status           : Comparative scenario model — See disclaimer
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations
import logging
import os
import sys

import streamlit as st

# ─────────────────────────────────────────────────────────────────────────────
# PATH SETUP: config, core and services must be importable
# ─────────────────────────────────────────────────────────────────────────────
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from config.settings import configure_logging, load_settings
from core.engine import compute_scenario_tco
from core.risk import RiskModelConfig
from app.session import init_session
from app.sidebar import render_sidebar
import app.tabs.about as about_tab
import app.tabs.breakdown as breakdown_tab
import app.tabs.comparison as comparison_tab
import app.tabs.library as library_tab
import app.tabs.sensitivity as sensitivity_tab

# .env is read inside load_settings(); process environment wins.
SETTINGS = load_settings()
configure_logging(SETTINGS)
logger = logging.getLogger(__name__)

RISK_CONFIG = RiskModelConfig.from_settings(SETTINGS)

# ─────────────────────────────────────────────────────────────────────────────
# PAGE CONFIGURATION
# ─────────────────────────────────────────────────────────────────────────────
st.set_page_config(
    page_title   = "ScenarioTCO Platform",
    page_icon    = "🏭",
    layout       = "wide",
    initial_sidebar_state = "expanded"
)

# ─────────────────────────────────────────────────────────────────────────────
# CSS BLOCK
# ─────────────────────────────────────────────────────────────────────────────
st.markdown("""
<style>
[data-testid="stAppViewContainer"] > .main { background: #F0F4F8; }
[data-testid="stSidebar"] { background: #071A2F !important; border-right: 1px solid #1A3A5C !important; }
[data-testid="stSidebar"] * { color: #CBD8E6 !important; }
[data-testid="stSidebar"] h1, [data-testid="stSidebar"] h2, [data-testid="stSidebar"] h3 { color: #00C2A8 !important; }
[data-testid="stSidebar"] hr { border-color: #1A3A5C !important; }
.kpi-card { background: #ffffff; border-radius: 8px; padding: 18px 20px 14px; border: 1px solid #E0EBF4; border-top: 3px solid #00C2A8; box-shadow: 0 2px 8px rgba(7,26,47,.05); height: 100%; }
.kpi-label { font-size: 0.78rem; font-weight: 700; letter-spacing: 1px; text-transform: uppercase; color: #3A576B; margin-bottom: 6px; }
.kpi-value { font-size: 1.8rem; font-weight: 700; color: #071A2F; line-height: 1.1; }
.kpi-sub { font-size: 0.78rem; color: #5A7A90; margin-top: 2px; }
.ent-footer { text-align: center; font-size: 0.75rem; color: #5A7A90; padding: 18px 0 8px; border-top: 1px solid #E0EBF4; margin-top: 24px; }
</style>
""", unsafe_allow_html=True)

# ─────────────────────────────────────────────────────────────────────────────
# STATE INITIALIZATION & SIDEBAR
# ─────────────────────────────────────────────────────────────────────────────
repo = init_session()
scenario, base_tco, context, compliance_settings = render_sidebar(
    repo, SETTINGS.documentation_hourly_rate
)

# ─────────────────────────────────────────────────────────────────────────────
# TABS
# ─────────────────────────────────────────────────────────────────────────────
_tab_breakdown, _tab_sens, _tab_compare, _tab_library, _tab_about = st.tabs([
    "📊 Cost Breakdown", "🌪️ Sensitivity", "⚖️ Compare Scenarios", "📚 Scenario Library", "ℹ️ Model Scope"
])

breakdown = None
if scenario is not None:
    breakdown = compute_scenario_tco(
        base_tco, scenario, context,
        risk_config=RISK_CONFIG, compliance_settings=compliance_settings,
    )

with _tab_breakdown:
    if breakdown is None:
        st.info("Select or create a scenario to see its cost breakdown.")
    else:
        breakdown_tab.render(scenario, breakdown)

with _tab_sens:
    if scenario is None:
        st.info("Select or create a scenario to run a sensitivity analysis.")
    else:
        sensitivity_tab.render(scenario, base_tco, context, RISK_CONFIG, compliance_settings)

with _tab_compare:
    comparison_tab.render(repo, base_tco, context, RISK_CONFIG, compliance_settings)

with _tab_library:
    library_tab.render(repo, SETTINGS.scenario_store)

with _tab_about:
    about_tab.render()

# ─────────────────────────────────────────────────────────────────────────────
# FOOTER
# ─────────────────────────────────────────────────────────────────────────────
st.markdown(
    "<div class='ent-footer'>ScenarioTCO Platform · comparative scenario analysis, "
    "not a forecast<br>© 2026 Aparajita Parihar. All rights reserved.</div>",
    unsafe_allow_html=True,
)
