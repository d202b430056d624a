"""
# ScenarioTCO Platform

This is the main entry point for the Streamlit application.

It hands control to the dashboard page in app/main.py, which owns page
configuration, session initialisation and the analysis tabs.

"""

import streamlit as st

# Redirect to the main application page.
# This is a workaround to use a multi-page app structure where the main app
# is not in the root script.
st.switch_page("app/main.py")
