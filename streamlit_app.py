"""
M3 JSON to Snowflake Converter - Entrypoint File

This is the main entrypoint for the Streamlit app. It acts as a router
using st.navigation.

The entrypoint file:
1. Sets page configuration (must be first Streamlit command)
2. Initializes environment, logging and session state
3. Sets up navigation with st.navigation
4. Runs the selected page

All page content is defined in the pages/ directory.
Common layout/frame elements are in common/layout.py.
Navigation configuration is in common/navigation.py.
"""

import traceback

import streamlit as st

from common.layout import init_environment, init_session_state, set_page_config
from common.navigation import setup_navigation

# =============================================================================
# Page configuration (MUST be first Streamlit command)
# =============================================================================
set_page_config()

# =============================================================================
# Initialize environment and session state
# =============================================================================
init_environment()
init_session_state()

# =============================================================================
# Set up navigation and run selected page
# =============================================================================
try:
    page = setup_navigation()
    page.run()
except Exception as exc:
    # Surface unexpected errors so the browser doesn't just disconnect
    traceback.print_exc()
    st.exception(exc)
    st.stop()
