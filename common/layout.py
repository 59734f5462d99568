"""
Shared layout and frame components for the M3 to Snowflake converter.

This module contains common UI elements that appear on all pages:
- Environment file loading and logging setup
- Session state initialization
- Sidebar status elements

Usage in page files:
    from common.layout import init_page

    # Call at the start of each page
    init_page()
"""

import os
from pathlib import Path
import streamlit as st

from common.config import APP_ICON, APP_TITLE, ENV_PLACEHOLDER
from common.logging_config import setup_logging

# Session state keys shared between pages
SCHEMA_TEXT_KEY = "schema_text"
TABLE_NAME_KEY = "table_name"
DDL_SQL_KEY = "ddl_sql"
DDL_ERROR_KEY = "ddl_error"
DDL_WARNINGS_KEY = "ddl_warnings"
SILVER_SQL_KEY = "silver_sql"
ENVIRONMENT_KEY = "target_environment"


def load_env_file(env_path: Path) -> None:
    """Load environment variables from a file (does not override existing)."""
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        os.environ.setdefault(key, value)


def init_environment() -> None:
    """
    Load environment files for local development and configure logging.
    Call this once at app startup (in the entrypoint file).
    """
    load_env_file(Path(".env.local"))
    setup_logging()


def init_session_state() -> None:
    """
    Initialize all session state variables used across the app.
    Call this once at app startup (in the entrypoint file).
    """
    st.session_state.setdefault(SCHEMA_TEXT_KEY, "")
    st.session_state.setdefault(TABLE_NAME_KEY, "")
    st.session_state.setdefault(DDL_SQL_KEY, "")
    st.session_state.setdefault(DDL_ERROR_KEY, "")
    st.session_state.setdefault(DDL_WARNINGS_KEY, [])
    st.session_state.setdefault(SILVER_SQL_KEY, "")
    st.session_state.setdefault(ENVIRONMENT_KEY, None)


def clear_outputs() -> None:
    """Drop generated SQL so stale output is never shown next to new input."""
    st.session_state[DDL_SQL_KEY] = ""
    st.session_state[DDL_ERROR_KEY] = ""
    st.session_state[DDL_WARNINGS_KEY] = []
    st.session_state[SILVER_SQL_KEY] = ""


def show_conversion_status() -> None:
    """Display the current input and output state in the sidebar."""
    st.sidebar.markdown("---")
    st.sidebar.caption("**Conversion**")

    if st.session_state.get(DDL_ERROR_KEY):
        st.sidebar.error("❌ Last conversion failed")
    elif st.session_state.get(DDL_SQL_KEY):
        st.sidebar.success("✅ DDL generated")
    elif st.session_state.get(SCHEMA_TEXT_KEY):
        st.sidebar.info("📝 Schema loaded")
    else:
        st.sidebar.warning("No schema yet")

    table_name = st.session_state.get(TABLE_NAME_KEY)
    if table_name:
        st.sidebar.caption(f"Table override: `{table_name}`")
    environment = st.session_state.get(ENVIRONMENT_KEY) or ENV_PLACEHOLDER
    st.sidebar.caption(f"Environment: `{environment}`")


def init_page(show_status: bool = True) -> None:
    """
    Initialize a page with common setup.

    Call this at the start of each page file to ensure consistent behavior.

    Args:
        show_status: If True, show conversion status in sidebar
    """
    init_session_state()
    if show_status:
        show_conversion_status()


def set_page_config() -> None:
    """
    Set the Streamlit page configuration.
    Call this once at the very start of the entrypoint file.

    Note: st.set_page_config must be the first Streamlit command.
    """
    st.set_page_config(
        page_title=APP_TITLE,
        page_icon=APP_ICON,
        layout="wide",
        initial_sidebar_state="expanded",
    )
