"""
Converter page

Paste or upload an M3 JSON schema and generate:
- The Bronze CREATE OR ALTER TABLE statement (download or copy)
- The Silver dynamic table built on top of it
"""

import logging

import streamlit as st

from common.config import ENV_PLACEHOLDER, TARGET_ENVIRONMENTS
from common.converter import convert_to_ddl, convert_to_silver, download_file_name
from common.examples import get_example_names, get_example_payload
from common.layout import (
    DDL_ERROR_KEY,
    DDL_SQL_KEY,
    DDL_WARNINGS_KEY,
    ENVIRONMENT_KEY,
    SCHEMA_TEXT_KEY,
    SILVER_SQL_KEY,
    TABLE_NAME_KEY,
    clear_outputs,
    init_page,
)

logger = logging.getLogger("common.ui")

# Widget keys are dropped by Streamlit when the page is not rendered, so the
# durable values live under the layout keys and are copied in callbacks.
SCHEMA_WIDGET_KEY = "converter_schema_input"
TABLE_WIDGET_KEY = "converter_table_input"
UPLOAD_WIDGET_KEY = "converter_schema_upload"
EXAMPLE_WIDGET_KEY = "converter_example"


def _sync_widget_defaults() -> None:
    if SCHEMA_WIDGET_KEY not in st.session_state:
        st.session_state[SCHEMA_WIDGET_KEY] = st.session_state[SCHEMA_TEXT_KEY]
    if TABLE_WIDGET_KEY not in st.session_state:
        st.session_state[TABLE_WIDGET_KEY] = st.session_state[TABLE_NAME_KEY]


def _set_schema_text(text: str) -> None:
    st.session_state[SCHEMA_TEXT_KEY] = text
    st.session_state[SCHEMA_WIDGET_KEY] = text


def _on_schema_edit() -> None:
    st.session_state[SCHEMA_TEXT_KEY] = st.session_state[SCHEMA_WIDGET_KEY]


def _on_table_edit() -> None:
    # Table names are upper-cased by convention before they reach the generator
    table_name = st.session_state[TABLE_WIDGET_KEY].upper()
    st.session_state[TABLE_WIDGET_KEY] = table_name
    st.session_state[TABLE_NAME_KEY] = table_name


def _on_load_example() -> None:
    name = st.session_state.get(EXAMPLE_WIDGET_KEY) or get_example_names()[0]
    _set_schema_text(get_example_payload(name))
    st.session_state[TABLE_NAME_KEY] = ""
    st.session_state[TABLE_WIDGET_KEY] = ""
    logger.info("Loaded example schema %s", name)


def _on_upload() -> None:
    uploaded = st.session_state.get(UPLOAD_WIDGET_KEY)
    if uploaded is None:
        return
    try:
        text = uploaded.getvalue().decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.warning("Upload %s is not UTF-8: %s", uploaded.name, exc)
        clear_outputs()
        st.session_state[DDL_ERROR_KEY] = f"Could not read {uploaded.name}: {exc}"
        return
    _set_schema_text(text)
    logger.info("Loaded schema from upload %s", uploaded.name)


def _on_convert() -> None:
    clear_outputs()
    result = convert_to_ddl(
        st.session_state[SCHEMA_TEXT_KEY],
        st.session_state[TABLE_NAME_KEY],
    )
    st.session_state[DDL_SQL_KEY] = result.sql
    st.session_state[DDL_ERROR_KEY] = result.error or ""
    st.session_state[DDL_WARNINGS_KEY] = list(result.warnings)


def _on_generate_silver() -> None:
    result = convert_to_silver(
        st.session_state[SCHEMA_TEXT_KEY],
        st.session_state[TABLE_NAME_KEY],
        st.session_state.get(ENVIRONMENT_KEY),
    )
    st.session_state[SILVER_SQL_KEY] = result.sql


def render_input_panel() -> None:
    st.subheader("Input: M3 JSON Schema")

    example_col, upload_col = st.columns([1, 2])
    with example_col:
        st.selectbox("Example", get_example_names(), key=EXAMPLE_WIDGET_KEY)
        st.button("Load Example", on_click=_on_load_example, width="stretch")
    with upload_col:
        st.file_uploader(
            "Upload",
            type=["json"],
            key=UPLOAD_WIDGET_KEY,
            on_change=_on_upload,
        )

    st.text_input(
        "Full Table Name (optional, e.g., M3CE_DBO.CIDMAS)",
        key=TABLE_WIDGET_KEY,
        on_change=_on_table_edit,
    )
    st.text_area(
        "Schema",
        key=SCHEMA_WIDGET_KEY,
        on_change=_on_schema_edit,
        height=400,
        placeholder="Paste your M3 JSON schema here...",
    )
    st.button(
        "Convert to Snowflake DDL",
        type="primary",
        on_click=_on_convert,
        width="stretch",
    )

    if st.session_state.get(DDL_ERROR_KEY):
        st.error(st.session_state[DDL_ERROR_KEY])


def render_output_panel() -> None:
    ddl_sql = st.session_state.get(DDL_SQL_KEY)

    st.subheader("Snowflake DDL")
    if not ddl_sql:
        st.info("Snowflake DDL will appear here...")
        return

    st.download_button(
        "⬇️ Download",
        data=ddl_sql,
        file_name=download_file_name(st.session_state.get(TABLE_NAME_KEY)),
        mime="text/plain",
    )
    st.code(ddl_sql, language="sql")
    for warning in st.session_state.get(DDL_WARNINGS_KEY, []):
        st.warning(warning)

    st.markdown("---")
    st.selectbox(
        "Target environment",
        [None] + TARGET_ENVIRONMENTS,
        key=ENVIRONMENT_KEY,
        format_func=lambda env: env or f"{ENV_PLACEHOLDER} (keep placeholder)",
    )
    st.button(
        "Generate Silver Table SQL",
        on_click=_on_generate_silver,
        width="stretch",
    )

    silver_sql = st.session_state.get(SILVER_SQL_KEY)
    if silver_sql:
        st.subheader("Silver Layer SQL")
        st.code(silver_sql, language="sql")


def main():
    """Main function for the Converter page."""

    init_page()
    _sync_widget_defaults()

    st.title("❄️ M3 JSON to Snowflake Converter")
    st.markdown("Convert Infor M3 JSON schemas to Snowflake DDL statements.")

    input_col, output_col = st.columns(2)
    with input_col:
        render_input_panel()
    with output_col:
        render_output_panel()


# Run the page
main()
