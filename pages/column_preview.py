"""
Column Preview page

Shows the columns the converter derives from the current schema, in output
order, together with the type rule that decided each column's type and the
SQL templates both artifacts are rendered from.
"""

import streamlit as st

from common.converter import build_column_frame
from common.layout import SCHEMA_TEXT_KEY, init_page
from common.schema_model import ParseError
from common.sql_templates import SQL_TEMPLATES
from common.type_mapping import FALLBACK_RULE, TYPE_RULES


def render_columns(schema_text: str) -> None:
    try:
        frame = build_column_frame(schema_text)
    except ParseError as exc:
        st.error(f"Error parsing JSON: {exc}")
        return

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Columns", len(frame))
    with col2:
        st.metric("NOT NULL", int(frame["NOT_NULL"].sum()))
    with col3:
        st.metric("Key Candidates", int(frame["PK_CANDIDATE"].sum()))

    if frame.empty:
        st.info("The schema declares no properties.")
        return
    st.dataframe(frame, width="stretch", hide_index=True)


def render_reference() -> None:
    with st.expander("🔀 Type rules (first match wins)", expanded=False):
        for index, rule in enumerate(TYPE_RULES + [FALLBACK_RULE], start=1):
            st.markdown(f"{index}. **{rule.key}**: {rule.description}")

    with st.expander("🧾 SQL templates", expanded=False):
        for template in SQL_TEMPLATES:
            st.markdown(f"**{template.label}**: {template.description}")
            st.code(template.template, language="sql")


def main():
    """Main function for the Column Preview page."""

    init_page()

    st.title("📋 Column Preview")
    st.markdown("Columns derived from the current schema, in the order they are generated.")

    schema_text = st.session_state.get(SCHEMA_TEXT_KEY)
    if not schema_text:
        st.info("No schema loaded. Paste, upload or load an example on the **Converter** page.")
    else:
        render_columns(schema_text)

    st.markdown("---")
    render_reference()


# Run the page
main()
