"""
Navigation configuration for the M3 to Snowflake converter.

Page Structure:
- Convert: Converter (Bronze DDL and Silver SQL)
- Inspect: Column Preview

To add a new page:
1. Create a new .py file in the pages/ directory
2. Add the page to the appropriate section in get_pages()
"""

import streamlit as st
from typing import Dict, List


def get_pages() -> Dict[str, List[st.Page]]:
    """
    Define all pages for the app, organized by section.

    Note: Paths are relative to the entrypoint file (streamlit_app.py).
    """
    pages = {
        "Convert": [
            st.Page(
                "pages/converter.py",
                title="Converter",
                icon="❄️",
                default=True,
            ),
        ],
        "Inspect": [
            st.Page(
                "pages/column_preview.py",
                title="Column Preview",
                icon="📋",
            ),
        ],
    }

    return pages


def setup_navigation() -> st.Page:
    """
    Set up the navigation and return the selected page.

    The returned page should then be run with page.run().
    """
    # Keys become section headers in the sidebar
    return st.navigation(get_pages())
