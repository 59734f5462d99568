"""
Conversion entry points used by the Streamlit pages.

Every function here returns a displayable result instead of raising: parse
failures become an error message and an empty (DDL) or placeholder (Silver)
SQL string, so the UI never shows output left over from an earlier run.
"""

from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from common.config import DEFAULT_DOWNLOAD_STEM
from common.ddl_generator import (
    DdlResult,
    SilverResult,
    derive_columns,
    generate_ddl,
    generate_silver,
    is_primary_key_candidate,
)
from common.schema_model import ParseError, parse_schema_text
from common.sql_templates import apply_environment
from common.type_mapping import matching_rule

logger = logging.getLogger(__name__)

NO_INPUT_PLACEHOLDER = "-- No JSON input available yet"
SILVER_ERROR_PREFIX = "-- Error generating silver query: "
PARSE_ERROR_PREFIX = "Error parsing JSON: "

COLUMN_FRAME_COLUMNS = [
    "POSITION",
    "COLUMN_NAME",
    "SNOWFLAKE_TYPE",
    "TYPE_RULE",
    "NOT_NULL",
    "PK_CANDIDATE",
    "COMMENT",
]


def convert_to_ddl(schema_text: str, table_name: Optional[str] = None) -> DdlResult:
    """Parse schema text and render the Bronze DDL, or an error with empty SQL."""
    try:
        result = generate_ddl(parse_schema_text(schema_text), table_name)
    except ParseError as exc:
        logger.warning("DDL generation failed: %s", exc)
        return DdlResult(sql="", error=f"{PARSE_ERROR_PREFIX}{exc}")
    return result


def convert_to_silver(
    schema_text: Optional[str],
    table_name: Optional[str] = None,
    environment: Optional[str] = None,
) -> SilverResult:
    """
    Render the Silver query.

    Missing input, unparseable input and an unknown environment all yield a
    placeholder comment instead of raising.
    """
    if not schema_text:
        return SilverResult(sql=NO_INPUT_PLACEHOLDER, error="No JSON input")
    try:
        result = generate_silver(parse_schema_text(schema_text), table_name)
    except ParseError as exc:
        logger.warning("Silver generation failed: %s", exc)
        return SilverResult(sql=f"{SILVER_ERROR_PREFIX}{exc}", error=str(exc))
    try:
        sql = apply_environment(result.sql, environment)
    except ValueError as exc:
        logger.warning("Silver environment rejected: %s", exc)
        return SilverResult(sql=f"{SILVER_ERROR_PREFIX}{exc}", error=str(exc))
    return SilverResult(sql=sql, table_name=result.table_name)


def build_column_frame(schema_text: str) -> pd.DataFrame:
    """
    Tabulate the derived columns in output order.

    Raises:
        ParseError: If the text is not a JSON object
    """
    document = parse_schema_text(schema_text)
    rows = []
    for column, (_, descriptor) in zip(derive_columns(document), document.ordered_properties()):
        rows.append(
            {
                "POSITION": column.position,
                "COLUMN_NAME": column.name,
                "SNOWFLAKE_TYPE": column.sql_type,
                "TYPE_RULE": matching_rule(descriptor).key,
                "NOT_NULL": column.not_null,
                "PK_CANDIDATE": column.not_null and is_primary_key_candidate(column.name),
                "COMMENT": column.comment or "",
            }
        )
    return pd.DataFrame(rows, columns=COLUMN_FRAME_COLUMNS)


def download_file_name(table_name: Optional[str]) -> str:
    stem = (table_name or "").strip() or DEFAULT_DOWNLOAD_STEM
    return f"{stem}.sql"
