"""
Bronze DDL and Silver dynamic-table generation.

Both artifacts are rendered from the same ordered ColumnSpec sequence, derived
fresh from the schema on every call:

    schema -> derive_columns() -> render_column_definition()  -> Bronze DDL
                               -> render_silver_projection()  -> Silver query
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from common.schema_model import ColumnSpec, SchemaDocument, as_schema_document
from common.sql_templates import (
    ROW_NUMBER_EXPRESSION,
    SILVER_EXCLUDED_COLUMNS,
    SILVER_PROJECTION_SEPARATOR,
    render_column_definition,
    render_silver_projection,
    render_sql,
)
from common.type_mapping import map_type

logger = logging.getLogger(__name__)

UNKNOWN_TABLE = "UNKNOWN_TABLE"
NO_DESCRIPTION = "No description"
PRIMARY_KEY_NAMES = frozenset({"CONO", "SUNO", "variationNumber", "timestamp", "deleted"})


@dataclass(frozen=True)
class DdlResult:
    sql: str
    table_name: str = ""
    warnings: Tuple[str, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SilverResult:
    sql: str
    table_name: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def resolve_table_name(schema: SchemaDocument, table_name_override: Optional[str] = None) -> str:
    """Override first, then the upper-cased title with whitespace runs as `_`."""
    override = (table_name_override or "").strip()
    if override:
        return override
    if schema.title:
        return re.sub(r"\s+", "_", schema.title.upper())
    return UNKNOWN_TABLE


def derive_columns(schema: SchemaDocument) -> List[ColumnSpec]:
    """Order the schema's properties and map each one to a ColumnSpec."""
    columns = []
    for name, descriptor in schema.ordered_properties():
        column = ColumnSpec(
            name=name,
            sql_type=map_type(descriptor),
            not_null=schema.is_required(name),
            comment=descriptor.description,
            position=descriptor.position,
        )
        logger.debug("Column %s -> %s (position %s)", name, column.sql_type, column.position)
        columns.append(column)
    return columns


def is_primary_key_candidate(name: str) -> bool:
    return name in PRIMARY_KEY_NAMES or "id" in name.lower()


def primary_key_candidates(schema: SchemaDocument) -> List[str]:
    """Required columns that look like key columns, in `required` order."""
    return [name for name in schema.required if is_primary_key_candidate(name)]


def quote_warnings(schema: SchemaDocument, columns: List[ColumnSpec]) -> List[str]:
    """Describe every single-quoted literal that will be emitted with a raw quote."""
    warnings = []
    if schema.description and "'" in schema.description:
        warnings.append("Table description contains a single quote; the COMMENT clause will not parse.")
    for column in columns:
        if column.comment and "'" in column.comment:
            warnings.append(
                f"Description of column {column.name} contains a single quote; "
                "its COMMENT clause will not parse."
            )
    return warnings


def generate_ddl(schema: Any, table_name_override: Optional[str] = None) -> DdlResult:
    """
    Render the Bronze CREATE OR ALTER TABLE statement.

    Args:
        schema: Schema text, a parsed JSON mapping, or a SchemaDocument
        table_name_override: Explicit table name; wins over the schema title

    Returns:
        DdlResult with the SQL text and any quoting warnings

    Raises:
        ParseError: If schema text is not a JSON object
    """
    document = as_schema_document(schema)
    table = resolve_table_name(document, table_name_override)
    columns = derive_columns(document)

    sections = [
        render_sql(
            "bronze_header",
            TABLE=table,
            DESCRIPTION=document.description or NO_DESCRIPTION,
        ),
        ",\n".join(render_column_definition(column) for column in columns),
        ")",
    ]
    if document.description:
        sections.append(render_sql("bronze_table_options", DESCRIPTION=document.description))
    sql = "\n".join(sections) + ";"

    key_columns = primary_key_candidates(document)
    if key_columns:
        hint = render_sql("primary_key_hint", TABLE=table, KEY_COLUMNS=", ".join(key_columns))
        sql += f"\n\n{hint}\n"

    warnings = quote_warnings(document, columns)
    for warning in warnings:
        logger.warning("%s: %s", table, warning)
    logger.info(
        "Generated Bronze DDL for %s (%d columns, %d key candidates)",
        table,
        len(columns),
        len(key_columns),
    )
    return DdlResult(sql=sql, table_name=table, warnings=tuple(warnings))


def generate_silver(schema: Any, table_name_override: Optional[str] = None) -> SilverResult:
    """
    Render the Silver dynamic table that trims and deduplicates the Bronze table.

    Raises:
        ParseError: If schema text is not a JSON object
    """
    document = as_schema_document(schema)
    table = resolve_table_name(document, table_name_override)
    projection = [render_silver_projection(column) for column in derive_columns(document)]
    projection.append(ROW_NUMBER_EXPRESSION)

    sql = render_sql(
        "silver_dynamic_table",
        TABLE=table,
        PROJECTION=SILVER_PROJECTION_SEPARATOR.join(projection),
        EXCLUDED=", ".join(SILVER_EXCLUDED_COLUMNS),
    )
    logger.info("Generated Silver dynamic table for %s (%d projections)", table, len(projection))
    return SilverResult(sql=sql + "\n", table_name=table)
