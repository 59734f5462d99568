"""SQL templates for the Bronze DDL and Silver dynamic table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
import re
import textwrap

from common.config import ENV_PLACEHOLDER, TARGET_ENVIRONMENTS
from common.schema_model import ColumnSpec
from common.type_mapping import STRING

COLUMN_INDENT = "    "
SILVER_PROJECTION_SEPARATOR = ",\n           "

ROW_NUMBER_EXPRESSION = (
    "ROW_NUMBER() OVER (PARTITION BY CONO, SUNO ORDER BY VARIATIONNUMBER DESC) AS ROW_NUM"
)
SILVER_EXCLUDED_COLUMNS: List[str] = [
    "ACCOUNTINGENTITY",
    "VARIATIONNUMBER",
    "TIMESTAMP",
    "DELETED",
    "ARCHIVED",
    "ROW_NUM",
]

_TOKEN_PATTERN = re.compile(r"__([A-Z][A-Z_]*?)__")


@dataclass(frozen=True)
class SqlTemplateDefinition:
    """Represents a reusable SQL template with __TOKEN__ placeholders."""

    key: str
    label: str
    description: str
    template: str


def _dedent(sql: str) -> str:
    return textwrap.dedent(sql).strip()


SQL_TEMPLATES: List[SqlTemplateDefinition] = [
    SqlTemplateDefinition(
        key="bronze_header",
        label="Bronze Table Header",
        description="Comment banner and CREATE OR ALTER TABLE opening for the raw table.",
        template=_dedent(
            """
            -- Table: __TABLE__
            -- Description: __DESCRIPTION__
            CREATE OR ALTER TABLE __TABLE__ (
            """
        ),
    ),
    SqlTemplateDefinition(
        key="bronze_table_options",
        label="Bronze Table Options",
        description="Change tracking and table comment, emitted when the schema has a description.",
        template=_dedent(
            """
            CHANGE_TRACKING = TRUE
            COMMENT = '__DESCRIPTION__'
            """
        ),
    ),
    SqlTemplateDefinition(
        key="primary_key_hint",
        label="Primary Key Suggestion",
        description="Commented ALTER TABLE listing inferred key columns.",
        template=_dedent(
            """
            -- Primary key:
            -- ALTER TABLE __TABLE__ ADD PRIMARY KEY (__KEY_COLUMNS__);
            """
        ),
    ),
    SqlTemplateDefinition(
        key="silver_dynamic_table",
        label="Silver Dynamic Table",
        description="Trimmed, deduplicated dynamic table reading the latest revision per key from Bronze.",
        template=_dedent(
            """
            CREATE OR REPLACE DYNAMIC TABLE __TABLE__
            TARGET_LAG= DOWNSTREAM
            WAREHOUSE={{env}}_ANALYTICS_WH
            REFRESH_MODE = INCREMENTAL
            INITIALIZE=ON_CREATE
            AS
            WITH BRONZE AS (
                SELECT __PROJECTION__
                FROM {{env}}_BRONZE.__TABLE__ b
            )

            SELECT *
                   EXCLUDE (__EXCLUDED__)
            FROM BRONZE
            WHERE ROW_NUM = 1 AND DELETED = FALSE;
            """
        ),
    ),
]

SQL_TEMPLATE_LOOKUP = {template.key: template for template in SQL_TEMPLATES}


def render_sql(key: str, **tokens: str) -> str:
    """
    Fill a template's __TOKEN__ placeholders in a single pass.

    Substituted values are never rescanned, so a description that happens to
    contain a token name is emitted as written.
    """
    template = SQL_TEMPLATE_LOOKUP[key]

    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name not in tokens:
            raise ValueError(f"Template {key} needs a value for __{name}__")
        return tokens[name]

    return _TOKEN_PATTERN.sub(_replace, template.template)


def render_column_definition(column: ColumnSpec) -> str:
    """Bronze column line: name, type, NOT NULL and COMMENT as applicable."""
    not_null = " NOT NULL" if column.not_null else ""
    comment = f" COMMENT '{column.comment}'" if column.comment else ""
    return f"{COLUMN_INDENT}{column.name} {column.sql_type}{not_null}{comment}"


def render_silver_projection(column: ColumnSpec) -> str:
    """Silver select expression: text columns are trimmed, others pass through."""
    if column.sql_type == STRING:
        return f"TRIM({column.name}) AS {column.name}"
    return column.name


def apply_environment(sql: str, env: Optional[str]) -> str:
    """Replace the {{env}} placeholder with a target environment, if one is chosen."""
    if not env:
        return sql
    env_upper = env.upper()
    if env_upper not in TARGET_ENVIRONMENTS:
        raise ValueError(f"Unknown environment {env_upper}")
    return sql.replace(ENV_PLACEHOLDER, env_upper)
