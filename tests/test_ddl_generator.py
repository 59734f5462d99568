"""Test Bronze DDL and Silver dynamic table generation."""
import pytest

from common.ddl_generator import (
    derive_columns,
    generate_ddl,
    generate_silver,
    primary_key_candidates,
    resolve_table_name,
)
from common.schema_model import ParseError, SchemaDocument

SUPPLIER_DDL = """-- Table: SUPPLIER
-- Description: Supplier master data
CREATE OR ALTER TABLE SUPPLIER (
    CONO INTEGER NOT NULL COMMENT 'company',
    SUNO STRING NOT NULL COMMENT 'supplier',
    SUNM STRING COMMENT 'supplier name',
    variationNumber INTEGER NOT NULL COMMENT 'record modification sequence',
    timestamp DATETIME NOT NULL COMMENT 'record modification time',
    deleted BOOLEAN NOT NULL COMMENT 'is record deleted'
)
CHANGE_TRACKING = TRUE
COMMENT = 'Supplier master data';

-- Primary key:
-- ALTER TABLE SUPPLIER ADD PRIMARY KEY (CONO, SUNO, variationNumber, timestamp, deleted);
"""

SUPPLIER_SILVER = """CREATE OR REPLACE DYNAMIC TABLE SUPPLIER
TARGET_LAG= DOWNSTREAM
WAREHOUSE={{env}}_ANALYTICS_WH
REFRESH_MODE = INCREMENTAL
INITIALIZE=ON_CREATE
AS
WITH BRONZE AS (
    SELECT CONO,
           TRIM(SUNO) AS SUNO,
           TRIM(SUNM) AS SUNM,
           variationNumber,
           timestamp,
           deleted,
           ROW_NUMBER() OVER (PARTITION BY CONO, SUNO ORDER BY VARIATIONNUMBER DESC) AS ROW_NUM
    FROM {{env}}_BRONZE.SUPPLIER b
)

SELECT *
       EXCLUDE (ACCOUNTINGENTITY, VARIATIONNUMBER, TIMESTAMP, DELETED, ARCHIVED, ROW_NUM)
FROM BRONZE
WHERE ROW_NUM = 1 AND DELETED = FALSE;
"""


def test_supplier_ddl(supplier_text):
    """End-to-end Bronze DDL for the Supplier example."""
    result = generate_ddl(supplier_text)
    assert result.sql == SUPPLIER_DDL
    assert result.table_name == "SUPPLIER"
    assert result.warnings == ()
    assert result.ok


def test_supplier_columns(supplier_schema):
    columns = derive_columns(SchemaDocument.from_mapping(supplier_schema))
    assert [c.name for c in columns] == ["CONO", "SUNO", "SUNM", "variationNumber", "timestamp", "deleted"]
    assert [c.sql_type for c in columns] == ["INTEGER", "STRING", "STRING", "INTEGER", "DATETIME", "BOOLEAN"]
    assert [c.not_null for c in columns] == [True, True, False, True, True, True]


def test_permuted_properties_give_identical_ddl(supplier_schema):
    shuffled = dict(reversed(list(supplier_schema["properties"].items())))
    permuted = {**supplier_schema, "properties": shuffled}
    assert generate_ddl(permuted).sql == generate_ddl(supplier_schema).sql


def test_generate_ddl_rejects_invalid_text():
    with pytest.raises(ParseError):
        generate_ddl("{not json")


@pytest.mark.parametrize(
    "raw, override, expected",
    [
        ({"title": "Supplier"}, "M3CE_DBO.CIDMAS", "M3CE_DBO.CIDMAS"),
        ({"title": "Customer Order  Line"}, None, "CUSTOMER_ORDER_LINE"),
        ({"title": "Item\tMaster"}, "   ", "ITEM_MASTER"),
        ({}, "", "UNKNOWN_TABLE"),
        ({"title": ""}, None, "UNKNOWN_TABLE"),
    ],
)
def test_resolve_table_name(raw, override, expected):
    assert resolve_table_name(SchemaDocument.from_mapping(raw), override) == expected


def test_override_used_throughout(supplier_schema):
    sql = generate_ddl(supplier_schema, "M3CE_DBO.CIDMAS").sql
    assert "-- Table: M3CE_DBO.CIDMAS\n" in sql
    assert "CREATE OR ALTER TABLE M3CE_DBO.CIDMAS (" in sql
    assert "-- ALTER TABLE M3CE_DBO.CIDMAS ADD PRIMARY KEY" in sql


def test_no_description():
    """Without a description there is no table option trailer."""
    schema = {"title": "Plain", "properties": {"NOTE": {"type": "string"}}}
    sql = generate_ddl(schema).sql
    assert sql == (
        "-- Table: PLAIN\n"
        "-- Description: No description\n"
        "CREATE OR ALTER TABLE PLAIN (\n"
        "    NOTE STRING\n"
        ");"
    )


def test_empty_properties():
    sql = generate_ddl({}).sql
    assert "CREATE OR ALTER TABLE UNKNOWN_TABLE (\n\n);" in sql
    assert "Primary key" not in sql


def test_primary_key_absent_without_candidates():
    schema = {
        "title": "Notes",
        "properties": {"CONO": {"type": "integer"}, "NOTE": {"type": "string"}},
        "required": ["NOTE"],
    }
    assert "Primary key" not in generate_ddl(schema).sql


def test_primary_key_candidates_follow_required_order():
    """Candidates keep `required` order, not x-position order."""
    schema = SchemaDocument.from_mapping(
        {
            "properties": {
                "CONO": {"x-position": 1},
                "ITNO": {"x-position": 2},
                "itemId": {"x-position": 3},
                "deleted": {"x-position": 4},
            },
            "required": ["deleted", "itemId", "ITNO", "CONO"],
        }
    )
    assert primary_key_candidates(schema) == ["deleted", "itemId", "CONO"]


def test_id_match_is_case_insensitive():
    schema = SchemaDocument.from_mapping({"required": ["ORDERID", "Ident", "NAME"]})
    assert primary_key_candidates(schema) == ["ORDERID", "Ident"]


def test_optional_allow_listed_column_is_not_a_candidate():
    schema = SchemaDocument.from_mapping({"properties": {"CONO": {}}, "required": []})
    assert primary_key_candidates(schema) == []


def test_single_quote_is_emitted_verbatim_and_flagged():
    schema = {
        "description": "Supplier's master",
        "properties": {"SUNM": {"type": "string", "description": "supplier's name"}},
    }
    result = generate_ddl(schema)
    assert "SUNM STRING COMMENT 'supplier's name'" in result.sql
    assert "COMMENT = 'Supplier's master'" in result.sql
    assert len(result.warnings) == 2
    assert "SUNM" in result.warnings[1]


def test_supplier_silver(supplier_text):
    """End-to-end Silver query for the Supplier example."""
    result = generate_silver(supplier_text)
    assert result.sql == SUPPLIER_SILVER
    assert result.table_name == "SUPPLIER"


def test_silver_trims_only_string_columns():
    schema = {
        "title": "Mixed",
        "properties": {
            "AMOUNT": {"type": "number", "multipleOf": 0.01, "x-position": 1},
            "PAYLOAD": {"type": "object", "x-position": 2},
            "UNTYPED": {"x-position": 3},
            "ACTIVE": {"type": "boolean", "x-position": 4},
        },
    }
    sql = generate_silver(schema).sql
    assert "SELECT AMOUNT,\n" in sql
    assert "TRIM(PAYLOAD) AS PAYLOAD" in sql
    assert "TRIM(UNTYPED) AS UNTYPED" in sql
    assert "TRIM(ACTIVE)" not in sql
    assert "           ACTIVE,\n" in sql


def test_silver_uses_override(supplier_schema):
    sql = generate_silver(supplier_schema, "M3CE_DBO.CIDMAS").sql
    assert sql.startswith("CREATE OR REPLACE DYNAMIC TABLE M3CE_DBO.CIDMAS\n")
    assert "FROM {{env}}_BRONZE.M3CE_DBO.CIDMAS b" in sql


def test_silver_without_properties():
    sql = generate_silver({}).sql
    assert "    SELECT ROW_NUMBER() OVER" in sql


def test_silver_rejects_invalid_text():
    with pytest.raises(ParseError):
        generate_silver("nope")
