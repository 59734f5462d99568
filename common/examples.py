"""
Example M3 schemas - loaded into the converter input with "Load Example".

Each entry contains:
- name: Label shown in the UI
- description: Human-readable description
- payload: Schema text exactly as it would be pasted or uploaded
"""

from typing import Any, Dict, List

SUPPLIER_SCHEMA = """{
  "$schema": "http://json-schema.org/draft-06/schema#",
  "title": "Supplier",
  "description": "Supplier master data",
  "type": "object",
  "properties": {
    "CONO": { "title": "company", "description": "company", "type": "integer", "maximum": 999, "x-position": 1 },
    "SUNO": { "title": "supplier", "description": "supplier", "type": "string", "maxLength": 10, "x-position": 2 },
    "SUNM": { "title": "supplier name", "description": "supplier name", "type": "string", "maxLength": 36, "x-position": 3 },
    "variationNumber": { "description": "record modification sequence", "type": "integer", "maximum": 9223372036854775807, "x-position": 4 },
    "timestamp": { "description": "record modification time", "type": "string", "format": "date-time", "x-position": 5 },
    "deleted": { "description": "is record deleted", "type": "boolean", "x-position": 6 }
  },
  "required": ["CONO", "SUNO", "variationNumber", "timestamp", "deleted"]
}"""

EXAMPLE_SCHEMAS: List[Dict[str, Any]] = [
    {
        "name": "Supplier",
        "description": "Supplier master (CIDMAS style) with M3 housekeeping columns",
        "payload": SUPPLIER_SCHEMA,
    },
]


def get_example_names() -> List[str]:
    """Return list of all example schema names."""
    return [example["name"] for example in EXAMPLE_SCHEMAS]


def get_example_payload(name: str) -> str:
    for example in EXAMPLE_SCHEMAS:
        if example["name"] == name:
            return example["payload"]
    raise ValueError(f"Unknown example schema: {name}")
