"""Shared fixtures for the converter tests."""
import json

import pytest

from common.examples import SUPPLIER_SCHEMA


@pytest.fixture
def supplier_text():
    """Raw text of the Supplier example schema."""
    return SUPPLIER_SCHEMA


@pytest.fixture
def supplier_schema(supplier_text):
    """Parsed Supplier example schema."""
    return json.loads(supplier_text)
