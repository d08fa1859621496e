"""Shared test fixtures for sqlplay-core."""

from datetime import date

import pytest


ELECTRIC_ITEMS = """
table : electric_items.
Type  Status  Time_in_Minutes
===============================
light 'on'  100
light 'off'    110
fan   'on'  80
fan   'off'    120
Output:
===========
Type     Time_Duration
=========================
light       60
fan      40
"""

CUSTOMERS = """
table: customers
customer_id  first_name  last_name  age
1  John  Doe  31
2  Robert  Luna  22
3  David  Robinson  22

Output:
first_name  age
John  31
Robert  22
David  22
"""

PRODUCTS = """
table: products
product_id  name  price
1  Laptop  1299.99
2  Mouse  29.50
3  'Keyboard Pro'  89.99

Output:
name  price
Laptop  1299.99
"""


@pytest.fixture
def fixed_day():
    """A fixed parse date so full table names are predictable."""
    return date(2024, 1, 15)


@pytest.fixture
def electric_items_text():
    return ELECTRIC_ITEMS


@pytest.fixture
def customers_text():
    return CUSTOMERS


@pytest.fixture
def products_text():
    return PRODUCTS


@pytest.fixture
def warehouse(monkeypatch):
    """An in-memory DuckDB warehouse with environment overrides cleared."""
    pytest.importorskip("duckdb")
    from sqlplay_core.warehouse import WarehouseClient

    monkeypatch.delenv("SQLPLAY_DUCKDB_PATH", raising=False)
    monkeypatch.delenv("SQLPLAY_DATASET", raising=False)
    client = WarehouseClient()
    yield client
    client.close()
