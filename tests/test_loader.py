"""Tests for the parse-validate-load pipeline."""

import pytest

from sqlplay_core import ParseError, ValidationError, load_question

pytest.importorskip("duckdb")


class TestLoadQuestion:
    def test_loads_input_table(self, warehouse, customers_text, fixed_day):
        parsed, info = load_question(customers_text, warehouse, today=fixed_day)
        assert parsed.table_name == "customers"
        assert info.full_table_path == "customer_data.customers_20240115"
        assert info.rows_inserted == 3

    def test_dataset_override(self, warehouse, customers_text):
        _, info = load_question(customers_text, warehouse, dataset_id="interviews")
        assert info.dataset_id == "interviews"

    def test_parse_failure_creates_nothing(self, warehouse):
        with pytest.raises(ParseError):
            load_question("table: t\n=====\nnothing", warehouse)
        assert warehouse.list_tables()["table_count"] == 0

    def test_validation_failure_creates_nothing(self, warehouse):
        with pytest.raises(ValidationError):
            load_question("table: empty\na  b", warehouse)
        assert warehouse.list_tables()["table_count"] == 0
