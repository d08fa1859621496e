"""Tests for the CLI module."""

import json

import pytest
from click.testing import CliRunner

from sqlplay_core.cli import cli


class TestCli:
    def setup_method(self):
        self.runner = CliRunner()

    def test_version(self):
        result = self.runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.3.0" in result.output

    def test_help(self):
        result = self.runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("parse", "load", "tables", "describe", "copy", "drop"):
            assert command in result.output


class TestParseCommand:
    def setup_method(self):
        self.runner = CliRunner()

    def test_parse_text(self, electric_items_text):
        result = self.runner.invoke(cli, ["parse", electric_items_text])
        assert result.exit_code == 0
        assert "Parsed Question" in result.output
        assert "electric_items" in result.output
        assert "Schema" in result.output
        assert "Expected Output" in result.output

    def test_parse_json(self, electric_items_text):
        result = self.runner.invoke(cli, ["parse", "--json", electric_items_text])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["tableName"] == "electric_items"
        assert payload["rowCount"] == 4
        assert payload["expectedOutput"]["columns"] == ["Type", "Time_Duration"]

    def test_parse_stdin(self, customers_text):
        result = self.runner.invoke(cli, ["parse", "--json"], input=customers_text)
        assert result.exit_code == 0
        assert json.loads(result.output)["columnCount"] == 4

    def test_parse_file(self, tmp_path, products_text):
        path = tmp_path / "question.txt"
        path.write_text(products_text)
        result = self.runner.invoke(cli, ["parse", "--json", "--file", str(path)])
        assert result.exit_code == 0
        schema = json.loads(result.output)["schema"]
        assert schema[2] == {"name": "price", "type": "FLOAT"}

    def test_parse_without_output_section(self):
        result = self.runner.invoke(cli, ["parse", "id  name\n1  a"])
        assert result.exit_code == 0
        assert "No expected output section" in result.output

    def test_parse_error(self):
        result = self.runner.invoke(cli, ["parse", "gibberish"])
        assert result.exit_code == 1
        assert "Parse error" in result.output

    def test_validation_error(self):
        result = self.runner.invoke(cli, ["parse", "table: t\na  b"])
        assert result.exit_code == 1
        assert "Validation error" in result.output

    def test_empty_input(self):
        result = self.runner.invoke(cli, ["parse"], input="")
        assert result.exit_code == 1
        assert "No input text" in result.output


class TestWarehouseCommands:
    def setup_method(self):
        self.runner = CliRunner()

    @pytest.fixture
    def database(self, tmp_path, monkeypatch, electric_items_text):
        pytest.importorskip("duckdb")
        monkeypatch.delenv("SQLPLAY_DATASET", raising=False)
        db = str(tmp_path / "warehouse.duckdb")
        result = CliRunner().invoke(
            cli, ["load", "--database", db, "--date", "2024-01-15", electric_items_text]
        )
        assert result.exit_code == 0, result.output
        assert "Loaded" in result.output
        return db

    table_id = "electric_items_20240115"

    def test_load_uses_given_date(self, database):
        result = self.runner.invoke(cli, ["tables", "--database", database])
        assert self.table_id in result.output

    def test_describe_shows_null_as_blank(self, tmp_path, monkeypatch):
        pytest.importorskip("duckdb")
        monkeypatch.delenv("SQLPLAY_DATASET", raising=False)
        db = str(tmp_path / "sparse.duckdb")
        loaded = self.runner.invoke(
            cli, ["load", "--database", db, "--date", "2024-01-15", "table: sp\na  b\n1  10\n2"]
        )
        assert loaded.exit_code == 0, loaded.output

        result = self.runner.invoke(cli, ["describe", "customer_data", "sp_20240115", "--database", db])
        assert result.exit_code == 0
        assert "10" in result.output
        assert "None" not in result.output
        assert "nan" not in result.output

    def test_tables(self, database):
        result = self.runner.invoke(cli, ["tables", "--database", database])
        assert result.exit_code == 0
        assert "customer_data" in result.output

    def test_tables_empty_dataset(self, database):
        result = self.runner.invoke(cli, ["tables", "--database", database, "--dataset", "other"])
        assert result.exit_code == 0
        assert "No tables found" in result.output

    def test_describe(self, database):
        result = self.runner.invoke(
            cli, ["describe", "customer_data", self.table_id, "--database", database]
        )
        assert result.exit_code == 0
        assert "BIGINT" in result.output
        assert "light" in result.output

    def test_describe_missing(self, database):
        result = self.runner.invoke(cli, ["describe", "customer_data", "nope", "--database", database])
        assert result.exit_code == 1
        assert "Warehouse error" in result.output

    def test_copy(self, database):
        result = self.runner.invoke(cli, [
            "copy", f"customer_data.{self.table_id}", "permanent", "electric_items",
            "--database", database,
        ])
        assert result.exit_code == 0
        assert "Copied" in result.output

    def test_drop(self, database):
        result = self.runner.invoke(cli, ["drop", "customer_data", self.table_id, "--database", database])
        assert result.exit_code == 0
        assert "Deleted" in result.output

    def test_load_parse_error(self, tmp_path):
        pytest.importorskip("duckdb")
        db = str(tmp_path / "warehouse.duckdb")
        result = self.runner.invoke(cli, ["load", "--database", db, "gibberish"])
        assert result.exit_code == 1
        assert "Parse error" in result.output
