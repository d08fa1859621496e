"""Local DuckDB warehouse for materializing parsed questions as tables.

Datasets map to DuckDB schemas. Requires the ``duckdb`` package.
Install via: ``pip install sqlplay-core[duckdb]``
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from .._types import ColumnType, ParsedQuestion, TableInfo, TableMetadata
from ..errors import WarehouseError

try:
    import duckdb
    DUCKDB_AVAILABLE = True
except ImportError:
    DUCKDB_AVAILABLE = False

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = ":memory:"
DEFAULT_DATASET = "customer_data"

DUCKDB_TYPES: Dict[ColumnType, str] = {
    ColumnType.STRING: "VARCHAR",
    ColumnType.INTEGER: "BIGINT",
    ColumnType.FLOAT: "DOUBLE",
    ColumnType.DATE: "DATE",
    ColumnType.TIMESTAMP: "TIMESTAMP",
    ColumnType.BOOLEAN: "BOOLEAN",
}


def _quote(identifier: str) -> str:
    return '"' + identifier.replace('"', '""') + '"'


def _qualified(dataset_id: str, table_id: str) -> str:
    return f"{_quote(dataset_id)}.{_quote(table_id)}"


def _split_table_path(path: str, default_dataset: str) -> Tuple[str, str]:
    """``dataset.table`` -> (dataset, table); a bare name uses the default dataset."""
    if "." in path:
        dataset_id, table_id = path.split(".", 1)
        return dataset_id, table_id
    return default_dataset, path


class WarehouseClient:
    """DuckDB-backed table store.

    Args:
        database: DuckDB database path. Falls back to ``SQLPLAY_DUCKDB_PATH``,
            then an in-memory database.
        dataset_id: Default dataset (schema). Falls back to
            ``SQLPLAY_DATASET``, then ``customer_data``.
        connection: An existing DuckDB connection to use instead of opening
            one. The client will not close a connection it did not open.
    """

    def __init__(
        self,
        database: Optional[str] = None,
        dataset_id: Optional[str] = None,
        connection: Optional["duckdb.DuckDBPyConnection"] = None,
    ):
        if connection is None and not DUCKDB_AVAILABLE:
            raise ImportError(
                "DuckDB is not installed. Run: pip install duckdb  "
                "or: pip install sqlplay-core[duckdb]"
            )
        self.database = database or os.getenv("SQLPLAY_DUCKDB_PATH", "") or DEFAULT_DATABASE
        self.dataset_id = dataset_id or os.getenv("SQLPLAY_DATASET", "") or DEFAULT_DATASET
        self._owns_connection = connection is None
        self._conn = connection if connection is not None else duckdb.connect(self.database)

    # -- lifecycle --

    def close(self) -> None:
        if self._owns_connection and self._conn is not None:
            self._conn.close()
        self._conn = None

    def __enter__(self) -> "WarehouseClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def connection(self) -> "duckdb.DuckDBPyConnection":
        if self._conn is None:
            raise WarehouseError("Warehouse client is closed")
        return self._conn

    # -- datasets and tables --

    def ensure_dataset(self, dataset_id: Optional[str] = None) -> str:
        """Create the dataset if it does not exist. Returns its id."""
        dataset_id = dataset_id or self.dataset_id
        self.connection.execute(f"CREATE SCHEMA IF NOT EXISTS {_quote(dataset_id)}")
        return dataset_id

    def table_exists(self, dataset_id: str, table_id: str) -> bool:
        row = self.connection.execute(
            "SELECT COUNT(*) FROM information_schema.tables "
            "WHERE table_schema = ? AND table_name = ?",
            [dataset_id, table_id],
        ).fetchone()
        return bool(row and row[0])

    def create_question_table(
        self,
        parsed: ParsedQuestion,
        dataset_id: Optional[str] = None,
    ) -> TableInfo:
        """Create a table from a parsed question and insert its rows.

        Any existing table with the same full name is replaced. If inserting
        fails, the new table is dropped and the original error is re-raised.

        Args:
            parsed: Output of ``parse_question``, already validated.
            dataset_id: Target dataset; defaults to the client's dataset.

        Returns:
            TableInfo describing the created table.
        """
        dataset_id = self.ensure_dataset(dataset_id)
        table_id = parsed.full_table_name
        target = _qualified(dataset_id, table_id)

        fields = []
        for col in parsed.schema:
            duck_type = DUCKDB_TYPES.get(col.type)
            if duck_type is None:
                raise WarehouseError(f"Unsupported column type: {col.type}")
            fields.append(f"{_quote(col.name)} {duck_type}")

        conn = self.connection
        if self.table_exists(dataset_id, table_id):
            conn.execute(f"DROP TABLE {target}")
            logger.info("Deleted existing table: %s.%s", dataset_id, table_id)

        conn.execute(f"CREATE TABLE {target} ({', '.join(fields)})")
        logger.info("Created table: %s.%s", dataset_id, table_id)

        placeholders = ", ".join("?" for _ in parsed.schema)
        try:
            if parsed.input_data:
                conn.executemany(
                    f"INSERT INTO {target} VALUES ({placeholders})",
                    [list(row) for row in parsed.input_data],
                )
        except duckdb.Error as exc:
            logger.error("Failed to insert data into %s.%s: %s", dataset_id, table_id, exc)
            try:
                conn.execute(f"DROP TABLE IF EXISTS {target}")
            except duckdb.Error as drop_exc:
                logger.warning(
                    "Rollback of %s.%s failed: %s", dataset_id, table_id, drop_exc
                )
            raise

        logger.info(
            "Inserted %d rows into %s.%s", len(parsed.input_data), dataset_id, table_id
        )

        return TableInfo(
            dataset_id=dataset_id,
            table_id=table_id,
            full_table_path=f"{dataset_id}.{table_id}",
            rows_inserted=len(parsed.input_data),
            columns=list(parsed.schema),
        )

    def copy_table(
        self,
        source_table: str,
        destination_dataset: str,
        destination_table: str,
        overwrite: bool = False,
    ) -> Dict[str, Any]:
        """Copy ``dataset.table`` into a permanent dataset.

        Raises:
            WarehouseError: If the source is missing, or the destination
                exists and ``overwrite`` is False.
        """
        src_dataset, src_table = _split_table_path(source_table, self.dataset_id)
        if not self.table_exists(src_dataset, src_table):
            raise WarehouseError(f"Table not found: {src_dataset}.{src_table}")

        self.ensure_dataset(destination_dataset)
        if self.table_exists(destination_dataset, destination_table) and not overwrite:
            raise WarehouseError(
                f"Table {destination_dataset}.{destination_table} already exists. "
                "Use overwrite=True to replace."
            )

        verb = "CREATE OR REPLACE TABLE" if overwrite else "CREATE TABLE"
        self.connection.execute(
            f"{verb} {_qualified(destination_dataset, destination_table)} AS "
            f"SELECT * FROM {_qualified(src_dataset, src_table)}"
        )
        logger.info(
            "Copied %s.%s to %s.%s",
            src_dataset, src_table, destination_dataset, destination_table,
        )

        return {
            "source_table": f"{src_dataset}.{src_table}",
            "destination_table": f"{destination_dataset}.{destination_table}",
            "row_count": self._count(destination_dataset, destination_table),
        }

    def get_table_metadata(self, dataset_id: str, table_id: str) -> TableMetadata:
        """Column schema and row count of a table."""
        if not self.table_exists(dataset_id, table_id):
            raise WarehouseError(f"Table not found: {dataset_id}.{table_id}")

        schema_df = self.connection.execute(
            f"DESCRIBE {_qualified(dataset_id, table_id)}"
        ).fetchdf()
        columns = [
            {"name": r["column_name"], "type": r["column_type"]}
            for _, r in schema_df.iterrows()
        ]

        return TableMetadata(
            dataset_id=dataset_id,
            table_id=table_id,
            columns=columns,
            num_rows=self._count(dataset_id, table_id),
        )

    def sample_rows(
        self,
        dataset_id: str,
        table_id: str,
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        """First ``limit`` rows of a table as records."""
        if not self.table_exists(dataset_id, table_id):
            raise WarehouseError(f"Table not found: {dataset_id}.{table_id}")

        df = self.connection.execute(
            f"SELECT * FROM {_qualified(dataset_id, table_id)} LIMIT {int(limit)}"
        ).fetchdf()
        # NULLs come back as NaN/NaT in numeric and date columns.
        df = df.astype(object).where(df.notna(), None)
        return df.to_dict(orient="records")

    def delete_table(self, dataset_id: str, table_id: str) -> None:
        if not self.table_exists(dataset_id, table_id):
            raise WarehouseError(f"Table not found: {dataset_id}.{table_id}")
        self.connection.execute(f"DROP TABLE {_qualified(dataset_id, table_id)}")
        logger.info("Deleted table: %s.%s", dataset_id, table_id)

    def list_tables(self, dataset_id: Optional[str] = None) -> Dict[str, Any]:
        """List tables in one dataset, or in every dataset when None.

        Returns:
            Dict with table_count and a list of table info dicts.
        """
        sql = (
            "SELECT table_schema, table_name FROM information_schema.tables "
            "WHERE table_type = 'BASE TABLE'"
        )
        params: List[Any] = []
        if dataset_id:
            sql += " AND table_schema = ?"
            params.append(dataset_id)
        sql += " ORDER BY table_schema, table_name"

        tables = []
        for schema_name, table_name in self.connection.execute(sql, params).fetchall():
            tables.append({
                "id": table_name,
                "dataset_id": schema_name,
                "full_id": f"{schema_name}.{table_name}",
                "row_count": self._count(schema_name, table_name),
            })

        return {
            "table_count": len(tables),
            "tables": tables,
        }

    def _count(self, dataset_id: str, table_id: str) -> int:
        row = self.connection.execute(
            f"SELECT COUNT(*) FROM {_qualified(dataset_id, table_id)}"
        ).fetchone()
        return row[0] if row else 0
