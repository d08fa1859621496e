"""sqlplay Warehouse -- Local DuckDB table store for parsed questions.

Requires optional dependency: ``pip install sqlplay-core[duckdb]``

Public API:
    WarehouseClient  — Create, copy, inspect, and delete question tables
    DUCKDB_TYPES     — Column type to DuckDB type mapping
"""

from .duckdb_local import DEFAULT_DATASET, DUCKDB_TYPES, WarehouseClient

__all__ = [
    "WarehouseClient",
    "DUCKDB_TYPES",
    "DEFAULT_DATASET",
]
