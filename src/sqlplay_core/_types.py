"""Shared result types for the sqlplay-core library.

Parser output is a frozen Pydantic model; warehouse operations return
Pydantic models or plain dicts.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Value = Union[bool, int, float, str, None]
Row = List[Value]


class ColumnType(str, Enum):
    """Warehouse column types inferred from sample values."""
    STRING = "STRING"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    DATE = "DATE"
    TIMESTAMP = "TIMESTAMP"
    BOOLEAN = "BOOLEAN"


# -- Parser types --

class Column(BaseModel):
    """A named, typed column of the input table."""
    model_config = ConfigDict(frozen=True)

    name: str
    type: ColumnType


class ExpectedOutput(BaseModel):
    """The expected-output table of a question. Values are parsed but untyped."""
    model_config = ConfigDict(frozen=True)

    columns: List[str]
    rows: List[List[Any]] = Field(default_factory=list)


class QuestionMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    row_count: int
    column_count: int
    date_suffix: str


class ParsedQuestion(BaseModel):
    """Result of parsing one question text."""
    model_config = ConfigDict(frozen=True)

    table_name: str
    full_table_name: str
    schema_: List[Column] = Field(alias="schema")
    input_data: List[List[Any]]
    expected_output: Optional[ExpectedOutput] = None
    metadata: QuestionMetadata

    @property
    def schema(self) -> List[Column]:
        return self.schema_

    @property
    def column_names(self) -> List[str]:
        return [col.name for col in self.schema_]

    def to_response(self) -> Dict[str, Any]:
        """Boundary shape returned to callers of the parse endpoint."""
        return {
            "tableName": self.table_name,
            "fullTableName": self.full_table_name,
            "schema": [{"name": c.name, "type": c.type.value} for c in self.schema_],
            "rowCount": len(self.input_data),
            "columnCount": len(self.schema_),
            "expectedOutput": (
                {
                    "columns": list(self.expected_output.columns),
                    "rows": [list(r) for r in self.expected_output.rows],
                }
                if self.expected_output is not None
                else None
            ),
        }


# -- Warehouse types --

class TableInfo(BaseModel):
    """Result of materializing a parsed question as a table."""
    dataset_id: str
    table_id: str
    full_table_path: str
    rows_inserted: int
    columns: List[Column]


class TableMetadata(BaseModel):
    """Schema and row count of an existing warehouse table."""
    dataset_id: str
    table_id: str
    columns: List[Dict[str, str]]
    num_rows: int
