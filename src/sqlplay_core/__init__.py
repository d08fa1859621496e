"""sqlplay Core -- Turn plain-text SQL interview questions into real tables.

Paste a question with an aligned input table and an expected output. Get a
typed schema, the rows, and a DuckDB table to practise against. No AI
calls, just deterministic parsing.

Quick start::

    from sqlplay_core import parse_question, validate_parsed_question

    parsed = parse_question(question_text)
    validate_parsed_question(parsed)
    print(parsed.table_name, [c.type.value for c in parsed.schema])
"""

__version__ = "0.3.0"

# Types and errors
from ._types import (
    Column,
    ColumnType,
    ExpectedOutput,
    ParsedQuestion,
    QuestionMetadata,
    TableInfo,
    TableMetadata,
)
from .errors import ParseError, SqlPlayError, ValidationError, WarehouseError

# Parser
from .parser import parse_question, validate_parsed_question

# Loading (warehouse client is passed in)
from .loader import load_question


__all__ = [
    "__version__",
    # Types
    "Column",
    "ColumnType",
    "ExpectedOutput",
    "ParsedQuestion",
    "QuestionMetadata",
    "TableInfo",
    "TableMetadata",
    # Errors
    "SqlPlayError",
    "ParseError",
    "ValidationError",
    "WarehouseError",
    # Parser
    "parse_question",
    "validate_parsed_question",
    # Loading
    "load_question",
]
