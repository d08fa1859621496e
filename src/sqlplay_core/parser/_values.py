"""Row tokenization, value parsing, and column type inference."""

from __future__ import annotations

import logging
import re
from typing import Any, List, Sequence

from .._types import Column, ColumnType, Row, Value

logger = logging.getLogger(__name__)

_QUOTES = ("'", '"')
_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?\d+\.\d+$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}")


def tokenize_row(line: str) -> List[str]:
    """Split a data line on whitespace, keeping quoted fields together.

    Either quote character toggles the in-quotes state, and the quote
    characters stay in the token. An unbalanced quote is not an error: the
    rest of the line simply ends up in one token.
    """
    tokens: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char in _QUOTES:
            in_quotes = not in_quotes
            current.append(char)
        elif char in (" ", "\t") and not in_quotes:
            token = "".join(current).strip()
            if token:
                tokens.append(token)
            current = []
        else:
            current.append(char)

    token = "".join(current).strip()
    if token:
        tokens.append(token)
    return tokens


def parse_value(token: str) -> Value:
    """Convert a raw token into None, int, float, or str."""
    if token is None or not token.strip():
        return None

    trimmed = token.strip()

    if len(trimmed) >= 2 and trimmed[0] in _QUOTES and trimmed[-1] == trimmed[0]:
        return trimmed[1:-1]

    if _INT_RE.match(trimmed):
        return int(trimmed)
    if _FLOAT_RE.match(trimmed):
        return float(trimmed)

    return trimmed


def normalize_row_width(values: Sequence[Value], width: int) -> Row:
    """Right-pad with None or truncate so the row has exactly ``width`` values.

    Truncation silently drops trailing values.
    """
    row = list(values)
    if len(row) > width:
        logger.warning(
            "Truncating row from %d to %d values, dropped %r",
            len(row), width, row[width:],
        )
        return row[:width]
    if len(row) < width:
        logger.debug("Padding row from %d to %d values", len(row), width)
        row.extend([None] * (width - len(row)))
    return row


def parse_data_row(line: str, width: int) -> Row:
    """Tokenize, parse, and width-normalize one data line."""
    return normalize_row_width([parse_value(tok) for tok in tokenize_row(line)], width)


def infer_column_type(value: Any) -> ColumnType:
    """Classify a single sample value."""
    if value is None:
        return ColumnType.STRING

    # bool is a subclass of int
    if isinstance(value, bool):
        return ColumnType.BOOLEAN

    if isinstance(value, int):
        return ColumnType.INTEGER

    if isinstance(value, float):
        return ColumnType.INTEGER if value.is_integer() else ColumnType.FLOAT

    if isinstance(value, str):
        if _DATE_RE.match(value):
            return ColumnType.DATE
        if _TIMESTAMP_RE.match(value):
            return ColumnType.TIMESTAMP
        if value.lower() in ("true", "false"):
            return ColumnType.BOOLEAN
        return ColumnType.STRING

    return ColumnType.STRING


def infer_schema(column_names: Sequence[str], rows: Sequence[Row]) -> List[Column]:
    """Type each column from its first non-null value; all-null columns are STRING."""
    schema: List[Column] = []
    for index, name in enumerate(column_names):
        sample = next(
            (row[index] for row in rows if index < len(row) and row[index] is not None),
            None,
        )
        schema.append(Column(name=name, type=infer_column_type(sample)))
    return schema
