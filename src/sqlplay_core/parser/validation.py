"""Post-parse consistency checks run before a question is materialized."""

from __future__ import annotations

from .._types import ParsedQuestion
from ..errors import ValidationError


def validate_parsed_question(parsed: ParsedQuestion) -> bool:
    """Check a parsed question before it is loaded into the warehouse.

    Rules are checked in order and the first failure is raised. Nothing is
    repaired here; width normalization already happened during parsing.

    Returns:
        True if every rule passes.

    Raises:
        ValidationError: On the first failing rule.
    """
    if not parsed.table_name:
        raise ValidationError("Table name is required")

    if not parsed.schema:
        raise ValidationError("Schema must have at least one column")

    if not parsed.input_data:
        raise ValidationError("Input data must have at least one row")

    expected = len(parsed.schema)
    for i, row in enumerate(parsed.input_data, start=1):
        if len(row) != expected:
            raise ValidationError(
                f"Row {i} has {len(row)} columns, expected {expected}"
            )

    return True
