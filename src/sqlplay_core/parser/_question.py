"""Question text -> ParsedQuestion.

Parses SQL practice questions written as aligned plain-text tables::

    table : electric_items.
    Type  Status  Time_in_Minutes
    ===============================
    light 'on'  100
    fan   'off'    120
    Output:
    ===========
    Type     Time_Duration
    =========================
    light       60

Everything before the first ``output:`` marker describes the input table;
everything after it, if present, is the expected result. Parsing is purely
rule based and deterministic.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from .._types import ExpectedOutput, ParsedQuestion, QuestionMetadata, Row
from ..errors import ParseError
from ._lines import (
    FALLBACK_TABLE_NAME,
    LineKind,
    extract_table_name,
    find_header_line,
    is_separator_line,
    parse_column_names,
    skip_separators,
    split_lines,
    split_sections,
)
from ._values import infer_schema, parse_data_row

logger = logging.getLogger(__name__)


def _parse_rows(lines: List[str], start: int, width: int) -> List[Row]:
    return [
        parse_data_row(line, width)
        for line in lines[start:]
        if not is_separator_line(line)
    ]


def parse_input_section(text: str) -> Dict[str, Any]:
    """Parse the input section into table name, schema, and rows.

    Raises:
        ParseError: If no header line can be found.
    """
    lines = split_lines(text)
    table_name = extract_table_name(lines)

    header_index = find_header_line(lines, skip=LineKind.TABLE_DECLARATION)
    if header_index == -1:
        raise ParseError("Could not find column headers in question (header not found)")

    column_names = parse_column_names(lines[header_index])
    data_start = skip_separators(lines, header_index + 1)
    rows = _parse_rows(lines, data_start, len(column_names))

    logger.debug(
        "Input header at line %d: %s; %d data rows",
        header_index, column_names, len(rows),
    )

    return {
        "table_name": table_name,
        "schema": infer_schema(column_names, rows),
        "rows": rows,
    }


def parse_output_section(text: str) -> Optional[ExpectedOutput]:
    """Parse the expected-output section. Values are not typed.

    Returns None when the section has no usable header line. The
    ``Output:`` marker line is never taken as the header, so a section
    holding only the marker and separators yields no expected output.
    """
    lines = split_lines(text)

    header_index = find_header_line(lines, skip=LineKind.OUTPUT_MARKER, min_tokens=1)
    if header_index == -1:
        logger.debug("Output section has no header line; ignoring it")
        return None

    column_names = parse_column_names(lines[header_index])
    data_start = skip_separators(lines, header_index + 1)
    rows = _parse_rows(lines, data_start, len(column_names))

    return ExpectedOutput(columns=column_names, rows=rows)


def parse_question(question_text: str, today: Optional[date] = None) -> ParsedQuestion:
    """Parse raw question text into a structured table definition.

    Args:
        question_text: Raw question text.
        today: Date used for the ``full_table_name`` suffix. Defaults to the
            current local date. Reparsing the same table on the same day
            yields the same full name.

    Returns:
        ParsedQuestion with schema, input rows, and expected output.

    Raises:
        ParseError: If the text is empty, not a string, or has no header.
    """
    if not isinstance(question_text, str) or not question_text.strip():
        raise ParseError("Invalid question text")

    input_text, output_text = split_sections(question_text)
    parsed_input = parse_input_section(input_text)
    expected_output = parse_output_section(output_text) if output_text else None

    date_suffix = (today or date.today()).strftime("%Y%m%d")
    table_name = parsed_input["table_name"] or FALLBACK_TABLE_NAME
    schema = parsed_input["schema"]
    rows = parsed_input["rows"]

    logger.debug(
        "Parsed question table %s: %d columns, %d rows, expected output %s",
        table_name, len(schema), len(rows),
        "present" if expected_output is not None else "absent",
    )

    return ParsedQuestion(
        table_name=table_name,
        full_table_name=f"{table_name}_{date_suffix}",
        schema=schema,
        input_data=rows,
        expected_output=expected_output,
        metadata=QuestionMetadata(
            row_count=len(rows),
            column_count=len(schema),
            date_suffix=date_suffix,
        ),
    )
