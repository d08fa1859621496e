"""sqlplay Parser -- Plain-text SQL question tables to schema and rows.

Public API:
    parse_question            — Parse question text into a ParsedQuestion
    validate_parsed_question  — Check a ParsedQuestion before loading it

Line and value policies (exposed for direct testing):
    split_sections, classify_line, is_separator_line, extract_table_name,
    sanitize_table_name, find_header_line, parse_column_names,
    tokenize_row, parse_value, normalize_row_width, infer_column_type
"""

from ._lines import (
    DEFAULT_TABLE_NAME,
    FALLBACK_TABLE_NAME,
    LineKind,
    classify_line,
    extract_table_name,
    find_header_line,
    is_separator_line,
    parse_column_names,
    sanitize_table_name,
    skip_separators,
    split_lines,
    split_sections,
)
from ._question import parse_input_section, parse_output_section, parse_question
from ._values import (
    infer_column_type,
    infer_schema,
    normalize_row_width,
    parse_data_row,
    parse_value,
    tokenize_row,
)
from .validation import validate_parsed_question

__all__ = [
    "parse_question",
    "parse_input_section",
    "parse_output_section",
    "validate_parsed_question",
    "DEFAULT_TABLE_NAME",
    "FALLBACK_TABLE_NAME",
    "LineKind",
    "classify_line",
    "extract_table_name",
    "find_header_line",
    "is_separator_line",
    "parse_column_names",
    "sanitize_table_name",
    "skip_separators",
    "split_lines",
    "split_sections",
    "infer_column_type",
    "infer_schema",
    "normalize_row_width",
    "parse_data_row",
    "parse_value",
    "tokenize_row",
]
