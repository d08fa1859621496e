"""Line-level heuristics: section splitting, separators, headers, table names."""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable, List, Optional, Tuple

DEFAULT_TABLE_NAME = "parsed_table"
FALLBACK_TABLE_NAME = "question_table"

_OUTPUT_MARKER_RE = re.compile(r"output\s*:", re.IGNORECASE)
_SEPARATOR_RE = re.compile(r"^[=\-_]+$")
_TABLE_DECL_RE = re.compile(r"table\s*:\s*([a-zA-Z_][a-zA-Z0-9_]*)", re.IGNORECASE)
_UNSAFE_IDENT_RE = re.compile(r"[^A-Za-z0-9_]")
_WIDE_GAP_RE = re.compile(r"\s{2,}")


class LineKind(str, Enum):
    BLANK = "blank"
    SEPARATOR = "separator"
    TABLE_DECLARATION = "table_declaration"
    OUTPUT_MARKER = "output_marker"
    CONTENT = "content"


def split_sections(text: str) -> Tuple[str, Optional[str]]:
    """Split question text at the first ``output:`` marker.

    The output section keeps the marker itself. Returns ``(input, None)``
    when there is no marker.
    """
    match = _OUTPUT_MARKER_RE.search(text)
    if match is None:
        return text.strip(), None
    return text[: match.start()].strip(), text[match.start():].strip()


def split_lines(section: str) -> List[str]:
    """Trimmed, non-empty lines of a section."""
    return [line.strip() for line in section.splitlines() if line.strip()]


def is_separator_line(line: str) -> bool:
    """True for visual dividers made only of ``=``, ``-`` and ``_``."""
    return bool(_SEPARATOR_RE.match(line.strip()))


def classify_line(line: str) -> LineKind:
    """Kind of a single line. Word checks are case-insensitive substrings.

    A line mentioning both "table" and "output" is a table declaration.
    """
    stripped = line.strip()
    if not stripped:
        return LineKind.BLANK
    if is_separator_line(stripped):
        return LineKind.SEPARATOR
    lowered = stripped.lower()
    if "table" in lowered:
        return LineKind.TABLE_DECLARATION
    if "output" in lowered:
        return LineKind.OUTPUT_MARKER
    return LineKind.CONTENT


def sanitize_table_name(name: str) -> str:
    """Reduce ``name`` to a safe identifier (letters, digits, underscore)."""
    cleaned = _UNSAFE_IDENT_RE.sub("", name.strip())
    if not cleaned:
        return FALLBACK_TABLE_NAME
    if cleaned[0].isdigit():
        cleaned = f"_{cleaned}"
    return cleaned


def extract_table_name(lines: Iterable[str]) -> str:
    """Name from the first ``table : name`` declaration, or the default."""
    for line in lines:
        match = _TABLE_DECL_RE.search(line)
        if match:
            return sanitize_table_name(match.group(1).rstrip("."))
    return DEFAULT_TABLE_NAME


def find_header_line(
    lines: List[str],
    skip: LineKind = LineKind.TABLE_DECLARATION,
    min_tokens: int = 2,
) -> int:
    """Index of the first plausible header line, or -1.

    Blank lines, separators and lines classified as ``skip`` are passed
    over. With the default this also skips a real header that has a column
    literally named "table". A header needs at least ``min_tokens``
    whitespace-delimited tokens.
    """
    for index, line in enumerate(lines):
        kind = classify_line(line)
        if kind in (LineKind.BLANK, LineKind.SEPARATOR) or kind is skip:
            continue
        if len(line.split()) >= min_tokens:
            return index
    return -1


def parse_column_names(header_line: str) -> List[str]:
    """Column names from a header, assuming 2+ spaces between columns."""
    names = [col.strip() for col in _WIDE_GAP_RE.split(header_line) if col.strip()]
    if not names:
        names = header_line.split()
    return names


def skip_separators(lines: List[str], start: int) -> int:
    """First index at or after ``start`` that is not a separator line."""
    index = start
    while index < len(lines) and is_separator_line(lines[index]):
        index += 1
    return index
