"""Parse, validate, and materialize a question in one call."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Optional, Tuple

from ._types import ParsedQuestion, TableInfo
from .parser import parse_question, validate_parsed_question

if TYPE_CHECKING:
    from .warehouse import WarehouseClient

logger = logging.getLogger(__name__)


def load_question(
    question_text: str,
    client: "WarehouseClient",
    dataset_id: Optional[str] = None,
    today: Optional[date] = None,
) -> Tuple[ParsedQuestion, TableInfo]:
    """Parse question text and load its input table into the warehouse.

    The table is only created when validation passes.

    Args:
        question_text: Raw question text.
        client: Warehouse to create the table in.
        dataset_id: Target dataset; defaults to the client's dataset.
        today: Date for the table name suffix (defaults to today).

    Returns:
        Tuple of (parsed question, created table info).

    Raises:
        ParseError: If the text cannot be parsed.
        ValidationError: If the parsed structure is inconsistent.
    """
    parsed = parse_question(question_text, today=today)
    validate_parsed_question(parsed)
    table_info = client.create_question_table(parsed, dataset_id=dataset_id)
    logger.info("Loaded question table %s", table_info.full_table_path)
    return parsed, table_info
