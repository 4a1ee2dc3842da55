from __future__ import annotations

"""Conversion of table widgets into a row/cell grid."""

from typing import List, Tuple
import logging
import re

from lxml import etree as ET

from seismic_toolkit.core.models import Cell, Row
from seismic_toolkit.core.parser.html_utils import (
    clone,
    emphasis_markup,
    insert_text_before,
    normalize_cell_text,
    replace_with_text,
)

logger = logging.getLogger(__name__)

__all__ = ["PARAGRAPH_BREAK", "extract_table", "extract_cell"]

# Separator between paragraphs inside one cell.
PARAGRAPH_BREAK = "\n\n"

# Breaks at the edge of an emphasis run are moved outside it.
_BREAK_BEFORE_CLOSE = re.compile(r"(\s*\n\n\s*)((?:</(?:b|strong|i|em)>)+)")
_BREAK_AFTER_OPEN = re.compile(r"((?:<(?:b|strong|i|em)>)+)(\s*\n\n\s*)")


def _mark_paragraph_breaks(cell: ET._Element) -> None:
    """Turn ``<br>`` into breaks and start every non-empty ``<div>`` on a new paragraph."""
    for br in cell.xpath(".//br"):
        replace_with_text(br, PARAGRAPH_BREAK)
    for div in cell.xpath(".//div"):
        if div.text_content().strip():
            insert_text_before(div, PARAGRAPH_BREAK)


def extract_cell(cell: ET._Element) -> Cell:
    """Return plain and emphasis-only content for a ``<td>``/``<th>``."""
    working = clone(cell)
    _mark_paragraph_breaks(working)
    content = normalize_cell_text(working.text_content())

    markup = emphasis_markup(working)
    rich_content = None
    if markup is not None:
        markup = _BREAK_BEFORE_CLOSE.sub(r"\2\1", markup)
        markup = _BREAK_AFTER_OPEN.sub(r"\2\1", markup)
        rich_content = normalize_cell_text(markup)
    return Cell(content=content, rich_content=rich_content or None)


def extract_table(table: ET._Element) -> Tuple[Row, ...]:
    """Return the rows of *table*; rows without any cell are omitted."""
    rows: List[Row] = []
    for tr in table.xpath(".//tr"):
        cells = tuple(extract_cell(cell) for cell in tr.xpath(".//td|.//th"))
        if cells:
            rows.append(cells)
    logger.debug("Extracted table: %d rows", len(rows))
    return tuple(rows)
