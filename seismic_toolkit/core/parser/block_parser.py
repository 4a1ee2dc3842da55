from __future__ import annotations

"""Widget-level parsing of a Seismic page export.

Every element carrying ``data-testid`` is a widget. The parse runs in two
passes over the widgets in source order:

1. resolve every accordion's title and heading level, and map each other
   widget to its nearest enclosing accordion;
2. build blocks: paragraph and table widgets inside an accordion become its
   children, everything else lands in the top-level document.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union
import logging

from lxml import etree as ET
from lxml import html as lxml_html

from seismic_toolkit.core.exceptions import EmptyInputError
from seismic_toolkit.core.models import (
    Accordion,
    Block,
    Divider,
    Document,
    Paragraph,
    Table,
)
from seismic_toolkit.core.parser.classifier import (
    DEFAULT_THRESHOLDS,
    ClaimedTexts,
    ClassifierThresholds,
    classify_fragment,
)
from seismic_toolkit.core.parser.html_utils import find_first_by_class, has_class
from seismic_toolkit.core.parser.table_extractor import extract_table

logger = logging.getLogger(__name__)

__all__ = [
    "WIDGET_PARAGRAPH",
    "WIDGET_TABLE",
    "WIDGET_DIVIDER",
    "WIDGET_ACCORDION",
    "DEFAULT_ACCORDION_TITLE",
    "parse_document",
]

WIDGET_PARAGRAPH = "page.paragraph"
WIDGET_TABLE = "page.table"
WIDGET_DIVIDER = "page.divider"
WIDGET_ACCORDION = "page.accordion"
# Marks the rich-text body wrapper, not a widget of its own.
RICH_CONTENT_TESTID = "seismic-page-richContent"

RICH_TEXT_CLASS = "seismic-page-RichTextView-content"
DIVIDER_HEADER_CLASS = "seismic-page-divider-view"
DIVIDER_LABEL_CLASS = "seismic-page-divider-view-text"
VIRTUAL_LABEL_CLASS = "seismic-page-divider-view-text-virtual"
HEADING_LEVEL_CLASSES = {"__heading1": 1, "__heading2": 2, "__heading3": 3}

DEFAULT_ACCORDION_TITLE = "Untitled Section"
DEFAULT_HEADER_LEVEL = 2


@dataclass
class _AccordionDraft:
    title: str
    level: int
    children: List[Union[Paragraph, Table]] = field(default_factory=list)

    def build(self) -> Accordion:
        return Accordion(title=self.title, level=self.level, children=tuple(self.children))


def _label_text(widget: ET._Element, class_name: str) -> str:
    label = find_first_by_class(widget, class_name)
    return label.text_content().strip() if label is not None else ""


def _header_level(widget: ET._Element) -> int:
    header = find_first_by_class(widget, DIVIDER_HEADER_CLASS)
    if header is None:
        return DEFAULT_HEADER_LEVEL
    for class_name, level in HEADING_LEVEL_CLASSES.items():
        if has_class(header, class_name):
            return level
    return DEFAULT_HEADER_LEVEL


def _accordion_title(widget: ET._Element) -> str:
    return (
        _label_text(widget, VIRTUAL_LABEL_CLASS)
        or _label_text(widget, DIVIDER_LABEL_CLASS)
        or DEFAULT_ACCORDION_TITLE
    )


def _enclosing_accordion(widget: ET._Element) -> Optional[ET._Element]:
    found = widget.xpath(f"ancestor::*[@data-testid='{WIDGET_ACCORDION}'][1]")
    return found[0] if found else None


def _load_root(raw: str) -> Optional[ET._Element]:
    try:
        return lxml_html.document_fromstring(raw)
    except (ET.ParserError, ValueError) as exc:
        logger.warning("Source markup could not be parsed: %s", exc)
        return None


def parse_document(raw: str, thresholds: ClassifierThresholds = DEFAULT_THRESHOLDS) -> Document:
    """Parse vendor markup into a :data:`Document`.

    Raises
    ------
    EmptyInputError
        If *raw* is blank after trimming.

    Returns an empty tuple when no recognizable widget was found; callers
    report that as :class:`~seismic_toolkit.core.exceptions.NoContentFound`.
    """
    if raw is None or not raw.strip():
        raise EmptyInputError()

    root = _load_root(raw.strip())
    if root is None:
        return ()

    widgets = root.xpath("//*[@data-testid]")

    # Pass 1: accordions and widget -> accordion mapping
    accordions: Dict[ET._Element, _AccordionDraft] = {}
    owner: Dict[ET._Element, _AccordionDraft] = {}
    for widget in widgets:
        if widget.get("data-testid") == WIDGET_ACCORDION:
            accordions[widget] = _AccordionDraft(_accordion_title(widget), _header_level(widget))
    for widget in widgets:
        if widget.get("data-testid") == WIDGET_ACCORDION:
            continue
        parent = _enclosing_accordion(widget)
        if parent is not None and parent in accordions:
            owner[widget] = accordions[parent]

    # Pass 2: blocks in source order; accordions are finalised at the end
    entries: List[Union[Block, _AccordionDraft]] = []
    claimed = ClaimedTexts()
    for widget in widgets:
        test_id = widget.get("data-testid")
        if test_id == RICH_CONTENT_TESTID:
            continue
        block: Optional[Union[Paragraph, Table]] = None

        if test_id == WIDGET_PARAGRAPH:
            body = find_first_by_class(widget, RICH_TEXT_CLASS)
            if body is None:
                continue
            items, claimed = classify_fragment(body, claimed, thresholds)
            block = Paragraph(items=items, text=body.text_content().strip())
        elif test_id == WIDGET_TABLE:
            table = widget.find(".//table")
            if table is None:
                continue
            block = Table(rows=extract_table(table))
        elif test_id == WIDGET_ACCORDION:
            entries.append(accordions[widget])
            continue
        elif test_id == WIDGET_DIVIDER:
            entries.append(Divider(title=_label_text(widget, DIVIDER_LABEL_CLASS),
                                   level=_header_level(widget)))
            continue
        else:
            continue

        if widget in owner:
            owner[widget].children.append(block)
        else:
            entries.append(block)

    document: Tuple[Block, ...] = tuple(
        entry.build() if isinstance(entry, _AccordionDraft) else entry for entry in entries
    )
    tables = sum(1 for block in document if isinstance(block, Table))
    logger.info("Parsed %d blocks (%d tables)", len(document), tables)
    return document
