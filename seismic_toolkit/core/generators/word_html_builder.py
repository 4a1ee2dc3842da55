from __future__ import annotations

"""Rendering of a :data:`Document` into HTML that Word pastes as rich text.

Headings carry ``mso-style-name`` / ``mso-outline-level`` so Word maps them
onto its built-in heading styles; tables get explicit borders and a shaded
header row; spacing between blocks is emitted as empty "Normal" paragraphs.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging
import re

from lxml import etree as ET
from lxml import html as lxml_html

from seismic_toolkit.config import ConfigManager
from seismic_toolkit.core.models import (
    Accordion,
    Block,
    Cell,
    Divider,
    InlineElement,
    InlineKind,
    Paragraph,
    Row,
    Table,
)

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_HEADING_STYLES",
    "BODY_STYLESHEET",
    "SPACER_STYLE",
    "heading_styles_from_config",
    "needs_spacer_between",
    "render_word_html",
]

DEFAULT_HEADING_STYLES: Dict[int, str] = {
    1: "mso-style-name:'Heading 1'; mso-outline-level:1; font-size:28px; color:#1a202c; "
       "margin:24px 0 12px 0; font-weight:bold;",
    2: "mso-style-name:'Heading 2'; mso-outline-level:2; font-size:22px; color:#2d3748; "
       "margin:20px 0 10px 0; font-weight:bold;",
    3: "mso-style-name:'Heading 3'; mso-outline-level:3; font-size:16px; color:#4a5568; "
       "margin:16px 0 8px 0; font-weight:bold;",
}

BODY_STYLESHEET = "body{font-family:Calibri,Arial,sans-serif;font-size:11pt;max-width:100%;}"
TABLE_STYLE = "width:100%; table-layout:fixed; border-collapse:collapse; margin:12px 0;"
CELL_STYLE = "border:1px solid #333; padding:8px; word-wrap:break-word;"
HEADER_CELL_STYLE = CELL_STYLE + " font-weight:bold; background-color:#f0f0f0;"
CELL_PARAGRAPH_STYLE = "margin:4px 0;"
SPACER_STYLE = "mso-style-name:'Normal'; margin:0; line-height:100%;"
TEXT_STYLE = "margin:0 0 0 0;"
FALLBACK_PARAGRAPH_STYLE = "margin:6px 0;"
LIST_ITEM_STYLE = "margin:4px 0;"

_CELL_PARAGRAPHS = re.compile(r"\n\n+")

_EMPHASIS_WRAPPERS = {
    InlineKind.BOLD: ("strong",),
    InlineKind.ITALIC: ("em",),
    InlineKind.BOLD_ITALIC: ("strong", "em"),
}


def heading_styles_from_config(config: Optional[Mapping[str, Any]] = None) -> Dict[int, str]:
    """Merge the ``word_styles.headings`` config section over the defaults."""
    if config is None:
        config = ConfigManager().get_word_styles()
    styles = dict(DEFAULT_HEADING_STYLES)
    for key, css in ((config or {}).get("headings") or {}).items():
        try:
            level = int(key)
        except (TypeError, ValueError):
            logger.warning("Ignoring heading style for unknown level %r", key)
            continue
        if level in styles and isinstance(css, str) and css.strip():
            styles[level] = css.strip()
    return styles


# ---------------------------------------------------------------------------
# Element helpers
# ---------------------------------------------------------------------------

def _append_markup(parent: ET._Element, markup: str) -> None:
    """Append an HTML fragment (text and elements) to *parent*."""
    for part in lxml_html.fragments_fromstring(markup):
        if isinstance(part, str):
            if len(parent):
                last = parent[-1]
                last.tail = (last.tail or "") + part
            else:
                parent.text = (parent.text or "") + part
        else:
            parent.append(part)


def _append_spacer(parent: ET._Element) -> None:
    p = ET.SubElement(parent, "p", style=SPACER_STYLE)
    span = ET.SubElement(p, "span", style="font-size:11pt;")
    span.text = "\u00a0"


def _text_style(element: InlineElement) -> str:
    if element.font_size:
        return f"{TEXT_STYLE}font-size:{element.font_size}pt;"
    return TEXT_STYLE


def _append_heading(parent: ET._Element, text: str, level: int, styles: Mapping[int, str]) -> None:
    heading = ET.SubElement(parent, f"h{level}", style=styles[level])
    heading.text = text


# ---------------------------------------------------------------------------
# Block renderers
# ---------------------------------------------------------------------------

def _render_items(parent: ET._Element, items: Sequence[InlineElement],
                  styles: Mapping[int, str]) -> None:
    lists: List[ET._Element] = []

    for element in items:
        if element.kind is InlineKind.LIST_ITEM:
            level = element.level or 1
            while len(lists) < level:
                indent = len(lists) * 20
                container = lists[-1] if lists else parent
                lists.append(ET.SubElement(container, "ul", style=f"margin:8px 0 8px {20 + indent}px;"))
            while len(lists) > level:
                lists.pop()
            li = ET.SubElement(lists[-1], "li", style=LIST_ITEM_STYLE)
            if element.rich_content:
                _append_markup(li, element.rich_content)
            else:
                li.text = element.content
            continue

        lists.clear()
        if element.kind is InlineKind.HEADING:
            _append_heading(parent, element.content, element.level, styles)
        elif element.kind is InlineKind.BREAK:
            _append_spacer(parent)
        elif element.kind in _EMPHASIS_WRAPPERS:
            node = ET.SubElement(parent, "p", style=_text_style(element))
            for tag in _EMPHASIS_WRAPPERS[element.kind]:
                node = ET.SubElement(node, tag)
            node.text = element.content
        else:
            p = ET.SubElement(parent, "p", style=_text_style(element))
            if element.rich_content:
                _append_markup(p, element.rich_content)
            else:
                p.text = element.content


def _render_paragraph(parent: ET._Element, block: Paragraph, styles: Mapping[int, str]) -> None:
    if block.items:
        _render_items(parent, block.items, styles)
    elif block.text:
        ET.SubElement(parent, "p", style=FALLBACK_PARAGRAPH_STYLE).text = block.text


def _render_cell(tr: ET._Element, cell: Cell, header: bool) -> None:
    td = ET.SubElement(tr, "td", style=HEADER_CELL_STYLE if header else CELL_STYLE)
    source = cell.rich_content or cell.content
    segments = [s.strip() for s in _CELL_PARAGRAPHS.split(source) if s.strip()]
    if not segments:
        td.text = source
        return
    for segment in segments:
        p = ET.SubElement(td, "p", style=CELL_PARAGRAPH_STYLE)
        if cell.rich_content:
            _append_markup(p, segment)
            if not p.text_content().strip():
                td.remove(p)
        else:
            p.text = segment


def _render_table(parent: ET._Element, rows: Sequence[Row]) -> None:
    if not rows:
        return
    table = ET.SubElement(parent, "table", style=TABLE_STYLE)
    for index, row in enumerate(rows):
        tr = ET.SubElement(table, "tr")
        for cell in row:
            _render_cell(tr, cell, header=index == 0)


def _render_block(parent: ET._Element, block: Block, styles: Mapping[int, str]) -> None:
    if isinstance(block, Paragraph):
        _render_paragraph(parent, block, styles)
    elif isinstance(block, Table):
        _render_table(parent, block.rows)
    elif isinstance(block, Divider):
        if block.title:
            _append_heading(parent, block.title, 1, styles)
    elif isinstance(block, Accordion):
        _append_heading(parent, block.title, 2, styles)
        for child in block.children:
            _render_block(parent, child, styles)


def needs_spacer_between(previous: Optional[Block], current: Block) -> bool:
    """Return True when an empty spacer paragraph belongs between two blocks."""
    if previous is None:
        return False
    # Divider and accordion headings carry their own margins.
    if isinstance(current, (Divider, Accordion)) or isinstance(previous, (Divider, Accordion)):
        return False
    if isinstance(current, Paragraph) and current.starts_with_heading:
        return False
    if isinstance(previous, Paragraph) and previous.ends_with_break:
        return False
    if type(previous) is not type(current):
        return True
    return isinstance(current, Table)


def render_word_html(document: Sequence[Block],
                     heading_styles: Optional[Mapping[int, str]] = None) -> str:
    """Render *document* as a self-contained HTML string for Word paste.

    Blocks are emitted in document order. Plain text is escaped by the
    serializer; ``rich_content`` fragments are inserted as markup.
    """
    styles = dict(heading_styles) if heading_styles is not None else heading_styles_from_config()

    root = ET.Element("html")
    head = ET.SubElement(root, "head")
    ET.SubElement(head, "style").text = BODY_STYLESHEET
    body = ET.SubElement(root, "body")

    previous: Optional[Block] = None
    for block in document:
        if needs_spacer_between(previous, block):
            _append_spacer(body)
        _render_block(body, block, styles)
        previous = block

    markup = lxml_html.tostring(root, encoding="unicode", method="html")
    logger.debug("Rendered %d blocks into %d chars", len(document), len(markup))
    return markup
