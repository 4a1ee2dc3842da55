from __future__ import annotations

"""Low-level lxml helpers shared by the classifier, table extractor and parser.

All helpers operate on ``lxml.html`` elements. Functions that rewrite a tree
are only ever applied to deep copies so the parsed source stays untouched.
"""

import copy
import re
from html import escape
from typing import Dict, Iterable, Optional, Tuple

from lxml import etree as ET
from lxml import html as lxml_html

__all__ = [
    "NBSP",
    "EMPHASIS_TAGS",
    "BOLD_TAGS",
    "ITALIC_TAGS",
    "LIST_TAGS",
    "ALL_HEADING_TAGS",
    "class_predicate",
    "has_class",
    "find_first_by_class",
    "closest",
    "count_ancestors",
    "clone",
    "remove_descendants",
    "replace_with_text",
    "insert_text_before",
    "inner_html",
    "emphasis_markup",
    "is_whitespace_only",
    "collapse_whitespace",
    "normalize_cell_text",
    "parse_font_size",
    "DocumentOrder",
]

NBSP = "\u00a0"

BOLD_TAGS = frozenset({"b", "strong"})
ITALIC_TAGS = frozenset({"i", "em"})
EMPHASIS_TAGS = BOLD_TAGS | ITALIC_TAGS
LIST_TAGS = frozenset({"ul", "ol"})
ALL_HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

_NBSP_ENTITIES = re.compile(r"&nbsp;|&#160;|&#xa0;|\u00a0", re.IGNORECASE)
_FONT_SIZE_PATTERN = re.compile(r"font-size\s*:\s*(\d+)", re.IGNORECASE)
_BLANK_LINES = re.compile(r"\n\s*\n")
_SPACES = re.compile(r"[ \t]+")
_WHITESPACE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Selection helpers
# ---------------------------------------------------------------------------

def class_predicate(class_name: str) -> str:
    """Return an XPath predicate body matching *class_name* as a whole token."""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {class_name} ')"


def has_class(element: ET._Element, class_name: str) -> bool:
    return class_name in (element.get("class") or "").split()


def find_first_by_class(element: ET._Element, class_name: str) -> Optional[ET._Element]:
    """Return the first descendant (document order) carrying *class_name*."""
    matches = element.xpath(f".//*[{class_predicate(class_name)}]")
    return matches[0] if matches else None


def _tag(element: ET._Element) -> str:
    tag = element.tag
    return tag.lower() if isinstance(tag, str) else ""


def closest(element: ET._Element, tags: Iterable[str] = (), classes: Iterable[str] = (),
            stop: Optional[ET._Element] = None) -> Optional[ET._Element]:
    """Return *element* or its nearest ancestor matching a tag or class.

    The walk does not go above *stop* (which is itself never matched).
    """
    tags = frozenset(tags)
    classes = tuple(classes)
    node = element
    while node is not None and node is not stop:
        if _tag(node) in tags or any(has_class(node, c) for c in classes):
            return node
        node = node.getparent()
    return None


def count_ancestors(element: ET._Element, tags: Iterable[str],
                    stop: Optional[ET._Element] = None) -> int:
    """Count strict ancestors of *element* whose tag is in *tags*.

    When *stop* is given, ancestors above it are not counted (``stop`` itself is).
    """
    tags = frozenset(tags)
    count = 0
    node = element.getparent()
    while node is not None:
        if _tag(node) in tags:
            count += 1
        if node is stop:
            break
        node = node.getparent()
    return count


# ---------------------------------------------------------------------------
# Tree rewriting (always on clones)
# ---------------------------------------------------------------------------

def clone(element: ET._Element) -> ET._Element:
    """Deep-copy *element* without its tail text."""
    copied = copy.deepcopy(element)
    copied.tail = None
    return copied


def remove_descendants(element: ET._Element, xpath: str) -> None:
    """Drop every descendant matched by *xpath*, keeping their tail text."""
    for node in element.xpath(xpath):
        node.drop_tree()


def replace_with_text(element: ET._Element, text: str) -> None:
    """Replace *element* (and its subtree) by a text node."""
    element.tail = text + (element.tail or "")
    element.drop_tree()


def insert_text_before(element: ET._Element, text: str) -> None:
    previous = element.getprevious()
    if previous is not None:
        previous.tail = (previous.tail or "") + text
        return
    parent = element.getparent()
    if parent is not None:
        parent.text = (parent.text or "") + text


def inner_html(element: ET._Element) -> str:
    """Serialize the children of *element* (like the DOM ``innerHTML``)."""
    parts = [escape(element.text or "", quote=False)]
    for child in element:
        parts.append(lxml_html.tostring(child, encoding="unicode", with_tail=True))
    return "".join(parts)


def emphasis_markup(element: ET._Element) -> Optional[str]:
    """Reduce *element*'s descendants to bare emphasis tags; return inner markup.

    Line breaks and comments are removed, every non-emphasis tag is unwrapped
    (its text kept) and emphasis tags lose their attributes. Emphasis tags
    left without visible text are unwrapped too. Returns ``None`` when no
    emphasis tag survives. Mutates *element*: pass a clone.
    """
    for node in list(element.iterdescendants()):
        tag = _tag(node)
        if not tag or tag == "br":
            node.drop_tree()
        elif tag in EMPHASIS_TAGS:
            node.attrib.clear()
        else:
            node.drop_tag()

    for node in list(element.iterdescendants()):
        if not node.text_content().strip():
            node.drop_tag()

    if len(element) == 0:
        return None
    return inner_html(element)


# ---------------------------------------------------------------------------
# Text normalisation
# ---------------------------------------------------------------------------

def is_whitespace_only(text: str) -> bool:
    """Return True when *text* holds nothing but whitespace / non-breaking spaces."""
    return not text.replace(NBSP, " ").strip()


def collapse_whitespace(text: str) -> str:
    """Fold non-breaking spaces and collapse all whitespace runs to one space."""
    return _WHITESPACE.sub(" ", _NBSP_ENTITIES.sub(" ", text)).strip()


def normalize_cell_text(text: str) -> str:
    """Normalise table-cell text while keeping ``"\\n\\n"`` paragraph breaks."""
    text = _NBSP_ENTITIES.sub(" ", text)
    text = _BLANK_LINES.sub("\n\n", text)
    text = _SPACES.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    return text.strip()


def parse_font_size(element: ET._Element) -> Optional[int]:
    """Return the leading integer of the inline ``font-size`` declaration."""
    match = _FONT_SIZE_PATTERN.search(element.get("style") or "")
    return int(match.group(1)) if match else None


# ---------------------------------------------------------------------------
# Document order
# ---------------------------------------------------------------------------

class DocumentOrder:
    """Stable document-order keys for elements and the text that follows them.

    Indices are assigned once by a pre-order walk of *root*, comments included.
    A node's key is ``(index, 0)``; the text following it (its ``tail``) sorts
    after its whole subtree, at ``(last_descendant_index, 1)``. The leading text
    of *root* sorts right after *root* itself.
    """

    def __init__(self, root: ET._Element) -> None:
        self._index: Dict[ET._Element, int] = {
            node: i for i, node in enumerate(root.iter())
        }

    def of(self, element: ET._Element) -> Tuple[int, int]:
        return (self._index[element], 0)

    def of_text_after(self, element: ET._Element) -> Tuple[int, int]:
        last = element
        for last in element.iter():
            pass
        return (self._index[last], 1)

    def of_leading_text(self, element: ET._Element) -> Tuple[int, int]:
        return (self._index[element], 1)
