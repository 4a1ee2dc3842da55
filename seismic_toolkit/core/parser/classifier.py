from __future__ import annotations

"""Semantic classification of rich-text widget bodies.

The vendor export carries no typed schema for paragraph content: headings
may be real ``<h1>``-``<h3>`` tags or spans with a large inline font size,
paragraphs are nested ``<div>`` lines, and bare runs of text sit directly in
the container. :func:`classify_fragment` applies five independent rules,
each skipping text already claimed by an earlier one, then merges the
candidates back into document order:

1. native headings (``h1``-``h3``)
2. font-size styled headings
3. list items, with their nesting depth
4. innermost ``<div>`` lines (text or explicit breaks)
5. top-level inline runs (plain / bold / italic text)

Text claimed while classifying is threaded through calls via
:class:`ClaimedTexts` so de-duplication spans a whole parse.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple
import logging

from lxml import etree as ET

from seismic_toolkit.core.models import InlineElement, InlineKind
from seismic_toolkit.core.parser.html_utils import (
    ALL_HEADING_TAGS,
    BOLD_TAGS,
    ITALIC_TAGS,
    LIST_TAGS,
    DocumentOrder,
    closest,
    clone,
    collapse_whitespace,
    count_ancestors,
    emphasis_markup,
    has_class,
    is_whitespace_only,
    parse_font_size,
    remove_descendants,
)

logger = logging.getLogger(__name__)

__all__ = [
    "H1_MIN_FONT_SIZE",
    "H2_MIN_FONT_SIZE",
    "H3_MIN_FONT_SIZE",
    "ANCHOR_CONTAINER_CLASS",
    "ClassifierThresholds",
    "ClaimedTexts",
    "classify_fragment",
]

# Font-size cutoffs for styled headings. Level 3 additionally needs bold.
H1_MIN_FONT_SIZE = 28
H2_MIN_FONT_SIZE = 20
H3_MIN_FONT_SIZE = 16

ANCHOR_CONTAINER_CLASS = "seismic-page-anchor-container"
BLOCK_CONTAINER_TAG = "div"

_NATIVE_HEADING_XPATH = ".//h1|.//h2|.//h3"
_STYLED_RUN_XPATH = ".//span[contains(@style, 'font-size')]"
_NESTED_LIST_XPATH = ".//ul|.//ol"
_CONTAINER_NOISE_XPATH = (
    ".//h1|.//h2|.//h3|.//h4|.//h5|.//h6|.//ul|.//ol|.//div"
    f"|.//*[contains(concat(' ', normalize-space(@class), ' '), ' {ANCHOR_CONTAINER_CLASS} ')]"
)
_SKIPPED_TOP_LEVEL_TAGS = frozenset({BLOCK_CONTAINER_TAG}) | ALL_HEADING_TAGS | LIST_TAGS


@dataclass(frozen=True)
class ClassifierThresholds:
    """Font-size cutoffs used by the styled-heading rule."""

    h1_min: int = H1_MIN_FONT_SIZE
    h2_min: int = H2_MIN_FONT_SIZE
    h3_min: int = H3_MIN_FONT_SIZE

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "ClassifierThresholds":
        """Build thresholds from the ``classifier`` config section.

        Unknown or non-integer values are ignored with a warning.
        """
        defaults = cls()
        values = {}
        for field_name, key in (("h1_min", "h1_min_font_size"),
                                ("h2_min", "h2_min_font_size"),
                                ("h3_min", "h3_min_font_size")):
            raw = (config or {}).get(key)
            if raw is None:
                continue
            try:
                values[field_name] = int(raw)
            except (TypeError, ValueError):
                logger.warning("Ignoring invalid classifier setting %s=%r", key, raw)
        if not values:
            return defaults
        return cls(**values)

    def heading_level(self, font_size: int, bold: bool) -> Optional[int]:
        if font_size >= self.h1_min:
            return 1
        if font_size >= self.h2_min:
            return 2
        if font_size >= self.h3_min and bold:
            return 3
        return None


DEFAULT_THRESHOLDS = ClassifierThresholds()


@dataclass(frozen=True)
class ClaimedTexts:
    """Ordered, immutable set of text already captured during a parse."""

    spans: Tuple[str, ...] = ()

    def __contains__(self, text: object) -> bool:
        return text in self.spans

    def __len__(self) -> int:
        return len(self.spans)

    def add(self, text: str) -> "ClaimedTexts":
        if text in self.spans:
            return self
        return ClaimedTexts(self.spans + (text,))

    def covers(self, text: str) -> bool:
        """True when *text* is a fragment of (contained in, and no longer than) a claim.

        Longer text that merely contains a claimed span is not covered.
        """
        return any(text in span and len(text) <= len(span) for span in self.spans)


@dataclass(frozen=True)
class _Candidate:
    position: Tuple[int, int]
    element: InlineElement


def _inline_rich(element: ET._Element) -> Optional[str]:
    markup = emphasis_markup(element)
    if markup is None:
        return None
    return collapse_whitespace(markup) or None


def _has_bold_context(run: ET._Element, fragment: ET._Element) -> bool:
    if run.xpath(".//b|.//strong"):
        return True
    return closest(run.getparent(), tags=BOLD_TAGS, stop=fragment) is not None


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def _native_headings(fragment, order, claimed):
    found: List[_Candidate] = []
    for heading in fragment.xpath(_NATIVE_HEADING_XPATH):
        text = heading.text_content().strip()
        if not text:
            continue
        level = int(heading.tag[1])
        found.append(_Candidate(order.of(heading), InlineElement.heading(text, level)))
        claimed = claimed.add(text)
    return found, claimed


def _styled_headings(fragment, order, claimed, thresholds):
    found: List[_Candidate] = []
    for run in fragment.xpath(_STYLED_RUN_XPATH):
        text = run.text_content().strip()
        if not text or text in claimed:
            continue
        size = parse_font_size(run)
        if size is None:
            continue
        level = thresholds.heading_level(size, _has_bold_context(run, fragment))
        if level is None:
            continue
        found.append(_Candidate(order.of(run), InlineElement.heading(text, level)))
        claimed = claimed.add(text)
    return found, claimed


def _list_items(fragment, order, claimed):
    found: List[_Candidate] = []
    for item in fragment.xpath(".//li"):
        level = max(1, count_ancestors(item, LIST_TAGS, stop=fragment))
        copy_ = clone(item)
        remove_descendants(copy_, _NESTED_LIST_XPATH)
        text = copy_.text_content().strip()
        if not text or text in claimed:
            continue
        element = InlineElement.list_item(text, level, rich_content=_inline_rich(copy_))
        found.append(_Candidate(order.of(item), element))
        claimed = claimed.add(text)
    return found, claimed


def _is_container_candidate(div: ET._Element, fragment: ET._Element) -> bool:
    if closest(div, tags=LIST_TAGS, stop=fragment) is not None:
        return False
    if closest(div, tags=ALL_HEADING_TAGS, classes=(ANCHOR_CONTAINER_CLASS,), stop=fragment) is not None:
        return False
    for child in div:
        if child.tag == BLOCK_CONTAINER_TAG and not has_class(child, ANCHOR_CONTAINER_CLASS):
            return False
    return True


def _block_containers(fragment, order, claimed):
    found: List[_Candidate] = []
    for div in fragment.xpath(f".//{BLOCK_CONTAINER_TAG}"):
        if not _is_container_candidate(div, fragment):
            continue

        copy_ = clone(div)
        remove_descendants(copy_, _CONTAINER_NOISE_XPATH)
        raw_text = copy_.text_content()
        blank = is_whitespace_only(raw_text)
        text = raw_text.strip()

        if not text or blank:
            if blank or copy_.find(".//br") is not None:
                found.append(_Candidate(order.of(div), InlineElement.line_break()))
            continue

        if claimed.covers(text):
            continue

        styled = div.xpath(_STYLED_RUN_XPATH)
        font_size = parse_font_size(styled[0]) if styled else None
        element = InlineElement.text(text, rich_content=_inline_rich(copy_), font_size=font_size)
        found.append(_Candidate(order.of(div), element))
        claimed = claimed.add(text)
    return found, claimed


def _emphasis_kind(node: ET._Element) -> InlineKind:
    tag = node.tag.lower()
    bold = tag in BOLD_TAGS or bool(node.xpath(".//b|.//strong"))
    italic = tag in ITALIC_TAGS or bool(node.xpath(".//i|.//em"))
    if bold and italic:
        return InlineKind.BOLD_ITALIC
    if bold:
        return InlineKind.BOLD
    if italic:
        return InlineKind.ITALIC
    return InlineKind.TEXT


def _top_level_runs(fragment, order, claimed):
    """Yield bare text and inline elements sitting directly in *fragment*."""
    runs: List[Tuple[Tuple[int, int], str, InlineKind]] = []
    if fragment.text:
        runs.append((order.of_leading_text(fragment), fragment.text, InlineKind.TEXT))
    for child in fragment:
        if isinstance(child.tag, str) and child.tag.lower() not in _SKIPPED_TOP_LEVEL_TAGS:
            runs.append((order.of(child), child.text_content(), _emphasis_kind(child)))
        if child.tail:
            runs.append((order.of_text_after(child), child.tail, InlineKind.TEXT))

    found: List[_Candidate] = []
    for position, raw_text, kind in runs:
        text = raw_text.strip()
        if not text or is_whitespace_only(text):
            continue
        if claimed.covers(text):
            continue
        found.append(_Candidate(position, InlineElement(kind, text)))
        claimed = claimed.add(text)
    return found, claimed


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------

def _merge(candidates: List[_Candidate], seen: ClaimedTexts) -> Tuple[InlineElement, ...]:
    """Sort *candidates* into document order and drop duplicate content.

    Breaks are exempt from de-duplication, except that a break directly after
    a heading is dropped. *seen* holds content emitted by earlier paragraphs.
    """
    merged: List[InlineElement] = []
    seen_content = set(seen.spans)
    for candidate in sorted(candidates, key=lambda c: c.position):
        element = candidate.element
        if element.is_break:
            if merged and merged[-1].is_heading:
                continue
            merged.append(element)
            continue
        if not element.content or element.content in seen_content:
            continue
        seen_content.add(element.content)
        merged.append(element)
    return tuple(merged)


def classify_fragment(
    fragment: ET._Element,
    claimed: ClaimedTexts = ClaimedTexts(),
    thresholds: ClassifierThresholds = DEFAULT_THRESHOLDS,
) -> Tuple[Tuple[InlineElement, ...], ClaimedTexts]:
    """Classify the content of a rich-text body into inline elements.

    Parameters
    ----------
    fragment
        The ``seismic-page-RichTextView-content`` element of a paragraph widget.
    claimed
        Text already captured earlier in the same parse.
    thresholds
        Font-size cutoffs for the styled-heading rule.

    Returns
    -------
    tuple
        ``(items, claimed')`` where *items* are in document order and
        *claimed'* extends *claimed* with everything captured here.
    """
    order = DocumentOrder(fragment)
    incoming = claimed

    headings, claimed = _native_headings(fragment, order, claimed)
    styled, claimed = _styled_headings(fragment, order, claimed, thresholds)
    items, claimed = _list_items(fragment, order, claimed)
    lines, claimed = _block_containers(fragment, order, claimed)
    runs, claimed = _top_level_runs(fragment, order, claimed)

    merged = _merge(headings + styled + items + lines + runs, incoming)
    logger.debug(
        "Classified fragment: headings=%d styled=%d list=%d lines=%d runs=%d -> %d items",
        len(headings), len(styled), len(items), len(lines), len(runs), len(merged),
    )
    return merged, claimed
