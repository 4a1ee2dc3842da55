from __future__ import annotations

"""Section index and selection helpers (UI-agnostic).

Sections are derived from a :data:`Document` and never stored on their own:
regenerate them whenever the document changes. Every function here is pure;
selection changes return a new tuple of sections and never touch the
document.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from seismic_toolkit.core.models import (
    Accordion,
    Divider,
    Document,
    Paragraph,
    Section,
    SectionKind,
)

logger = logging.getLogger(__name__)

__all__ = [
    "derive_sections",
    "toggle_section",
    "select_all",
    "deselect_all",
    "owning_section",
    "filter_document",
]


def derive_sections(document: Document) -> Tuple[Section, ...]:
    """Return the flat outline of *document*.

    Titled dividers are level 1, accordions level 2 (their children are not
    indexed), and every heading item of a top-level paragraph is indexed at
    its own level. Ids follow traversal order.
    """
    sections: List[Section] = []

    def add(title: str, level: int, index: int, kind: SectionKind,
            element_index: Optional[int] = None) -> None:
        sections.append(Section(
            id=len(sections),
            title=title,
            level=level,
            block_index=index,
            kind=kind,
            element_index=element_index,
        ))

    for index, block in enumerate(document):
        if isinstance(block, Divider):
            # Untitled dividers render no heading and do not open a section.
            if block.title:
                add(block.title, 1, index, SectionKind.DIVIDER)
        elif isinstance(block, Accordion):
            add(block.title, 2, index, SectionKind.ACCORDION)
        elif isinstance(block, Paragraph):
            for position, item in enumerate(block.items):
                if item.is_heading:
                    add(item.content, item.level, index, SectionKind.PARAGRAPH_HEADING, position)

    logger.debug("Derived %d sections", len(sections))
    return tuple(sections)


def toggle_section(sections: Sequence[Section], section_id: int) -> Tuple[Section, ...]:
    """Flip the selection of one section and cascade through the outline.

    Deselecting also deselects the following sections that are deeper than
    the target, up to the first one at the same level or shallower.
    Selecting also re-selects the preceding shallower sections (its
    ancestors), stopping after the first level-1 section. Unknown ids leave
    the sections unchanged.
    """
    updated = list(sections)
    target = next((i for i, s in enumerate(updated) if s.id == section_id), None)
    if target is None:
        logger.debug("Toggle ignored: unknown section id=%s", section_id)
        return tuple(sections)

    section = updated[target]
    selected = not section.selected
    updated[target] = replace(section, selected=selected)

    if not selected:
        for i in range(target + 1, len(updated)):
            if updated[i].level <= section.level:
                break
            updated[i] = replace(updated[i], selected=False)
    else:
        for i in range(target - 1, -1, -1):
            if updated[i].level < section.level:
                updated[i] = replace(updated[i], selected=True)
                if updated[i].level == 1:
                    break

    return tuple(updated)


def select_all(sections: Sequence[Section]) -> Tuple[Section, ...]:
    return tuple(replace(s, selected=True) for s in sections)


def deselect_all(sections: Sequence[Section]) -> Tuple[Section, ...]:
    return tuple(replace(s, selected=False) for s in sections)


def _sections_by_index(sections: Sequence[Section]) -> Dict[int, Section]:
    # Several headings of one paragraph share a block index; the last one wins.
    return {section.block_index: section for section in sections}


def owning_section(sections: Sequence[Section], index: int) -> Optional[Section]:
    """Return the section starting at *index*, else the nearest one before it."""
    by_index = _sections_by_index(sections)
    for candidate in range(index, -1, -1):
        if candidate in by_index:
            return by_index[candidate]
    return None


def filter_document(document: Document, sections: Sequence[Section]) -> Document:
    """Return *document* restricted to blocks whose owning section is selected.

    Content before the first section is always kept.
    """
    if not sections:
        return tuple(document)

    by_index = _sections_by_index(sections)
    kept = []
    owner: Optional[Section] = None
    for index, block in enumerate(document):
        if index in by_index:
            owner = by_index[index]
        if owner is None or owner.selected:
            kept.append(block)

    logger.debug("Filtered document: kept %d of %d blocks", len(kept), len(document))
    return tuple(kept)
