from __future__ import annotations

"""Outline entries derived from a :data:`Document` for selective export."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .document import HEADING_LEVELS

__all__ = ["SectionKind", "Section"]


class SectionKind(str, Enum):
    DIVIDER = "divider"
    ACCORDION = "accordion"
    PARAGRAPH_HEADING = "paragraph-header"


@dataclass(frozen=True)
class Section:
    """A selectable outline entry pointing back into the document.

    ``block_index`` is the document index at which the section begins and
    ``element_index`` the position of the heading inside that paragraph's
    items (paragraph headings only). Ids are unique within one derivation.
    """

    id: int
    title: str
    level: int
    block_index: int
    kind: SectionKind
    element_index: Optional[int] = None
    selected: bool = True

    def __post_init__(self) -> None:
        if self.level not in HEADING_LEVELS:
            raise ValueError(f"Section level must be 1..3, got {self.level!r}")
