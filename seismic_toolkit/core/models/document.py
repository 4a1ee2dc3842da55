from __future__ import annotations

"""Semantic document model produced by the block parser.

A :data:`Document` is a tuple of blocks in source order. Blocks and inline
elements are frozen dataclasses so a parsed document can be shared between
the section index, the filter and the serializer without defensive copies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

__all__ = [
    "InlineKind",
    "InlineElement",
    "Cell",
    "Row",
    "Paragraph",
    "Table",
    "Divider",
    "Accordion",
    "Block",
    "Document",
    "HEADING_LEVELS",
]

HEADING_LEVELS = (1, 2, 3)


class InlineKind(str, Enum):
    """Semantic role of a classified run of paragraph text."""

    HEADING = "heading"
    LIST_ITEM = "listitem"
    TEXT = "text"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bolditalic"
    BREAK = "break"


@dataclass(frozen=True)
class InlineElement:
    """One classified unit of paragraph content.

    Attributes
    ----------
    kind
        Semantic role of the element.
    content
        Plain text, used for de-duplication and as the render fallback.
        Always empty for :attr:`InlineKind.BREAK`.
    rich_content
        Markup fragment keeping only bold/italic tags, or ``None`` when the
        source carried no emphasis.
    level
        Heading level (1..3) for headings, list nesting depth (>= 1) for
        list items, ``None`` otherwise.
    font_size
        Declared font size of a text container, when one styled run was found.
    """

    kind: InlineKind
    content: str = ""
    rich_content: Optional[str] = None
    level: Optional[int] = None
    font_size: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is InlineKind.HEADING and self.level not in HEADING_LEVELS:
            raise ValueError(f"Heading level must be 1..3, got {self.level!r}")
        if self.kind is InlineKind.LIST_ITEM and (self.level is None or self.level < 1):
            raise ValueError(f"List item level must be >= 1, got {self.level!r}")

    # Convenience constructors -------------------------------------------------

    @classmethod
    def heading(cls, content: str, level: int) -> "InlineElement":
        return cls(InlineKind.HEADING, content, level=level)

    @classmethod
    def list_item(cls, content: str, level: int, rich_content: Optional[str] = None) -> "InlineElement":
        return cls(InlineKind.LIST_ITEM, content, rich_content=rich_content, level=level)

    @classmethod
    def text(cls, content: str, rich_content: Optional[str] = None,
             font_size: Optional[int] = None) -> "InlineElement":
        return cls(InlineKind.TEXT, content, rich_content=rich_content, font_size=font_size)

    @classmethod
    def line_break(cls) -> "InlineElement":
        return cls(InlineKind.BREAK)

    @property
    def is_heading(self) -> bool:
        return self.kind is InlineKind.HEADING

    @property
    def is_break(self) -> bool:
        return self.kind is InlineKind.BREAK


@dataclass(frozen=True)
class Cell:
    """Table cell; ``content`` separates inner paragraphs with a blank line."""

    content: str
    rich_content: Optional[str] = None


Row = Tuple[Cell, ...]


@dataclass(frozen=True)
class Paragraph:
    """Rich-text widget body.

    ``text`` is the whole trimmed widget text, kept so a paragraph whose
    items could not be classified still renders something.
    """

    items: Tuple[InlineElement, ...] = ()
    text: str = ""

    @property
    def starts_with_heading(self) -> bool:
        return bool(self.items) and self.items[0].is_heading

    @property
    def ends_with_break(self) -> bool:
        return bool(self.items) and self.items[-1].is_break


@dataclass(frozen=True)
class Table:
    rows: Tuple[Row, ...] = ()


@dataclass(frozen=True)
class Divider:
    title: str = ""
    level: int = 2


@dataclass(frozen=True)
class Accordion:
    """Collapsible widget; its children are restricted to paragraphs and tables."""

    title: str = "Untitled Section"
    level: int = 2
    children: Tuple[Union[Paragraph, Table], ...] = ()

    def __post_init__(self) -> None:
        for child in self.children:
            if not isinstance(child, (Paragraph, Table)):
                raise TypeError(
                    f"Accordion children must be Paragraph or Table, got {type(child).__name__}"
                )


Block = Union[Paragraph, Table, Divider, Accordion]

# Blocks in document order.
Document = Tuple[Block, ...]
