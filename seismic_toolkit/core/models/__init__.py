from __future__ import annotations

"""Shared data structures used across the Seismic Toolkit core.

This package exposes the immutable value objects used by the parser,
services and generators. It is intentionally free of UI / I/O code so the
contained objects can be reused in any context (unit-tests, CLI, GUI, etc.).
"""

from .document import (
    HEADING_LEVELS,
    Accordion,
    Block,
    Cell,
    Divider,
    Document,
    InlineElement,
    InlineKind,
    Paragraph,
    Row,
    Table,
)
from .section import Section, SectionKind

__all__ = [
    "HEADING_LEVELS",
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
    "SectionKind",
    "Section",
]
