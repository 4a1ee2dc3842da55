from __future__ import annotations

"""Seismic markup parser.

Provides the widget-level block parser together with the paragraph
classifier and table extractor it delegates to.
"""

from .block_parser import parse_document  # noqa: F401
from .classifier import ClaimedTexts, ClassifierThresholds, classify_fragment  # noqa: F401
from .table_extractor import extract_table  # noqa: F401

__all__: list[str] = [
    "parse_document",
    "classify_fragment",
    "ClaimedTexts",
    "ClassifierThresholds",
    "extract_table",
]
