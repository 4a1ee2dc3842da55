"""Seismic Toolkit core package.

Exposes the parsing, section-selection and rendering APIs used by any
front-end.
"""

from .exceptions import ConversionError, EmptyInputError, ExportSinkFailure, NoContentFound  # noqa: F401
from .parser import parse_document  # noqa: F401
from .generators import render_word_html  # noqa: F401
from .services import ConversionService, ConversionSnapshot  # noqa: F401

__all__ = [
    "ConversionError",
    "EmptyInputError",
    "NoContentFound",
    "ExportSinkFailure",
    "parse_document",
    "render_word_html",
    "ConversionService",
    "ConversionSnapshot",
]
