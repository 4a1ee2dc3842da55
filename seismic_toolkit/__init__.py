"""Top-level package for Seismic Toolkit.

Converts Seismic page exports into a selectable outline and Word-paste HTML.
Front-ends (CLI, GUI) should only depend on the public API exposed here
rather than importing internal modules directly.
"""

from .core import (  # re-export for convenience
    ConversionError,
    ConversionService,
    ConversionSnapshot,
    parse_document,
    render_word_html,
)

__all__: list[str] = [
    "ConversionError",
    "ConversionService",
    "ConversionSnapshot",
    "parse_document",
    "render_word_html",
]
