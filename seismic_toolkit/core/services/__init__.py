from __future__ import annotations

"""Business-logic services (GUI-agnostic)."""

from . import section_service  # noqa: F401
from .export_service import ExportSink, FileExportSink, StreamExportSink  # noqa: F401
from .conversion_service import ConversionService, ConversionSnapshot  # noqa: F401

__all__: list[str] = [
    "section_service",
    "ExportSink",
    "FileExportSink",
    "StreamExportSink",
    "ConversionService",
    "ConversionSnapshot",
]
