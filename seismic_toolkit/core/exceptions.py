from __future__ import annotations

"""Conversion exception classes.

Only input-shape problems and export failures are raised to callers; every
other irregularity in the vendor markup degrades to a default value inside
the parser.
"""

from typing import Optional

__all__ = [
    "ConversionError",
    "EmptyInputError",
    "NoContentFound",
    "ExportSinkFailure",
]


class ConversionError(Exception):
    """Base exception for all user-facing conversion failures."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class EmptyInputError(ConversionError):
    """Raised when the source markup is blank or whitespace-only."""

    def __init__(self, message: str = "Please paste Seismic HTML content") -> None:
        super().__init__(message)


class NoContentFound(ConversionError):
    """Raised when the markup parsed but no recognizable block was found.

    Usually means the wrong part of the page was copied.
    """

    def __init__(
        self,
        message: str = "No content found. Make sure you copied the Seismic article HTML.",
    ) -> None:
        super().__init__(message)


class ExportSinkFailure(ConversionError):
    """Raised when the export boundary (file, clipboard) rejects the output."""

    def __init__(self, reason: str, sink: Optional[str] = None,
                 cause: Optional[BaseException] = None) -> None:
        self.reason = reason
        self.sink = sink
        message = f"Failed to export: {reason}"
        if sink:
            message = f"Failed to export to {sink}: {reason}"
        super().__init__(message, cause)
