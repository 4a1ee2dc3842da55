from __future__ import annotations

"""Export boundary: hand rendered markup to an external sink.

A sink is called exactly once per export. Failures are wrapped in
:class:`ExportSinkFailure` with the underlying reason and are not retried.
"""

from pathlib import Path
from typing import Protocol, Union
import logging
import sys

from seismic_toolkit.core.exceptions import ExportSinkFailure

logger = logging.getLogger(__name__)

__all__ = ["ExportSink", "FileExportSink", "StreamExportSink", "export_markup"]


class ExportSink(Protocol):
    """Anything able to receive the rendered Word HTML."""

    def write(self, markup: str) -> None:
        ...


class FileExportSink:
    """Write the markup as a UTF-8 ``.html`` file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"FileExportSink({str(self.path)!r})"

    def write(self, markup: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(markup, encoding="utf-8")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("I/O: wrote HTML path=%s chars=%d", self.path, len(markup))


class StreamExportSink:
    """Write the markup to a text stream (stdout by default)."""

    def __init__(self, stream=None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def __repr__(self) -> str:
        return f"StreamExportSink({getattr(self.stream, 'name', '<stream>')!r})"

    def write(self, markup: str) -> None:
        self.stream.write(markup)
        self.stream.flush()


def export_markup(markup: str, sink: ExportSink) -> None:
    """Deliver *markup* to *sink* once; raise :class:`ExportSinkFailure` on error."""
    try:
        sink.write(markup)
    except ExportSinkFailure:
        raise
    except OSError as exc:
        logger.error("Export FAIL: sink=%r reason=%s", sink, exc)
        raise ExportSinkFailure(exc.strerror or str(exc), sink=repr(sink), cause=exc) from exc
    except Exception as exc:
        logger.error("Export FAIL: sink=%r reason=%s", sink, exc)
        raise ExportSinkFailure(str(exc) or type(exc).__name__, sink=repr(sink), cause=exc) from exc
    logger.info("Export OK: sink=%r chars=%d", sink, len(markup))
