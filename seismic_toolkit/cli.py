# -*- coding: utf-8 -*-
"""Command-line front-end for Seismic Toolkit.

Usage::

  seismic-toolkit [SOURCE] [--list-sections] [--exclude ID ...] [--output PATH]

Reads Seismic page markup from SOURCE (or stdin), prints the section outline
with ``--list-sections``, and otherwise writes Word-paste HTML to PATH (or
stdout) with the excluded sections removed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from seismic_toolkit.core.exceptions import ConversionError
from seismic_toolkit.core.services import (
    ConversionService,
    ConversionSnapshot,
    FileExportSink,
    StreamExportSink,
)
from seismic_toolkit.version import get_app_version

logger = logging.getLogger(__name__)

__all__ = ["build_parser", "main", "console_main"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seismic-toolkit",
        description="Convert a Seismic page export into HTML that pastes cleanly into Word.",
    )
    parser.add_argument("--version", action="version", version=f"seismic-toolkit {get_app_version()}")
    parser.add_argument(
        "source",
        nargs="?",
        help="HTML file copied from the Seismic page (default: read stdin)",
    )
    parser.add_argument(
        "--list-sections",
        action="store_true",
        help="print the section outline and exit",
    )
    parser.add_argument(
        "--exclude",
        metavar="ID",
        type=int,
        action="append",
        default=[],
        help="deselect a section (and its subsections) by id; may be repeated",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="PATH",
        help="write the HTML to PATH instead of stdout",
    )
    return parser


def _read_source(source: Optional[str]) -> str:
    if source is None or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _format_outline(snapshot: ConversionSnapshot) -> List[str]:
    lines = []
    for section in snapshot.sections:
        mark = "x" if section.selected else " "
        indent = "  " * (section.level - 1)
        lines.append(f"[{mark}] {section.id:>3}  {indent}{section.title}")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    service = ConversionService()

    try:
        raw = _read_source(args.source)
    except OSError as exc:
        print(f"Error: cannot read {args.source}: {exc.strerror or exc}", file=sys.stderr)
        return 1

    try:
        snapshot = service.parse(raw)
        for section_id in args.exclude:
            current = next((s for s in snapshot.sections if s.id == section_id), None)
            if current is None:
                logger.warning("Unknown section id %d ignored", section_id)
            elif current.selected:
                snapshot = service.toggle(snapshot, section_id)

        if args.list_sections:
            print("\n".join(_format_outline(snapshot)))
            return 0

        sink = FileExportSink(args.output) if args.output else StreamExportSink()
        service.export(snapshot, sink)
    except ConversionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    counts = service.summary(snapshot)
    logger.info(
        "Converted %d blocks (%d tables), %d/%d sections selected",
        counts["blocks"], counts["tables"], counts["selected"], counts["sections"],
    )
    return 0


def console_main() -> int:
    """Entry point of the installed script: configure logging, then run."""
    from seismic_toolkit.logging_config import setup_logging

    setup_logging()
    return main()


if __name__ == "__main__":
    sys.exit(console_main())
