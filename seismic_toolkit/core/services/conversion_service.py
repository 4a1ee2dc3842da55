from __future__ import annotations

"""High-level conversion service for Seismic markup to Word-paste HTML.

Entry-point for any front-end (GUI, CLI, API) that needs to turn a pasted
Seismic page into a selectable outline and a Word-friendly HTML string.
The service holds no conversion state of its own: every call takes and
returns an immutable :class:`ConversionSnapshot`.
"""

from dataclasses import dataclass, replace
from typing import Dict, Optional
import logging

from seismic_toolkit.config import ConfigManager
from seismic_toolkit.core.exceptions import NoContentFound
from seismic_toolkit.core.generators import heading_styles_from_config, render_word_html
from seismic_toolkit.core.models import Document, Section, Table
from seismic_toolkit.core.parser import ClassifierThresholds, parse_document
from seismic_toolkit.core.services import section_service
from seismic_toolkit.core.services.export_service import ExportSink, export_markup

logger = logging.getLogger(__name__)

__all__ = ["ConversionService", "ConversionSnapshot"]


@dataclass(frozen=True)
class ConversionSnapshot:
    """A parsed document together with its current section selection."""

    document: Document
    sections: tuple[Section, ...]


class ConversionService:
    """Business-logic façade with zero GUI dependencies."""

    def __init__(self, thresholds: Optional[ClassifierThresholds] = None,
                 heading_styles: Optional[Dict[int, str]] = None) -> None:
        config = ConfigManager()
        self.thresholds = thresholds or ClassifierThresholds.from_config(
            config.get_classifier_config()
        )
        self.heading_styles = heading_styles or heading_styles_from_config(
            config.get_word_styles()
        )

    # ---------------------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------------------
    def parse(self, raw: str) -> ConversionSnapshot:
        """Parse *raw* markup into a snapshot with every section selected.

        Raises
        ------
        EmptyInputError
            If *raw* is blank.
        NoContentFound
            If no recognizable block was found in the markup.
        """
        document = parse_document(raw, self.thresholds)
        if not document:
            logger.warning("Parse produced no blocks")
            raise NoContentFound()
        sections = section_service.derive_sections(document)
        logger.info("Indexed %d sections", len(sections))
        return ConversionSnapshot(document=document, sections=sections)

    def toggle(self, snapshot: ConversionSnapshot, section_id: int) -> ConversionSnapshot:
        return replace(snapshot, sections=section_service.toggle_section(snapshot.sections, section_id))

    def select_all(self, snapshot: ConversionSnapshot) -> ConversionSnapshot:
        return replace(snapshot, sections=section_service.select_all(snapshot.sections))

    def deselect_all(self, snapshot: ConversionSnapshot) -> ConversionSnapshot:
        return replace(snapshot, sections=section_service.deselect_all(snapshot.sections))

    def filtered_document(self, snapshot: ConversionSnapshot) -> Document:
        return section_service.filter_document(snapshot.document, snapshot.sections)

    def render(self, snapshot: ConversionSnapshot) -> str:
        """Render the selected part of *snapshot* as Word-paste HTML."""
        return render_word_html(self.filtered_document(snapshot), self.heading_styles)

    def summary(self, snapshot: ConversionSnapshot) -> Dict[str, int]:
        """Return block, table and section counts for status display."""
        return {
            "blocks": len(snapshot.document),
            "tables": sum(1 for block in snapshot.document if isinstance(block, Table)),
            "sections": len(snapshot.sections),
            "selected": sum(1 for section in snapshot.sections if section.selected),
        }

    def export(self, snapshot: ConversionSnapshot, sink: ExportSink) -> str:
        """Render *snapshot* and hand the markup to *sink* exactly once.

        Returns the rendered markup. Sink errors surface as
        :class:`~seismic_toolkit.core.exceptions.ExportSinkFailure`.
        """
        markup = self.render(snapshot)
        export_markup(markup, sink)
        return markup
