"""Shared fixtures for Seismic Toolkit tests.

Provides small builders for the vendor markup conventions (widgets carrying
``data-testid``, rich-text bodies, divider/accordion headers) so test modules
can describe source pages in a few lines.
"""

import logging
from typing import Iterable, Optional, Sequence

import pytest
from lxml import html as lxml_html

from seismic_toolkit.config import ConfigManager

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


class SeismicMarkup:
    """Builders for Seismic page exports."""

    @staticmethod
    def paragraph(body: str) -> str:
        return (
            '<div data-testid="page.paragraph">'
            '<div data-testid="seismic-page-richContent">'
            f'<div class="seismic-page-RichTextView-content">{body}</div>'
            '</div></div>'
        )

    @staticmethod
    def table(rows: Sequence[Sequence[str]], header: bool = True) -> str:
        lines = []
        for index, row in enumerate(rows):
            tag = "th" if header and index == 0 else "td"
            cells = "".join(f"<{tag}>{cell}</{tag}>" for cell in row)
            lines.append(f"<tr>{cells}</tr>")
        return f'<div data-testid="page.table"><table>{"".join(lines)}</table></div>'

    @staticmethod
    def header(level: Optional[int] = None, label: Optional[str] = None,
               virtual: Optional[str] = None) -> str:
        marker = f" __heading{level}" if level else ""
        parts = []
        if virtual is not None:
            parts.append(f'<span class="seismic-page-divider-view-text-virtual">{virtual}</span>')
        if label is not None:
            parts.append(f'<span class="seismic-page-divider-view-text">{label}</span>')
        return f'<div class="seismic-page-divider-view{marker}">{"".join(parts)}</div>'

    @classmethod
    def divider(cls, title: Optional[str] = None, level: Optional[int] = 1) -> str:
        return f'<div data-testid="page.divider">{cls.header(level, label=title)}</div>'

    @classmethod
    def accordion(cls, children: Iterable[str] = (), title: Optional[str] = None,
                  level: Optional[int] = 2, label: Optional[str] = None) -> str:
        return (
            '<div data-testid="page.accordion">'
            f'{cls.header(level, label=label, virtual=title)}'
            f'<div class="accordion-body">{"".join(children)}</div>'
            '</div>'
        )

    @staticmethod
    def page(*widgets: str) -> str:
        return f'<html><body><div class="page">{"".join(widgets)}</div></body></html>'


@pytest.fixture
def markup():
    """Provides the vendor markup builders."""
    return SeismicMarkup


@pytest.fixture
def fragment():
    """Parse a rich-text body into the element handed to the classifier."""

    def _build(body: str):
        return lxml_html.fragment_fromstring(
            f'<div class="seismic-page-RichTextView-content">{body}</div>'
        )

    return _build


@pytest.fixture
def table_element():
    """Parse a ``<table>`` string into an lxml element."""

    def _build(source: str):
        return lxml_html.fragment_fromstring(source)

    return _build


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user overrides at an empty directory and reload config per test."""
    monkeypatch.setenv("SEISMIC_CONFIG_DIR", str(tmp_path / "user-config"))
    ConfigManager.reset()
    yield
    ConfigManager.reset()
