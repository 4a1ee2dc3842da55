from __future__ import annotations

"""Output generators."""

from .word_html_builder import heading_styles_from_config, render_word_html  # noqa: F401

__all__: list[str] = ["heading_styles_from_config", "render_word_html"]
