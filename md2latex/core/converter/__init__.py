"""Markdown → LaTeX conversion pipeline.

Public API: ``convert_markdown_to_latex()``

    raw Markdown ─ preprocess ─▶ Markdown ─ mistune ─▶ events
                 ─ translate ─▶ LaTeX ─ postprocess ─▶ LaTeX

The output is body markup only; the caller supplies the preamble
(``tabularx``, ``listings``, ``hyperref``, ``graphicx``, ``amsmath``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from md2latex.config import settings
from md2latex.core.parsers.markdown_events import parse_events
from md2latex.core.replacements import (
    IN_TEXT_REPLACEMENT_TABLE,
    PRE_REPLACEMENT_TABLE,
    ReplacementTable,
)

from .postprocessor import postprocess, postprocess_segments
from .preprocessor import preprocess
from .translator import LatexTranslator

logger = logging.getLogger(__name__)

__all__ = [
    "ConversionOptions",
    "convert_markdown_to_latex",
    "preprocess",
    "postprocess",
    "postprocess_segments",
]


@dataclass
class ConversionOptions:
    """Rendering knobs; defaults come from :data:`md2latex.config.settings`."""

    figure_width: str = field(default_factory=lambda: settings.FIGURE_WIDTH)
    figure_placement: str = field(default_factory=lambda: settings.FIGURE_PLACEMENT)
    toc_entry_level: str = field(default_factory=lambda: settings.TOC_ENTRY_LEVEL)
    plugins: list[str] = field(default_factory=lambda: list(settings.MARKDOWN_PLUGINS))
    pre_table: ReplacementTable = PRE_REPLACEMENT_TABLE
    in_text_table: ReplacementTable = IN_TEXT_REPLACEMENT_TABLE


def convert_markdown_to_latex(markdown: str, options: ConversionOptions | None = None) -> str:
    """Convert a Markdown document into LaTeX body markup."""
    options = options or ConversionOptions()

    preprocessed = preprocess(markdown, options.pre_table)
    translator = LatexTranslator(
        table=options.in_text_table,
        figure_width=options.figure_width,
        figure_placement=options.figure_placement,
        toc_entry_level=options.toc_entry_level,
    )
    segments = translator.translate_segments(parse_events(preprocessed, options.plugins))
    result = postprocess_segments(segments, options.in_text_table)

    logger.debug("Converted %d chars of Markdown into %d chars of LaTeX", len(markdown), len(result))
    return result
