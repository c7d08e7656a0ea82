"""Markdown → LaTeX body converter."""

from md2latex.core.converter import ConversionOptions, convert_markdown_to_latex

__all__ = ["ConversionOptions", "convert_markdown_to_latex"]
__version__ = "0.1.0"
