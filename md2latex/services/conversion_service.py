import logging
from pathlib import Path

from md2latex.config import settings
from md2latex.core.converter import ConversionOptions, convert_markdown_to_latex

logger = logging.getLogger(__name__)


def derive_output_path(input_path: str | Path, suffix: str | None = None) -> Path:
    """``notes/draft.md`` → ``notes/draft.tex``."""
    input_path = Path(input_path)
    return input_path.parent / f"{input_path.stem}{suffix or settings.OUTPUT_SUFFIX}"


def convert_text(markdown: str, options: ConversionOptions | None = None) -> str:
    return convert_markdown_to_latex(markdown, options)


def convert_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    options: ConversionOptions | None = None,
) -> Path:
    """Convert a Markdown file and write the LaTeX next to it (or to *output_path*).

    Read and write errors propagate; nothing is written unless the whole
    document converted.
    """
    input_path = Path(input_path)
    output_path = Path(output_path) if output_path else derive_output_path(input_path)

    markdown = input_path.read_text(encoding="utf-8")
    latex = convert_text(markdown, options)
    output_path.write_text(latex, encoding="utf-8")

    logger.info("Wrote %s (%d chars) from %s", output_path, len(latex), input_path)
    return output_path
