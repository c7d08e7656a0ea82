"""Command line entry point.

    md2latex INPUT [OUTPUT] [--log-level LEVEL]

OUTPUT defaults to INPUT with its suffix replaced by ``.tex``.
"""

import argparse
import logging
import sys

from md2latex import __version__
from md2latex.log_config import setup_logging
from md2latex.services.conversion_service import convert_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="md2latex",
        description="Convert a Markdown file into LaTeX body markup.",
    )
    parser.add_argument("input", metavar="INPUT", help="Markdown file to convert")
    parser.add_argument(
        "output", metavar="OUTPUT", nargs="?", default=None,
        help="LaTeX file to write (default: INPUT with a .tex suffix)",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING ...")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        output = convert_file(args.input, args.output)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Conversion failed: %s", e)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
