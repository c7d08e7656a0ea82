"""Stage 1: line-oriented rewriting before Markdown parsing.

* ``$$ label`` ... ``$$`` display equations become fenced code blocks tagged
  ``block_equation{label}``, recognised later by the translator.
* ```` ```latex raw ```` fences are copied through untouched.
* Every other line gets the pre-pass replacement table (citation and
  cross-reference shorthand).

An unterminated equation or raw block swallows the rest of the document as
block content.
"""

from __future__ import annotations

import logging
import re

from md2latex.core.replacements import PRE_REPLACEMENT_TABLE, ReplacementTable

logger = logging.getLogger(__name__)

EQUATION_DELIMITER = "$$"
EQUATION_FENCE_TAG = "block_equation"

_FENCE_OPEN_RE = re.compile(r"^(`{3,}|~{3,})\s*(.*)$")


def is_raw_latex_info(info: str) -> bool:
    """True when a fence-info string carries both ``latex`` and ``raw`` tokens."""
    tokens = info.split()
    return "latex" in tokens and "raw" in tokens


def _raw_fence_marker(trimmed: str) -> str | None:
    m = _FENCE_OPEN_RE.match(trimmed)
    if not m:
        return None
    marker, info = m.group(1), m.group(2)
    # Backtick fences cannot carry backticks in their info string
    if marker[0] == "`" and "`" in info:
        return None
    if not is_raw_latex_info(info):
        return None
    return marker


def _closes_fence(trimmed: str, marker: str) -> bool:
    return (
        len(trimmed) >= len(marker)
        and trimmed == marker[0] * len(trimmed)
    )


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n`` / ``\\r\\n`` only; a trailing newline adds no empty line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _fence_for(body: list[str]) -> str:
    # Must be longer than any backtick run opening a body line
    longest = 0
    for line in body:
        m = re.match(r"\s*(`+)", line)
        if m:
            longest = max(longest, len(m.group(1)))
    return "`" * max(3, longest + 1)


def preprocess(text: str, table: ReplacementTable = PRE_REPLACEMENT_TABLE) -> str:
    """Rewrite *text* so the Markdown parser sees only standard constructs."""
    out: list[str] = []
    lines = _split_lines(text)
    equations = 0
    raw_blocks = 0

    i = 0
    while i < len(lines):
        line = lines[i]
        trimmed = line.strip()

        if trimmed.startswith(EQUATION_DELIMITER):
            label = trimmed[len(EQUATION_DELIMITER):].strip()
            start = i
            i += 1
            body: list[str] = []
            while i < len(lines) and lines[i].strip() != EQUATION_DELIMITER:
                body.append(lines[i])
                i += 1
            if i >= len(lines):
                logger.warning(
                    "Unterminated display equation at line %d; "
                    "treating the rest of the input as its body", start + 1,
                )
            i += 1  # closing delimiter

            fence = _fence_for(body)
            out.append(f"{fence} {EQUATION_FENCE_TAG}{{{label}}}")
            out.extend(body)
            out.append(fence)
            equations += 1
            continue

        marker = _raw_fence_marker(trimmed)
        if marker is not None:
            start = i
            out.append(line)
            i += 1
            closed = False
            while i < len(lines):
                out.append(lines[i])
                i += 1
                if _closes_fence(lines[i - 1].strip(), marker):
                    closed = True
                    break
            if not closed:
                logger.warning(
                    "Unterminated raw LaTeX block at line %d; "
                    "passing the rest of the input through", start + 1,
                )
            raw_blocks += 1
            continue

        out.append(table.apply(line))
        i += 1

    logger.debug(
        "Preprocessed %d lines: %d equation block(s), %d raw LaTeX block(s)",
        len(lines), equations, raw_blocks,
    )
    return "".join(f"{line}\n" for line in out)
