"""Stage 3: repair escaping collisions in the assembled LaTeX.

The pre-pass turns ``[`key`]`` into ``\\cite{key}`` before parsing, and the
translator then escapes the braces of that command along with ordinary prose.
This pass restores:

* ``\\cite\\{key\\}`` / ``\\ref\\{label\\}`` back to ``\\cite{key}`` / ``\\ref{label}``;
* the contents of ``$...$`` spans and of ``\\cite{}`` / ``\\ref{}`` arguments,
  by inverting the in-text escapes (``\\_`` → ``_`` and friends).

Running it twice gives the same result as running it once.  Bodies of code,
equation and raw LaTeX blocks are never touched: ``postprocess_segments()``
repairs prose runs only.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Callable

from md2latex.core.replacements import IN_TEXT_REPLACEMENT_TABLE, ReplacementTable

_ESCAPED_COMMAND_RE = re.compile(r"\\(cite|ref)\\\{(.*?)\\\}")
_INLINE_MATH_RE = re.compile(r"\$([^$\n]+)\$")
_COMMAND_ARG_RE = re.compile(r"\\(cite|ref)\{([^}]+)\}")


def _restore_escaped_commands(text: str) -> str:
    return _ESCAPED_COMMAND_RE.sub(lambda m: f"\\{m.group(1)}{{{m.group(2)}}}", text)


def inversely_replace(
    text: str,
    pattern: re.Pattern[str],
    formatter: Callable[[re.Match[str], str], str],
    table: ReplacementTable = IN_TEXT_REPLACEMENT_TABLE,
) -> str:
    """Invert *table* inside the last group of each *pattern* match.

    *formatter* receives the match and the repaired inner text and returns the
    replacement for the whole match.
    """
    def _sub(m: re.Match[str]) -> str:
        return formatter(m, table.invert(m.group(m.re.groups)))

    return pattern.sub(_sub, text)


def postprocess(text: str, table: ReplacementTable = IN_TEXT_REPLACEMENT_TABLE) -> str:
    """Repair citation, reference and inline-math spans in *text*."""
    result = _restore_escaped_commands(text)
    result = inversely_replace(result, _INLINE_MATH_RE, lambda m, inner: f"${inner}$", table)
    result = inversely_replace(
        result, _COMMAND_ARG_RE, lambda m, inner: f"\\{m.group(1)}{{{inner}}}", table
    )
    return result


def postprocess_segments(
    segments: Iterable[tuple[str, bool]],
    table: ReplacementTable = IN_TEXT_REPLACEMENT_TABLE,
) -> str:
    """Repair ``(text, verbatim)`` runs, passing verbatim runs through as-is."""
    return "".join(
        text if verbatim else postprocess(text, table)
        for text, verbatim in segments
    )
