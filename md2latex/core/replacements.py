"""Literal substring replacement tables.

Two tables drive the conversion:

* ``PRE_REPLACEMENT_TABLE`` rewrites the citation / cross-reference shorthand
  (``[`key`]`` and ``[*label*]``) before Markdown parsing.
* ``IN_TEXT_REPLACEMENT_TABLE`` escapes LaTeX-reserved characters in prose.

Substitution is a single left-to-right scan: at each position the longest
matching key wins, and replaced text is never rescanned.  This makes the result
independent of dict ordering, e.g. ``[`]`` always becomes ``\\cite{]`` and never
``[}``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType


def _alternation(keys) -> re.Pattern[str]:
    # Longest first so that overlapping keys resolve deterministically.
    ordered = sorted(keys, key=lambda k: (-len(k), k))
    return re.compile("|".join(re.escape(k) for k in ordered))


class ReplacementTable:
    """Immutable literal → literal mapping with forward and inverse substitution."""

    def __init__(self, mapping: Mapping[str, str]):
        if any(not key for key in mapping):
            raise ValueError("Replacement keys must be non-empty")
        self._forward = MappingProxyType(dict(mapping))

        # First key wins when several keys share a value
        inverse: dict[str, str] = {}
        for key, value in self._forward.items():
            if value:
                inverse.setdefault(value, key)

        # A doubled backslash is an escaped backslash, not the start of an
        # escape sequence; matching it as one unit keeps inversion idempotent.
        if any(value.startswith("\\") for value in inverse):
            inverse.setdefault("\\\\", "\\\\")
        self._inverse = MappingProxyType(inverse)

        self._forward_re = _alternation(self._forward) if self._forward else None
        self._inverse_re = _alternation(self._inverse) if self._inverse else None

    @property
    def mapping(self) -> Mapping[str, str]:
        return self._forward

    def apply(self, text: str) -> str:
        """Replace every key occurrence in *text* with its value."""
        if self._forward_re is None or not text:
            return text
        return self._forward_re.sub(lambda m: self._forward[m.group(0)], text)

    def invert(self, text: str) -> str:
        """Replace every value occurrence in *text* with its key."""
        if self._inverse_re is None or not text:
            return text
        return self._inverse_re.sub(lambda m: self._inverse[m.group(0)], text)

    def __contains__(self, key: object) -> bool:
        return key in self._forward

    def __len__(self) -> int:
        return len(self._forward)

    def __repr__(self) -> str:
        return f"ReplacementTable({dict(self._forward)!r})"


PRE_REPLACEMENT_TABLE = ReplacementTable({
    "[`": "\\cite{",
    "`]": "}",
    "[*": "\\ref{",
    "*]": "}",
})

IN_TEXT_REPLACEMENT_TABLE = ReplacementTable({
    "&": "\\&",
    "%": "\\%",
    "_": "\\_",
    "#": "\\#",
    "{": "\\{",
    "}": "\\}",
})
