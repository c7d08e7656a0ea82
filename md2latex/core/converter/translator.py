"""Stage 2: document events → LaTeX body markup.

A single forward pass over the event stream.  The only memory carried between
events lives in :class:`TranslatorState`: image caption capture, the kind of
fenced block currently open, table cell position and a pending forced
table-of-contents entry.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from itertools import groupby
from typing import NamedTuple

from md2latex.core.converter.preprocessor import EQUATION_FENCE_TAG, is_raw_latex_info
from md2latex.core.parsers.markdown_events import (
    CODE,
    END,
    HARD_BREAK,
    RULE,
    SOFT_BREAK,
    START,
    TEXT,
    Event,
)
from md2latex.core.replacements import IN_TEXT_REPLACEMENT_TABLE, ReplacementTable

logger = logging.getLogger(__name__)

HEADING_COMMANDS = {
    1: "chapter",
    2: "section",
    3: "subsection",
    4: "subsubsection",
    5: "paragraph",
}
FALLBACK_HEADING_COMMAND = "textbf"

UNNUMBERED_CLASS = "unnumbered"
ADD_CONTENTS_CLASS = "add-contents"

COLUMN_TYPES = {
    "left": r">{\raggedright\arraybackslash}X",
    "center": r">{\centering\arraybackslash}X",
    "right": r">{\raggedleft\arraybackslash}X",
}

_EQUATION_INFO_RE = re.compile(
    r"(?:^|\s)" + re.escape(EQUATION_FENCE_TAG) + r"\{(.*?)\}"
)


class Segment(NamedTuple):
    text: str
    verbatim: bool = False


class CodeBlockKind(Enum):
    NONE = "none"
    CODE = "code"
    RAW_LATEX = "raw_latex"
    EQUATION = "equation"


@dataclass
class TranslatorState:
    """Carry-over state between events."""

    inside_image: bool = False
    image_url: str = ""
    image_caption: list[str] = field(default_factory=list)

    codeblock_kind: CodeBlockKind = CodeBlockKind.NONE

    first_cell: bool = True

    toc_override: bool = False
    heading_text: list[str] | None = None

    def clear_image(self) -> None:
        self.inside_image = False
        self.image_url = ""
        self.image_caption = []

    def clear_toc(self) -> None:
        self.toc_override = False
        self.heading_text = None


def _merge_runs(pieces: list[Segment]) -> list[Segment]:
    """Join adjacent pieces of the same kind."""
    return [
        Segment("".join(seg.text for seg in group), verbatim)
        for verbatim, group in groupby(pieces, key=lambda seg: seg.verbatim)
    ]


def column_spec(alignments: Iterable[str | None]) -> str:
    """Build a bordered ``tabularx`` column specification."""
    columns = [COLUMN_TYPES.get(align or "", COLUMN_TYPES["center"]) for align in alignments]
    return "".join(f"|{col}" for col in columns) + "|"


def heading_command(level: int, classes: Iterable[str] = ()) -> str:
    name = HEADING_COMMANDS.get(level, FALLBACK_HEADING_COMMAND)
    if UNNUMBERED_CLASS in classes:
        name += "*"
    return name


class LatexTranslator:
    """Translate a document event stream into LaTeX."""

    def __init__(
        self,
        table: ReplacementTable = IN_TEXT_REPLACEMENT_TABLE,
        figure_width: str = r"0.8\textwidth",
        figure_placement: str = "htbp",
        toc_entry_level: str = "chapter",
    ):
        self.table = table
        self.figure_width = figure_width
        self.figure_placement = figure_placement
        self.toc_entry_level = toc_entry_level

        self.state = TranslatorState()
        self._out: list[Segment] = []

        self._start_handlers = {
            "heading": self._start_heading,
            "paragraph": self._ignore,
            "emphasis": lambda ev: self._emit("\\textit{"),
            "strong": lambda ev: self._emit("\\textbf{"),
            "link": self._start_link,
            "image": self._start_image,
            "list": self._start_list,
            "item": lambda ev: self._emit("\\item "),
            "code_block": self._start_code_block,
            "table": self._start_table,
            "table_head": self._start_row,
            "table_row": self._start_row,
            "table_cell": self._start_cell,
        }
        self._end_handlers = {
            "heading": self._end_heading,
            "paragraph": lambda ev: self._emit("\n\n"),
            "emphasis": self._close_brace,
            "strong": self._close_brace,
            "link": self._close_brace,
            "image": self._end_image,
            "list": self._end_list,
            "item": lambda ev: self._emit("\n"),
            "code_block": self._end_code_block,
            "table": lambda ev: self._emit("\\end{tabularx}\n\n"),
            "table_head": self._end_row,
            "table_row": self._end_row,
            "table_cell": self._ignore,
        }
        self._leaf_handlers = {
            TEXT: self._text,
            CODE: self._inline_code,
            RULE: lambda ev: self._emit("\\hrulefill\n"),
            SOFT_BREAK: lambda ev: self._emit("\n"),
            HARD_BREAK: lambda ev: self._emit("\\\\\n"),
        }

    # ── Public API ───────────────────────────────────────────────────

    def translate(self, events: Iterable[Event]) -> str:
        """Consume *events* and return the assembled LaTeX."""
        return "".join(seg.text for seg in self.translate_segments(events))

    def translate_segments(self, events: Iterable[Event]) -> list[Segment]:
        """Consume *events* and return the output split into prose and verbatim runs.

        Verbatim runs are the bodies of code, equation and raw LaTeX blocks.
        """
        self.state = TranslatorState()
        self._out = []
        for event in events:
            self.handle(event)
        if self.state.codeblock_kind is not CodeBlockKind.NONE:
            logger.warning("Event stream ended inside a %s block", self.state.codeblock_kind.value)
        return _merge_runs(self._out)

    def handle(self, event: Event) -> None:
        """Process a single event."""
        if event.kind == START:
            handler = self._start_handlers.get(event.tag)
        elif event.kind == END:
            handler = self._end_handlers.get(event.tag)
        else:
            handler = self._leaf_handlers.get(event.kind)
        if handler is None:
            return
        if self.state.inside_image and event.kind != TEXT and not event.is_end("image"):
            # Only the alt text of an image is kept, as its caption
            return
        handler(event)

    # ── Output helpers ───────────────────────────────────────────────

    def _emit(self, text: str, verbatim: bool = False) -> None:
        if text:
            self._out.append(Segment(text, verbatim))

    def _close_brace(self, event: Event) -> None:
        self._emit("}")

    def _ignore(self, event: Event) -> None:
        pass

    # ── Text ─────────────────────────────────────────────────────────

    def _text(self, event: Event) -> None:
        state = self.state
        if state.inside_image:
            state.image_caption.append(event.text)
            return
        if state.codeblock_kind is not CodeBlockKind.NONE:
            self._emit(event.text, verbatim=True)
            return

        replaced = self.table.apply(event.text)
        if state.toc_override and state.heading_text is not None:
            state.heading_text.append(replaced)
        self._emit(replaced)

    def _inline_code(self, event: Event) -> None:
        code = f"\\texttt{{{self.table.apply(event.text)}}}"
        if self.state.toc_override and self.state.heading_text is not None:
            self.state.heading_text.append(code)
        self._emit(code)

    # ── Headings ─────────────────────────────────────────────────────

    def _start_heading(self, event: Event) -> None:
        classes = event.attrs.get("classes", ())
        command = heading_command(event.attrs.get("level", 1), classes)
        if ADD_CONTENTS_CLASS in classes:
            self.state.toc_override = True
            self.state.heading_text = []
        self._emit(f"\\{command}{{")

    def _end_heading(self, event: Event) -> None:
        self._emit("}\n")
        if self.state.toc_override:
            title = "".join(self.state.heading_text or [])
            self._emit(f"\\addcontentsline{{toc}}{{{self.toc_entry_level}}}{{{title}}}\n")
            self.state.clear_toc()
        self._emit("\n")

    # ── Links and images ─────────────────────────────────────────────

    def _start_link(self, event: Event) -> None:
        self._emit(f"\\href{{{event.attrs.get('url', '')}}}{{")

    def _start_image(self, event: Event) -> None:
        self.state.inside_image = True
        self.state.image_url = event.attrs.get("url", "")
        self.state.image_caption = []

    def _end_image(self, event: Event) -> None:
        url = self.state.image_url
        caption = self.table.apply("".join(self.state.image_caption))
        self._emit(
            f"\\begin{{figure}}[{self.figure_placement}]\n"
            "\\centering\n"
            f"\\includegraphics[width={self.figure_width}]{{{url}}}\n"
            f"\\caption{{{caption}}}\n"
            f"\\label{{fig:{url}}}\n"
            "\\end{figure}\n"
        )
        self.state.clear_image()

    # ── Lists ────────────────────────────────────────────────────────

    def _start_list(self, event: Event) -> None:
        env = "enumerate" if event.attrs.get("ordered") else "itemize"
        self._emit(f"\\begin{{{env}}}\n")

    def _end_list(self, event: Event) -> None:
        env = "enumerate" if event.attrs.get("ordered") else "itemize"
        self._emit(f"\\end{{{env}}}\n")

    # ── Code, equation and raw LaTeX blocks ──────────────────────────

    def _start_code_block(self, event: Event) -> None:
        info = event.attrs.get("info") or ""
        m = _EQUATION_INFO_RE.search(info)
        if m:
            self.state.codeblock_kind = CodeBlockKind.EQUATION
            self._emit("\\begin{equation}\n")
            label = m.group(1).strip()
            if label:
                self._emit(f"\\label{{eq:{label}}}\n")
            return

        if is_raw_latex_info(info):
            self.state.codeblock_kind = CodeBlockKind.RAW_LATEX
            return

        self.state.codeblock_kind = CodeBlockKind.CODE
        self._emit("\\begin{lstlisting}\n")

    def _end_code_block(self, event: Event) -> None:
        kind = self.state.codeblock_kind
        if kind is CodeBlockKind.CODE:
            self._emit("\\end{lstlisting}\n\n")
        elif kind is CodeBlockKind.EQUATION:
            self._emit("\\end{equation}\n\n")
        self.state.codeblock_kind = CodeBlockKind.NONE

    # ── Tables ───────────────────────────────────────────────────────

    def _start_table(self, event: Event) -> None:
        spec = column_spec(event.attrs.get("alignments", ()))
        self._emit(f"\\begin{{tabularx}}{{\\textwidth}}{{{spec}}} \\hline\n")

    def _start_row(self, event: Event) -> None:
        self.state.first_cell = True

    def _end_row(self, event: Event) -> None:
        self._emit(" \\\\ \\hline\n")

    def _start_cell(self, event: Event) -> None:
        if not self.state.first_cell:
            self._emit(" & ")
        self.state.first_cell = False


def translate(events: Iterable[Event], **options) -> str:
    """Translate *events* with a fresh :class:`LatexTranslator`."""
    return LatexTranslator(**options).translate(events)
