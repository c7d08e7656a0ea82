"""Markdown → document event stream, backed by mistune's AST renderer.

mistune hands back a token tree; the translator wants a flat, forward-only
sequence of start/end pairs and leaf events.  ``parse_events()`` walks the tree
lazily and yields :class:`Event` values in document order.

Container tags: ``heading``, ``paragraph``, ``emphasis``, ``strong``, ``link``,
``image``, ``list``, ``item``, ``code_block``, ``table``, ``table_head``,
``table_row``, ``table_cell``.  Any other mistune container (block quotes,
strikethrough, footnotes ...) is passed through under its own type name so its
children are still visited.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

import mistune

logger = logging.getLogger(__name__)

DEFAULT_PLUGINS = ("table", "strikethrough", "footnotes", "task_lists", "url")

# Event kinds
START = "start"
END = "end"
TEXT = "text"
CODE = "code"
SOFT_BREAK = "softbreak"
HARD_BREAK = "hardbreak"
RULE = "rule"
HTML = "html"


@dataclass(frozen=True)
class Event:
    kind: str
    tag: str = ""  # container name for start/end events
    text: str = ""
    attrs: dict[str, Any] = field(default_factory=dict)

    def is_start(self, tag: str) -> bool:
        return self.kind == START and self.tag == tag

    def is_end(self, tag: str) -> bool:
        return self.kind == END and self.tag == tag


# mistune token type → event tag (containers only)
_TAG_NAMES = {
    "heading": "heading",
    "paragraph": "paragraph",
    "emphasis": "emphasis",
    "strong": "strong",
    "link": "link",
    "image": "image",
    "list": "list",
    "list_item": "item",
    "task_list_item": "item",
    "table": "table",
    "table_head": "table_head",
    "table_row": "table_row",
    "table_cell": "table_cell",
}

# Containers whose children are spliced into the parent without events
_TRANSPARENT = {"block_text", "table_body"}

_LEAVES = {
    "text": TEXT,
    "codespan": CODE,
    "softbreak": SOFT_BREAK,
    "linebreak": HARD_BREAK,
    "thematic_break": RULE,
    "block_html": HTML,
    "inline_html": HTML,
}

# Trailing ``{#id .class key=value}`` block on a heading line
_HEADING_ATTRS_RE = re.compile(r"\s*\{([^{}]*)\}\s*$")


@lru_cache(maxsize=8)
def _get_markdown(plugins: tuple[str, ...]) -> mistune.Markdown:
    return mistune.create_markdown(renderer="ast", plugins=list(plugins))


def parse_tokens(text: str, plugins: Sequence[str] | None = None) -> list[dict]:
    """Return mistune's raw AST for *text*."""
    md = _get_markdown(tuple(DEFAULT_PLUGINS if plugins is None else plugins))
    return md(text)


def parse_events(text: str, plugins: Sequence[str] | None = None) -> Iterator[Event]:
    """Parse *text* and yield its document events in order."""
    return iter_events(parse_tokens(text, plugins))


def parse_heading_attributes(text: str) -> tuple[str, tuple[str, ...], str | None] | None:
    """Split a trailing attribute block off a heading's text.

    Returns ``(text, classes, id)`` or ``None`` when *text* carries no valid
    attribute block.

    >>> parse_heading_attributes("Preface {#pre .unnumbered}")
    ('Preface', ('unnumbered',), 'pre')
    """
    m = _HEADING_ATTRS_RE.search(text)
    if not m:
        return None
    tokens = m.group(1).split()
    if not tokens:
        return None
    classes: list[str] = []
    heading_id = None
    for token in tokens:
        if token.startswith(".") and len(token) > 1:
            classes.append(token[1:])
        elif token.startswith("#") and len(token) > 1:
            heading_id = token[1:]
        elif "=" in token and not token.startswith("="):
            continue  # key=value pairs are accepted but unused
        else:
            return None
    return text[:m.start()].rstrip(), tuple(classes), heading_id


def _split_heading(children: list[dict]) -> tuple[list[dict], tuple[str, ...], str | None]:
    # mistune may split the trailing text into several text tokens
    idx = len(children)
    while idx > 0 and children[idx - 1].get("type") == "text":
        idx -= 1
    tail = "".join(tok.get("raw", "") for tok in children[idx:])
    parsed = parse_heading_attributes(tail) if tail else None
    if parsed is None:
        return children, (), None
    stripped, classes, heading_id = parsed
    head = list(children[:idx])
    if stripped:
        head.append({"type": "text", "raw": stripped})
    return head, classes, heading_id


def _table_alignments(table: dict) -> tuple[str | None, ...]:
    for part in table.get("children", []):
        if part.get("type") == "table_head":
            return tuple(
                (cell.get("attrs") or {}).get("align")
                for cell in part.get("children", [])
            )
    return ()


def _container_attrs(tok: dict, tag: str) -> dict[str, Any]:
    attrs = tok.get("attrs") or {}
    if tag == "heading":
        return {"level": attrs.get("level", 1)}
    if tag in ("link", "image"):
        return {"url": attrs.get("url", ""), "title": attrs.get("title")}
    if tag == "list":
        return {"ordered": bool(attrs.get("ordered")), "start": attrs.get("start")}
    if tag == "table":
        return {"alignments": _table_alignments(tok)}
    if tag == "table_cell":
        return {"align": attrs.get("align"), "head": bool(attrs.get("head"))}
    if tag == "item" and "checked" in attrs:
        return {"checked": attrs["checked"]}
    return dict(attrs)


def iter_events(tokens: Iterable[dict]) -> Iterator[Event]:
    """Flatten a mistune AST into document events."""
    for tok in tokens:
        tok_type = tok.get("type", "")

        if tok_type == "block_code":
            info = (tok.get("attrs") or {}).get("info")
            yield Event(START, "code_block", attrs={"info": info, "style": tok.get("style")})
            raw = tok.get("raw", "")
            if raw:
                yield Event(TEXT, text=raw)
            yield Event(END, "code_block")
            continue

        if tok_type in _LEAVES:
            yield Event(_LEAVES[tok_type], text=tok.get("raw", ""))
            continue

        children = tok.get("children")
        if tok_type in _TRANSPARENT:
            yield from iter_events(children or [])
            continue
        if children is None:
            # blank_line and leaf tokens without a counterpart carry nothing
            continue

        tag = _TAG_NAMES.get(tok_type, tok_type)
        attrs = _container_attrs(tok, tag)
        if tag == "heading":
            children, classes, heading_id = _split_heading(children)
            attrs["classes"] = classes
            attrs["id"] = heading_id

        yield Event(START, tag, attrs=attrs)
        yield from iter_events(children)
        yield Event(END, tag, attrs=attrs)
