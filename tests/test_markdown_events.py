from md2latex.core.parsers.markdown_events import (
    END,
    START,
    TEXT,
    iter_events,
    parse_events,
    parse_heading_attributes,
)


def test_heading_attributes_are_split_off():
    assert parse_heading_attributes("Preface {#pre .unnumbered}") == ("Preface", ("unnumbered",), "pre")
    assert parse_heading_attributes("Intro {.unnumbered .add-contents}") == (
        "Intro", ("unnumbered", "add-contents"), None,
    )


def test_non_attribute_braces_are_kept():
    assert parse_heading_attributes("Sets {a, b}") is None
    assert parse_heading_attributes("Empty {}") is None
    assert parse_heading_attributes("No braces") is None


def test_heading_event_carries_level_and_classes():
    events = list(parse_events("## Title {.unnumbered}\n"))
    assert events[0].kind == START
    assert events[0].tag == "heading"
    assert events[0].attrs["level"] == 2
    assert events[0].attrs["classes"] == ("unnumbered",)
    assert "".join(e.text for e in events if e.kind == TEXT) == "Title"


def test_start_and_end_events_are_balanced():
    md = "# A\n\n- x\n- *y*\n\n| a | b |\n|---|---|\n| 1 | 2 |\n\n> quote\n"
    events = list(parse_events(md))
    starts = [e.tag for e in events if e.kind == START]
    ends = [e.tag for e in events if e.kind == END]
    assert sorted(starts) == sorted(ends)


def test_table_alignments_come_from_header():
    events = list(parse_events("| A | B | C |\n|:--|--:|---|\n| 1 | 2 | 3 |\n"))
    table = next(e for e in events if e.kind == START and e.tag == "table")
    assert table.attrs["alignments"] == ("left", "right", None)
    tags = [e.tag for e in events if e.kind == START]
    assert tags.count("table_head") == 1
    assert tags.count("table_row") == 1
    assert tags.count("table_cell") == 6


def test_fenced_code_block_keeps_info_and_body():
    events = list(parse_events("```python\nx = 1\n```\n"))
    assert events[0].is_start("code_block")
    assert events[0].attrs["info"] == "python"
    assert events[1].kind == TEXT
    assert events[1].text == "x = 1\n"
    assert events[2].is_end("code_block")


def test_tight_list_items_have_no_paragraphs():
    events = list(parse_events("- a\n- b\n"))
    tags = [e.tag for e in events if e.kind == START]
    assert tags == ["list", "item", "item"]
    assert events[0].attrs["ordered"] is False


def test_iter_events_is_lazy():
    gen = iter_events([{"type": "paragraph", "children": [{"type": "text", "raw": "x"}]}])
    assert next(gen).is_start("paragraph")
    assert next(gen).text == "x"
    assert next(gen).is_end("paragraph")
