from __future__ import annotations

from mince.markup.blocks import (
    block_style,
    collect_block,
    join_flow_continuation,
    open_brackets,
)
from mince.markup.loader import load
from mince.markup.scanner import scan


def test_block_style_requires_whitespace_before_indicator() -> None:
    assert block_style("text: |") == "|"
    assert block_style("text: >") == ">"
    assert block_style("a: x|") is None
    assert block_style("a: b") is None


def test_html_tail_is_not_a_folded_block() -> None:
    assert block_style("a: <b> >") is None
    assert block_style("html: <br>") is None


def test_literal_block_keeps_newlines() -> None:
    assert load("text: |\n  line one\n  line two\n") == {"text": "line one\nline two"}


def test_literal_block_keeps_relative_indentation() -> None:
    text = "code: |\n  if x:\n      y\nnext: 1\n"
    assert load(text) == {"code": "if x:\n    y", "next": 1}


def test_folded_block_joins_lines() -> None:
    text = "text: >\n  one\n  two\n\n\n  three\n\n"
    assert load(text) == {"text": "one two\nthree"}


def test_block_in_sequence_item() -> None:
    assert load("- |\n  a\n  b\n- c\n") == ["a\nb", "c"]


def test_collect_block_stops_at_parent_indent() -> None:
    lines = scan("a: |\n  x\n\n  y\nb: 1\n")
    text, index = collect_block(lines, 1, 0, "|")
    assert text == "x\n\ny"
    assert lines[index].content == "b: 1"


def test_open_brackets_ignores_quoted_brackets() -> None:
    assert open_brackets("[1, [2") == 2
    assert open_brackets("[1, 2]") == 0
    assert open_brackets("['[', 2") == 1


def test_join_flow_continuation_only_for_flow_openings() -> None:
    lines = scan("key: [1,\n  2]\n")
    content, index = join_flow_continuation(lines[0].content, lines, 1)
    assert content == "key: [1, 2]"
    assert index == 2

    plain = scan("key: value\nother: 1\n")
    assert join_flow_continuation(plain[0].content, plain, 1) == ("key: value", 1)


def test_block_scalar_inside_flow_collections() -> None:
    assert load("items: [a, |\n  text here\n  more\n]\n") == {"items": ["a", "text here\nmore"]}
    assert load("meta: {note: >\n  folded\n  words\n}\n") == {"meta": {"note": "folded words"}}
