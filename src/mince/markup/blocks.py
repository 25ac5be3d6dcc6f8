"""Multi-line constructs: block scalars and flow collections spanning lines."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from mince.markup.scanner import Line, is_ignorable, iter_unquoted, strip_comment

LOG = logging.getLogger(__name__)

LITERAL = "|"
FOLDED = ">"
BLOCK_PLACEHOLDER = "___BLOCK_SCALAR___"

_HTML_TAIL = re.compile(r"<.*?>$")
_FLOW_OPENING = re.compile(r"^(?:-\s+)?(?:[^:\[{]+?:\s+)?[\[{]")


def block_style(content: str) -> str | None:
    """Return ``|`` or ``>`` when ``content`` introduces a block scalar."""
    stripped = content.rstrip()
    if not stripped or stripped[-1] not in (LITERAL, FOLDED):
        return None
    if len(stripped) > 1 and not stripped[-2].isspace():
        return None
    if stripped[-1] == FOLDED and _HTML_TAIL.search(stripped):
        return None
    return stripped[-1]


def mark_block(content: str) -> str:
    """Replace the block indicator with the placeholder token."""
    return f"{content.rstrip()[:-1].rstrip()} {BLOCK_PLACEHOLDER}".strip()


def collect_block(
    lines: Sequence[Line], start: int, parent_indent: int, style: str
) -> tuple[str, int]:
    """Consume the lines of a block scalar starting at ``start``.

    Returns the scalar text and the index of the first line after the block.
    """
    collected: list[str] = []
    block_indent: int | None = None
    index = start
    while index < len(lines):
        line = lines[index]
        if line.is_blank:
            collected.append("")
        else:
            if line.indent <= parent_indent:
                break
            if block_indent is None:
                block_indent = line.indent
            collected.append(line.raw[min(block_indent, line.indent) :].rstrip())
        index += 1

    while collected and not collected[-1]:
        collected.pop()

    if style == LITERAL:
        text = "\n".join(collected)
    else:
        text = _fold(collected)
    LOG.debug(
        "Collected %s block scalar of %d lines ending before line %d",
        "literal" if style == LITERAL else "folded",
        len(collected),
        index + 1,
    )
    return text, index


def _fold(collected: Sequence[str]) -> str:
    paragraphs: list[str] = []
    buffer: list[str] = []
    for text in collected:
        if text:
            buffer.append(text.strip())
        elif buffer:
            paragraphs.append(" ".join(buffer))
            buffer = []
    if buffer:
        paragraphs.append(" ".join(buffer))
    return "\n".join(paragraphs)


def open_brackets(text: str) -> int:
    """Return how many brackets or braces are left open at the end of ``text``."""
    depth = 0
    for _, char, level in iter_unquoted(text):
        if char in "[{":
            depth = level + 1
        elif char in "]}":
            depth = level
    return depth


def join_flow_continuation(content: str, lines: Sequence[Line], index: int) -> tuple[str, int]:
    """Append following lines while a flow collection opened on ``content`` is unclosed."""
    if not _FLOW_OPENING.match(content.strip()):
        return content, index
    while index < len(lines) and open_brackets(content) > 0:
        piece = lines[index].content
        index += 1
        if is_ignorable(piece):
            continue
        content = f"{content.rstrip()} {strip_comment(piece)}"
    return content, index
