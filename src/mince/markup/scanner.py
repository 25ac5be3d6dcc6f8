"""Line scanning and quote-aware text helpers."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

DOCUMENT_MARKER = "---"
QUOTES = "'\""

_OPENERS = "[{"
_CLOSERS = "]}"
# A quote only opens a quoted scalar at the start of a token.
_TOKEN_BOUNDARY = " \t[{,:"


@dataclass(frozen=True)
class Line:
    """One physical line of a document."""

    number: int
    raw: str
    indent: int
    content: str

    @property
    def is_blank(self) -> bool:
        return not self.content


def scan(text: str) -> list[Line]:
    """Split ``text`` into lines with normalized endings and indentation widths."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    if normalized.startswith("\ufeff"):
        normalized = normalized[1:]
    lines: list[Line] = []
    for number, raw in enumerate(normalized.split("\n"), start=1):
        stripped = raw.lstrip(" \t")
        lines.append(
            Line(
                number=number,
                raw=raw,
                indent=len(raw) - len(stripped),
                content=stripped.rstrip(),
            )
        )
    return lines


def is_ignorable(content: str) -> bool:
    """Return True for blank lines, comment lines and the document marker."""
    stripped = content.strip()
    return not stripped or stripped.startswith("#") or stripped == DOCUMENT_MARKER


def quoted_end(text: str, start: int) -> int | None:
    """Return the index closing the quoted scalar opened at ``start``."""
    quote = text[start]
    index = start + 1
    while index < len(text):
        char = text[index]
        if quote == '"' and char == "\\":
            index += 2
            continue
        if char == quote:
            if quote == "'" and text[index + 1 : index + 2] == "'":
                index += 2
                continue
            return index
        index += 1
    return None


def is_quoted(text: str) -> bool:
    """Return True when ``text`` is exactly one quoted scalar."""
    if len(text) < 2 or text[0] not in QUOTES:
        return False
    return quoted_end(text, 0) == len(text) - 1


def iter_unquoted(text: str) -> Iterator[tuple[int, str, int]]:
    """Yield ``(index, char, depth)`` for characters outside quoted scalars.

    ``depth`` counts the brackets and braces enclosing the character; an opening
    bracket is reported at the depth outside it, as is its closing partner.
    """
    depth = 0
    index = 0
    while index < len(text):
        char = text[index]
        if char in QUOTES and (index == 0 or text[index - 1] in _TOKEN_BOUNDARY):
            end = quoted_end(text, index)
            if end is not None:
                index = end + 1
                continue
        if char in _CLOSERS and depth > 0:
            depth -= 1
        yield index, char, depth
        if char in _OPENERS:
            depth += 1
        index += 1


def find_comment(text: str) -> int | None:
    """Return the index of a ``#`` comment marker outside quotes, if any."""
    for index, char, _ in iter_unquoted(text):
        if char == "#" and (index == 0 or text[index - 1] in " \t"):
            return index
    return None


def strip_comment(text: str) -> str:
    index = find_comment(text)
    if index is None:
        return text
    return text[:index].rstrip()


def find_separator(text: str, separator: str = ": ") -> int | None:
    """Return the first top-level occurrence of ``separator`` outside quotes."""
    for index, char, depth in iter_unquoted(text):
        if depth == 0 and char == separator[0] and text.startswith(separator, index):
            return index
    return None


def split_top_level(text: str, delimiter: str = ",") -> list[str]:
    """Split ``text`` on ``delimiter`` where it is not nested or quoted."""
    parts: list[str] = []
    start = 0
    for index, char, depth in iter_unquoted(text):
        if depth == 0 and char == delimiter:
            parts.append(text[start:index].strip())
            start = index + 1
    parts.append(text[start:].strip())
    return parts
