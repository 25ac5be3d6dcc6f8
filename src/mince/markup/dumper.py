"""Serialization of value trees back into markup text."""

from __future__ import annotations

import textwrap
from typing import Any

from pydantic import BaseModel, Field

from mince.markup.anchors import MERGE_KEY
from mince.markup.scalars import parse_key, resolve
from mince.markup.scanner import DOCUMENT_MARKER, find_separator

_STRUCTURAL = (": ", "- ", "*", "&", "#", "<", ">", "  ", "[", "]", "{", "}")
_KEY_INDICATORS = "-[{&*!|>?%@`'\""
_KEY_SPECIALS = ":#&*[]{}'\"\n\r\t"
_DOUBLE_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


class DumpOptions(BaseModel):
    """Layout settings for :func:`dump`."""

    indent: int = Field(default=2, ge=1, description="Spaces added per nesting level.")
    wrap: int = Field(default=40, ge=0, description="Fold plain strings longer than this; 0 disables.")
    force_quotes: bool = Field(default=False, description="Quote every string value.")


def dump(value: Any, indent: int = 2, wrap: int = 40, force_quotes: bool = False) -> str:
    """Render ``value`` as markup text opening with a document marker line."""
    options = DumpOptions(indent=indent, wrap=wrap, force_quotes=force_quotes)
    return _Dumper(options).render(value)


class _Dumper:
    def __init__(self, options: DumpOptions) -> None:
        self.options = options
        self.lines: list[str] = [DOCUMENT_MARKER]

    def render(self, value: Any) -> str:
        if _is_container(value):
            self._write_container(value, 0)
        else:
            self.lines.append(self._scalar(value, 0))
        return "\n".join(self.lines) + "\n"

    def _write_container(self, container: Any, indent: int) -> None:
        spaces = " " * indent
        if isinstance(container, dict):
            entries = [(f"{spaces}{_format_key(key)}:", item) for key, item in container.items()]
        else:
            entries = [(f"{spaces}-", item) for item in container]
        for prefix, item in entries:
            if _is_container(item) and item:
                self.lines.append(prefix)
                self._write_container(item, indent + self.options.indent)
            else:
                self.lines.append(f"{prefix} {self._scalar(item, indent)}")

    def _scalar(self, value: Any, indent: int) -> str:
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            text = repr(value)
            # "0.5" would reload as a string; ".5" stays a float.
            return text[1:] if text.startswith("0") else text
        if isinstance(value, dict):
            return "{ }"
        if isinstance(value, (list, tuple)):
            return "[ ]"
        return self._string(str(value), indent + self.options.indent)

    def _string(self, text: str, block_indent: int) -> str:
        if "\n" in text or "\r" in text:
            if not self.options.force_quotes and _literal_safe(text):
                return _literal_block(text, block_indent)
            return _double_quote(text)
        if self.options.force_quotes or _needs_quotes(text):
            return _quote(text)
        wrap = self.options.wrap
        if wrap and len(text) > wrap:
            folded = textwrap.wrap(text, width=wrap, break_long_words=False, break_on_hyphens=False)
            if len(folded) > 1 and " ".join(folded) == text:
                spaces = " " * block_indent
                return ">" + "".join(f"\n{spaces}{line}" for line in folded)
        return text


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def _needs_quotes(text: str) -> bool:
    if not text or text != text.strip():
        return True
    if any(marker in text for marker in _STRUCTURAL):
        return True
    if text.endswith((":", "|")):
        return True
    resolved = resolve(text)
    return not isinstance(resolved, str) or resolved != text


def _quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


def _double_quote(text: str) -> str:
    return '"' + "".join(_DOUBLE_ESCAPES.get(char, char) for char in text) + '"'


def _literal_safe(text: str) -> bool:
    if "\r" in text:
        return False
    lines = text.split("\n")
    if not lines[0].strip() or lines[0][0].isspace() or not lines[-1].strip():
        return False
    return all(line == line.rstrip() for line in lines)


def _literal_block(text: str, indent: int) -> str:
    spaces = " " * indent
    return "|" + "".join(f"\n{spaces}{line}" if line else "\n" for line in text.split("\n"))


def _format_key(key: Any) -> str:
    if isinstance(key, int) and not isinstance(key, bool):
        return str(key)
    text = str(key)
    if (
        not text
        or text != text.strip()
        or text == MERGE_KEY
        or text[0] in _KEY_INDICATORS
        or any(char in text for char in _KEY_SPECIALS)
        or parse_key(text) != text
        or find_separator(f"{text}: x") != len(text)
    ):
        return _double_quote(text)
    return text
