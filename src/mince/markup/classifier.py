"""Classification of logical lines into structural entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from mince.markup.scalars import Key, parse_key, resolve
from mince.markup.scanner import find_separator, is_quoted


class EntryKind(Enum):
    MAPPED_SEQUENCE = "mapped-sequence"
    MAPPED_VALUE = "mapped-value"
    SEQUENCE_ITEM = "sequence-item"
    FLOW_SEQUENCE = "flow-sequence"
    KEY_VALUE = "key-value"
    SCALAR = "scalar"


@dataclass
class Entry:
    """A classified line ready to be placed into the tree.

    ``key`` is ``None`` for positional entries. Mapped-sequence entries are
    positional items holding ``{inner_key: []}``; ``key_column`` is the offset of
    ``inner_key`` within the line. ``quoted_key`` marks keys written in quotes.
    """

    kind: EntryKind
    key: Key | None = None
    value: Any = None
    inner_key: Key | None = None
    quoted_key: bool = False
    key_column: int = 0
    anchor: str | None = None
    alias: str | None = None

    @property
    def positional(self) -> bool:
        return self.key is None


def is_sequence_item(text: str) -> bool:
    return text == "-" or text.startswith(("- ", "-\t"))


def classify(text: str, anchor: str | None = None, alias: str | None = None) -> Entry:
    """Decide which construct ``text`` represents; the first matching rule wins."""
    text = text.strip()

    if is_sequence_item(text) and text.endswith(":") and len(text) > 2:
        body = text[1:].lstrip()
        key = parse_key(body[:-1])
        return Entry(
            EntryKind.MAPPED_SEQUENCE,
            value={key: []},
            inner_key=key,
            key_column=len(text) - len(body),
            anchor=anchor,
            alias=alias,
        )

    if text.endswith(":"):
        return Entry(
            EntryKind.MAPPED_VALUE,
            key=parse_key(text[:-1]),
            quoted_key=is_quoted(text[:-1].strip()),
            anchor=anchor,
            alias=alias,
        )

    if is_sequence_item(text):
        return Entry(EntryKind.SEQUENCE_ITEM, value=resolve(text[1:]), anchor=anchor, alias=alias)

    if text.startswith("[") and text.endswith("]"):
        return Entry(EntryKind.FLOW_SEQUENCE, value=resolve(text), anchor=anchor, alias=alias)

    separator = find_separator(text)
    if separator is None:
        return Entry(EntryKind.SCALAR, value=resolve(text), anchor=anchor, alias=alias)
    return Entry(
        EntryKind.KEY_VALUE,
        key=parse_key(text[:separator]),
        quoted_key=is_quoted(text[:separator].strip()),
        value=resolve(text[separator + 2 :]),
        anchor=anchor,
        alias=alias,
    )
