"""Document loading: drives scanning, classification and tree building."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from mince.markup.anchors import MERGE_KEY, AnchorRegistry, extract_references, merge_into
from mince.markup.blocks import (
    BLOCK_PLACEHOLDER,
    block_style,
    collect_block,
    join_flow_continuation,
    mark_block,
)
from mince.markup.builder import TreeBuilder
from mince.markup.classifier import Entry, EntryKind, classify
from mince.markup.errors import DocumentNotFoundError, DocumentReadError
from mince.markup.scanner import Line, is_ignorable, scan, strip_comment

LOG = logging.getLogger(__name__)


def load(text: str) -> Any:
    """Parse a markup document into nested dicts, lists and scalars.

    Empty documents load as an empty mapping. Raises a ``ParseError`` subclass on
    inconsistent root entries, unknown aliases or invalid merge sources.
    """
    return _Loader(text).run()


def load_file(path: Path | str) -> Any:
    """Read ``path`` as UTF-8 and parse it with :func:`load`."""
    path = Path(path)
    LOG.debug("Reading file '%s'", path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DocumentNotFoundError(path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(path, str(exc)) from exc
    return load(text)


def _restore_block(value: Any, block: str) -> Any:
    if value == BLOCK_PLACEHOLDER:
        return block
    if isinstance(value, list):
        return [_restore_block(item, block) for item in value]
    if isinstance(value, dict):
        return {key: _restore_block(item, block) for key, item in value.items()}
    return value


class _Loader:
    """State of a single load call: lines, path stack and anchors."""

    def __init__(self, text: str) -> None:
        self.lines = scan(text)
        self.builder = TreeBuilder()
        self.anchors = AnchorRegistry()

    def run(self) -> Any:
        index = 0
        entries = 0
        while index < len(self.lines):
            line = self.lines[index]
            index += 1
            content = strip_comment(line.content)
            if is_ignorable(content):
                continue

            block = None
            style = block_style(content)
            if style is not None:
                content = mark_block(content)
                block, index = collect_block(self.lines, index, line.indent, style)
            content, index = join_flow_continuation(content, self.lines, index)

            references = extract_references(content)
            entry = classify(references.text, anchor=references.anchor, alias=references.alias)
            if block is not None:
                entry.value = _restore_block(entry.value, block)
            self._place(entry, line)
            entries += 1

        result = self.builder.result()
        LOG.debug(
            "Loaded %d entries from %d lines into a %s",
            entries,
            len(self.lines),
            "sequence" if isinstance(result, list) else "mapping",
        )
        return result

    def _place(self, entry: Entry, line: Line) -> None:
        container = self.builder.open_container(line.indent, entry.positional, line.number)

        value = entry.value
        if entry.alias is not None:
            value = self.anchors.resolve(entry.alias, self.builder.root, line.number)
            if entry.kind is EntryKind.MAPPED_SEQUENCE:
                value = {entry.inner_key: value}

        if entry.key == MERGE_KEY and not entry.quoted_key:
            merge_into(container, value, entry.alias, line.number)
            return

        if entry.kind is EntryKind.FLOW_SEQUENCE and isinstance(value, list):
            if entry.anchor is not None:
                self.anchors.record(entry.anchor, self.builder.path)
            for item in value:
                self.builder.insert(container, None, item, line.indent)
            return

        self.builder.insert(
            container,
            entry.key,
            value,
            line.indent,
            accepts_indentless=entry.kind is EntryKind.MAPPED_VALUE,
        )
        if entry.anchor is not None:
            path = self.builder.path
            if entry.kind is EntryKind.MAPPED_SEQUENCE:
                path.append(entry.inner_key)
            self.anchors.record(entry.anchor, path)
        if entry.kind is EntryKind.MAPPED_SEQUENCE:
            self.builder.push(line.indent + entry.key_column, value, entry.inner_key)
