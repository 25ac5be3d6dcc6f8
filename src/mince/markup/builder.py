"""Placement of classified entries into the value tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mince.markup.errors import InconsistentRootKeysError
from mince.markup.scalars import Key, next_index

Container = list | dict


@dataclass
class _Frame:
    """The key last assigned at one indentation width, and where it lives."""

    indent: int
    container: Container
    key: Key
    accepts_indentless: bool = False

    @property
    def value(self) -> Any:
        return self.container[self.key]

    def replace(self, value: Any) -> None:
        self.container[self.key] = value


def _coerce(current: Any, positional: bool) -> Container:
    if isinstance(current, dict):
        return current
    if isinstance(current, list):
        if positional:
            return current
        if not current:
            return {}
        return dict(enumerate(current))
    return [] if positional else {}


class TreeBuilder:
    """Builds a value tree from entries and their indentation.

    The path stack holds handles to the open containers from the root down, so
    every insertion mutates the tree in place.
    """

    def __init__(self) -> None:
        self.root: Container | None = None
        self._frames: list[_Frame] = []

    @property
    def path(self) -> list[Key]:
        """Keys leading from the root to the most recently placed value."""
        return [frame.key for frame in self._frames]

    def result(self) -> Container:
        return {} if self.root is None else self.root

    def open_container(self, indent: int, positional: bool, line_no: int | None = None) -> Container:
        """Rewind the path stack to ``indent`` and return the container to insert into."""
        self._rewind(indent, positional)
        if not self._frames:
            return self._root_container(positional, line_no)
        frame = self._frames[-1]
        container = _coerce(frame.value, positional)
        if container is not frame.value:
            frame.replace(container)
        return container

    def insert(
        self,
        container: Container,
        key: Key | None,
        value: Any,
        indent: int,
        accepts_indentless: bool = False,
    ) -> None:
        """Store ``value`` in ``container`` and make it the open path at ``indent``."""
        if key is None:
            if isinstance(container, list):
                container.append(value)
                key = len(container) - 1
            else:
                key = next_index(container)
                container[key] = value
        else:
            container[key] = value
        self._frames.append(_Frame(indent, container, key, accepts_indentless))

    def push(self, indent: int, container: Container, key: Key) -> None:
        """Route lines deeper than ``indent`` into ``container[key]``."""
        self._frames.append(_Frame(indent, container, key, accepts_indentless=True))

    def _rewind(self, indent: int, positional: bool) -> None:
        while self._frames:
            frame = self._frames[-1]
            if frame.indent < indent:
                return
            # "key:" followed by "- item" at the same indentation.
            if (
                frame.indent == indent
                and positional
                and frame.accepts_indentless
                and (frame.value is None or isinstance(frame.value, list))
            ):
                return
            self._frames.pop()

    def _root_container(self, positional: bool, line_no: int | None) -> Container:
        if self.root is None:
            self.root = [] if positional else {}
        elif isinstance(self.root, list) != positional:
            expected = "sequence" if isinstance(self.root, list) else "mapping"
            raise InconsistentRootKeysError(expected, line_no)
        return self.root
