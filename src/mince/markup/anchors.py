"""Anchor bookkeeping, alias resolution and merge keys."""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from mince.markup.errors import MergeSourceError, UnresolvedAliasError
from mince.markup.scalars import Key
from mince.markup.scanner import iter_unquoted

LOG = logging.getLogger(__name__)

MERGE_KEY = "<<"

_NAME = re.compile(r"[A-Za-z0-9_\-]+")


@dataclass(frozen=True)
class References:
    """Line text with its anchor and alias markers removed."""

    text: str
    anchor: str | None = None
    alias: str | None = None


def extract_references(text: str) -> References:
    """Pull an ``&anchor`` and a trailing ``*alias`` out of a line."""
    anchor = None
    alias = None
    for index, char, _ in iter_unquoted(text):
        if char not in "&*" or (index > 0 and not text[index - 1].isspace()):
            continue
        match = _NAME.match(text, index + 1)
        if match is None:
            continue
        rest = text[match.end() :]
        if rest and not rest[0].isspace():
            continue
        if char == "&" and anchor is None:
            anchor = match.group(0)
            text = (text[:index] + rest.lstrip()).strip()
            return _with_alias(text, anchor)
        if char == "*" and not rest.strip():
            alias = match.group(0)
            text = text[:index].strip()
            break
    return References(text=text, anchor=anchor, alias=alias)


def _with_alias(text: str, anchor: str) -> References:
    remaining = extract_references(text)
    return References(text=remaining.text, anchor=anchor, alias=remaining.alias)


class AnchorRegistry:
    """Maps anchor names to the tree path of the value they were attached to.

    The registry belongs to a single load call; aliases are resolved against the
    tree as it stands when the alias is read.
    """

    def __init__(self) -> None:
        self._paths: dict[str, tuple[Key, ...]] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._paths

    def record(self, name: str, path: Sequence[Key]) -> None:
        self._paths[name] = tuple(path)
        LOG.debug("Anchor '&%s' bound to path %s", name, list(path))

    def resolve(self, name: str, root: Any, line_no: int | None = None) -> Any:
        """Return a deep copy of the subtree anchored as ``name``."""
        try:
            path = self._paths[name]
        except KeyError as exc:
            raise UnresolvedAliasError(name, line_no) from exc
        node = root
        try:
            for key in path:
                node = node[key]
        except (KeyError, IndexError, TypeError) as exc:
            raise UnresolvedAliasError(name, line_no) from exc
        LOG.debug("Alias '*%s' resolved from path %s", name, list(path))
        return copy.deepcopy(node)


def merge_into(
    target: dict[Key, Any],
    source: Any,
    name: str | None = None,
    line_no: int | None = None,
) -> None:
    """Copy entries of ``source`` into ``target`` without overriding existing keys."""
    if isinstance(source, dict):
        sources = [source]
    elif isinstance(source, list) and source and all(isinstance(item, dict) for item in source):
        sources = source
    else:
        raise MergeSourceError(name, line_no)
    merged = 0
    for mapping in sources:
        for key, value in mapping.items():
            if key not in target:
                target[key] = value
                merged += 1
    LOG.debug("Merged %d keys from %s", merged, f"'*{name}'" if name else "inline mapping")
