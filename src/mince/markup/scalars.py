"""Scalar typing and flow collection resolution.

Every function here is pure: the same text always resolves to an equal value,
and nested flow collections resolve through the same entry point.
"""

from __future__ import annotations

import re
from typing import Any

from mince.markup.scanner import find_comment, find_separator, is_quoted, split_top_level

Key = str | int

NULL_TOKENS = frozenset({"null", "NULL", "Null", "~"})
TRUE_TOKENS = frozenset({"true", "on", "+", "yes", "y"})
FALSE_TOKENS = frozenset({"false", "off", "-", "no", "n"})

INT64_MAX = 2**63 - 1

_INT_PATTERN = re.compile(r"^[1-9][0-9]*$")
_KEY_INT_PATTERN = re.compile(r"^(?:0|[1-9][0-9]*)$")
_NUMERIC_PATTERN = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")
_DOUBLE_ESCAPES = re.compile(r"\\([\"\\nrt])")
_ESCAPE_VALUES = {'"': '"', "\\": "\\", "n": "\n", "r": "\r", "t": "\t"}


def unquote(text: str) -> str:
    """Strip the quotes of a quoted scalar and apply its escapes."""
    inner = text[1:-1]
    if text[0] == "'":
        return inner.replace("''", "'")
    return _DOUBLE_ESCAPES.sub(lambda match: _ESCAPE_VALUES[match.group(1)], inner)


def parse_key(text: str) -> Key:
    """Convert key text to a mapping key.

    Quoted keys are unwrapped and always stay strings. Unquoted keys in canonical
    non-negative decimal form become integers.
    """
    text = text.strip()
    if is_quoted(text):
        return unquote(text)
    if _KEY_INT_PATTERN.match(text):
        number = int(text)
        if number <= INT64_MAX:
            return number
    return text


def resolve(text: str) -> Any:
    """Resolve raw scalar text into a typed value or flow collection."""
    text = text.strip()
    if not text:
        return None
    if is_quoted(text):
        return unquote(text)

    comment = find_comment(text)
    if comment is not None:
        return resolve(text[:comment])

    first, last = text[0], text[-1]
    if first == "[" and last == "]":
        return [resolve(item) for item in _flow_items(text[1:-1])]

    if first != "{":
        separator = find_separator(text)
        if separator is not None:
            return {parse_key(text[:separator]): resolve(text[separator + 2 :])}

    if first == "{" and last == "}":
        return _flow_mapping(text[1:-1])

    if text in NULL_TOKENS:
        return None

    if _INT_PATTERN.match(text):
        number = int(text)
        if number <= INT64_MAX:
            return number
        return text

    lowered = text.lower()
    if lowered in TRUE_TOKENS:
        return True
    if lowered in FALSE_TOKENS:
        return False

    if _NUMERIC_PATTERN.match(text):
        if text == "0":
            return 0
        # Leading zeros mark identifiers such as "007" or "0.50".
        if text.startswith("0"):
            return text
        return float(text)

    return text.replace("\\n", "\n")


def _flow_items(body: str) -> list[str]:
    if not body.strip():
        return []
    items = split_top_level(body)
    if len(items) > 1 and not items[-1]:
        items.pop()
    return items


def _flow_mapping(body: str) -> dict[Key, Any]:
    result: dict[Key, Any] = {}
    for item in _flow_items(body):
        value = resolve(item)
        if isinstance(value, dict):
            result.update(value)
        else:
            result[next_index(result)] = value
    return result


def next_index(mapping: dict[Key, Any]) -> int:
    """Return the next positional key for a mapping with mixed keys."""
    indices = [key for key in mapping if isinstance(key, int)]
    return max(indices) + 1 if indices else 0
