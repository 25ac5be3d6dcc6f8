"""
Mince package initialisation.

Exposes the markup engine used to read ``.minceconf`` files: ``load`` and
``load_file`` turn configuration text into nested values, ``dump`` turns them back.
"""

from importlib import metadata

from mince.markup.dumper import dump
from mince.markup.errors import (
    DocumentIOError,
    DocumentNotFoundError,
    DocumentReadError,
    InconsistentRootKeysError,
    MergeSourceError,
    ParseError,
    UnresolvedAliasError,
)
from mince.markup.loader import load, load_file


def get_version() -> str:
    """Return the installed package version, falling back to source version during development."""
    try:
        return metadata.version("mince")
    except metadata.PackageNotFoundError:  # pragma: no cover - only occurs during dev
        return "1.3.0"


__all__ = [
    "DocumentIOError",
    "DocumentNotFoundError",
    "DocumentReadError",
    "InconsistentRootKeysError",
    "MergeSourceError",
    "ParseError",
    "UnresolvedAliasError",
    "dump",
    "get_version",
    "load",
    "load_file",
]
