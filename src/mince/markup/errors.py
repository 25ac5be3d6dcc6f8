"""Exceptions raised while loading markup documents."""

from __future__ import annotations

from pathlib import Path


class ParseError(ValueError):
    """Raised when a document cannot be assembled into a value tree."""

    def __init__(self, message: str, line_no: int | None = None) -> None:
        self.line_no = line_no
        if line_no is not None:
            message = f"{message} (line {line_no})"
        super().__init__(message)


class InconsistentRootKeysError(ParseError):
    """Raised when root entries mix sequence items with named keys."""

    def __init__(self, expected: str, line_no: int | None = None) -> None:
        self.expected = expected
        super().__init__(
            f"Root entries are inconsistent: document started as a {expected}",
            line_no,
        )


class UnresolvedAliasError(ParseError):
    """Raised when an alias refers to an anchor that was never defined."""

    def __init__(self, name: str, line_no: int | None = None) -> None:
        self.name = name
        super().__init__(f"Alias '*{name}' does not match any anchor", line_no)


class MergeSourceError(ParseError):
    """Raised when a merge key points at something other than a mapping."""

    def __init__(self, name: str | None, line_no: int | None = None) -> None:
        self.name = name
        source = f"'*{name}'" if name else "inline value"
        super().__init__(f"Merge source {source} is not a mapping", line_no)


class DocumentIOError(OSError):
    """Raised when a document file cannot be read."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class DocumentNotFoundError(DocumentIOError, FileNotFoundError):
    """Raised when the requested document does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Document file not found ({path}).")


class DocumentReadError(DocumentIOError):
    """Raised when an existing document cannot be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.reason = reason
        super().__init__(path, f"Failed to read document {path}: {reason}")
