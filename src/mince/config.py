"""Configuration model for ``.minceconf`` files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mince.markup.loader import load_file

LOG = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = ".minceconf"


def _path_list(value: Any) -> Any:
    """Promote a single path to a one-element list and drop empty entries."""
    if value is None:
        return []
    if isinstance(value, dict):
        value = list(value.values())
    elif not isinstance(value, list):
        value = [value]
    return [
        str(item) if isinstance(item, (int, float)) and not isinstance(item, bool) else item
        for item in value
        if item is not None
    ]


class MinceConfig(BaseModel):
    """Minify and combine directives read from a parsed config root.

    Keys other than ``minify`` and ``combine`` are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    minify: list[str] = Field(default_factory=list, description="Files to minify in place.")
    combine: dict[str, list[str]] = Field(
        default_factory=dict, description="Destination file mapped to the files concatenated into it."
    )

    @field_validator("minify", mode="before")
    @classmethod
    def promote_minify(cls, value: Any) -> Any:
        return _path_list(value)

    @field_validator("combine", mode="before")
    @classmethod
    def promote_combine(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value
        return {str(target): _path_list(sources) for target, sources in value.items()}

    @model_validator(mode="after")
    def require_directives(self) -> "MinceConfig":
        if not self.minify and not self.combine:
            raise ValueError("No minify or combine directives in minceconf.")
        return self

    def rule_counts(self) -> tuple[int, int]:
        """Return the number of minify rules and of combined source files."""
        return len(self.minify), sum(len(sources) for sources in self.combine.values())

    @classmethod
    def from_yaml(cls, path: Path | str = DEFAULT_CONFIG_FILENAME) -> "MinceConfig":
        LOG.info("Reading file '%s'.", path)
        raw = load_file(path)
        config = cls.model_validate(raw)
        LOG.info("Parsed %d rules.", sum(config.rule_counts()))
        return config
