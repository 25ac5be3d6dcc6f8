from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from mince.config import DEFAULT_CONFIG_FILENAME, MinceConfig
from mince.markup.errors import DocumentNotFoundError


def _write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / DEFAULT_CONFIG_FILENAME
    path.write_text(text, encoding="utf-8")
    return path


def test_from_yaml_reads_rules(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        "minify:\n  - js/app.js\n  - css/site.css\ncombine:\n  out.css:\n    - a.css\n    - b.css\n",
    )
    config = MinceConfig.from_yaml(path)
    assert config.minify == ["js/app.js", "css/site.css"]
    assert config.combine == {"out.css": ["a.css", "b.css"]}
    assert config.rule_counts() == (2, 2)


def test_single_strings_are_promoted(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "minify: app.js\ncombine:\n  all.js: app.js\n")
    config = MinceConfig.from_yaml(path)
    assert config.minify == ["app.js"]
    assert config.combine == {"all.js": ["app.js"]}


def test_null_entries_and_unknown_keys_are_dropped() -> None:
    config = MinceConfig.model_validate(
        {"minify": [None, "a.js"], "combine": {1: ["b.js", None]}, "notes": "ignored"},
    )
    assert config.minify == ["a.js"]
    assert config.combine == {"1": ["b.js"]}
    assert not hasattr(config, "notes")


def test_directives_are_required(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "minify:\n  -\nother: 1\n")
    with pytest.raises(ValidationError) as excinfo:
        MinceConfig.from_yaml(path)
    assert "No minify or combine directives in minceconf." in str(excinfo.value)


def test_sequence_root_is_rejected(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "- a.js\n")
    with pytest.raises(ValidationError):
        MinceConfig.from_yaml(path)


def test_default_filename_is_read_from_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _write_config(tmp_path, "minify: [a.js, b.js]\n")
    monkeypatch.chdir(tmp_path)
    assert MinceConfig.from_yaml().rule_counts() == (2, 0)


def test_missing_config(tmp_path: Path) -> None:
    with pytest.raises(DocumentNotFoundError):
        MinceConfig.from_yaml(tmp_path / "nope")
