from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from mince import get_version
from mince.app import app

runner = CliRunner()

CONFIG_TEXT = "minify:\n  - app.js\ncombine:\n  all.css:\n    - a.css\n    - b.css\n"


def test_show_renders_rules(tmp_path: Path) -> None:
    config = tmp_path / ".minceconf"
    config.write_text(CONFIG_TEXT, encoding="utf-8")
    result = runner.invoke(app, ["show", str(config)])
    assert result.exit_code == 0, result.output
    assert "app.js" in result.output
    assert "Parsed 3 rules" in result.output


def test_show_exports_json(tmp_path: Path) -> None:
    config = tmp_path / ".minceconf"
    config.write_text(CONFIG_TEXT, encoding="utf-8")
    export = tmp_path / "rules.json"
    result = runner.invoke(app, ["show", str(config), "--plain", "--export-json", str(export)])
    assert result.exit_code == 0, result.output
    assert json.loads(export.read_text(encoding="utf-8")) == {
        "minify": ["app.js"],
        "combine": {"all.css": ["a.css", "b.css"]},
    }


def test_show_missing_config_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["show", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_show_without_directives_fails(tmp_path: Path) -> None:
    config = tmp_path / ".minceconf"
    config.write_text("other: 1\n", encoding="utf-8")
    result = runner.invoke(app, ["show", str(config)])
    assert result.exit_code == 1
    assert "No minify or combine directives" in result.output


def test_dump_reserialises_file(tmp_path: Path) -> None:
    source = tmp_path / "doc.yml"
    source.write_text("a: 1\nlist: [x, y]\n", encoding="utf-8")
    result = runner.invoke(app, ["dump", str(source), "--indent", "4"])
    assert result.exit_code == 0, result.output
    assert result.output == "---\na: 1\nlist:\n    - x\n    - y\n"


def test_dump_reports_parse_errors(tmp_path: Path) -> None:
    source = tmp_path / "bad.yml"
    source.write_text("a: *nowhere\n", encoding="utf-8")
    result = runner.invoke(app, ["dump", str(source)])
    assert result.exit_code == 1
    assert "nowhere" in result.output


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.output.strip() == get_version()
