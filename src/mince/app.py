"""Command-line entry point for Mince."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import typer
from pydantic import ValidationError

from mince import get_version
from mince.config import DEFAULT_CONFIG_FILENAME, MinceConfig
from mince.markup.dumper import dump as dump_markup
from mince.markup.errors import DocumentIOError, ParseError
from mince.markup.loader import load_file
from mince.reporting.report import emit_report

app = typer.Typer(help="Mince: inspect .minceconf rules and re-serialise markup files.")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    )


def _fail(exc: Exception) -> NoReturn:
    typer.secho(str(exc), fg=typer.colors.RED)
    raise typer.Exit(code=1) from exc


@app.callback()
def main(
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level (DEBUG, INFO, ...)."),
) -> None:
    """Read and write the markup used by .minceconf files."""
    _configure_logging(log_level)


@app.command()
def show(
    config_file: Path = typer.Argument(
        Path(DEFAULT_CONFIG_FILENAME),
        help="Config file to read.",
    ),
    plain: bool = typer.Option(False, "--plain", help="Log the rules instead of drawing panels."),
    export_json: Path | None = typer.Option(
        None,
        "--export-json",
        help="Optional path to write the recognised rules as JSON.",
    ),
) -> None:
    """Load a config file and report its minify and combine rules."""
    try:
        config = MinceConfig.from_yaml(config_file)
    except (DocumentIOError, ParseError, ValidationError) as exc:
        _fail(exc)
    emit_report(config, config_file, rich_output=not plain, export_json=export_json)


@app.command()
def dump(
    markup_file: Path = typer.Argument(..., help="Markup file to load and re-serialise."),
    indent: int = typer.Option(2, "--indent", help="Spaces per nesting level."),
    wrap: int = typer.Option(40, "--wrap", help="Fold plain strings longer than this; 0 disables."),
    force_quotes: bool = typer.Option(False, "--force-quotes", help="Quote every string value."),
) -> None:
    """Print a markup file as the dumper renders it."""
    try:
        value = load_file(markup_file)
        text = dump_markup(value, indent=indent, wrap=wrap, force_quotes=force_quotes)
    except (DocumentIOError, ParseError, ValidationError) as exc:
        _fail(exc)
    typer.echo(text, nl=False)


@app.command()
def version() -> None:
    """Print the installed version."""
    typer.echo(get_version())


if __name__ == "__main__":  # pragma: no cover
    app()
