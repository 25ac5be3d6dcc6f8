"""Config summary presentation utilities."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from mince.config import MinceConfig

LOG = logging.getLogger(__name__)


def emit_report(
    config: MinceConfig,
    source: Path,
    rich_output: bool = True,
    export_json: Path | None = None,
) -> None:
    """Format and emit the rules of ``config`` read from ``source``."""
    if rich_output:
        _render_rich_panels(config, source)
    else:
        _render_plain(config)

    if export_json:
        _export_json(config, export_json)


def _render_rich_panels(config: MinceConfig, source: Path) -> None:
    console = Console()
    minify_count, combine_count = config.rule_counts()

    if config.minify:
        console.print(
            Panel(
                Text("\n".join(config.minify)),
                title=f"Minify ({minify_count})",
                border_style="cyan",
                expand=False,
            ),
        )

    for target, sources in config.combine.items():
        body = Text()
        for path in sources:
            body.append(f"{path}\n")
        body.append(f"-> {target}", style="bold")
        console.print(
            Panel(
                body,
                title=f"Combine into {target} ({len(sources)})",
                border_style="magenta",
                expand=False,
            ),
        )

    console.print(
        Text(
            f"Parsed {minify_count + combine_count} rules from {source}.",
            style="bold green",
        ),
    )


def _render_plain(config: MinceConfig) -> None:
    for path in config.minify:
        LOG.info("minify %s", path)
    for target, sources in config.combine.items():
        LOG.info("combine %s <- %s", target, ", ".join(sources))


def _export_json(config: MinceConfig, path: Path) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(config.model_dump(), handle, indent=2)
    LOG.info("JSON exported to %s", path)
