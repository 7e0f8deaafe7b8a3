"""Entry point for the font2svg command."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from font_to_svg import __version__
from font_to_svg.cli.commands import cache, fonts, metrics, path, svg
from font_to_svg.config import LOG_LEVELS, Config
from font_to_svg.exceptions import ConfigError

console = Console()


def setup_logging(level: str) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(__version__, prog_name="font2svg")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file (default: $FONT2SVG_CONFIG or ~/.config/font2svg/config.yaml)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (overrides the config file)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """Convert text to SVG path outlines using TrueType/OpenType fonts."""
    ctx.ensure_object(dict)
    try:
        config = Config.load(config_path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    level = (log_level or config.log_level).upper()
    setup_logging(level)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = level


cli.add_command(svg)
cli.add_command(path)
cli.add_command(metrics)
cli.add_command(fonts)
cli.add_command(cache)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
