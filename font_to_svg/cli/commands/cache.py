"""Cache command - inspect the font resource cache."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from font_to_svg.config import Config
from font_to_svg.exceptions import FontToSvgError
from font_to_svg.fonts.cache import DEFAULT_FONT_KEY, FontCache, format_bytes

console = Console()


@click.group()
def cache() -> None:
    """Font cache commands."""
    pass


@cache.command("stats")
@click.argument("keys", nargs=-1)
@click.option("--json", "as_json", is_flag=True, help="Print the statistics as JSON")
@click.pass_context
def cache_stats(ctx: click.Context, keys: tuple[str, ...], as_json: bool) -> None:
    """Load font KEYS through one cache and report its statistics.

    Use "default" for the default font. Keys are loaded in order, so the
    report shows which fonts survive eviction under the configured ceiling.
    """
    config = ctx.obj.get("config") if ctx.obj else None
    font_cache = FontCache.from_config(config or Config.load())

    for key in keys:
        try:
            font_cache.acquire(None if key == DEFAULT_FONT_KEY else key)
        except FontToSvgError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise SystemExit(1) from e

    stats = font_cache.stats()
    if as_json:
        click.echo(json.dumps(stats.to_dict(), indent=2))
        return

    table = Table(title="Font Cache")
    table.add_column("Key", style="cyan")
    table.add_column("Size", style="yellow", justify="right")
    table.add_column("Last accessed", style="dim")
    for entry in stats.entries:
        table.add_row(entry.key, format_bytes(entry.size), entry.last_accessed.isoformat(timespec="seconds"))

    console.print(table)
    console.print(f"[bold]Fonts:[/bold] {stats.count}")
    console.print(
        f"[bold]Total:[/bold] {format_bytes(stats.total_bytes)} of {format_bytes(stats.max_bytes)}"
        f" ({stats.usage_percent:.1f}%)"
    )
