"""Fonts command - font discovery utilities."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from font_to_svg.config import Config
from font_to_svg.exceptions import FontToSvgError
from font_to_svg.fonts import FontCache, FontResolver
from font_to_svg.fonts.cache import DEFAULT_FONT_KEY, format_bytes

console = Console()


def _config(ctx: click.Context) -> Config:
    config = ctx.obj.get("config") if ctx.obj else None
    return config or Config.load()


@click.group()
def fonts() -> None:
    """Font management commands."""
    pass


@fonts.command("list")
@click.option("--family", type=click.Choice(["Default", "Uploaded"]), help="Only list fonts of one family")
@click.pass_context
def list_fonts(ctx: click.Context, family: str | None) -> None:
    """List fonts under the fonts and uploads directories."""
    resolver = FontResolver.from_config(_config(ctx))

    table = Table(title="Available Fonts")
    table.add_column("Name", style="cyan")
    table.add_column("Family", style="green")
    table.add_column("Style", style="yellow")
    table.add_column("Key", style="dim")

    count = 0
    for info in resolver.list_fonts():
        if family and info.family != family:
            continue
        table.add_row(info.name, info.family, info.style, info.file)
        count += 1

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {count} fonts")


@fonts.command("find")
@click.argument("key")
@click.pass_context
def find_font(ctx: click.Context, key: str) -> None:
    """Show the file a font KEY resolves to ("default" for the default font)."""
    resolver = FontResolver.from_config(_config(ctx))
    try:
        font_path = resolver.resolve(None if key == DEFAULT_FONT_KEY else key)
    except FontToSvgError as e:
        console.print(f"[red]Not found:[/red] {escape(str(e))}")
        for candidate in getattr(e, "searched", []):
            console.print(f"  [dim]searched:[/dim] {escape(str(candidate))}")
        raise SystemExit(1) from e
    console.print(f"[green]Found:[/green] {escape(str(font_path))}")


@fonts.command("info")
@click.argument("key")
@click.pass_context
def font_info(ctx: click.Context, key: str) -> None:
    """Load a font KEY and print its metrics."""
    cache = FontCache.from_config(_config(ctx))
    font_key = None if key == DEFAULT_FONT_KEY else key
    try:
        with console.status(f"[bold green]Loading '{escape(key)}'..."):
            asset = cache.acquire(font_key)
    except FontToSvgError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    table = Table(title=f"Font {key}", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("File", str(asset.source))
    size = next(entry.size for entry in cache.stats().entries if entry.key == (font_key or DEFAULT_FONT_KEY))
    table.add_row("Size", format_bytes(size))
    table.add_row("Units per em", str(asset.units_per_em))
    table.add_row("Ascender", str(asset.ascender))
    table.add_row("Descender", str(asset.descender))
    table.add_row("Glyphs", str(asset.glyph_count))
    console.print(table)
