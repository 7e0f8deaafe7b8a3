"""Render commands - SVG documents, path data and metrics for a text."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.markup import escape

from font_to_svg.api import TextToSvgConverter
from font_to_svg.config import Config
from font_to_svg.exceptions import FontToSvgError
from font_to_svg.options import TEXT_ALIGNS, WRITING_MODES, TextOptions

console = Console()

# click parameter -> camelCase option name
_FLAG_OPTIONS = {
    "font_size": "fontSize",
    "letter_spacing": "letterSpacing",
    "tracking": "tracking",
    "kerning": "kerning",
    "anchor": "anchor",
    "x": "x",
    "y": "y",
    "line_height": "lineHeight",
    "text_align": "textAlign",
    "writing_mode": "writingMode",
}

_TEXT_OPTIONS = [
    click.argument("text"),
    click.option("--font", "font_key", help="Font key, relative to the fonts or uploads directory"),
    click.option("--font-size", type=float, help="Font size in output units [default: 72]"),
    click.option("--letter-spacing", type=float, help="Extra advance per glyph, in em"),
    click.option("--tracking", type=float, help="Extra advance per glyph, in 1/1000 em"),
    click.option("--kerning/--no-kerning", default=None, help="Apply pair kerning [default: on]"),
    click.option("--anchor", help='Anchor, e.g. "left baseline" or "center middle"'),
    click.option("-x", "x", type=float, help="Anchor x position"),
    click.option("-y", "y", type=float, help="Anchor y position"),
    click.option("--attr", "attrs", multiple=True, metavar="KEY=VALUE", help="Attribute for the path element"),
    click.option("--arc", "arc_angle", type=float, help="Bend the text along an arc of ANGLE degrees"),
    click.option("--arc-center", nargs=2, type=float, default=None, metavar="X Y", help="Arc center"),
    click.option("--line-height", type=float, help="Line height multiplier [default: 1.2]"),
    click.option("--text-align", type=click.Choice(TEXT_ALIGNS), help="Alignment of lines in a block"),
    click.option("--writing-mode", type=click.Choice(WRITING_MODES), help="Horizontal lines or vertical columns"),
    click.option(
        "--options-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="JSON file with camelCase options; flags override it",
    ),
]


def text_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared TEXT argument and layout options to a command."""
    for decorator in reversed(_TEXT_OPTIONS):
        func = decorator(func)
    return func


def _fail(message: str, error: Exception | None = None) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(message)}")
    if error is not None:
        raise SystemExit(1) from error
    raise SystemExit(1)


def _parse_attrs(attrs: tuple[str, ...]) -> dict[str, str]:
    parsed = {}
    for item in attrs:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--attr")
        parsed[key] = value
    return parsed


def build_options(params: dict[str, Any]) -> TextOptions:
    """Merge --options-file with explicit flags into TextOptions.

    Raises:
        click.BadParameter: On malformed --attr or --arc-center without an arc.
        InvalidOptionError: If the merged options fail validation.
        ValueError: If the options file is not a JSON object.
    """
    data: dict[str, Any] = {}
    options_file = params.get("options_file")
    if options_file is not None:
        loaded = json.loads(options_file.read_text(encoding="utf-8"))
        if not isinstance(loaded, dict):
            raise ValueError(f"{options_file} must contain a JSON object")
        data.update(loaded)

    for param, wire_name in _FLAG_OPTIONS.items():
        if params.get(param) is not None:
            data[wire_name] = params[param]

    attrs = _parse_attrs(params.get("attrs") or ())
    if attrs:
        data["attributes"] = {**(data.get("attributes") or {}), **attrs}

    arc_angle = params.get("arc_angle")
    arc_center = params.get("arc_center")
    if arc_angle is not None or arc_center:
        envelope = dict(data.get("envelope") or {})
        arc = dict(envelope.get("arc") or {})
        if arc_angle is not None:
            arc["angle"] = arc_angle
        if "angle" not in arc:
            raise click.BadParameter("requires --arc (or an arc in --options-file)", param_hint="--arc-center")
        if arc_center:
            arc["centerX"], arc["centerY"] = arc_center
        envelope["arc"] = arc
        data["envelope"] = envelope

    return TextOptions.from_dict(data)


def _prepare(ctx: click.Context, params: dict[str, Any]) -> tuple[TextToSvgConverter, str, TextOptions]:
    config = ctx.obj.get("config") if ctx.obj else None
    converter = TextToSvgConverter(config=config or Config.load())
    # allow "\n" typed on the command line as a line break
    text = params["text"].replace("\\n", "\n")
    try:
        options = build_options(params)
    except (FontToSvgError, ValueError) as e:
        _fail(str(e), e)
    return converter, text, options


@click.command()
@text_options
@click.option("--debug", is_flag=True, help="Draw axes, line boxes and the writing mode")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write the SVG to a file")
@click.option("--with-metrics", is_flag=True, help="Also print the layout metrics as JSON")
@click.pass_context
def svg(ctx: click.Context, debug: bool, output: Path | None, with_metrics: bool, **params: Any) -> None:
    """Render TEXT as a standalone SVG document."""
    converter, text, options = _prepare(ctx, params)
    try:
        result = converter.render(text, options, params["font_key"], debug=debug)
    except FontToSvgError as e:
        _fail(str(e), e)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.svg, encoding="utf-8")
        console.print(f"[green]Wrote[/green] {escape(str(output))}")
    else:
        click.echo(result.svg)

    if with_metrics:
        click.echo(json.dumps(result.metrics.to_dict(), indent=2))


@click.command()
@text_options
@click.option("--element", is_flag=True, help="Print a <path> element with the --attr attributes")
@click.pass_context
def path(ctx: click.Context, element: bool, **params: Any) -> None:
    """Print the SVG path data of TEXT."""
    converter, text, options = _prepare(ctx, params)
    try:
        if element:
            output = converter.path_element(text, options, params["font_key"])
        else:
            output = converter.path_data(text, options, params["font_key"])
    except FontToSvgError as e:
        _fail(str(e), e)
    click.echo(output)


@click.command()
@text_options
@click.option("--preserve-anchor-case", is_flag=True, help="Reject anchor tokens that are not lower-case")
@click.pass_context
def metrics(ctx: click.Context, preserve_anchor_case: bool, **params: Any) -> None:
    """Print the layout metrics of TEXT as JSON."""
    converter, text, options = _prepare(ctx, params)
    try:
        result = converter.metrics(text, options, params["font_key"], preserve_case=preserve_anchor_case)
    except FontToSvgError as e:
        _fail(str(e), e)
    click.echo(json.dumps(result.to_dict(), indent=2))
