"""Glyph outline assembly.

Turns laid-out text into absolute PathCommands. Horizontal runs are drawn
from the anchored metrics position on the baseline; vertical runs stack
glyphs top-down, each centered in the column. Every glyph's commands are
rounded to the serialization precision as soon as they are produced, and the
optional arc envelope is applied per line afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from font_to_svg.fonts.asset import FontAsset
from font_to_svg.layout.metrics import (
    VERTICAL_CHAR_SPACING,
    VERTICAL_SPACE_ADVANCE,
    LineMetrics,
    column_width,
    is_multiline,
    multiline_metrics,
    single_line_metrics,
    vertical_multiline_metrics,
)
from font_to_svg.options import EnvelopeOptions, ResolvedOptions, TextOptions, resolve_options
from font_to_svg.svg.envelope import apply_envelope
from font_to_svg.svg.path_data import PathCommand, round_commands, to_path_data


def _is_blank(text: str) -> bool:
    return text.strip() == ""


def envelope_for_run(
    envelope: EnvelopeOptions | None, width: float, x: float, baseline: float
) -> EnvelopeOptions | None:
    """Fill in the arc defaults for one run without touching the caller's value.

    The arc always spans the run's measured width; a missing center falls
    back to the run's horizontal middle and baseline.
    """
    if envelope is None or envelope.arc is None:
        return envelope
    arc = envelope.arc
    return EnvelopeOptions(
        arc=replace(
            arc,
            text_width=width if width > 0 else None,
            center_x=arc.center_x if arc.center_x is not None else x + width / 2,
            center_y=arc.center_y if arc.center_y is not None else baseline,
        )
    )


def _run_path(font: FontAsset, text: str, x: float, baseline: float, options: ResolvedOptions) -> list[PathCommand]:
    commands = font.outline_path(
        text,
        x,
        baseline,
        options.font_size,
        kerning=options.kerning,
        letter_spacing=options.letter_spacing,
        tracking=options.tracking,
    )
    return round_commands(commands)


def horizontal_path(font: FontAsset, text: str, options: ResolvedOptions) -> list[PathCommand]:
    """Path of a single horizontal line, arc envelope applied if configured."""
    metrics = single_line_metrics(font, text, options)
    commands = _run_path(font, text, metrics.x, metrics.baseline, options)
    envelope = envelope_for_run(options.envelope, metrics.width, metrics.x, metrics.baseline)
    return apply_envelope(commands, envelope)


def left_edge_compensation(font: FontAsset, lines: tuple[LineMetrics, ...], font_size: float) -> list[LineMetrics]:
    """Shift lines so the ink of their first characters starts flush left.

    Each non-blank line is moved left by how much its first glyph's left side
    bearing exceeds the smallest one in the block. Blank lines are unchanged.
    """
    offsets: list[float | None] = []
    for line in lines:
        if _is_blank(line.text):
            offsets.append(None)
            continue
        glyph = font.char_to_glyph(line.text[0])
        offsets.append(font.glyph_bounding_box(glyph, font_size).x1)

    known = [offset for offset in offsets if offset is not None]
    if not known:
        return list(lines)
    min_offset = min(known)
    return [
        line if offset is None else replace(line, x=line.x - (offset - min_offset))
        for line, offset in zip(lines, offsets)
    ]


def multiline_path(font: FontAsset, text: str, options: ResolvedOptions) -> list[PathCommand]:
    """Concatenated paths of a horizontal block; blank lines draw nothing."""
    metrics = multiline_metrics(font, text, options)
    lines = list(metrics.lines or ())
    if options.text_align == "left":
        lines = left_edge_compensation(font, metrics.lines or (), options.font_size)

    commands: list[PathCommand] = []
    for line in lines:
        if _is_blank(line.text):
            continue
        line_commands = _run_path(font, line.text, line.x, line.baseline, options)
        envelope = envelope_for_run(options.envelope, line.width, line.x, line.baseline)
        commands.extend(apply_envelope(line_commands, envelope))
    return commands


def vertical_path(font: FontAsset, text: str, options: ResolvedOptions) -> list[PathCommand]:
    """Path of a single vertical column starting at (options.x, options.y).

    The position is used as given (no anchoring). Each printable glyph is
    centered in the column and hung with its ink top at the running cursor.
    """
    font_size = options.font_size
    char_spacing = font_size * VERTICAL_CHAR_SPACING
    width = column_width(font, font_size)

    commands: list[PathCommand] = []
    current_y = options.y
    for glyph in font.glyphs_for(text):
        if glyph.is_printable:
            box = font.glyph_bounding_box(glyph, font_size)
            glyph_x = options.x + (width - box.width) / 2 - box.x1
            glyph_y = current_y - box.y1
            commands.extend(round_commands(font.glyph_path(glyph, glyph_x, glyph_y, font_size)))
            current_y += box.height + char_spacing + options.spacing
        elif glyph.advance_width:
            current_y += font_size * VERTICAL_SPACE_ADVANCE
    return commands


def vertical_multiline_path(font: FontAsset, text: str, options: ResolvedOptions) -> list[PathCommand]:
    """Concatenated columns of a vertical block, right-most column first."""
    metrics = vertical_multiline_metrics(font, text, options)
    commands: list[PathCommand] = []
    for column in metrics.lines or ():
        if _is_blank(column.text):
            continue
        column_options = options.replace(x=column.x, y=column.y, writing_mode="vertical")
        commands.extend(vertical_path(font, column.text, column_options))
    return commands


def synthesize_path(
    font: FontAsset,
    text: str,
    options: TextOptions | ResolvedOptions | Mapping[str, Any] | None = None,
) -> list[PathCommand]:
    """Lay out text and return its outline as absolute PathCommands.

    Args:
        font: Parsed font supplying the outlines.
        text: Text to draw; a "\\n" makes it multi-line.
        options: Text options in any accepted form.

    Returns:
        Commands with coordinates rounded to 2 decimals.

    Raises:
        UnknownAnchorOptionError: If an anchor axis value is not recognized.
    """
    resolved = resolve_options(options)
    vertical = resolved.writing_mode == "vertical"
    if is_multiline(text):
        if vertical:
            return vertical_multiline_path(font, text, resolved)
        return multiline_path(font, text, resolved)
    if vertical:
        return vertical_path(font, text, resolved)
    return horizontal_path(font, text, resolved)


def synthesize_path_data(
    font: FontAsset,
    text: str,
    options: TextOptions | ResolvedOptions | Mapping[str, Any] | None = None,
) -> str:
    """synthesize_path serialized to an SVG path-data string."""
    return to_path_data(synthesize_path(font, text, options))
