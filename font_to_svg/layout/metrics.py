"""Text metrics for the four layout modes.

Text containing a line break is laid out as multiple lines (horizontal) or
multiple columns (vertical); everything else is a single run. All values are
in output units with y growing downward:

    x, y        top-left corner of the block after anchoring
    baseline    y of the first line's baseline
    width       advance-based width (horizontal) or column width (vertical)
    height      ascender - descender for a horizontal line, the stacked glyph
                heights for a vertical column

Height of a horizontal line is the font's fixed em extent at the given size,
not the ink bounds of the characters it contains.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, replace
from typing import Any

from font_to_svg.anchor import AnchorSpec, resolve_anchor
from font_to_svg.exceptions import UnknownAnchorOptionError
from font_to_svg.fonts.asset import FontAsset
from font_to_svg.options import ResolvedOptions, TextOptions, resolve_options

# Gap between stacked glyphs in vertical text, as a fraction of the font size.
VERTICAL_CHAR_SPACING = 0.1
# Advance used for spaces and other non-printable glyphs in vertical text.
VERTICAL_SPACE_ADVANCE = 0.6

TOP_LEFT = "left top"


@dataclass(frozen=True)
class LineMetrics:
    """Positioned metrics of one line (horizontal) or column (vertical)."""

    text: str
    x: float
    y: float
    baseline: float
    width: float
    height: float
    ascender: float
    descender: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TextMetrics:
    """Aggregate metrics of a text block.

    Attributes:
        ascender: The first line's ascender.
        descender: The last line's descender.
        lines: Per-line metrics in input order; None for single-line text.
    """

    x: float
    y: float
    baseline: float
    width: float
    height: float
    ascender: float
    descender: float
    lines: tuple[LineMetrics, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "x": self.x,
            "y": self.y,
            "baseline": self.baseline,
            "width": self.width,
            "height": self.height,
            "ascender": self.ascender,
            "descender": self.descender,
        }
        if self.lines is not None:
            data["lines"] = [line.to_dict() for line in self.lines]
        return data


def is_multiline(text: str) -> bool:
    return "\n" in text


# -- extents ------------------------------------------------------------------


def text_width(font: FontAsset, text: str, options: ResolvedOptions) -> float:
    """Advance width of a run, including kerning and per-glyph spacing.

    Letter spacing (or tracking) is added after every glyph, the last one
    included.
    """
    scale = font.scale_for(options.font_size)
    glyphs = font.glyphs_for(text)
    width = 0.0
    for i, glyph in enumerate(glyphs):
        if glyph.advance_width:
            width += font.advance_width(glyph) * scale
        if options.kerning and i < len(glyphs) - 1:
            width += font.kerning(glyph, glyphs[i + 1]) * scale
        width += options.spacing
    return width


def text_height(font: FontAsset, font_size: float) -> float:
    """Em extent (ascender - descender) at a font size."""
    return (font.ascender - font.descender) * font.scale_for(font_size)


def column_width(font: FontAsset, font_size: float) -> float:
    """Width of a vertical column; the horizontal em extent turned sideways."""
    return text_height(font, font_size)


def vertical_text_height(font: FontAsset, text: str, options: ResolvedOptions) -> float:
    """Stacked height of a vertical run.

    Printable glyphs contribute their outline height plus the inter-character
    gap (not after the last glyph) and any letter spacing. Spaces and other
    non-printable glyphs with an advance contribute a fixed placeholder.
    """
    font_size = options.font_size
    char_spacing = font_size * VERTICAL_CHAR_SPACING
    glyphs = font.glyphs_for(text)
    height = 0.0
    for i, glyph in enumerate(glyphs):
        if glyph.is_printable:
            height += font.glyph_bounding_box(glyph, font_size).height
            if i < len(glyphs) - 1:
                height += char_spacing
            height += options.spacing
        elif glyph.advance_width:
            height += font_size * VERTICAL_SPACE_ADVANCE
    return height


# -- anchoring ----------------------------------------------------------------


def horizontal_offset(horizontal: str, width: float) -> float:
    """Shift applied to x for a horizontal anchor value.

    Raises:
        UnknownAnchorOptionError: If the value is not left, center or right.
    """
    if horizontal == "left":
        return 0.0
    if horizontal == "center":
        return -width / 2
    if horizontal == "right":
        return -width
    raise UnknownAnchorOptionError(horizontal)


def vertical_offset(vertical: str, height: float, ascender: float) -> float:
    """Shift applied to y for a vertical anchor value.

    Raises:
        UnknownAnchorOptionError: If the value is not baseline, top, middle or bottom.
    """
    if vertical == "baseline":
        return -ascender
    if vertical == "top":
        return 0.0
    if vertical == "middle":
        return -height / 2
    if vertical == "bottom":
        return -height
    raise UnknownAnchorOptionError(vertical)


def _anchored(
    anchor: AnchorSpec, x: float, y: float, width: float, height: float, ascender: float
) -> tuple[float, float]:
    return (
        x + horizontal_offset(anchor.horizontal, width),
        y + vertical_offset(anchor.vertical, height, ascender),
    )


# -- single runs ----------------------------------------------------------------


def single_line_metrics(
    font: FontAsset, text: str, options: ResolvedOptions, *, preserve_case: bool = False
) -> TextMetrics:
    """Metrics of one horizontal line anchored at (options.x, options.y)."""
    scale = font.scale_for(options.font_size)
    width = text_width(font, text, options)
    height = text_height(font, options.font_size)
    ascender = font.ascender * scale
    descender = font.descender * scale

    anchor = resolve_anchor(options.anchor, preserve_case=preserve_case)
    x, y = _anchored(anchor, options.x, options.y, width, height, ascender)
    return TextMetrics(x, y, y + ascender, width, height, ascender, descender)


def vertical_metrics(
    font: FontAsset, text: str, options: ResolvedOptions, *, preserve_case: bool = False
) -> TextMetrics:
    """Metrics of one vertical column anchored at (options.x, options.y)."""
    scale = font.scale_for(options.font_size)
    width = column_width(font, options.font_size)
    height = vertical_text_height(font, text, options)
    ascender = font.ascender * scale
    descender = font.descender * scale

    anchor = resolve_anchor(options.anchor, preserve_case=preserve_case)
    x, y = _anchored(anchor, options.x, options.y, width, height, ascender)
    return TextMetrics(x, y, y + ascender, width, height, ascender, descender)


def _as_line(text: str, metrics: TextMetrics) -> LineMetrics:
    return LineMetrics(
        text=text,
        x=metrics.x,
        y=metrics.y,
        baseline=metrics.baseline,
        width=metrics.width,
        height=metrics.height,
        ascender=metrics.ascender,
        descender=metrics.descender,
    )


# -- blocks -------------------------------------------------------------------


def multiline_metrics(
    font: FontAsset, text: str, options: ResolvedOptions, *, preserve_case: bool = False
) -> TextMetrics:
    """Metrics of a horizontal block of lines.

    The anchor positions the block as a whole; text_align then places each
    line inside it, and lines are stacked line_advance apart.
    """
    line_options = options
    if options.text_align == "left":
        line_options = options.replace(anchor=TOP_LEFT)

    lines = [
        _as_line(line, single_line_metrics(font, line, line_options, preserve_case=preserve_case))
        for line in text.split("\n")
    ]
    line_advance = options.line_advance
    total_width = max(line.width for line in lines)
    total_height = (len(lines) - 1) * line_advance + lines[0].height

    anchor = resolve_anchor(options.anchor, preserve_case=preserve_case)
    x, y = _anchored(anchor, options.x, options.y, total_width, total_height, lines[0].ascender)

    positioned = []
    for i, line in enumerate(lines):
        if options.text_align == "center":
            line_x = x + (total_width - line.width) / 2
        elif options.text_align == "right":
            line_x = x + total_width - line.width
        else:
            line_x = x
        line_y = y + i * line_advance
        positioned.append(replace(line, x=line_x, y=line_y, baseline=line_y + line.ascender))

    return TextMetrics(
        x=x,
        y=y,
        baseline=y + positioned[0].ascender,
        width=total_width,
        height=total_height,
        ascender=positioned[0].ascender,
        descender=positioned[-1].descender,
        lines=tuple(positioned),
    )


def vertical_multiline_metrics(
    font: FontAsset, text: str, options: ResolvedOptions, *, preserve_case: bool = False
) -> TextMetrics:
    """Metrics of a block of vertical columns, laid out right to left.

    Column i is centered in the i-th line_advance-wide slot counted from the
    right edge of the block; every column starts at the block's top.
    """
    column_options = options.replace(x=0.0, y=0.0, anchor="", envelope=None, writing_mode="vertical")
    columns = [_as_line(line, vertical_metrics(font, line, column_options)) for line in text.split("\n")]

    line_advance = options.line_advance
    total_height = max(column.height for column in columns)
    total_width = columns[0].width + (len(columns) - 1) * line_advance

    ascender = font.ascender * font.scale_for(options.font_size)
    anchor = resolve_anchor(options.anchor, preserve_case=preserve_case)
    x, y = _anchored(anchor, options.x, options.y, total_width, total_height, ascender)

    positioned = [
        replace(
            column,
            x=x + total_width - (i + 1) * line_advance + (line_advance - column.width) / 2,
            y=y,
            baseline=y + column.ascender,
        )
        for i, column in enumerate(columns)
    ]

    return TextMetrics(
        x=x,
        y=y,
        baseline=y + positioned[0].ascender,
        width=total_width,
        height=total_height,
        ascender=positioned[0].ascender,
        descender=positioned[-1].descender,
        lines=tuple(positioned),
    )


def compute_metrics(
    font: FontAsset,
    text: str,
    options: TextOptions | ResolvedOptions | Mapping[str, Any] | None = None,
    *,
    preserve_case: bool = False,
) -> TextMetrics:
    """Compute positioned metrics for text in any layout mode.

    Args:
        font: Parsed font to measure with.
        text: Text to lay out; a "\\n" makes it multi-line.
        options: Text options in any accepted form; missing fields use defaults.
        preserve_case: Pass anchor tokens through without lower-casing them,
            so "Center" is rejected instead of treated as "center".

    Returns:
        TextMetrics, with per-line entries for multi-line text.

    Raises:
        UnknownAnchorOptionError: If an anchor axis value is not recognized.
        InvalidOptionError: If options given as a mapping fail validation.
    """
    resolved = resolve_options(options)
    vertical = resolved.writing_mode == "vertical"
    if is_multiline(text):
        if vertical:
            return vertical_multiline_metrics(font, text, resolved, preserve_case=preserve_case)
        return multiline_metrics(font, text, resolved, preserve_case=preserve_case)
    if vertical:
        return vertical_metrics(font, text, resolved, preserve_case=preserve_case)
    return single_line_metrics(font, text, resolved, preserve_case=preserve_case)
