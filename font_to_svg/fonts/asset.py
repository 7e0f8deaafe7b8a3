"""Parsed font wrapper used by the layout engine.

FontAsset exposes the small surface layout needs: vertical metrics, glyph
lookup, advance widths, pair kerning and glyph outlines as PathCommands in
SVG (y-down) output units. Outlines come from fontTools glyph sets; kerning
pairs are measured by shaping the pair with HarfBuzz with only the kern
feature active, which covers both GPOS pair positioning and legacy kern
tables.

A FontAsset is read-only once constructed and may be shared between threads.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

import uharfbuzz as hb
from fontTools.pens.basePen import BasePen
from fontTools.pens.boundsPen import BoundsPen
from fontTools.ttLib import TTFont

from font_to_svg.exceptions import FontParseError
from font_to_svg.svg.path_data import ClosePath, CubicTo, LineTo, MoveTo, PathCommand, QuadTo

NOTDEF = ".notdef"

# Features disabled while measuring a kerning pair so the pair cannot ligate.
_PAIR_FEATURES = {"kern": True, "liga": False, "clig": False, "calt": False, "rlig": False, "dlig": False}


@dataclass(frozen=True)
class Glyph:
    """A glyph resolved from a character.

    Attributes:
        name: Glyph name in the font.
        index: Glyph id.
        unicode: Code point the glyph was looked up for; None for .notdef.
        advance_width: Horizontal advance in font units.
        char: Source character (kept for kerning lookups).
    """

    name: str
    index: int
    unicode: int | None
    advance_width: int
    char: str = ""

    @property
    def is_printable(self) -> bool:
        """Visible glyph, i.e. mapped from a code point above U+0020."""
        return (self.unicode or 0) > 32


class GlyphBox(NamedTuple):
    """Glyph outline bounds in output units, y-down (y1 is the top)."""

    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1


class _PathCommandPen(BasePen):
    """Pen that records outlines as PathCommands placed at (x, y) with y flipped."""

    def __init__(self, glyph_set, x: float, y: float, scale: float) -> None:
        super().__init__(glyph_set)
        self.x = x
        self.y = y
        self.scale = scale
        self.commands: list[PathCommand] = []

    def _pt(self, pt: tuple[float, float]) -> tuple[float, float]:
        return self.x + pt[0] * self.scale, self.y - pt[1] * self.scale

    def _moveTo(self, pt):
        self.commands.append(MoveTo(*self._pt(pt)))

    def _lineTo(self, pt):
        self.commands.append(LineTo(*self._pt(pt)))

    def _curveToOne(self, pt1, pt2, pt3):
        self.commands.append(CubicTo(*self._pt(pt1), *self._pt(pt2), *self._pt(pt3)))

    def _qCurveToOne(self, pt1, pt2):
        self.commands.append(QuadTo(*self._pt(pt1), *self._pt(pt2)))

    def _closePath(self):
        self.commands.append(ClosePath())


class FontAsset:
    """An immutable parsed font."""

    def __init__(self, ttfont: TTFont, blob: bytes, source: Path | None = None) -> None:
        self.ttfont = ttfont
        self.source = source
        self.units_per_em: int = ttfont["head"].unitsPerEm
        if self.units_per_em <= 0:
            raise FontParseError(source, f"unitsPerEm must be positive, got {self.units_per_em}")

        hhea = ttfont["hhea"]
        self.ascender: int = hhea.ascent
        self.descender: int = hhea.descent

        self._cmap: dict[int, str] = ttfont.getBestCmap() or {}
        self._glyph_set = ttfont.getGlyphSet()
        self._hmtx = ttfont["hmtx"].metrics
        self._glyph_order = ttfont.getGlyphOrder()
        self.glyph_count = len(self._glyph_order)

        hb_face = hb.Face(hb.Blob(blob))
        self._hb_font = hb.Font(hb_face)
        self._hb_font.scale = (self.units_per_em, self.units_per_em)
        self._kerning_pairs: dict[tuple[int, int], int] = {}

    def __repr__(self) -> str:
        return f"FontAsset(source={self.source!r}, units_per_em={self.units_per_em})"

    def scale_for(self, font_size: float) -> float:
        """Font units -> output units factor for a font size."""
        return font_size / self.units_per_em

    # -- glyph lookup -------------------------------------------------------

    def char_to_glyph(self, char: str) -> Glyph:
        code = ord(char)
        name = self._cmap.get(code)
        if name is None or name not in self._glyph_set:
            return self._glyph(self._glyph_order[0] if self._glyph_order else NOTDEF, None, char)
        return self._glyph(name, code, char)

    def glyphs_for(self, text: str) -> list[Glyph]:
        """Map text to glyphs one code point at a time; unmapped chars give .notdef."""
        return [self.char_to_glyph(ch) for ch in text]

    def _glyph(self, name: str, code: int | None, char: str) -> Glyph:
        advance, _lsb = self._hmtx.get(name, (0, 0))
        try:
            index = self.ttfont.getGlyphID(name)
        except KeyError:
            index = 0
        return Glyph(name=name, index=index, unicode=code, advance_width=advance, char=char)

    def advance_width(self, glyph: Glyph) -> int:
        return glyph.advance_width

    def kerning(self, left: Glyph, right: Glyph) -> int:
        """Kerning adjustment between two glyphs, in font units."""
        key = (left.index, right.index)
        cached = self._kerning_pairs.get(key)
        if cached is not None:
            return cached
        value = self._measure_pair(left, right)
        self._kerning_pairs[key] = value
        return value

    def _measure_pair(self, left: Glyph, right: Glyph) -> int:
        if left.unicode is None or right.unicode is None:
            return 0
        buf = hb.Buffer()
        buf.add_codepoints([left.unicode, right.unicode])
        buf.guess_segment_properties()
        hb.shape(self._hb_font, buf, _PAIR_FEATURES)
        infos = buf.glyph_infos
        positions = buf.glyph_positions
        if len(infos) != 2 or infos[0].codepoint != left.index:
            return 0
        return positions[0].x_advance - left.advance_width

    # -- outlines -----------------------------------------------------------

    def glyph_path(self, glyph: Glyph, x: float, y: float, font_size: float) -> list[PathCommand]:
        """Outline of one glyph with its origin at (x, y) on the baseline."""
        pen = _PathCommandPen(self._glyph_set, x, y, self.scale_for(font_size))
        self._glyph_set[glyph.name].draw(pen)
        return pen.commands

    def outline_path(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float,
        *,
        kerning: bool = True,
        letter_spacing: float = 0.0,
        tracking: float = 0.0,
    ) -> list[PathCommand]:
        """Outline of a run of text starting at (x, y).

        The pen advances by each glyph's advance width, then by the pair
        kerning (when enabled and a next glyph exists), then by the letter
        spacing (em fraction) or, if that is zero, the tracking (1/1000 em).
        """
        scale = self.scale_for(font_size)
        glyphs = self.glyphs_for(text)
        commands: list[PathCommand] = []
        for i, glyph in enumerate(glyphs):
            commands.extend(self.glyph_path(glyph, x, y, font_size))
            if glyph.advance_width:
                x += glyph.advance_width * scale
            if kerning and i < len(glyphs) - 1:
                x += self.kerning(glyph, glyphs[i + 1]) * scale
            if letter_spacing:
                x += letter_spacing * font_size
            elif tracking:
                x += tracking / 1000 * font_size
        return commands

    def glyph_bounding_box(self, glyph: Glyph, font_size: float) -> GlyphBox:
        """Exact outline bounds of a glyph drawn at the origin.

        An empty glyph (e.g. space) yields a zero box at the origin.
        """
        pen = BoundsPen(self._glyph_set)
        self._glyph_set[glyph.name].draw(pen)
        if pen.bounds is None:
            return GlyphBox(0.0, 0.0, 0.0, 0.0)
        x_min, y_min, x_max, y_max = pen.bounds
        scale = self.scale_for(font_size)
        return GlyphBox(x_min * scale, -y_max * scale, x_max * scale, -y_min * scale)


def parse_font(data: bytes, source: Path | None = None) -> FontAsset:
    """Parse font bytes into a FontAsset.

    Raises:
        FontParseError: If the data is not a usable TrueType/OpenType font.
    """
    try:
        ttfont = TTFont(io.BytesIO(data))
        # touch every table the asset reads so malformed data fails here
        ttfont["head"]
        ttfont["hhea"]
        ttfont["hmtx"]
        ttfont.getBestCmap()
        ttfont.getGlyphSet()
    except FontParseError:
        raise
    except Exception as e:
        raise FontParseError(source, str(e) or type(e).__name__) from e
    return FontAsset(ttfont, data, source)


def load_font(path: Path) -> FontAsset:
    """Read and parse a font file."""
    return parse_font(Path(path).read_bytes(), Path(path))
