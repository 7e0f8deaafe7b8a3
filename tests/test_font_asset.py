"""Unit tests for font_to_svg.fonts.asset module."""

import pytest

from font_to_svg.exceptions import FontParseError
from font_to_svg.fonts.asset import GlyphBox, load_font, parse_font
from font_to_svg.svg.bbox import BoundingBox, calculate_bounding_box
from font_to_svg.svg.path_data import ClosePath, MoveTo


class TestFontAssetMetrics:
    """Tests for font-wide values."""

    def test_vertical_metrics(self, font):
        """Verify unitsPerEm, ascender and descender come from head/hhea."""
        assert font.units_per_em == 1000
        assert font.ascender == 800
        assert font.descender == -200

    def test_scale_for(self, font):
        """Verify fontScale = fontSize / unitsPerEm."""
        assert font.scale_for(72) == pytest.approx(0.072)

    def test_source_is_recorded(self, font, font_path):
        """Verify the asset remembers where it was loaded from."""
        assert font.source == font_path


class TestGlyphLookup:
    """Tests for character to glyph mapping."""

    def test_mapped_character(self, font):
        """Verify a mapped character keeps its code point and advance."""
        glyph = font.char_to_glyph("A")
        assert glyph.name == "A"
        assert glyph.unicode == ord("A")
        assert glyph.advance_width == 600
        assert glyph.is_printable

    def test_space_is_not_printable(self, font):
        """Verify U+0020 is treated as whitespace."""
        glyph = font.char_to_glyph(" ")
        assert not glyph.is_printable
        assert glyph.advance_width == 600

    def test_unmapped_character_gives_notdef(self, font):
        """Verify unknown characters fall back to .notdef without a code point."""
        glyph = font.char_to_glyph("é")
        assert glyph.name == ".notdef"
        assert glyph.unicode is None
        assert not glyph.is_printable

    def test_glyphs_for_preserves_order(self, font):
        """Verify one glyph per code point in input order."""
        assert [g.char for g in font.glyphs_for("AB|")] == ["A", "B", "|"]


class TestKerning:
    """Tests for HarfBuzz pair kerning."""

    def test_kerned_pair(self, font):
        """Verify the GPOS pair A V is found."""
        a, v = font.glyphs_for("AV")
        assert font.kerning(a, v) == -100

    def test_unkerned_pair(self, font):
        """Verify pairs without kerning give zero."""
        a, b = font.glyphs_for("AB")
        assert font.kerning(a, b) == 0

    def test_notdef_pair(self, font):
        """Verify pairs involving .notdef give zero."""
        a, missing = font.glyphs_for("Aé")
        assert font.kerning(a, missing) == 0


class TestOutlines:
    """Tests for glyph outlines and bounds."""

    def test_glyph_bounding_box_is_y_down(self, font):
        """Verify bounds are scaled and flipped so y1 is the top."""
        box = font.glyph_bounding_box(font.char_to_glyph("A"), 100)
        assert box == GlyphBox(0, -80, 60, 0)
        assert box.width == 60 and box.height == 80

    def test_side_bearing_glyph(self, font):
        """Verify the bar glyph's left edge is offset from its origin."""
        box = font.glyph_bounding_box(font.char_to_glyph("|"), 100)
        assert box.x1 == pytest.approx(20)
        assert box.width == pytest.approx(20)

    def test_empty_glyph_box(self, font):
        """Verify glyphs without contours have a zero box."""
        assert font.glyph_bounding_box(font.char_to_glyph(" "), 100) == GlyphBox(0, 0, 0, 0)

    def test_glyph_path_placed_on_baseline(self, font):
        """Verify outlines are positioned at (x, baseline) with y flipped."""
        commands = font.glyph_path(font.char_to_glyph("A"), 10, 100, 100)
        assert isinstance(commands[0], MoveTo)
        assert isinstance(commands[-1], ClosePath)
        assert calculate_bounding_box(commands) == BoundingBox(10, 20, 60, 80)

    def test_outline_path_advances(self, font):
        """Verify the pen advances by advance width plus letter spacing."""
        commands = font.outline_path("AB", 0, 80, 100, letter_spacing=0.5)
        assert calculate_bounding_box(commands) == BoundingBox(0, 0, 170, 80)

    def test_outline_path_applies_kerning(self, font):
        """Verify kerning pulls V towards A unless disabled."""
        kerned = calculate_bounding_box(font.outline_path("AV", 0, 80, 100))
        plain = calculate_bounding_box(font.outline_path("AV", 0, 80, 100, kerning=False))
        assert kerned.width == pytest.approx(110)
        assert plain.width == pytest.approx(120)


class TestParseFont:
    """Tests for font parsing failures."""

    def test_garbage_bytes(self):
        """Verify non-font data raises FontParseError."""
        with pytest.raises(FontParseError):
            parse_font(b"definitely not a font")

    def test_truncated_file(self, tmp_path, font_path):
        """Verify a truncated font raises FontParseError naming the file."""
        broken = tmp_path / "broken.ttf"
        broken.write_bytes(font_path.read_bytes()[:64])
        with pytest.raises(FontParseError) as exc_info:
            load_font(broken)
        assert exc_info.value.path == broken
        assert "broken.ttf" in str(exc_info.value)
