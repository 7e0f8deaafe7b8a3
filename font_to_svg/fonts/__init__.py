"""Font handling for font-to-svg.

This subpackage provides:
- Font parsing, glyph outlines and kerning (fontTools, HarfBuzz)
- Font key resolution and discovery under the font roots
- A byte-bounded LRU cache of parsed fonts
"""

from font_to_svg.fonts.asset import FontAsset, Glyph, GlyphBox, load_font, parse_font
from font_to_svg.fonts.cache import CacheStats, FontCache
from font_to_svg.fonts.resolver import FontInfo, FontResolver

__all__ = [
    "FontAsset",
    "Glyph",
    "GlyphBox",
    "load_font",
    "parse_font",
    "CacheStats",
    "FontCache",
    "FontInfo",
    "FontResolver",
]
