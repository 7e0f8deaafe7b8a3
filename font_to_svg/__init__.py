"""font-to-svg: Convert text into SVG path outlines with any font.

This library provides text-to-path conversion with:
- Anchored metrics for single-line, multi-line and vertical text
- Glyph outlines from TrueType/OpenType fonts (fontTools), kerning via HarfBuzz
- An arc envelope that bends text along a circular baseline
- A byte-bounded LRU cache of parsed fonts

Example:
    >>> from font_to_svg import TextToSvgConverter
    >>> converter = TextToSvgConverter()
    >>> svg = converter.svg("Hello", {"fontSize": 48, "anchor": "center middle"})
"""

from font_to_svg.api import PathResult, RenderResult, TextToSvgConverter
from font_to_svg.config import Config
from font_to_svg.exceptions import (
    ConfigError,
    FontNotFoundError,
    FontParseError,
    FontToSvgError,
    InvalidOptionError,
    UnknownAnchorOptionError,
)
from font_to_svg.fonts.cache import FontCache
from font_to_svg.layout.metrics import LineMetrics, TextMetrics, compute_metrics
from font_to_svg.layout.synthesis import synthesize_path
from font_to_svg.options import ArcOptions, EnvelopeOptions, TextOptions
from font_to_svg.svg.document import synthesize_document

__version__ = "0.1.0"

__all__ = [
    # Main API
    "TextToSvgConverter",
    "RenderResult",
    "PathResult",
    "Config",
    # Layout
    "TextOptions",
    "EnvelopeOptions",
    "ArcOptions",
    "TextMetrics",
    "LineMetrics",
    "compute_metrics",
    "synthesize_path",
    "synthesize_document",
    # Font handling
    "FontCache",
    # Exceptions
    "FontToSvgError",
    "FontNotFoundError",
    "FontParseError",
    "UnknownAnchorOptionError",
    "InvalidOptionError",
    "ConfigError",
    # Metadata
    "__version__",
]
