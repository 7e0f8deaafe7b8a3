"""High-level API for font-to-svg.

TextToSvgConverter binds a FontCache to the layout operations, so callers
only deal with text, options and an optional font key:

    >>> from font_to_svg import TextToSvgConverter
    >>> converter = TextToSvgConverter()
    >>> result = converter.render("Hello", {"fontSize": 48})
    >>> result.svg.startswith("<svg")
    True

Options are resolved once per call; the same ResolvedOptions value flows
through metrics, path synthesis and document assembly.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from font_to_svg.config import Config
from font_to_svg.fonts.asset import FontAsset
from font_to_svg.fonts.cache import FontCache
from font_to_svg.layout.metrics import TextMetrics, compute_metrics
from font_to_svg.layout.synthesis import synthesize_path
from font_to_svg.options import ResolvedOptions, TextOptions, resolve_options
from font_to_svg.svg.document import path_element, synthesize_document
from font_to_svg.svg.path_data import PathCommand, to_path_data

logger = logging.getLogger(__name__)

OptionsLike = TextOptions | ResolvedOptions | Mapping[str, Any] | None


@dataclass(frozen=True)
class RenderResult:
    """An SVG document together with the metrics of the requested layout."""

    svg: str
    metrics: TextMetrics

    def to_dict(self) -> dict[str, Any]:
        return {"svg": self.svg, "metrics": self.metrics.to_dict()}


@dataclass(frozen=True)
class PathResult:
    """Path data together with the metrics of the requested layout."""

    path: str
    metrics: TextMetrics

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "metrics": self.metrics.to_dict()}


class TextToSvgConverter:
    """Text to SVG path converter backed by a font cache.

    Args:
        cache: Font cache to load fonts through. Built from config when omitted.
        config: Configuration used to build the cache. Loaded with
            Config.load() when both cache and config are omitted.
    """

    def __init__(self, cache: FontCache | None = None, config: Config | None = None) -> None:
        if cache is None:
            config = config or Config.load()
            cache = FontCache.from_config(config)
        self.cache = cache
        self.config = config

    def font(self, font_key: str | None = None) -> FontAsset:
        """Acquire a parsed font; None selects the default font."""
        return self.cache.acquire(font_key)

    def metrics(
        self,
        text: str,
        options: OptionsLike = None,
        font_key: str | None = None,
        *,
        preserve_case: bool = False,
    ) -> TextMetrics:
        """Layout metrics for text.

        Raises:
            FontNotFoundError: If the font key resolves to no file.
            FontParseError: If the font file is invalid.
            UnknownAnchorOptionError: If an anchor axis value is not recognized.
            InvalidOptionError: If options fail validation.
        """
        resolved = resolve_options(options)
        return compute_metrics(self.font(font_key), text, resolved, preserve_case=preserve_case)

    def path(self, text: str, options: OptionsLike = None, font_key: str | None = None) -> list[PathCommand]:
        """Outline of the text as absolute path commands."""
        resolved = resolve_options(options)
        return synthesize_path(self.font(font_key), text, resolved)

    def path_data(self, text: str, options: OptionsLike = None, font_key: str | None = None) -> str:
        """Outline of the text as an SVG path-data string."""
        return to_path_data(self.path(text, options, font_key))

    def path_element(self, text: str, options: OptionsLike = None, font_key: str | None = None) -> str:
        """A <path> element carrying the configured attributes."""
        resolved = resolve_options(options)
        return path_element(self.font(font_key), text, resolved)

    def svg(
        self,
        text: str,
        options: OptionsLike = None,
        font_key: str | None = None,
        *,
        debug: bool = False,
    ) -> str:
        """A standalone SVG document for the text."""
        resolved = resolve_options(options)
        return synthesize_document(self.font(font_key), text, resolved, debug=debug)

    def render(
        self,
        text: str,
        options: OptionsLike = None,
        font_key: str | None = None,
        *,
        debug: bool = False,
    ) -> RenderResult:
        """SVG document plus metrics in one call, sharing one font and options value."""
        resolved = resolve_options(options)
        font = self.font(font_key)
        logger.debug("Rendering %d characters with font %s", len(text), font_key or "default")
        svg = synthesize_document(font, text, resolved, debug=debug)
        return RenderResult(svg=svg, metrics=compute_metrics(font, text, resolved))

    def render_path(self, text: str, options: OptionsLike = None, font_key: str | None = None) -> PathResult:
        """Path data plus metrics in one call."""
        resolved = resolve_options(options)
        font = self.font(font_key)
        path = to_path_data(synthesize_path(font, text, resolved))
        return PathResult(path=path, metrics=compute_metrics(font, text, resolved))
