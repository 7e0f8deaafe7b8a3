"""Text layout options.

TextOptions is the immutable input struct a caller builds (directly or from a
camelCase request mapping via from_dict). resolve() produces ResolvedOptions,
the normalized value with every default filled in; layout code only ever sees
ResolvedOptions and derives per-line variants with dataclasses.replace instead
of mutating shared state.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from font_to_svg.exceptions import InvalidOptionError

DEFAULT_FONT_SIZE = 72.0
DEFAULT_LINE_HEIGHT = 1.2

TEXT_ALIGNS = ("left", "center", "right")
WRITING_MODES = ("horizontal", "vertical")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


@dataclass(frozen=True)
class ArcOptions:
    """Arc envelope parameters.

    Attributes:
        angle: Arc angle in degrees. Positive bows upward, negative downward.
        text_width: Width the arc is spread over; filled from metrics when synthesizing.
        center_x: Arc center x; defaults to the horizontal middle of the text.
        center_y: Arc center y; defaults to the text baseline.
    """

    angle: float
    text_width: float | None = None
    center_x: float | None = None
    center_y: float | None = None

    def __post_init__(self) -> None:
        if not _is_number(self.angle):
            raise InvalidOptionError("envelope.arc.angle", "must be a number")
        if self.text_width is not None and (not _is_number(self.text_width) or self.text_width <= 0):
            raise InvalidOptionError("envelope.arc.textWidth", "must be a positive number")
        for name, value in (("centerX", self.center_x), ("centerY", self.center_y)):
            if value is not None and not _is_number(value):
                raise InvalidOptionError(f"envelope.arc.{name}", "must be a number")


@dataclass(frozen=True)
class EnvelopeOptions:
    """Envelope transformations applied to synthesized paths."""

    arc: ArcOptions | None = None


@dataclass(frozen=True)
class TextOptions:
    """Caller-supplied text options; every field is optional."""

    font_size: float | None = None
    letter_spacing: float | None = None
    tracking: float | None = None
    kerning: bool | None = None
    anchor: str | None = None
    x: float | None = None
    y: float | None = None
    attributes: Mapping[str, str] | None = None
    envelope: EnvelopeOptions | None = None
    line_height: float | None = None
    text_align: str | None = None
    writing_mode: str | None = None

    def __post_init__(self) -> None:
        if self.font_size is not None and (not _is_number(self.font_size) or self.font_size <= 0):
            raise InvalidOptionError("fontSize", "must be a positive number")
        if self.line_height is not None and (not _is_number(self.line_height) or self.line_height <= 0):
            raise InvalidOptionError("lineHeight", "must be a positive number")
        for name, value in (
            ("letterSpacing", self.letter_spacing),
            ("tracking", self.tracking),
            ("x", self.x),
            ("y", self.y),
        ):
            if value is not None and not _is_number(value):
                raise InvalidOptionError(name, "must be a number")
        if self.kerning is not None and not isinstance(self.kerning, bool):
            raise InvalidOptionError("kerning", "must be a boolean")
        if self.anchor is not None and not isinstance(self.anchor, str):
            raise InvalidOptionError("anchor", "must be a string")
        if self.text_align is not None and self.text_align not in TEXT_ALIGNS:
            raise InvalidOptionError("textAlign", f"must be one of {', '.join(TEXT_ALIGNS)}")
        if self.writing_mode is not None and self.writing_mode not in WRITING_MODES:
            raise InvalidOptionError("writingMode", f"must be one of {', '.join(WRITING_MODES)}")
        if self.attributes is not None:
            if not isinstance(self.attributes, Mapping):
                raise InvalidOptionError("attributes", "must be a mapping")
            # freeze a private copy so later caller mutation cannot leak in
            object.__setattr__(
                self,
                "attributes",
                MappingProxyType({str(k): str(v) for k, v in self.attributes.items()}),
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> TextOptions:
        """Build options from a camelCase mapping (e.g. a JSON request body).

        Args:
            data: Mapping using the wire names (fontSize, letterSpacing, ...).

        Returns:
            A validated TextOptions.

        Raises:
            InvalidOptionError: On unknown keys or badly typed values.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise InvalidOptionError("options", "must be a mapping")

        unknown = sorted(set(data) - set(_WIRE_NAMES))
        if unknown:
            raise InvalidOptionError(unknown[0], "unknown option")

        kwargs: dict[str, Any] = {}
        for wire_name, attr in _WIRE_NAMES.items():
            if wire_name in data and data[wire_name] is not None:
                kwargs[attr] = data[wire_name]

        if "envelope" in kwargs:
            kwargs["envelope"] = _envelope_from_dict(kwargs["envelope"])
        return cls(**kwargs)

    def resolve(self) -> ResolvedOptions:
        """Fill in defaults, producing the normalized per-request value."""
        return ResolvedOptions(
            font_size=float(self.font_size or DEFAULT_FONT_SIZE),
            letter_spacing=float(self.letter_spacing or 0.0),
            tracking=float(self.tracking or 0.0),
            kerning=True if self.kerning is None else self.kerning,
            anchor=self.anchor or "",
            x=float(self.x or 0.0),
            y=float(self.y or 0.0),
            attributes=self.attributes or MappingProxyType({}),
            envelope=self.envelope,
            line_height=float(self.line_height or DEFAULT_LINE_HEIGHT),
            text_align=self.text_align or "left",
            writing_mode=self.writing_mode or "horizontal",
        )


_WIRE_NAMES = {
    "fontSize": "font_size",
    "letterSpacing": "letter_spacing",
    "tracking": "tracking",
    "kerning": "kerning",
    "anchor": "anchor",
    "x": "x",
    "y": "y",
    "attributes": "attributes",
    "envelope": "envelope",
    "lineHeight": "line_height",
    "textAlign": "text_align",
    "writingMode": "writing_mode",
}


def _envelope_from_dict(data: Any) -> EnvelopeOptions:
    if not isinstance(data, Mapping):
        raise InvalidOptionError("envelope", "must be a mapping")
    unknown = sorted(set(data) - {"arc"})
    if unknown:
        raise InvalidOptionError(f"envelope.{unknown[0]}", "unknown option")

    arc = data.get("arc")
    if arc is None:
        return EnvelopeOptions()
    if not isinstance(arc, Mapping):
        raise InvalidOptionError("envelope.arc", "must be a mapping")
    if "angle" not in arc:
        raise InvalidOptionError("envelope.arc.angle", "is required")
    unknown = sorted(set(arc) - {"angle", "textWidth", "centerX", "centerY"})
    if unknown:
        raise InvalidOptionError(f"envelope.arc.{unknown[0]}", "unknown option")
    return EnvelopeOptions(
        arc=ArcOptions(
            angle=arc["angle"],
            text_width=arc.get("textWidth"),
            center_x=arc.get("centerX"),
            center_y=arc.get("centerY"),
        )
    )


@dataclass(frozen=True)
class ResolvedOptions:
    """Normalized options with all defaults applied. Never mutated."""

    font_size: float = DEFAULT_FONT_SIZE
    letter_spacing: float = 0.0
    tracking: float = 0.0
    kerning: bool = True
    anchor: str = ""
    x: float = 0.0
    y: float = 0.0
    attributes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    envelope: EnvelopeOptions | None = None
    line_height: float = DEFAULT_LINE_HEIGHT
    text_align: str = "left"
    writing_mode: str = "horizontal"

    @property
    def spacing(self) -> float:
        """Extra advance added after every glyph: letterSpacing wins over tracking."""
        if self.letter_spacing:
            return self.letter_spacing * self.font_size
        if self.tracking:
            return self.tracking / 1000 * self.font_size
        return 0.0

    @property
    def line_advance(self) -> float:
        """Distance between consecutive lines (or columns) in output units."""
        return self.line_height * self.font_size

    def replace(self, **changes: Any) -> ResolvedOptions:
        return replace(self, **changes)


def resolve_options(options: TextOptions | ResolvedOptions | Mapping[str, Any] | None) -> ResolvedOptions:
    """Coerce any accepted options form into ResolvedOptions."""
    if isinstance(options, ResolvedOptions):
        return options
    if isinstance(options, TextOptions):
        return options.resolve()
    return TextOptions.from_dict(options).resolve()
