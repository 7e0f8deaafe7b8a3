"""Path commands and path-data strings.

Synthesized outlines are kept as a list of PathCommand values (absolute
coordinates, SVG y-down space) until the very end, where to_path_data()
serializes them with fixed 2-decimal precision. parse_path_data() goes the
other way for externally supplied path strings, using svg.path for the
grammar (relative commands, H/V shorthands, smooth curves).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Union

from svg.path import Arc as _SvgArc
from svg.path import Close as _SvgClose
from svg.path import CubicBezier as _SvgCubic
from svg.path import Line as _SvgLine
from svg.path import Move as _SvgMove
from svg.path import QuadraticBezier as _SvgQuad
from svg.path import parse_path

DEFAULT_PRECISION = 2


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class CubicTo:
    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float


@dataclass(frozen=True)
class QuadTo:
    x1: float
    y1: float
    x: float
    y: float


@dataclass(frozen=True)
class ArcTo:
    rx: float
    ry: float
    rotation: float
    large_arc: bool
    sweep: bool
    x: float
    y: float


@dataclass(frozen=True)
class ClosePath:
    pass


PathCommand = Union[MoveTo, LineTo, CubicTo, QuadTo, ArcTo, ClosePath]

PointMapper = Callable[[float, float], tuple[float, float]]


def format_number(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Format a coordinate: integers bare, everything else fixed-point."""
    rounded = round(value, precision)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.{precision}f}"


def to_path_data(commands: Iterable[PathCommand], precision: int = DEFAULT_PRECISION) -> str:
    """Serialize commands to a compact SVG path-data string."""

    def fmt(*values: float) -> str:
        return " ".join(format_number(v, precision) for v in values)

    parts: list[str] = []
    for cmd in commands:
        if isinstance(cmd, MoveTo):
            parts.append(f"M{fmt(cmd.x, cmd.y)}")
        elif isinstance(cmd, LineTo):
            parts.append(f"L{fmt(cmd.x, cmd.y)}")
        elif isinstance(cmd, CubicTo):
            parts.append(f"C{fmt(cmd.x1, cmd.y1, cmd.x2, cmd.y2, cmd.x, cmd.y)}")
        elif isinstance(cmd, QuadTo):
            parts.append(f"Q{fmt(cmd.x1, cmd.y1, cmd.x, cmd.y)}")
        elif isinstance(cmd, ArcTo):
            flags = f"{int(cmd.large_arc)} {int(cmd.sweep)}"
            parts.append(f"A{fmt(cmd.rx, cmd.ry, cmd.rotation)} {flags} {fmt(cmd.x, cmd.y)}")
        elif isinstance(cmd, ClosePath):
            parts.append("Z")
    return "".join(parts)


def map_points(commands: Iterable[PathCommand], mapper: PointMapper) -> list[PathCommand]:
    """Apply mapper to every endpoint and control point.

    Each point is mapped independently; arc radii and flags are left untouched.
    """
    mapped: list[PathCommand] = []
    for cmd in commands:
        if isinstance(cmd, (MoveTo, LineTo, ArcTo)):
            x, y = mapper(cmd.x, cmd.y)
            mapped.append(replace(cmd, x=x, y=y))
        elif isinstance(cmd, CubicTo):
            x1, y1 = mapper(cmd.x1, cmd.y1)
            x2, y2 = mapper(cmd.x2, cmd.y2)
            x, y = mapper(cmd.x, cmd.y)
            mapped.append(CubicTo(x1, y1, x2, y2, x, y))
        elif isinstance(cmd, QuadTo):
            x1, y1 = mapper(cmd.x1, cmd.y1)
            x, y = mapper(cmd.x, cmd.y)
            mapped.append(QuadTo(x1, y1, x, y))
        else:
            mapped.append(cmd)
    return mapped


def round_commands(commands: Iterable[PathCommand], precision: int = DEFAULT_PRECISION) -> list[PathCommand]:
    """Round every coordinate to the serialization precision."""
    return map_points(commands, lambda x, y: (round(x, precision), round(y, precision)))


def translate(commands: Iterable[PathCommand], dx: float, dy: float) -> list[PathCommand]:
    return map_points(commands, lambda x, y: (x + dx, y + dy))


def parse_path_data(d: str) -> list[PathCommand]:
    """Parse an SVG path-data string into absolute PathCommands."""
    commands: list[PathCommand] = []
    for seg in parse_path(d):
        end = seg.end
        if isinstance(seg, _SvgMove):
            commands.append(MoveTo(end.real, end.imag))
        elif isinstance(seg, _SvgClose):
            commands.append(ClosePath())
        elif isinstance(seg, _SvgLine):
            commands.append(LineTo(end.real, end.imag))
        elif isinstance(seg, _SvgCubic):
            c1, c2 = seg.control1, seg.control2
            commands.append(CubicTo(c1.real, c1.imag, c2.real, c2.imag, end.real, end.imag))
        elif isinstance(seg, _SvgQuad):
            c = seg.control
            commands.append(QuadTo(c.real, c.imag, end.real, end.imag))
        elif isinstance(seg, _SvgArc):
            commands.append(
                ArcTo(
                    seg.radius.real,
                    seg.radius.imag,
                    seg.rotation,
                    bool(seg.arc),
                    bool(seg.sweep),
                    end.real,
                    end.imag,
                )
            )
    return commands


def as_commands(path: str | Sequence[PathCommand]) -> list[PathCommand]:
    """Accept either a path-data string or a command sequence."""
    if isinstance(path, str):
        return parse_path_data(path)
    return list(path)
