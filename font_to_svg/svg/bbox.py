"""Axis-aligned bounding box of path data.

The box spans endpoints and control points (arcs: endpoint only), i.e. the
control polygon, not the true extrema of curve segments. For glyph outlines
the difference is a fraction of a unit and is accepted.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from font_to_svg.svg.path_data import ClosePath, CubicTo, PathCommand, QuadTo, as_commands


class BoundingBox(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height


def calculate_bounding_box(path: str | Sequence[PathCommand]) -> BoundingBox:
    """Compute the control-polygon box of a path.

    Args:
        path: Path-data string or PathCommand sequence.

    Returns:
        BoundingBox(x, y, width, height); all zeros for an empty path.
    """
    xs: list[float] = []
    ys: list[float] = []
    for cmd in as_commands(path):
        if isinstance(cmd, ClosePath):
            continue
        xs.append(cmd.x)
        ys.append(cmd.y)
        if isinstance(cmd, (CubicTo, QuadTo)):
            xs.append(cmd.x1)
            ys.append(cmd.y1)
        if isinstance(cmd, CubicTo):
            xs.append(cmd.x2)
            ys.append(cmd.y2)

    if not xs:
        return BoundingBox(0.0, 0.0, 0.0, 0.0)

    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    return BoundingBox(min_x, min_y, max_x - min_x, max_y - min_y)
