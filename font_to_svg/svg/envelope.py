"""Envelope transformations for synthesized text paths.

Only the arc envelope is implemented: text laid out along a straight baseline
is bent onto a circular arc. The mapping is applied to every endpoint and
control point independently, so curve segments are approximated (arc length
and tangent continuity are not preserved for strong bends).
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import NamedTuple

from font_to_svg.options import ArcOptions, EnvelopeOptions
from font_to_svg.svg.path_data import PathCommand, map_points

DEFAULT_TEXT_WIDTH = 100.0
SMALL_ANGLE_RAD = 0.1


class ArcPoint(NamedTuple):
    x: float
    y: float
    rotation: float


class ArcTransform:
    """Maps points from a straight baseline onto a circular arc.

    The radius comes from the text width and the arc angle: below 0.1 rad
    the arc-length approximation R = w / angle is used, above it the chord
    formula R = w / (2 sin(angle / 2)).
    """

    def __init__(self, options: ArcOptions) -> None:
        self.options = options
        self.text_width = options.text_width or DEFAULT_TEXT_WIDTH
        self.center_x = options.center_x or 0.0
        self.center_y = options.center_y or 0.0
        self.upward = options.angle > 0
        self.angle_rad = math.radians(abs(options.angle))

        if self.angle_rad == 0:
            self.radius = 0.0
        elif self.angle_rad < SMALL_ANGLE_RAD:
            self.radius = self.text_width / self.angle_rad
        else:
            self.radius = self.text_width / (2 * math.sin(self.angle_rad / 2))

    def transform_point(self, x: float, y: float) -> ArcPoint:
        """Map one point; rotation is the tangent angle in degrees."""
        if self.angle_rad == 0:
            return ArcPoint(self.center_x + x, self.center_y + y, 0.0)

        normalized_x = x / self.text_width - 0.5
        point_angle = normalized_x * self.angle_rad
        lift = self.radius * (1 - math.cos(point_angle))

        tx = self.center_x + self.radius * math.sin(point_angle)
        if self.upward:
            ty = self.center_y - lift + y
        else:
            ty = self.center_y + lift + y

        rotation = math.degrees(point_angle)
        return ArcPoint(tx, ty, rotation if self.upward else -rotation)

    def transform_path(self, commands: Iterable[PathCommand]) -> list[PathCommand]:
        def mapper(x: float, y: float) -> tuple[float, float]:
            point = self.transform_point(x, y)
            return point.x, point.y

        return map_points(commands, mapper)


def apply_envelope(commands: Iterable[PathCommand], envelope: EnvelopeOptions | None) -> list[PathCommand]:
    """Apply the configured envelope, or return the commands unchanged."""
    if envelope is None or envelope.arc is None:
        return list(commands)
    return ArcTransform(envelope.arc).transform_path(commands)
