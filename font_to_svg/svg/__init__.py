"""SVG geometry and output for font-to-svg.

This subpackage provides:
- Path commands, path-data serialization and parsing
- The arc envelope transform
- Control-polygon bounding boxes
- SVG document assembly (plain and debug)
"""

from font_to_svg.svg.bbox import BoundingBox, calculate_bounding_box
from font_to_svg.svg.envelope import ArcTransform, apply_envelope
from font_to_svg.svg.path_data import PathCommand, parse_path_data, to_path_data

__all__ = [
    "BoundingBox",
    "calculate_bounding_box",
    "ArcTransform",
    "apply_envelope",
    "PathCommand",
    "parse_path_data",
    "to_path_data",
]
