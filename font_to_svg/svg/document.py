"""SVG document assembly.

synthesize_document() wraps a synthesized text path in a minimal standalone
SVG. The path is always drawn from the top-left origin (x = y = 0, anchor
"left top") so the caller's position and anchor do not move it on the canvas:

- plain mode crops to the path's bounding box with PADDING units on every
  side and expresses the canvas as a viewBox;
- debug mode sizes the canvas from the layout metrics with explicit
  width/height, draws the two axes through the origin, a dashed box and
  number for every line (multi-line text only), and labels the writing mode.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any

from font_to_svg.fonts.asset import FontAsset
from font_to_svg.layout.metrics import TOP_LEFT, compute_metrics, is_multiline
from font_to_svg.layout.synthesis import synthesize_path
from font_to_svg.options import ResolvedOptions, TextOptions, resolve_options
from font_to_svg.svg.bbox import calculate_bounding_box
from font_to_svg.svg.path_data import PathCommand, format_number, to_path_data, translate

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

PADDING = 10


def _path_element(parent: ET.Element | None, commands: list[PathCommand], attributes: Mapping[str, str]) -> ET.Element:
    attrib = dict(attributes)
    attrib["d"] = to_path_data(commands)
    if parent is None:
        return ET.Element("path", attrib)
    return ET.SubElement(parent, "path", attrib)


def path_element(
    font: FontAsset,
    text: str,
    options: TextOptions | ResolvedOptions | Mapping[str, Any] | None = None,
) -> str:
    """A bare <path> element for the text at its requested position.

    The configured attributes are copied onto the element ahead of "d".
    """
    resolved = resolve_options(options)
    commands = synthesize_path(font, text, resolved)
    return ET.tostring(_path_element(None, commands, resolved.attributes), encoding="unicode")


def _origin_options(options: ResolvedOptions) -> ResolvedOptions:
    return options.replace(x=0.0, y=0.0, anchor=TOP_LEFT)


def synthesize_document(
    font: FontAsset,
    text: str,
    options: TextOptions | ResolvedOptions | Mapping[str, Any] | None = None,
    *,
    debug: bool = False,
) -> str:
    """Render text into a self-contained SVG document string.

    Args:
        font: Parsed font supplying the outlines.
        text: Text to render; a "\\n" makes it multi-line.
        options: Text options in any accepted form. x, y and anchor are
            ignored for placement on the canvas.
        debug: Produce the annotated debug document instead.

    Returns:
        The serialized <svg> element.
    """
    resolved = resolve_options(options)
    if debug:
        root = _debug_document(font, text, resolved)
    else:
        root = _plain_document(font, text, resolved)
    return ET.tostring(root, encoding="unicode")


def _plain_document(font: FontAsset, text: str, options: ResolvedOptions) -> ET.Element:
    commands = synthesize_path(font, text, _origin_options(options))
    box = calculate_bounding_box(commands)

    box_width = box.width + PADDING * 2
    box_height = box.height + PADDING * 2
    # center the content box inside the padded canvas
    translate_x = (box_width - box.width) / 2 - box.x
    translate_y = (box_height - box.height) / 2 - box.y

    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "viewBox": f"0 0 {format_number(box_width)} {format_number(box_height)}",
        },
    )
    _path_element(root, translate(commands, translate_x, translate_y), options.attributes)
    return root


def _debug_document(font: FontAsset, text: str, options: ResolvedOptions) -> ET.Element:
    origin_options = _origin_options(options)
    metrics = compute_metrics(font, text, origin_options)

    width = metrics.width
    height = metrics.height
    origin_x = -metrics.x
    origin_y = -metrics.y

    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "xmlns:xlink": XLINK_NS,
            "width": format_number(width),
            "height": format_number(height),
        },
    )

    axis = {"fill": "none", "stroke": "red", "stroke-width": "1"}
    ET.SubElement(
        root, "path", {**axis, "d": f"M0,{format_number(origin_y)}L{format_number(width)},{format_number(origin_y)}"}
    )
    ET.SubElement(
        root, "path", {**axis, "d": f"M{format_number(origin_x)},0L{format_number(origin_x)},{format_number(height)}"}
    )

    if is_multiline(text) and metrics.lines:
        for index, line in enumerate(metrics.lines):
            line_x = line.x + origin_x
            line_y = line.y + origin_y
            ET.SubElement(
                root,
                "rect",
                {
                    "fill": "none",
                    "stroke": "blue",
                    "stroke-width": "0.5",
                    "stroke-dasharray": "2,2",
                    "x": format_number(line_x),
                    "y": format_number(line_y),
                    "width": format_number(line.width),
                    "height": format_number(line.height),
                },
            )
            label = ET.SubElement(
                root,
                "text",
                {"x": format_number(line_x + 2), "y": format_number(line_y + 12), "font-size": "10", "fill": "blue"},
            )
            label.text = str(index + 1)

    commands = synthesize_path(font, text, origin_options)
    _path_element(root, translate(commands, origin_x, origin_y), options.attributes)

    mode = ET.SubElement(root, "text", {"x": "5", "y": "15", "font-size": "12", "fill": "green"})
    mode.text = f"Mode: {options.writing_mode}"
    return root
