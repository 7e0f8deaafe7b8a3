"""Unit tests for font_to_svg.svg.document module.

Generated markup is parsed back with defusedxml.
"""

from defusedxml import ElementTree

from font_to_svg.svg.bbox import BoundingBox, calculate_bounding_box
from font_to_svg.svg.document import PADDING, path_element, synthesize_document

SVG = "{http://www.w3.org/2000/svg}"


def _parse(markup: str):
    return ElementTree.fromstring(markup)


class TestPlainDocument:
    """Tests for the cropped, padded document."""

    def test_viewbox_fits_content_with_padding(self, font):
        """Verify the viewBox is the path box plus 10 units on each side."""
        root = _parse(synthesize_document(font, "A", {"fontSize": 100}))
        assert root.tag == f"{SVG}svg"
        assert root.get("viewBox") == "0 0 80 100"
        assert root.get("width") is None

    def test_path_is_centered(self, font):
        """Verify the path is translated to start at the padding."""
        root = _parse(synthesize_document(font, "A", {"fontSize": 100}))
        path = root.find(f"{SVG}path")
        assert calculate_bounding_box(path.get("d")) == BoundingBox(PADDING, PADDING, 60, 80)

    def test_position_and_anchor_do_not_move_content(self, font):
        """Verify x, y and anchor are ignored for canvas placement."""
        plain = synthesize_document(font, "AB", {"fontSize": 100})
        moved = synthesize_document(font, "AB", {"fontSize": 100, "x": 500, "y": -40, "anchor": "right bottom"})
        assert plain == moved

    def test_attributes_copied_before_d(self, font):
        """Verify path attributes are emitted ahead of the path data."""
        markup = synthesize_document(font, "A", {"fontSize": 100, "attributes": {"fill": "red", "stroke": "blue"}})
        path = _parse(markup).find(f"{SVG}path")
        assert path.get("fill") == "red"
        assert path.get("stroke") == "blue"
        assert markup.index('fill="red"') < markup.index(' d="')

    def test_multiline_document(self, font):
        """Verify multi-line text is cropped to all lines."""
        root = _parse(synthesize_document(font, "A\nB", {"fontSize": 100}))
        assert root.get("viewBox") == "0 0 80 220"

    def test_vertical_document(self, font):
        """Verify vertical text is cropped to the stacked glyphs."""
        root = _parse(synthesize_document(font, "AB", {"fontSize": 100, "writingMode": "vertical"}))
        assert root.get("viewBox") == "0 0 80 190"

    def test_attribute_values_escaped(self, font):
        """Verify attribute values cannot break out of the markup."""
        markup = synthesize_document(font, "A", {"attributes": {"data-x": '"><script>'}})
        path = _parse(markup).find(f"{SVG}path")
        assert path.get("data-x") == '"><script>'


class TestDebugDocument:
    """Tests for the annotated debug document."""

    def test_explicit_size_without_viewbox(self, font):
        """Verify the debug canvas uses the metrics box as width/height."""
        root = _parse(synthesize_document(font, "A", {"fontSize": 100}, debug=True))
        assert root.get("viewBox") is None
        assert root.get("width") == "60"
        assert root.get("height") == "100"

    def test_axes_through_origin(self, font):
        """Verify two red axis lines are drawn first."""
        root = _parse(synthesize_document(font, "A", {"fontSize": 100}, debug=True))
        paths = root.findall(f"{SVG}path")
        assert [p.get("stroke") for p in paths[:2]] == ["red", "red"]
        assert paths[0].get("d") == "M0,0L60,0"
        assert paths[1].get("d") == "M0,0L0,100"

    def test_mode_label(self, font):
        """Verify the writing mode is labelled in green."""
        root = _parse(synthesize_document(font, "A", {"writingMode": "vertical"}, debug=True))
        label = root.findall(f"{SVG}text")[-1]
        assert label.text == "Mode: vertical"
        assert label.get("fill") == "green"

    def test_single_line_has_no_line_boxes(self, font):
        """Verify line boxes are only drawn for multi-line text."""
        root = _parse(synthesize_document(font, "AB", {"fontSize": 100}, debug=True))
        assert root.findall(f"{SVG}rect") == []

    def test_line_boxes_and_numbers(self, font):
        """Verify one dashed box and one number per line."""
        root = _parse(synthesize_document(font, "A\nB", {"fontSize": 100}, debug=True))
        rects = root.findall(f"{SVG}rect")
        assert len(rects) == 2
        assert rects[1].get("y") == "120"
        assert rects[0].get("stroke-dasharray") == "2,2"
        labels = [t.text for t in root.findall(f"{SVG}text")]
        assert labels == ["1", "2", "Mode: horizontal"]

    def test_glyph_path_follows_overlays(self, font):
        """Verify the text path comes after the axes and is not stroked red."""
        root = _parse(synthesize_document(font, "A", {"fontSize": 100}, debug=True))
        paths = root.findall(f"{SVG}path")
        assert len(paths) == 3
        assert calculate_bounding_box(paths[2].get("d")) == BoundingBox(0, 0, 60, 80)


class TestPathElement:
    """Tests for the bare <path> element helper."""

    def test_path_element_keeps_position(self, font):
        """Verify the element uses the requested position and anchor."""
        element = _parse(path_element(font, "A", {"fontSize": 100, "x": 10, "y": 100, "attributes": {"id": "t"}}))
        assert element.tag == "path"
        assert element.get("id") == "t"
        assert calculate_bounding_box(element.get("d")) == BoundingBox(10, 20, 60, 80)
