"""Tests for the SVG drawing surface."""

import pytest
from shapely.geometry import Polygon

from circlepaint.config import Settings
from circlepaint.svg.draw import SvgCanvas, text_anchor, text_rotation
from circlepaint.svg.serializer import SVG11_DOCTYPE, XML_DECLARATION, serialize_element
from circlepaint.svg.style import StyleBuilder


@pytest.fixture
def canvas(basic_resolver, settings) -> SvgCanvas:
    return SvgCanvas(StyleBuilder(basic_resolver), 1000, 1000, settings=settings)


def test_center_defaults_to_middle(canvas):
    assert canvas.center == (500, 500)


def test_line_defaults(canvas):
    elem = canvas.draw_line([0, 0, 10, 20])
    assert elem["tag"] == "line"
    assert elem["x2"] == "10.0"
    assert elem["style"] == "stroke-width:1.0;stroke:rgb(0,0,0);stroke-linecap:round;fill:none;"


def test_line_needs_four_coordinates(canvas):
    with pytest.raises(ValueError, match="4 coordinates"):
        canvas.draw_line([0, 0, 10])


def test_circle(canvas):
    elem = canvas.draw_circle((500, 500), 20, color="red")
    assert elem["r"] == "20.0"
    assert elem["style"] == "fill:rgb(255,0,0);"


def test_polygon_from_shapely(canvas):
    elem = canvas.draw_polygon(Polygon([(0, 0), (10, 0), (10, 10)]), thickness=1, color="blue")
    assert elem["points"] == "0,0 10,0 10,10"


def test_slice_is_centered(canvas):
    elem = canvas.draw_slice(0, 90, 100, 50, edgecolor="black", edgestroke=1, fillcolor="red")
    assert elem["d"].startswith("M600.000,500.000 A100.000,100.000")
    assert "fill:rgb(255,0,0)" in elem["style"]


def test_degenerate_slice_drops_fill(canvas):
    elem = canvas.draw_slice(0, 90, 100, 100, edgecolor="black", edgestroke=2, fillcolor="red")
    assert "fill:none" in elem["style"]
    assert "Z" not in elem["d"]


def test_asymmetric_slice(canvas):
    elem = canvas.draw_slice(0, 90, 100, radius_to_pair=(50, 80), fillcolor="green")
    assert elem["d"].count("L") == 2


def test_text_anchor_and_escape(canvas):
    elem = canvas.draw_text("A & B", angle=180, radius=100, size=12)
    assert "text-anchor:end" in elem["style"]
    assert elem["font-family"] == "Arial"
    assert serialize_element(elem).endswith(">A &amp; B</text>")


def test_font_scale(basic_resolver, tmp_path):
    settings = Settings(color_cache_dir=tmp_path, svg_font_scale=2.0)
    canvas = SvgCanvas(StyleBuilder(basic_resolver), 100, 100, settings=settings)
    assert canvas.draw_text("x", 0, 10, 12)["font-size"] == "24.0px"


def test_text_placement_rules():
    assert text_anchor(0) == "start"
    assert text_anchor(180) == "end"
    assert text_anchor(180, is_parallel=True) == "middle"
    assert text_anchor(180, is_rotated=False) == "start"
    assert text_rotation(180) == 360
    assert text_rotation(30) == 30
    assert text_rotation(30, is_rotated=False) == 0


def test_document(canvas):
    canvas.draw_circle((1, 1), 1, color="white")
    svg = canvas.to_svg(title="plot")
    lines = svg.splitlines()
    assert lines[0] == XML_DECLARATION
    assert lines[1] == SVG11_DOCTYPE
    assert '<svg width="1000px" height="1000px"' in lines[2]
    assert "<title>plot</title>" in svg
    assert svg.rstrip().endswith("</svg>")
