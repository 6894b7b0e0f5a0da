"""Tests for wedge path construction."""

import math

import pytest
from svgpathtools import Arc, Line, parse_path

from circlepaint.svg.arc_path import (
    ArcPathBuilder,
    ArcTo,
    ClosePath,
    LineTo,
    MoveTo,
    WedgeShape,
    WedgeSpec,
    nudged_end,
    wedge_points,
    wedge_polygon,
)
from circlepaint.utils.geometry import sector_area


@pytest.fixture
def builder() -> ArcPathBuilder:
    return ArcPathBuilder()


class TestWedgeSpec:
    def test_needs_one_inner_form(self):
        with pytest.raises(ValueError):
            WedgeSpec(0, 90, 100)
        with pytest.raises(ValueError):
            WedgeSpec(0, 90, 100, inner_radius=50, inner_radii=(40, 60))

    def test_equal_pair_collapses(self):
        spec = WedgeSpec(0, 90, 100, inner_radii=(50, 50))
        assert not spec.is_asymmetric
        assert spec.inner_radius == 50

    def test_negative_radius(self):
        with pytest.raises(ValueError):
            WedgeSpec(0, 90, -1, inner_radius=0)


class TestShapes:
    def test_equal_radii_is_single_arc(self, builder):
        path = builder.wedge(0, 90, 100, 100)
        assert path.shape is WedgeShape.ARC
        assert [type(s) for s in path.segments] == [MoveTo, ArcTo]
        assert not path.fillable
        assert not path.closed

    def test_equal_angles_is_radial_line(self, builder):
        path = builder.wedge(45, 45, 100, 50)
        assert path.shape is WedgeShape.RADIAL_LINE
        geometric = path.to_path()
        assert len(geometric) == 1
        assert isinstance(geometric[0], Line)
        assert abs(geometric[0].start) == pytest.approx(50)
        assert abs(geometric[0].end) == pytest.approx(100)
        assert not path.fillable

    def test_zero_span_from_origin_angle(self, builder):
        path = builder.wedge(0, 0, 100, 50)
        assert [type(s) for s in path.segments] == [MoveTo, LineTo]
        assert path.d() == "M50.000,0.000 L100.000,0.000"

    def test_annular_wedge(self, builder):
        path = builder.wedge(0, 90, 100, 50)
        assert path.shape is WedgeShape.ANNULAR
        assert [type(s) for s in path.segments] == [MoveTo, ArcTo, LineTo, ArcTo, ClosePath]
        assert path.d() == (
            "M100.000,0.000 A100.000,100.000 0.000 0,1 0.000,100.000 "
            "L0.000,50.000 A50.000,50.000 0.000 0,0 50.000,0.000 Z"
        )

    def test_inner_arc_reverses_sweep(self, builder):
        outer, inner = builder.wedge(0, 90, 100, 50).segments[1::2][:2]
        assert outer.sweep and not inner.sweep

    def test_asymmetric_wedge_uses_straight_chord(self, builder):
        path = builder.wedge(0, 90, 100, inner_radii=(50, 80))
        assert path.shape is WedgeShape.ASYMMETRIC
        assert path.d() == (
            "M100.000,0.000 A100.000,100.000 0.000 0,1 0.000,100.000 "
            "L0.000,80.000 L50.000,0.000 Z"
        )
        assert path.fillable

    def test_pie_slice_has_no_zero_radius_arc(self, builder):
        path = builder.wedge(0, 90, 100, 0)
        assert [type(s) for s in path.segments] == [MoveTo, ArcTo, LineTo, ClosePath]
        assert all(not isinstance(seg, Arc) or seg.radius.real > 0 for seg in path.to_path())


class TestFlags:
    def test_large_arc(self, builder):
        assert builder.wedge(0, 270, 100, 50).segments[1].large_arc
        assert not builder.wedge(0, 180, 100, 50).segments[1].large_arc

    def test_descending_angles_sweep_backwards(self, builder):
        arc = builder.wedge(90, 0, 100, 50).segments[1]
        assert not arc.sweep
        assert not arc.large_arc

    def test_full_circle_is_not_degenerate(self, builder):
        path = builder.wedge(0, 360, 100, 100)
        arc = path.segments[1]
        assert arc.large_arc and arc.sweep
        outer = path.to_path()[0]
        assert isinstance(outer, Arc)
        # midpoint lies opposite the start, so the arc goes the long way round
        assert abs(outer.point(0.5) - complex(-100, 0)) < 0.1
        assert outer.length() > 2 * math.pi * 100 * 359 / 360

    def test_nudged_end(self):
        assert nudged_end(0, 360) == pytest.approx(359.99)
        assert nudged_end(360, 0) == pytest.approx(0.01)
        assert nudged_end(10, 10) == pytest.approx(9.99)
        assert nudged_end(0, 90) == 90


class TestGeometricPath:
    def test_closed_path_returns_to_start(self, builder):
        path = builder.wedge(10, 80, 100, 50).to_path()
        assert path.isclosed()

    def test_d_string_matches_geometry(self, builder):
        wedge = builder.wedge(-30, 200, 120, 40)
        assert parse_path(wedge.d()).length() == pytest.approx(wedge.to_path().length(), rel=1e-4)

    def test_center_offset(self):
        builder = ArcPathBuilder(center=(500, 500))
        assert builder.point(0, 100) == pytest.approx((600, 500))
        assert builder.point(90, 100) == pytest.approx((500, 600))


class TestPolygon:
    def test_annular_area(self):
        spec = WedgeSpec(0, 90, 100, inner_radius=50)
        poly = wedge_polygon(spec)
        assert poly.is_valid
        assert poly.area == pytest.approx(sector_area(0, 90, 50, 100), rel=1e-3)

    def test_points_shape(self):
        points = wedge_points(WedgeSpec(0, 90, 100, inner_radius=50), step=10)
        # 10 samples per arc
        assert points.shape == (20, 2)

    def test_asymmetric_polygon(self):
        poly = wedge_polygon(WedgeSpec(0, 90, 100, inner_radii=(50, 80)))
        assert poly.is_valid
        assert 0 < poly.area < sector_area(0, 90, 0, 100)

    def test_degenerate_wedge_has_no_polygon(self):
        with pytest.raises(ValueError):
            wedge_points(WedgeSpec(0, 90, 100, inner_radius=100))
        with pytest.raises(ValueError):
            wedge_points(WedgeSpec(30, 30, 100, inner_radius=50))
