"""Wedge (annular sector) boundary paths.

A wedge is two angles plus an outer radius and either one inner radius or a
pair of inner radii (one at each angle). The builder picks one of four
shapes from the angle/radius relationships:

    ARC          inner == outer: a single stroked arc, nothing to fill
    RADIAL_LINE  start == end: a straight radial segment
    ANNULAR      move, outer arc, line in, inner arc back, close
    ASYMMETRIC   move, outer arc, line to each inner point, close (straight chord)
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Polygon
from shapely.validation import make_valid
from svgpathtools import Arc, Line, Path

from circlepaint.utils.geometry import polar_to_xy, polar_to_xy_array

# Spans wider than this are full circles.
FULL_CIRCLE_SPAN = 359.99
# A full circle ends this far short of its start; an arc whose endpoints
# coincide is undefined in SVG.
END_ANGLE_NUDGE = 0.01
# Decimal places in generated path data.
COORD_PRECISION = 3

Point = tuple[float, float]


@dataclass(frozen=True)
class WedgeSpec:
    """Angles in degrees, any real, in either order.

    Give ``inner_radius`` or ``inner_radii`` (radius at start angle, radius at end angle).
    """

    start: float
    end: float
    outer_radius: float
    inner_radius: float | None = None
    inner_radii: tuple[float, float] | None = None

    def __post_init__(self) -> None:
        if (self.inner_radius is None) == (self.inner_radii is None):
            raise ValueError("WedgeSpec needs exactly one of inner_radius or inner_radii")
        if self.inner_radii is not None:
            if len(self.inner_radii) != 2:
                raise ValueError(f"inner_radii must be a pair, got {self.inner_radii!r}")
            if self.inner_radii[0] == self.inner_radii[1]:
                # equal pair is just a symmetric wedge
                object.__setattr__(self, "inner_radius", self.inner_radii[0])
                object.__setattr__(self, "inner_radii", None)
        radii = [self.outer_radius, *self.inner_at()]
        if any(r < 0 for r in radii):
            raise ValueError(f"radii must be non-negative, got {radii}")

    @property
    def is_asymmetric(self) -> bool:
        return self.inner_radii is not None

    def inner_at(self) -> tuple[float, float]:
        """Inner radius at (start, end)."""
        if self.inner_radii is not None:
            return self.inner_radii
        return (self.inner_radius, self.inner_radius)  # type: ignore[return-value]


class WedgeShape(enum.Enum):
    ARC = "arc"
    RADIAL_LINE = "radial_line"
    ANNULAR = "annular"
    ASYMMETRIC = "asymmetric"


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class ArcTo:
    radius: float
    large_arc: bool
    sweep: bool
    point: Point
    rotation: float = 0.0


@dataclass(frozen=True)
class ClosePath:
    pass


Segment = MoveTo | LineTo | ArcTo | ClosePath


def _fmt(value: float, precision: int) -> str:
    text = f"{value:.{precision}f}"
    # avoid "-0.000"
    return text[1:] if text.startswith("-") and float(text) == 0 else text


@dataclass
class WedgePath:
    shape: WedgeShape
    segments: list[Segment] = field(default_factory=list)

    @property
    def closed(self) -> bool:
        return any(isinstance(s, ClosePath) for s in self.segments)

    @property
    def fillable(self) -> bool:
        return self.shape in (WedgeShape.ANNULAR, WedgeShape.ASYMMETRIC)

    def d(self, precision: int = COORD_PRECISION) -> str:
        """SVG path data."""

        def pt(p: Point) -> str:
            return f"{_fmt(p[0], precision)},{_fmt(p[1], precision)}"

        parts = []
        for seg in self.segments:
            if isinstance(seg, MoveTo):
                parts.append(f"M{pt(seg.point)}")
            elif isinstance(seg, LineTo):
                parts.append(f"L{pt(seg.point)}")
            elif isinstance(seg, ArcTo):
                r = _fmt(seg.radius, precision)
                parts.append(
                    f"A{r},{r} {_fmt(seg.rotation, precision)} "
                    f"{int(seg.large_arc)},{int(seg.sweep)} {pt(seg.point)}"
                )
            else:
                parts.append("Z")
        return " ".join(parts)

    def to_path(self) -> Path:
        """Geometric ``svgpathtools.Path`` of the boundary (points as complex x+yj)."""
        segs = []
        start = cur = 0j
        for seg in self.segments:
            if isinstance(seg, MoveTo):
                start = cur = complex(*seg.point)
            elif isinstance(seg, LineTo):
                end = complex(*seg.point)
                segs.append(Line(cur, end))
                cur = end
            elif isinstance(seg, ArcTo):
                end = complex(*seg.point)
                if seg.radius == 0 or end == cur:
                    segs.append(Line(cur, end))
                else:
                    segs.append(
                        Arc(cur, complex(seg.radius, seg.radius), seg.rotation, seg.large_arc, seg.sweep, end)
                    )
                cur = end
            elif cur != start:
                segs.append(Line(cur, start))
                cur = start
        return Path(*segs)


def nudged_end(start: float, end: float) -> float:
    """End angle adjusted so an arc from start never ends where it begins."""
    span = end - start
    if abs(span) > FULL_CIRCLE_SPAN:
        return start + math.copysign(360.0 - END_ANGLE_NUDGE, span)
    if span == 0:
        return end - END_ANGLE_NUDGE
    return end


class ArcPathBuilder:
    """Builds wedge paths around a fixed center owned by the caller's layout."""

    def __init__(self, center: Point = (0.0, 0.0)) -> None:
        self.center = center

    def point(self, angle: float, radius: float) -> Point:
        return polar_to_xy(angle, radius, self.center)

    def build(self, spec: WedgeSpec) -> WedgePath:
        start, end, outer = spec.start, spec.end, spec.outer_radius
        inner_start, inner_end = spec.inner_at()

        if not spec.is_asymmetric and spec.inner_radius == outer:
            end_mod = nudged_end(start, end)
            return WedgePath(
                WedgeShape.ARC,
                [
                    MoveTo(self.point(start, outer)),
                    ArcTo(outer, abs(end_mod - start) > 180, end_mod > start, self.point(end_mod, outer)),
                ],
            )

        if start == end:
            return WedgePath(
                WedgeShape.RADIAL_LINE,
                [MoveTo(self.point(start, inner_start)), LineTo(self.point(end, outer))],
            )

        large_arc = abs(end - start) > 180
        sweep = end > start
        end_mod = nudged_end(start, end)
        segments: list[Segment] = [
            MoveTo(self.point(start, outer)),
            ArcTo(outer, large_arc, sweep, self.point(end_mod, outer)),
        ]
        if spec.is_asymmetric:
            segments += [
                LineTo(self.point(end_mod, inner_end)),
                LineTo(self.point(start, inner_start)),
                ClosePath(),
            ]
            return WedgePath(WedgeShape.ASYMMETRIC, segments)

        segments.append(LineTo(self.point(end_mod, inner_start)))
        if inner_start > 0:
            segments.append(ArcTo(inner_start, large_arc, not sweep, self.point(start, inner_start)))
        segments.append(ClosePath())
        return WedgePath(WedgeShape.ANNULAR, segments)

    def wedge(
        self,
        start: float,
        end: float,
        outer_radius: float,
        inner_radius: float | None = None,
        inner_radii: tuple[float, float] | None = None,
    ) -> WedgePath:
        return self.build(WedgeSpec(start, end, outer_radius, inner_radius, inner_radii))


def wedge_points(
    spec: WedgeSpec,
    center: Point = (0.0, 0.0),
    step: float = 1.0,
) -> NDArray[np.float64]:
    """Sampled boundary of a fillable wedge as an Nx2 array, for raster backends."""
    if spec.start == spec.end or (not spec.is_asymmetric and spec.inner_radius == spec.outer_radius):
        raise ValueError("wedge has no area to sample")
    end = nudged_end(spec.start, spec.end)
    n = max(2, int(math.ceil(abs(end - spec.start) / step)) + 1)
    angles = np.linspace(spec.start, end, n)
    outer = polar_to_xy_array(angles, spec.outer_radius, center)
    inner_start, inner_end = spec.inner_at()
    if spec.is_asymmetric:
        inner = polar_to_xy_array([end, spec.start], [inner_end, inner_start], center)
    else:
        inner = polar_to_xy_array(angles[::-1], inner_start, center)
    return np.vstack([outer, inner])


def wedge_polygon(spec: WedgeSpec, center: Point = (0.0, 0.0), step: float = 1.0) -> Polygon:
    """Shapely polygon of a fillable wedge. Near-full rings are repaired to their largest part."""
    poly = Polygon(wedge_points(spec, center, step))
    if not poly.is_valid:
        poly = make_valid(poly)
    if poly.geom_type == "MultiPolygon":
        poly = max(poly.geoms, key=lambda g: g.area)
    elif poly.geom_type == "GeometryCollection":
        polys = [g for g in poly.geoms if g.geom_type == "Polygon"]
        poly = max(polys, key=lambda g: g.area) if polys else Polygon()
    return poly
