"""SvgCanvas: drawing primitives that resolve colors and emit SVG elements.

Polar positions (slices, text) are placed around the canvas center; lines,
circles and polygons take image coordinates as given.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
from shapely.geometry import Polygon

from circlepaint.config import Settings
from circlepaint.svg.arc_path import ArcPathBuilder, WedgePath, WedgeSpec
from circlepaint.svg.serializer import serialize_svg
from circlepaint.svg.style import StyleBuilder
from circlepaint.utils.geometry import DEG2RAD, on_left_half

logger = logging.getLogger(__name__)


def text_anchor(angle: float, is_parallel: bool = False, is_rotated: bool = True) -> str:
    """Anchor for a label at ``angle``: radial labels on the left half hang off their end."""
    if is_parallel:
        return "middle"
    if is_rotated and on_left_half(angle):
        return "end"
    return "start"


def text_rotation(angle: float, is_parallel: bool = False, is_rotated: bool = True) -> float:
    """Rotation in degrees that keeps a label readable left to right."""
    if not is_rotated:
        return 0.0
    if is_parallel:
        # tangent to the circle, flipped on the lower half
        return angle - 90.0 if np.sin(angle * DEG2RAD) > 1e-12 else angle + 90.0
    return angle + 180.0 if on_left_half(angle) else angle


class SvgCanvas:
    def __init__(
        self,
        styles: StyleBuilder,
        width: float,
        height: float,
        center: tuple[float, float] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.styles = styles
        self.width = width
        self.height = height
        self.center = center if center is not None else (width / 2.0, height / 2.0)
        self.settings = settings or Settings()
        self.arcs = ArcPathBuilder(self.center)
        self.elements: list[dict[str, Any]] = []

    def _add(self, elem: dict[str, Any]) -> dict[str, Any]:
        self.elements.append(elem)
        return elem

    def draw_line(
        self,
        points: Sequence[float],
        color: str | None = None,
        thickness: float | None = None,
        linecap: str | None = None,
    ) -> dict[str, Any]:
        """Straight line through ``(x1, y1, x2, y2)``."""
        if len(points) != 4:
            raise ValueError(f"draw_line needs 4 coordinates, got {len(points)}")
        style = self.styles.css(
            thickness=thickness or 1,
            color=color or self.settings.default_color,
            linecap=linecap or "round",
        )
        x1, y1, x2, y2 = points
        logger.debug("svg line %s %s", points, style)
        return self._add(
            {
                "tag": "line",
                "x1": f"{x1:.1f}",
                "y1": f"{y1:.1f}",
                "x2": f"{x2:.1f}",
                "y2": f"{y2:.1f}",
                "style": style,
            }
        )

    def draw_circle(
        self,
        point: tuple[float, float],
        radius: float,
        color: str | None = None,
        stroke_color: str | None = None,
        stroke_thickness: float | None = None,
    ) -> dict[str, Any]:
        """Circle filled with ``color``, outlined only when a stroke thickness is given."""
        style = self.styles.css(thickness=stroke_thickness, color=stroke_color, fill_color=color)
        return self._add(
            {
                "tag": "circle",
                "cx": f"{point[0]:.1f}",
                "cy": f"{point[1]:.1f}",
                "r": f"{radius:.1f}",
                "style": style,
            }
        )

    def draw_polygon(
        self,
        polygon: Polygon | Sequence[tuple[float, float]],
        thickness: float | None = None,
        color: str | None = None,
        fill_color: str | None = None,
        linecap: str | None = None,
    ) -> dict[str, Any]:
        if isinstance(polygon, Polygon):
            vertices = list(polygon.exterior.coords)[:-1]
        else:
            vertices = list(polygon)
        points = " ".join(f"{x:g},{y:g}" for x, y in vertices)
        style = self.styles.css(
            thickness=thickness,
            color=color,
            fill_color=fill_color or self.settings.default_fill_color,
            linecap=linecap,
        )
        return self._add({"tag": "polygon", "points": points, "style": style})

    def slice_path(
        self,
        start: float,
        end: float,
        radius_from: float,
        radius_to: float | None = None,
        radius_to_pair: tuple[float, float] | None = None,
    ) -> WedgePath:
        """Wedge from ``radius_from`` (the arc side) in to ``radius_to`` or a per-angle pair."""
        if radius_to is None and radius_to_pair is None:
            radius_to = radius_from
        return self.arcs.build(WedgeSpec(start, end, radius_from, radius_to, radius_to_pair))

    def draw_slice(
        self,
        start: float,
        end: float,
        radius_from: float,
        radius_to: float | None = None,
        radius_to_pair: tuple[float, float] | None = None,
        edgecolor: str | None = None,
        edgestroke: float | None = None,
        fillcolor: str | None = None,
        linecap: str | None = None,
    ) -> dict[str, Any]:
        path = self.slice_path(start, end, radius_from, radius_to, radius_to_pair)
        fill = fillcolor or self.settings.default_fill_color
        if fill and not path.fillable:
            logger.debug("slice %s-%s has no area, dropping fill %s", start, end, fill)
            fill = None
        style = self.styles.css(
            thickness=edgestroke,
            color=edgecolor,
            linecap=linecap or "round",
            fill_color=fill,
        )
        return self._add({"tag": "path", "d": path.d(), "style": style})

    def draw_text(
        self,
        text: str,
        angle: float,
        radius: float,
        size: float,
        font: str | None = None,
        color: str | None = None,
        angle_offset: float = 0.0,
        is_parallel: bool = False,
        is_rotated: bool = True,
    ) -> dict[str, Any]:
        """Label at a polar position, anchored and rotated for its side of the circle."""
        if is_parallel:
            angle_offset = 0.0
        x, y = self.arcs.point(angle + angle_offset, radius)
        style = self.styles.css(
            fill_color=color or self.settings.default_font_color,
            text_anchor=text_anchor(angle, is_parallel, is_rotated),
        )
        rotation = text_rotation(angle, is_parallel, is_rotated)
        return self._add(
            {
                "tag": "text",
                "x": f"{x:.1f}",
                "y": f"{y:.1f}",
                "font-size": f"{self.settings.svg_font_scale * size:.1f}px",
                "font-family": font or self.settings.default_font_name,
                "style": style,
                "transform": f"rotate({rotation:.1f},{x:.1f},{y:.1f})",
                "text": text,
            }
        )

    def to_svg(self, title: str = "") -> str:
        return serialize_svg(self.elements, self.width, self.height, title=title)
