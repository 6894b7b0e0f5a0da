"""Leaf-node polar geometry helpers. No color imports.

Angles are in degrees and follow the image frame: 0° points along +x and
angles increase clockwise on screen because image y grows downward.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

DEG2RAD = np.pi / 180.0


def polar_to_xy(
    angle: float,
    radius: float,
    center: tuple[float, float] = (0.0, 0.0),
) -> tuple[float, float]:
    """Cartesian position of (angle, radius) around center."""
    a = angle * DEG2RAD
    return (
        float(center[0] + radius * np.cos(a)),
        float(center[1] + radius * np.sin(a)),
    )


def polar_to_xy_array(
    angles: ArrayLike,
    radii: ArrayLike,
    center: tuple[float, float] = (0.0, 0.0),
) -> NDArray[np.float64]:
    """Vectorized ``polar_to_xy``. Broadcasts angles against radii, returns Nx2."""
    a = np.asarray(angles, dtype=np.float64) * DEG2RAD
    r = np.asarray(radii, dtype=np.float64)
    a, r = np.broadcast_arrays(a, r)
    return np.column_stack((center[0] + r * np.cos(a), center[1] + r * np.sin(a)))


def angular_span(start: float, end: float) -> float:
    """Unsigned angular distance between two angles, no wrap applied."""
    return abs(end - start)


def normalize_angle(angle: float) -> float:
    """Wrap into [0, 360)."""
    return float(angle % 360.0)


def angle_quadrant(angle: float) -> int:
    """Quadrant 0..3 of the wrapped angle, counting from +x in 90° steps."""
    return int(normalize_angle(angle) // 90.0)


def on_left_half(angle: float) -> bool:
    """True for angles whose point lies left of the center (cos < 0)."""
    return bool(np.cos(angle * DEG2RAD) < -1e-12)


def sector_area(start: float, end: float, inner: float, outer: float) -> float:
    """Area of an annular sector, span capped at a full turn."""
    span = min(angular_span(start, end), 360.0)
    return float(np.pi * abs(outer**2 - inner**2) * span / 360.0)
