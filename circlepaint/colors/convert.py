"""Color space conversion: HSV <-> RGB and 8-bit channel quantization.

Channels in the [0,1] float domain are the working representation; the
backend only ever sees integer channels in [0,255].
"""

from __future__ import annotations

import math

from circlepaint.utils.math_helpers import put_between, round_half_up

RGB = tuple[float, float, float]
RGB255 = tuple[int, int, int]


def hsv_to_rgb(h: float, s: float, v: float) -> RGB:
    """HSV (h in degrees, s and v in [0,1]) to RGB floats in [0,1].

    The hue circle is split into six 60° sectors; each sector picks one
    permutation of (v, t, p, q).
    """
    if h < 0 or h >= 360:
        h = h % 360
    h /= 60.0
    i = math.floor(h)
    f = h - i
    p = v * (1 - s)
    q = v * (1 - s * f)
    t = v * (1 - s * (1 - f))
    if i == 0:
        return (v, t, p)
    if i == 1:
        return (q, v, p)
    if i == 2:
        return (p, v, t)
    if i == 3:
        return (p, q, v)
    if i == 4:
        return (t, p, v)
    # sector 5
    return (v, p, q)


def rgb_to_hsv(r: float, g: float, b: float) -> tuple[float, float, float]:
    """RGB floats in [0,1] to HSV with h in [0,360)."""
    hi = max(r, g, b)
    lo = min(r, g, b)
    delta = hi - lo
    v = hi
    s = 0.0 if hi == 0 else delta / hi
    if delta == 0:
        return (0.0, s, v)
    if hi == r:
        h = ((g - b) / delta) % 6
    elif hi == g:
        h = (b - r) / delta + 2
    else:
        h = (r - g) / delta + 4
    return ((h * 60.0) % 360.0, s, v)


def rgb_to_rgb255(r: float, g: float, b: float) -> RGB255:
    """Clamp float channels to [0,1] and quantize to 0..255."""
    return tuple(round_half_up(255 * put_between(c, 0.0, 1.0)) for c in (r, g, b))  # type: ignore[return-value]


def rgb255_to_rgb(r: int, g: int, b: int) -> RGB:
    return (r / 255.0, g / 255.0, b / 255.0)


def hsv_to_rgb255(h: float, s: float, v: float) -> RGB255:
    return rgb_to_rgb255(*hsv_to_rgb(h, s, v))


def rgb255_to_hsv(r: int, g: int, b: int) -> tuple[float, float, float]:
    return rgb_to_hsv(*rgb255_to_rgb(r, g, b))
