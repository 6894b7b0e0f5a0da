"""Tests for HSV/RGB conversion."""

import itertools

import pytest

from circlepaint.colors.convert import (
    hsv_to_rgb,
    hsv_to_rgb255,
    rgb255_to_hsv,
    rgb_to_hsv,
    rgb_to_rgb255,
)


@pytest.mark.parametrize(
    "hsv, expected",
    [
        ((0, 1, 1), (255, 0, 0)),
        ((120, 1, 1), (0, 255, 0)),
        ((240, 1, 1), (0, 0, 255)),
        ((60, 1, 1), (255, 255, 0)),
        ((0, 0, 1), (255, 255, 255)),
        ((0, 0, 0), (0, 0, 0)),
        ((360, 1, 1), (255, 0, 0)),
    ],
)
def test_hsv_primaries(hsv, expected):
    assert hsv_to_rgb255(*hsv) == expected


def test_hue_wraps_outside_circle():
    assert hsv_to_rgb(-120, 1, 1) == hsv_to_rgb(240, 1, 1)
    assert hsv_to_rgb(480, 1, 1) == hsv_to_rgb(120, 1, 1)


def test_half_value_grey_rounds_half_up():
    # 0.5 * 255 = 127.5
    assert hsv_to_rgb255(0, 0, 0.5) == (128, 128, 128)


def test_rgb255_clamps_out_of_range():
    assert rgb_to_rgb255(1.2, -0.1, 0.5) == (255, 0, 128)


def test_round_trip_hue_sectors():
    for h in range(0, 360, 15):
        r, g, b = hsv_to_rgb(h, 0.8, 0.6)
        h2, s2, v2 = rgb_to_hsv(r, g, b)
        assert h2 == pytest.approx(h, abs=1e-9)
        assert s2 == pytest.approx(0.8)
        assert v2 == pytest.approx(0.6)


def test_quantized_round_trip_within_one_step():
    for h, s, v in [(10, 0.3, 0.9), (200, 1.0, 0.4), (330, 0.5, 0.5)]:
        rgb = hsv_to_rgb255(h, s, v)
        assert hsv_to_rgb255(*rgb255_to_hsv(*rgb)) == rgb



def test_rgb_grid_round_trips_through_hsv():
    levels = range(0, 256, 15)
    for r, g, b in itertools.product(levels, repeat=3):
        rgb = (r / 255, g / 255, b / 255)
        back = hsv_to_rgb(*rgb_to_hsv(*rgb))
        assert all(abs(x - y) <= 1 / 255 for x, y in zip(rgb, back)), (r, g, b)
        assert hsv_to_rgb255(*rgb255_to_hsv(r, g, b)) == (r, g, b)


def test_grey_has_zero_hue_and_saturation():
    h, s, v = rgb_to_hsv(0.5, 0.5, 0.5)
    assert (h, s) == (0.0, 0.0)
    assert v == 0.5
