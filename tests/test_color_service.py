from __future__ import annotations

import random

import numpy as np
import pytest

from imagefilters.models.hsl import HSL
from imagefilters.services.color_service import ColorService


@pytest.mark.parametrize("rgb, expected", [
    ((255, 0, 0), (0.0, 1.0, 0.5)),
    ((0, 255, 0), (120.0, 1.0, 0.5)),
    ((0, 0, 255), (240.0, 1.0, 0.5)),
    ((255, 255, 0), (60.0, 1.0, 0.5)),
    ((255, 0, 255), (300.0, 1.0, 0.5)),
    ((255, 255, 255), (0.0, 0.0, 1.0)),
    ((0, 0, 0), (0.0, 0.0, 0.0)),
])
def test_rgb_to_hsl_known_values(rgb, expected) -> None:
    hsl = ColorService.rgb_to_hsl(*rgb)
    assert hsl.hue == pytest.approx(expected[0])
    assert hsl.saturation == pytest.approx(expected[1])
    assert hsl.lightness == pytest.approx(expected[2])


def test_gray_is_achromatic() -> None:
    hsl = ColorService.rgb_to_hsl(128, 128, 128)
    assert hsl.hue == 0.0
    assert hsl.saturation == 0.0
    assert hsl.lightness == pytest.approx(128 / 255)


def test_hsl_to_rgb_known_values() -> None:
    assert ColorService.hsl_to_rgb(HSL(0.0, 1.0, 0.5)) == (255, 0, 0)
    assert ColorService.hsl_to_rgb(HSL(120.0, 1.0, 0.5)) == (0, 255, 0)
    assert ColorService.hsl_to_rgb(HSL(240.0, 1.0, 0.5)) == (0, 0, 255)
    assert ColorService.hsl_to_rgb(HSL(200.0, 0.0, 1.0)) == (255, 255, 255)


def test_round_trip_within_one() -> None:
    rng = random.Random(1234)
    for _ in range(1000):
        rgb = (rng.randrange(256), rng.randrange(256), rng.randrange(256))
        hsl = ColorService.rgb_to_hsl(*rgb)
        assert 0.0 <= hsl.hue < 360.0
        assert 0.0 <= hsl.saturation <= 1.0
        assert 0.0 <= hsl.lightness <= 1.0
        back = ColorService.hsl_to_rgb(hsl)
        for original, restored in zip(rgb, back):
            assert abs(original - restored) <= 1, (rgb, hsl, back)


def test_array_forms_match_scalar_forms(make_raster) -> None:
    pixels = make_raster(16, 12, seed=7).pixels
    h, s, l = ColorService.rgb_to_hsl_array(pixels)
    restored = ColorService.hsl_to_rgb_array(h, s, l)
    for y in range(pixels.shape[0]):
        for x in range(pixels.shape[1]):
            scalar = ColorService.rgb_to_hsl(*(int(c) for c in pixels[y, x]))
            assert h[y, x] == pytest.approx(scalar.hue)
            assert s[y, x] == pytest.approx(scalar.saturation)
            assert l[y, x] == pytest.approx(scalar.lightness)
            assert tuple(restored[y, x]) == ColorService.hsl_to_rgb(scalar)


def test_array_round_trip_within_one(make_raster) -> None:
    pixels = make_raster(40, 25, seed=3).pixels
    restored = ColorService.hsl_to_rgb_array(*ColorService.rgb_to_hsl_array(pixels))
    assert np.abs(restored.astype(int) - pixels.astype(int)).max() <= 1


def test_luminance_formula() -> None:
    assert ColorService.luminance(0, 0, 0) == 0.0
    assert ColorService.luminance(255, 255, 255) == pytest.approx(255.0)
    expected = (0.299 * 100 ** 2 + 0.587 * 50 ** 2 + 0.114 * 200 ** 2) ** 0.5
    assert ColorService.luminance(100, 50, 200) == pytest.approx(expected)


def test_luminance_array_matches_scalar(make_raster) -> None:
    pixels = make_raster(5, 4, seed=11).pixels
    lums = ColorService.luminance_array(pixels)
    assert lums.shape == (4, 5)
    for y in range(4):
        for x in range(5):
            assert lums[y, x] == pytest.approx(ColorService.luminance(*(int(c) for c in pixels[y, x])))
