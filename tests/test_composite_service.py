from __future__ import annotations

import numpy as np
import pytest

from imagefilters.exceptions import DimensionMismatchError, InvalidArgumentError
from imagefilters.models.blend import BlendWeights
from imagefilters.models.raster import Pixel, Raster
from imagefilters.services.composite_service import CompositeService


@pytest.fixture
def composite() -> CompositeService:
    return CompositeService()


def test_default_weights_match_filter_recipe(composite) -> None:
    assert composite.vignette_weights.base == pytest.approx(0.65)
    assert composite.vignette_weights.overlay == pytest.approx(0.35)
    assert composite.grain_weights.base == pytest.approx(0.95)
    assert composite.grain_weights.overlay == pytest.approx(0.05)


def test_warm_formula(composite) -> None:
    out = composite.warm(Raster.blank(1, 1, fill=(100, 80, 150)))
    assert out.get(0, 0) == Pixel(int(100 * 1.2), 80, int(150 / 1.5))


def test_warm_clamps_red(composite) -> None:
    out = composite.warm(Raster.blank(2, 2, fill=(250, 250, 250)))
    assert out.get(1, 1) == Pixel(255, 250, int(250 / 1.5))


def test_blend_is_weighted_sum(composite, make_raster) -> None:
    target = make_raster(5, 4, seed=1)
    overlay = make_raster(5, 4, seed=2)
    weights = BlendWeights(0.7, 0.3)
    out = composite.blend(target, overlay, weights)
    for y in range(4):
        for x in range(5):
            expected = tuple(
                int(weights.base * a + weights.overlay * b)
                for a, b in zip(target.get(x, y), overlay.get(x, y))
            )
            assert out.get(x, y) == expected


def test_vignette_with_black_mask_darkens(composite) -> None:
    target = Raster.blank(3, 3, fill=(200, 200, 200))
    out = composite.vignette(target, Raster.blank(3, 3))
    assert out.get(1, 1) == Pixel(130, 130, 130)


def test_grain_with_identical_texture_is_identity(composite, make_raster) -> None:
    target = make_raster(6, 6, seed=3)
    out = composite.grain(target, target.copy())
    assert np.abs(out.pixels.astype(int) - target.pixels.astype(int)).max() <= 1


def test_mismatched_mask_raises_before_mutation(composite, make_raster) -> None:
    target = make_raster(10, 10, seed=4)
    before = target.pixels.copy()
    with pytest.raises(DimensionMismatchError, match="5x5"):
        composite.vignette(target, Raster.blank(5, 5))
    assert np.array_equal(target.pixels, before)


def test_transposed_overlay_is_a_mismatch(composite) -> None:
    with pytest.raises(DimensionMismatchError):
        composite.grain(Raster.blank(4, 2), Raster.blank(2, 4))


@pytest.mark.parametrize("base, overlay", [(0.95, 0.5), (0.5, 0.6), (1.2, -0.2), (0.5, "half")])
def test_blend_weights_must_be_a_partition_of_one(base, overlay) -> None:
    with pytest.raises(InvalidArgumentError):
        BlendWeights(base, overlay)


def test_blend_weights_from_overlay() -> None:
    weights = BlendWeights.from_overlay(0.05)
    assert weights.base == pytest.approx(0.95)
    with pytest.raises(InvalidArgumentError):
        BlendWeights.from_overlay(1.5)


def test_env_configures_weights(monkeypatch) -> None:
    monkeypatch.setenv("VIGNETTE_MASK_WEIGHT", "0.5")
    monkeypatch.setenv("WARM_RED_GAIN", "2")
    service = CompositeService()
    assert service.vignette_weights.overlay == 0.5
    assert service.warm(Raster.blank(1, 1, fill=(100, 0, 0))).get(0, 0).r == 200


def test_invalid_blue_divisor_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        CompositeService(blue_divisor=0)
