from __future__ import annotations

import numpy as np
import pytest

from imagefilters.exceptions import InvalidArgumentError
from imagefilters.pipeline.batch_filter import FILTERS, apply_filter, apply_filter_to_gallery
from imagefilters.services.filter_service import FilterService


def test_every_registered_filter_runs(make_raster) -> None:
    src = make_raster(4, 3, seed=1)
    values = {"hue": 90.0, "saturation": 0.3, "lightness": 0.6}
    for name in FILTERS:
        out = apply_filter(src, name, values.get(name))
        assert out.pixels.size == src.pixels.size


def test_apply_filter_matches_service(make_raster) -> None:
    src = make_raster(5, 5, seed=2)
    assert np.array_equal(apply_filter(src, "sepia").pixels, FilterService().sepia(src).pixels)
    assert np.array_equal(
        apply_filter(src, "lightness", 0.25).pixels,
        FilterService().set_lightness(src, 0.25).pixels,
    )


@pytest.mark.parametrize("name, value", [
    ("blur", None),
    ("hue", None),
    ("invert", 0.5),
])
def test_bad_filter_requests(make_raster, name, value) -> None:
    with pytest.raises(InvalidArgumentError):
        apply_filter(make_raster(2, 2), name, value)


def test_gallery_is_streamed(make_raster) -> None:
    gallery = [make_raster(2, 2, seed=i) for i in range(3)]
    results = apply_filter_to_gallery(iter(gallery), "invert")
    first = next(results)
    assert np.array_equal(first.pixels, 255 - gallery[0].pixels)
    assert len(list(results)) == 2


def test_gallery_rejects_unknown_filter_eagerly() -> None:
    with pytest.raises(InvalidArgumentError):
        apply_filter_to_gallery([], "blur")
