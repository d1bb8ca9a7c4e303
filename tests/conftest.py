from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage

from imagefilters.models.raster import Raster


@pytest.fixture
def make_raster():
    """Factory: make_raster(width, height, seed=0) -> random RGB Raster."""
    def _make(width: int, height: int, seed: int = 0) -> Raster:
        rng = np.random.default_rng(seed)
        return Raster(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))
    return _make


@pytest.fixture
def write_png():
    """Factory: write_png(path, pixels) writes an RGB PNG and returns its path."""
    def _write(path: Path, pixels: np.ndarray) -> Path:
        PILImage.fromarray(pixels).save(path, format="PNG")
        return path
    return _write
