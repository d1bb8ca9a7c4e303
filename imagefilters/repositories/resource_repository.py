# repositories/resource_repository.py
from __future__ import annotations
from pathlib import Path
from typing import Union
import cv2
import numpy as np

from ..models.raster import Raster
from .raster_repository import RasterRepository


class ResourceRepository:
    """
    Access to the two fixed overlay assets of the composite filter.

    • Loads the halo mask / grain texture from disk, or
    • renders equivalent assets procedurally at any requested size.
    """

    def __init__(self) -> None:
        self.raster_repo = RasterRepository()

    # ---------- file assets ----------
    def load_asset(self, path: Union[str, Path]) -> Raster:
        return self.raster_repo.load(path, timeout=self.raster_repo.LOAD_TIMEOUT)

    @staticmethod
    def fit(asset: Raster, width: int, height: int) -> Raster:
        """Resize *asset* to exactly width x height (bilinear)."""
        if (asset.width(), asset.height()) == (width, height):
            return asset
        if width == 0 or height == 0:
            return Raster.blank(width, height)
        resized = cv2.resize(asset.pixels, (width, height), interpolation=cv2.INTER_LINEAR)
        return Raster(pixels=resized, path=asset.path)

    # ---------- procedural assets ----------
    @staticmethod
    def render_halo(width: int, height: int, softness: float = 0.35) -> Raster:
        """
        White centre fading to black towards the corners.
        softness: fraction of the half-diagonal that stays fully white.
        """
        if width == 0 or height == 0:
            return Raster.blank(width, height)
        yy, xx = np.ogrid[:height, :width]
        cx = (width - 1) / 2.0
        cy = (height - 1) / 2.0
        dist = np.sqrt((xx - cx) ** 2 + (yy - cy) ** 2)
        max_dist = np.sqrt(cx ** 2 + cy ** 2) or 1.0
        falloff = np.clip((dist / max_dist - softness) / max(1e-3, 1.0 - softness), 0.0, 1.0)
        level = np.clip(255.0 * (1.0 - falloff), 0, 255).astype(np.uint8)
        return Raster(pixels=np.repeat(level[..., np.newaxis], 3, axis=-1))

    @staticmethod
    def render_grain(width: int, height: int, seed: int = 42, spread: float = 40.0) -> Raster:
        """Mid-gray monochrome noise; the same seed always gives the same texture."""
        rng = np.random.default_rng(seed)
        noise = rng.normal(128.0, spread, size=(height, width, 1))
        level = np.clip(noise, 0, 255).astype(np.uint8)
        return Raster(pixels=np.repeat(level, 3, axis=-1))
