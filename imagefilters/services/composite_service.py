from __future__ import annotations

import logging
import os

import numpy as np
from dotenv import load_dotenv

from ..exceptions import DimensionMismatchError, InvalidArgumentError
from ..models.blend import BlendWeights
from ..models.raster import Raster
from .filter_service import to_channels

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class CompositeService:
    """
    Warm tint plus weighted two-image blends (vignette halo, decorative grain).

    Blends never crop, tile or resize: the overlay must already have the
    target's exact size, otherwise DimensionMismatchError is raised before
    any pixel is computed.
    """

    def __init__(self,
                 red_gain: float = None,
                 blue_divisor: float = None,
                 vignette_weights: BlendWeights = None,
                 grain_weights: BlendWeights = None):
        """
        Args:
            red_gain: Warm-tint multiplier for red (defaults to env var)
            blue_divisor: Warm-tint divisor for blue (defaults to env var)
            vignette_weights: Image/halo weights (defaults to env var)
            grain_weights: Image/grain weights (defaults to env var)
        """
        self.red_gain = red_gain if red_gain is not None else float(os.getenv("WARM_RED_GAIN", "1.2"))
        self.blue_divisor = (blue_divisor if blue_divisor is not None
                             else float(os.getenv("WARM_BLUE_DIVISOR", "1.5")))
        if self.blue_divisor <= 0:
            raise InvalidArgumentError(f"Warm blue divisor must be positive, got {self.blue_divisor}")

        self.vignette_weights = vignette_weights or BlendWeights.from_overlay(
            float(os.getenv("VIGNETTE_MASK_WEIGHT", "0.35")))
        self.grain_weights = grain_weights or BlendWeights.from_overlay(
            float(os.getenv("GRAIN_TEXTURE_WEIGHT", "0.05")))

    @staticmethod
    def check_dimensions(target: Raster, overlay: Raster, role: str = "overlay") -> None:
        if (overlay.width(), overlay.height()) != (target.width(), target.height()):
            raise DimensionMismatchError(
                f"{role} is {overlay.width()}x{overlay.height()} but the image is "
                f"{target.width()}x{target.height()}"
            )

    # ─── Public API ────────────────────────────────────────────────
    def warm(self, raster: Raster) -> Raster:
        """r' = r * 1.2, g' = g, b' = b / 1.5 (with the configured gain/divisor)."""
        logger.debug(f"warm on {raster.width()}x{raster.height()}")
        rgb = raster.pixels.astype(np.float64)
        rgb[..., 0] *= self.red_gain
        rgb[..., 2] /= self.blue_divisor
        return Raster(pixels=to_channels(rgb), path=raster.path)

    def blend(self, target: Raster, overlay: Raster, weights: BlendWeights, role: str = "overlay") -> Raster:
        """c' = base * c_target + overlay * c_overlay per channel, truncated and clamped."""
        self.check_dimensions(target, overlay, role)
        logger.debug(f"blend {role} {weights.base:.2f}/{weights.overlay:.2f} "
                     f"on {target.width()}x{target.height()}")
        mixed = (weights.base * target.pixels.astype(np.float64) +
                 weights.overlay * overlay.pixels.astype(np.float64))
        return Raster(pixels=to_channels(mixed), path=target.path)

    def vignette(self, target: Raster, mask: Raster, weights: BlendWeights = None) -> Raster:
        return self.blend(target, mask, weights or self.vignette_weights, role="halo mask")

    def grain(self, target: Raster, texture: Raster, weights: BlendWeights = None) -> Raster:
        return self.blend(target, texture, weights or self.grain_weights, role="grain texture")
