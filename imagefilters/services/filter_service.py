from __future__ import annotations

import logging
import numbers

import numpy as np

from ..exceptions import InvalidArgumentError
from ..models.raster import Raster
from .color_service import ColorService

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def to_channels(values: np.ndarray) -> np.ndarray:
    """Truncate float channel values toward zero and clamp them into uint8."""
    return np.clip(np.trunc(values), 0, 255).astype(np.uint8)


def _require_number(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
    return float(value)


class FilterService:
    """
    Single-image recolouring and rotation.

    *   Every method returns a **new** Raster; the input is never modified,
        so a rejected call leaves the caller's raster exactly as it was.
    *   No I/O here, works only with Raster objects.
    """

    def __init__(self):
        self.colors = ColorService()

    @staticmethod
    def _derive(raster: Raster, pixels: np.ndarray) -> Raster:
        return Raster(pixels=pixels, path=raster.path)

    # ─── Per-pixel recolouring ─────────────────────────────────────
    def grayscale(self, raster: Raster) -> Raster:
        """Set each channel to floor((r + g + b) / 3)."""
        logger.debug(f"grayscale on {raster.width()}x{raster.height()}")
        avg = raster.pixels.astype(np.int32).sum(axis=-1) // 3
        return self._derive(raster, np.repeat(avg[..., np.newaxis], 3, axis=-1).astype(np.uint8))

    def invert(self, raster: Raster) -> Raster:
        """c' = 255 - c for every channel."""
        logger.debug(f"invert on {raster.width()}x{raster.height()}")
        return self._derive(raster, 255 - raster.pixels)

    def sepia(self, raster: Raster) -> Raster:
        """
        Fixed colour-mixing matrix:
            r' = .393r + .769g + .189b
            g' = .349r + .686g + .168b
            b' = .272r + .534g + .131b
        Bright inputs overflow 255, so results are clamped.
        """
        logger.debug(f"sepia on {raster.width()}x{raster.height()}")
        rgb = raster.pixels.astype(np.float64)
        r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
        out = np.stack([
            .393 * r + .769 * g + .189 * b,
            .349 * r + .686 * g + .168 * b,
            .272 * r + .534 * g + .131 * b,
        ], axis=-1)
        return self._derive(raster, to_channels(out))

    def black_white(self, raster: Raster) -> Raster:
        """
        Stylised black/white with no gray.

        1) luminance = sqrt(.299 r^2 + .587 g^2 + .114 b^2) for each pixel
        2) median of all luminances (mean of the two middle values when even)
        3) luminance >= median -> white, otherwise black
        """
        logger.debug(f"black_white on {raster.width()}x{raster.height()}")
        if raster.pixels.size == 0:
            return raster.copy()

        lums = self.colors.luminance_array(raster.pixels)
        median = float(np.median(lums))
        out = np.where((lums >= median)[..., np.newaxis], WHITE, BLACK).astype(np.uint8)
        logger.debug(f"black_white threshold (median luminance) = {median:.3f}")
        return self._derive(raster, out)

    # ─── Geometry ──────────────────────────────────────────────────
    def rotate(self, raster: Raster, turns: int = 1) -> Raster:
        """
        Rotate 90° clockwise *turns* times.

        Source (x, y) in a WxH raster lands on (H-1-y, x) in the HxW result.
        """
        if isinstance(turns, bool) or not isinstance(turns, numbers.Integral):
            raise InvalidArgumentError(f"turns must be an integer, got {turns!r}")
        logger.debug(f"rotate {turns}x90° on {raster.width()}x{raster.height()}")
        # np.rot90 turns counter-clockwise for positive k.
        rotated = np.rot90(raster.pixels, k=-(int(turns) % 4), axes=(0, 1))
        return self._derive(raster, np.ascontiguousarray(rotated))

    # ─── HSL setters ───────────────────────────────────────────────
    def set_hue(self, raster: Raster, hue: float) -> Raster:
        """Give every pixel the same hue (degrees, 0 <= hue < 360)."""
        hue = _require_number("hue", hue)
        if not 0.0 <= hue < 360.0:
            raise InvalidArgumentError(f"hue must be in [0, 360), got {hue}")
        logger.debug(f"set_hue({hue}) on {raster.width()}x{raster.height()}")
        _, s, l = self.colors.rgb_to_hsl_array(raster.pixels)
        return self._derive(raster, self.colors.hsl_to_rgb_array(np.full_like(s, hue), s, l))

    def set_saturation(self, raster: Raster, saturation: float) -> Raster:
        """Give every pixel the same saturation (0 <= saturation <= 1)."""
        saturation = _require_number("saturation", saturation)
        if not 0.0 <= saturation <= 1.0:
            raise InvalidArgumentError(f"saturation must be in [0, 1], got {saturation}")
        logger.debug(f"set_saturation({saturation}) on {raster.width()}x{raster.height()}")
        h, _, l = self.colors.rgb_to_hsl_array(raster.pixels)
        return self._derive(raster, self.colors.hsl_to_rgb_array(h, np.full_like(l, saturation), l))

    def set_lightness(self, raster: Raster, lightness: float) -> Raster:
        """Give every pixel the same lightness (0 <= lightness <= 1)."""
        lightness = _require_number("lightness", lightness)
        if not 0.0 <= lightness <= 1.0:
            raise InvalidArgumentError(f"lightness must be in [0, 1], got {lightness}")
        logger.debug(f"set_lightness({lightness}) on {raster.width()}x{raster.height()}")
        h, s, _ = self.colors.rgb_to_hsl_array(raster.pixels)
        return self._derive(raster, self.colors.hsl_to_rgb_array(h, s, np.full_like(s, lightness)))
