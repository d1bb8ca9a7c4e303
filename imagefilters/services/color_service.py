from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from ..models.hsl import HSL
from ..models.raster import Pixel

# Perceptual channel weights used by the luminance formula.
_LUMA_WEIGHTS = (0.299, 0.587, 0.114)


class ColorService:
    """
    Pure colour-model conversions (RGB <-> HSL, luminance).

    Every conversion exists twice: a scalar form for single pixels and an
    array form working on whole (H, W, 3) uint8 grids. Both follow the same
    formulas so a filter applied to an array gives the same result as the
    scalar function applied pixel by pixel.
    """

    # ─── Luminance ──────────────────────────────────────────────────
    @staticmethod
    def luminance(r: int, g: int, b: int) -> float:
        wr, wg, wb = _LUMA_WEIGHTS
        return math.sqrt(wr * (r * r) + wg * (g * g) + wb * (b * b))

    @staticmethod
    def luminance_array(pixels: np.ndarray) -> np.ndarray:
        """Return an (H, W) float64 array of per-pixel luminance."""
        rgb = pixels.astype(np.float64)
        r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
        wr, wg, wb = _LUMA_WEIGHTS
        return np.sqrt(wr * (r * r) + wg * (g * g) + wb * (b * b))

    # ─── RGB -> HSL ─────────────────────────────────────────────────
    @staticmethod
    def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
        """
        Standard max/min/chroma conversion.

        Returns:
            HSL with hue in [0, 360), saturation and lightness in [0, 1].
            Achromatic pixels (r == g == b) get hue 0 and saturation 0.
        """
        rf, gf, bf = r / 255.0, g / 255.0, b / 255.0
        c_max = max(rf, gf, bf)
        c_min = min(rf, gf, bf)
        chroma = c_max - c_min
        lightness = (c_max + c_min) / 2.0

        if chroma == 0:
            return HSL(0.0, 0.0, lightness)

        if c_max == rf:
            hue = 60.0 * (((gf - bf) / chroma) % 6)
        elif c_max == gf:
            hue = 60.0 * ((bf - rf) / chroma + 2)
        else:
            hue = 60.0 * ((rf - gf) / chroma + 4)
        if hue >= 360.0:
            hue -= 360.0

        saturation = min(1.0, chroma / (1.0 - abs(2.0 * lightness - 1.0)))
        return HSL(hue, saturation, lightness)

    @staticmethod
    def rgb_to_hsl_array(pixels: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Array form of :meth:`rgb_to_hsl`; returns three (H, W) float64 arrays."""
        rgb = pixels.astype(np.float64) / 255.0
        r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
        c_max = rgb.max(axis=-1)
        c_min = rgb.min(axis=-1)
        chroma = c_max - c_min
        lightness = (c_max + c_min) / 2.0

        achromatic = chroma == 0
        safe_chroma = np.where(achromatic, 1.0, chroma)

        hue = np.select(
            [achromatic, c_max == r, c_max == g],
            [
                0.0,
                60.0 * (((g - b) / safe_chroma) % 6),
                60.0 * ((b - r) / safe_chroma + 2),
            ],
            default=60.0 * ((r - g) / safe_chroma + 4),
        )
        hue = np.where(hue >= 360.0, hue - 360.0, hue)

        denom = 1.0 - np.abs(2.0 * lightness - 1.0)
        safe_denom = np.where(achromatic, 1.0, denom)
        saturation = np.where(achromatic, 0.0, np.minimum(1.0, chroma / safe_denom))
        return hue, saturation, lightness

    # ─── HSL -> RGB ─────────────────────────────────────────────────
    @staticmethod
    def hsl_to_rgb(hsl: HSL) -> Pixel:
        """Inverse of :meth:`rgb_to_hsl`; channels rounded to nearest and clamped."""
        chroma = (1.0 - abs(2.0 * hsl.lightness - 1.0)) * hsl.saturation
        h_prime = (hsl.hue % 360.0) / 60.0
        x = chroma * (1.0 - abs(h_prime % 2 - 1.0))
        m = hsl.lightness - chroma / 2.0

        sextant = int(h_prime)
        if sextant == 0:
            r1, g1, b1 = chroma, x, 0.0
        elif sextant == 1:
            r1, g1, b1 = x, chroma, 0.0
        elif sextant == 2:
            r1, g1, b1 = 0.0, chroma, x
        elif sextant == 3:
            r1, g1, b1 = 0.0, x, chroma
        elif sextant == 4:
            r1, g1, b1 = x, 0.0, chroma
        else:
            r1, g1, b1 = chroma, 0.0, x

        to_channel = lambda v: max(0, min(255, int(round((v + m) * 255.0))))
        return Pixel(to_channel(r1), to_channel(g1), to_channel(b1))

    @staticmethod
    def hsl_to_rgb_array(hue: np.ndarray, saturation: np.ndarray, lightness: np.ndarray) -> np.ndarray:
        """Array form of :meth:`hsl_to_rgb`; returns an (H, W, 3) uint8 array."""
        chroma = (1.0 - np.abs(2.0 * lightness - 1.0)) * saturation
        h_prime = np.mod(hue, 360.0) / 60.0
        x = chroma * (1.0 - np.abs(np.mod(h_prime, 2) - 1.0))
        m = lightness - chroma / 2.0
        zero = np.zeros_like(chroma)

        sextant = np.floor(h_prime).astype(np.int64)
        conditions = [sextant == i for i in range(5)]
        r1 = np.select(conditions, [chroma, x, zero, zero, x], default=chroma)
        g1 = np.select(conditions, [x, chroma, chroma, x, zero], default=zero)
        b1 = np.select(conditions, [zero, zero, x, chroma, chroma], default=x)

        rgb = np.stack([r1, g1, b1], axis=-1) + m[..., np.newaxis]
        return np.clip(np.rint(rgb * 255.0), 0, 255).astype(np.uint8)
