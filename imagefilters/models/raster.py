from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Tuple
import numpy as np

from ..exceptions import InvalidArgumentError, OutOfBoundsError


class Pixel(NamedTuple):
    r: int
    g: int
    b: int


@dataclass(eq=False)
class Raster:
    """
    Simple data object: RGB pixels (+ optional source path for bookkeeping).
    No file I/O in this file.
    """
    pixels: np.ndarray # Shape (H, W, 3), dtype uint8, RGB order.
    path: Path | None = None # Source of the image.

    def __post_init__(self):
        self.pixels = np.asarray(self.pixels)
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 3:
            raise InvalidArgumentError(f"Raster pixels must have shape (H, W, 3), got {self.pixels.shape}")
        if not np.issubdtype(self.pixels.dtype, np.number):
            raise InvalidArgumentError(f"Raster pixels must be numeric, got dtype {self.pixels.dtype}")
        if self.pixels.dtype != np.uint8:
            self.pixels = np.clip(self.pixels, 0, 255).astype(np.uint8)

    @classmethod
    def blank(cls, width: int, height: int, fill: Tuple[int, int, int] = (0, 0, 0)) -> Raster:
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[:, :] = fill
        return cls(pixels)

    def width(self) -> int:
        return self.pixels.shape[1]

    def height(self) -> int:
        return self.pixels.shape[0]

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width() and 0 <= y < self.height()):
            raise OutOfBoundsError(
                f"({x}, {y}) is outside a {self.width()}x{self.height()} raster"
            )

    def get(self, x: int, y: int) -> Pixel:
        self._check_bounds(x, y)
        r, g, b = self.pixels[y, x]
        return Pixel(int(r), int(g), int(b))

    def set(self, x: int, y: int, pixel: Tuple[int, int, int]) -> None:
        self._check_bounds(x, y)
        self.pixels[y, x] = [max(0, min(255, int(c))) for c in pixel]

    def copy(self) -> Raster:
        return Raster(pixels=self.pixels.copy(), path=self.path)
