from .raster import Pixel, Raster
from .hsl import HSL
from .blend import BlendWeights

__all__ = ["Pixel", "Raster", "HSL", "BlendWeights"]
