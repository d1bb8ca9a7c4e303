from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class HSL:
    """
    Transient hue/saturation/lightness view of one RGB pixel.
    hue in [0, 360) degrees, saturation and lightness in [0, 1].
    """
    hue: float
    saturation: float
    lightness: float
