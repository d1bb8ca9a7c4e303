from __future__ import annotations
from dataclasses import dataclass
import math
import numbers

from ..exceptions import InvalidArgumentError


@dataclass(frozen=True)
class BlendWeights:
    """
    Value-object holding the two weights of a compositing step:
        c' = base * c_image + overlay * c_overlay
    The weights must each lie in [0, 1] and sum to 1, so "95/5" is
    accepted and a reading such as "95/50" is rejected.
    """
    base: float
    overlay: float

    def __post_init__(self):
        for name, value in (("base", self.base), ("overlay", self.overlay)):
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidArgumentError(f"Blend weight {name} must be a number, got {value!r}")
            if not 0.0 <= value <= 1.0:
                raise InvalidArgumentError(f"Blend weight {name}={value} is outside [0, 1]")
        if not math.isclose(self.base + self.overlay, 1.0, rel_tol=0.0, abs_tol=1e-9):
            raise InvalidArgumentError(
                f"Blend weights must sum to 1, got {self.base} + {self.overlay}"
            )

    @classmethod
    def from_overlay(cls, overlay: float) -> BlendWeights:
        """Build weights from the overlay share alone (0.35 -> 0.65/0.35)."""
        if isinstance(overlay, bool) or not isinstance(overlay, numbers.Real):
            raise InvalidArgumentError(f"Blend weight overlay must be a number, got {overlay!r}")
        return cls(base=1.0 - overlay, overlay=overlay)
