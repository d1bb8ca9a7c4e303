"""Pure raster-recolouring filters: grayscale, sepia, HSL setters, vignette and friends."""

__version__ = "1.0.0"
