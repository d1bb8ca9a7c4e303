"""Custom exceptions."""
from __future__ import annotations


class ImageFilterError(Exception):
    """Base exception for the image filter toolkit."""


class OutOfBoundsError(ImageFilterError, IndexError):
    """Pixel access outside the raster extent."""


class InvalidArgumentError(ImageFilterError, ValueError):
    """User-facing parameter outside its documented domain."""


class DimensionMismatchError(ImageFilterError, ValueError):
    """Two rasters that must be composited have different sizes."""


class LoadError(ImageFilterError, OSError):
    """Image could not be read or decoded."""


class SaveError(ImageFilterError, OSError):
    """Image could not be encoded or written."""
