"""
Instagram-style Filter Pipeline
Warm tint, then a vignette halo blend, then a decorative grain blend.
"""

import logging

from ..models.raster import Raster
from ..services.composite_service import CompositeService
from ..services.resource_service import ResourceService

logger = logging.getLogger(__name__)


def apply_instagram_filter(
    raster: Raster,
    *,
    halo: Raster | None = None,
    grain: Raster | None = None,
    composite_service: CompositeService = CompositeService(),
    resource_service: ResourceService = ResourceService(),
) -> Raster:
    """
    Apply the three-stage composite filter and return a new Raster.

    1. Warm:     r = r * 1.2, g = g, b = b / 1.5
    2. Vignette: c = .65 * c_image + .35 * c_halo
    3. Grain:    c = .95 * c_image + .05 * c_grain

    Args:
        raster: Image to filter (left untouched)
        halo: Halo mask of the same size; supplied by resource_service if omitted
        grain: Grain texture of the same size; supplied by resource_service if omitted
        composite_service: Service doing the per-pixel math
        resource_service: Source of default overlays

    Returns:
        Raster: The filtered image

    Raises:
        DimensionMismatchError: before any stage runs, if an overlay's size differs
    """
    # Validate caller-supplied overlays up front so no stage runs on a bad input
    if halo is not None:
        composite_service.check_dimensions(raster, halo, "halo mask")
    if grain is not None:
        composite_service.check_dimensions(raster, grain, "grain texture")

    halo = halo if halo is not None else resource_service.halo_for(raster)
    grain = grain if grain is not None else resource_service.grain_for(raster)

    logger.info(f"Instagram filter on {raster.width()}x{raster.height()}")
    warmed = composite_service.warm(raster)
    vignetted = composite_service.vignette(warmed, halo)
    return composite_service.grain(vignetted, grain)
