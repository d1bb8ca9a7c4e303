from .color_service import ColorService
from .filter_service import FilterService
from .composite_service import CompositeService
from .resource_service import ResourceService
from .raster_service import RasterService

__all__ = ["ColorService", "FilterService", "CompositeService", "ResourceService", "RasterService"]
