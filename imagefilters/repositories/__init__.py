from .raster_repository import RasterRepository
from .resource_repository import ResourceRepository

__all__ = ["RasterRepository", "ResourceRepository"]
