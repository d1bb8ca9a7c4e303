# services/resource_service.py
from __future__ import annotations
import logging
import os
from dotenv import load_dotenv

from ..exceptions import InvalidArgumentError
from ..models.raster import Raster
from ..repositories.resource_repository import ResourceRepository

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

RESOURCE_SOURCES = ("procedural", "file")


class ResourceService:
    """
    Supplies the halo mask and grain texture sized for a given target.
    File assets are cached at the business-logic layer.
    """

    def __init__(self,
                 source: str = None,
                 halo_path: str = None,
                 grain_path: str = None,
                 grain_seed: int = None) -> None:
        self.repo = ResourceRepository()
        self.source = (source or os.getenv("RESOURCE_SOURCE", "procedural")).lower()
        if self.source not in RESOURCE_SOURCES:
            raise InvalidArgumentError(
                f"RESOURCE_SOURCE must be one of {RESOURCE_SOURCES}, got {self.source!r}")
        self.halo_path = halo_path or os.getenv("HALO_MASK_PATH", "resources/halo.png")
        self.grain_path = grain_path or os.getenv("GRAIN_TEXTURE_PATH", "resources/decorative_grain.png")
        self.grain_seed = grain_seed if grain_seed is not None else int(os.getenv("GRAIN_SEED", "42"))
        self._asset_cache: dict[str, Raster] = {}

    def _asset(self, path: str) -> Raster:
        if path not in self._asset_cache:
            logger.info(f"Loading overlay asset {path}")
            self._asset_cache[path] = self.repo.load_asset(path)
        return self._asset_cache[path]

    def halo_for(self, target: Raster) -> Raster:
        w, h = target.width(), target.height()
        if self.source == "file":
            return self.repo.fit(self._asset(self.halo_path), w, h)
        return self.repo.render_halo(w, h)

    def grain_for(self, target: Raster) -> Raster:
        w, h = target.width(), target.height()
        if self.source == "file":
            return self.repo.fit(self._asset(self.grain_path), w, h)
        return self.repo.render_grain(w, h, seed=self.grain_seed)
