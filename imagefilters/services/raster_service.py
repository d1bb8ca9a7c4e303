from __future__ import annotations
from pathlib import Path
from typing import Iterable, Tuple, Union, Iterator
import logging
import numpy as np

from ..exceptions import SaveError
from ..models.raster import Raster
from ..repositories.raster_repository import RasterRepository

logger = logging.getLogger(__name__)


class RasterService:
    """I/O helpers.  No filter logic."""
    def __init__(self):
        self.raster_repository = RasterRepository()

    def create_raster(self, pixels: np.ndarray, path: Union[str, Path] = None) -> Raster:
        return self.raster_repository.create_raster(pixels, path)

    def load(self, path: str | Path) -> Raster:
        """Load a single image from disk into a Raster object."""
        return self.raster_repository.load(path, timeout=self.raster_repository.LOAD_TIMEOUT)

    def stream_gallery(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Raster]:
        """
        Yield rasters lazily instead of returning a gigantic list.
        """
        return self.raster_repository.iter_dir(folder,
                                               recursive=recursive,
                                               exts=exts)

    def save(self, raster: Raster, format_tag: str, path: Union[str, Path] = None) -> None:
        """
        Business-level method to save the raster to a specific path
        (defaults to ``raster.path``).
        """
        self.raster_repository.save(raster, format_tag, path)

    @staticmethod
    def output_path(
        source: Union[str, Path],
        out_dir: Union[str, Path],
        suffix: str,
        format_tag: str,
        root: Union[str, Path] | None = None,
    ) -> Path:
        """
        ``<out_dir>/<source relative to root>/<stem>_<suffix>.<format_tag>``.

        Without *root* (or for a source outside it) the file lands directly
        in *out_dir*.
        """
        source = Path(source)
        subdir = Path()
        if root is not None:
            try:
                subdir = source.parent.resolve().relative_to(Path(root).resolve())
            except ValueError:
                subdir = Path()
        ext = "." + str(format_tag).lower().lstrip(".")
        return Path(out_dir) / subdir / f"{source.stem}_{suffix}{ext}"

    def save_gallery(
        self,
        gallery: Iterable[Raster],
        format_tag: str,
        out_dir: Union[str, Path],
        suffix: str,
        *,
        root: Union[str, Path] | None = None,
    ) -> int:
        """
        Save every raster under *out_dir*, named after its source file
        (see :meth:`output_path`), so sources keep their bytes. Two
        rasters mapping to the same destination raise SaveError.

        Returns:
            int: number of files written
        """
        if not suffix:
            raise SaveError("A non-empty name suffix is required for gallery output")

        written: set[Path] = set()
        for raster in gallery:
            if raster.path is None:
                raise SaveError("Gallery raster has no source path to derive an output name from")
            destination = self.output_path(raster.path, out_dir, suffix, format_tag, root)
            key = destination.resolve()
            if key in written:
                raise SaveError(f"Two images map to the same output file {destination}")
            try:
                destination.parent.mkdir(parents=True, exist_ok=True)
            except OSError as err:
                raise SaveError(f"Could not create {destination.parent}: {err}") from err
            self.save(raster, format_tag, destination)
            written.add(key)
            logger.debug(f"Saved {destination}")
        return len(written)

    def get_dimensions(self, raster: Raster) -> Tuple[int, int]:
        return self.raster_repository.retrieve_dimensions(raster)
