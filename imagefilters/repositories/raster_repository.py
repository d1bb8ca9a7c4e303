from __future__ import annotations
from pathlib import Path
from typing import Union, Iterable, Iterator, Tuple
import logging
import os
import signal
import numpy as np
import cv2
from PIL import Image as PILImage
from dotenv import load_dotenv

from ..exceptions import LoadError, SaveError
from ..models.raster import Raster

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# format tag -> Pillow encoder name
SAVE_FORMATS = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "bmp": "BMP",
    "tif": "TIFF",
    "tiff": "TIFF",
    "webp": "WEBP",
}


class RasterRepository:
    """
    Handles file I/O for Raster entities.
    """
    def __init__(self):
        exts = os.getenv("VALID_IMAGE_EXTENSIONS", ".png,.jpg,.jpeg,.bmp,.tif,.tiff,.webp")
        self.VALID_EXTS = {ext.strip().lower() for ext in exts.split(",") if ext.strip()}
        self.LOAD_TIMEOUT = int(os.getenv("IMAGE_LOAD_TIMEOUT", "5"))

    @staticmethod
    def create_raster(pixels: np.ndarray, path: Union[str, Path] = None) -> Raster:
        if path is None:
            return Raster(pixels)
        return Raster(pixels=pixels, path=Path(path))

    @staticmethod
    def retrieve_dimensions(raster: Raster) -> Tuple[int, int]:
        return raster.width(), raster.height()

    @staticmethod
    def load(path: Union[str, Path], timeout: int = 5) -> Raster:
        path = Path(path)
        if not path.is_file():
            raise LoadError(f"Image not found: {path}")

        # ─── timeout wrapper (5 s default) ────────────────────────────────
        def _handler(signum, frame):
            raise LoadError(f"cv2.imread timed-out after {timeout}s: {path}")

        previous = signal.signal(signal.SIGALRM, _handler)
        signal.alarm(timeout)
        try:
            arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        finally:
            signal.alarm(0)  # always disarm
            signal.signal(signal.SIGALRM, previous)
        # ──────────────────────────────────────────────────────────────────

        if arr_bgr is None:
            raise LoadError(f"Unrecognised or corrupt image: {path}")

        arr = np.ascontiguousarray(arr_bgr[:, :, ::-1])
        return Raster(pixels=arr, path=path)

    @staticmethod
    def save(raster: Raster, format_tag: str, path: Union[str, Path] = None) -> None:
        path = Path(path) if path is not None else raster.path
        if path is None:
            raise SaveError("No destination path given and the raster has no path")

        tag = str(format_tag).lower().lstrip(".")
        if tag not in SAVE_FORMATS:
            raise SaveError(f"Unsupported image format: {format_tag!r}")

        try:
            PILImage.fromarray(raster.pixels).save(path, format=SAVE_FORMATS[tag])
        except (OSError, ValueError, SystemError) as err:
            raise SaveError(f"Could not write {path}: {err}") from err

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Raster]:
        """
        Yield Raster objects one at a time.  Nothing accumulates in memory.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise LoadError(f"Not a directory: {folder}")

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if p.suffix.lower() not in allowed or not p.is_file():
                logger.debug(f"Skipping {p}")
                continue
            try:
                yield self.load(p, timeout=self.LOAD_TIMEOUT)
            except LoadError as err:
                logger.warning(f"Skipping {p.name}: {err}")
