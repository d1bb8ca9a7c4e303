# pipeline/batch_filter.py
import logging
from typing import Callable, Dict, Iterable, Iterator

from ..exceptions import InvalidArgumentError
from ..models.raster import Raster
from ..services.filter_service import FilterService
from .instagram_filter import apply_instagram_filter

logger = logging.getLogger(__name__)

_filters = FilterService()

# name -> (callable, takes a value?)
FILTERS: Dict[str, tuple[Callable[..., Raster], bool]] = {
    "grayscale":  (_filters.grayscale, False),
    "invert":     (_filters.invert, False),
    "sepia":      (_filters.sepia, False),
    "bw":         (_filters.black_white, False),
    "rotate":     (_filters.rotate, False),
    "hue":        (_filters.set_hue, True),
    "saturation": (_filters.set_saturation, True),
    "lightness":  (_filters.set_lightness, True),
    "instagram":  (apply_instagram_filter, False),
}


def resolve_filter(name: str, value: float | None = None) -> Callable[[Raster], Raster]:
    """
    Look up *name* and bind *value* to it.

    hue/saturation/lightness require a value; every other filter rejects one.
    """
    try:
        func, takes_value = FILTERS[name]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown filter {name!r}; choose one of {', '.join(FILTERS)}") from None

    if takes_value and value is None:
        raise InvalidArgumentError(f"Filter {name!r} needs a value")
    if not takes_value and value is not None:
        raise InvalidArgumentError(f"Filter {name!r} takes no value")

    if takes_value:
        return lambda raster: func(raster, value)
    return func


def apply_filter(raster: Raster, name: str, value: float | None = None) -> Raster:
    """Run the filter registered under *name* on one raster."""
    return resolve_filter(name, value)(raster)


def apply_filter_to_gallery(
    gallery: Iterable[Raster],
    name: str,
    value: float | None = None,
) -> Iterator[Raster]:
    """
    For every Raster in *gallery* yield the filtered copy.
    The filter name is checked immediately; images are processed lazily.
    """
    func = resolve_filter(name, value)

    def _stream() -> Iterator[Raster]:
        count = 0
        for raster in gallery:
            yield func(raster)
            count += 1
        logger.info(f"Applied {name!r} to {count} image(s)")

    return _stream()
