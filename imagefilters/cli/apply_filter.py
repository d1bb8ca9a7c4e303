import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from tqdm import tqdm

from ..exceptions import ImageFilterError
from ..pipeline.batch_filter import FILTERS, apply_filter_to_gallery, resolve_filter
from ..services.raster_service import RasterService

# Load environment variables first
load_dotenv()

logger = logging.getLogger(__name__)

OUTPUT_DIR = os.getenv("OUTPUT_DIR_PATH", "data/filtered")
OUTPUT_EXT = os.getenv("OUTPUT_IMG_EXT", ".png")


def _configure_logging() -> None:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imagefilters-apply",
        description="Apply one image filter to a file or to every image in a directory.",
    )
    parser.add_argument("filter", choices=list(FILTERS), help="filter to apply")
    parser.add_argument("input", type=Path, help="image file or directory of images")
    parser.add_argument("--value", type=float, default=None,
                        help="hue (0-360) or saturation/lightness (0-1)")
    parser.add_argument("--output", type=Path, default=None,
                        help="output file (single input) or directory (gallery input)")
    parser.add_argument("--format", dest="format_tag", default=None,
                        help="output format tag, e.g. png or jpeg (default: OUTPUT_IMG_EXT)")
    parser.add_argument("--recursive", action="store_true",
                        help="descend into sub-directories of a gallery input")
    return parser


def run(args: argparse.Namespace) -> int:
    raster_service = RasterService()
    apply = resolve_filter(args.filter, args.value)
    format_tag = (args.format_tag or OUTPUT_EXT).lstrip(".")

    if args.input.is_dir():
        out_dir = args.output or Path(OUTPUT_DIR)
        gallery = raster_service.stream_gallery(args.input, recursive=args.recursive)
        results = apply_filter_to_gallery(tqdm(gallery, desc=args.filter, ncols=70), args.filter, args.value)
        count = raster_service.save_gallery(results, format_tag, out_dir, args.filter, root=args.input)
        logger.info(f"Filtered {count} image(s) into {out_dir}")
        return 0

    raster = raster_service.load(args.input)
    result = apply(raster)
    if args.output is not None:
        destination = args.output
    else:
        out_dir = Path(OUTPUT_DIR)
        out_dir.mkdir(parents=True, exist_ok=True)
        destination = raster_service.output_path(args.input, out_dir, args.filter, format_tag)
    raster_service.save(result, format_tag, destination)
    logger.info(f"Saved {destination}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    _configure_logging()
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except ImageFilterError as err:
        logger.error(f"{type(err).__name__}: {err}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
