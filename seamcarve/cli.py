"""
Command-line entry point.

    seamcarve photo.ppm 40          -> writes photo_new.ppm
"""

import argparse
import logging
import sys

from .carving import resize_width
from .config import CarveConfig
from .errors import SeamCarvingError
from .io import load_image, output_path, save_image

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="seamcarve",
        description="Shrink an image's width by removing low-energy vertical seams"
    )
    parser.add_argument(
        'input',
        type=str,
        help='Input image (8-bit RGB, e.g. a binary P6 PPM)'
    )
    parser.add_argument(
        'columns',
        type=int,
        help='Number of columns to remove'
    )
    parser.add_argument(
        '--output',
        type=str,
        help='Output path (default: <input stem>_new.ppm in the current directory)'
    )
    parser.add_argument(
        '--device',
        type=str,
        default='cpu',
        help='torch device to carve on (default: cpu)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log every removed seam'
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = CarveConfig.from_args(args)
    except SeamCarvingError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error("%s", e)
        return 1

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format='%(asctime)s - %(name)-20s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    destination = config.output or output_path(
        args.input, config.output_suffix, config.output_format)

    try:
        image = load_image(args.input, device=config.device)
        carved = resize_width(image, config.columns)
        save_image(carved, destination)
    except (SeamCarvingError, OSError) as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
