"""
Content-aware width reduction (seam carving).

Energy comes from a grayscale -> blur -> Sobel pipeline computed once;
vertical seams are then found by dynamic programming and removed one at
a time.
"""

__version__ = "0.1.0"

from .errors import (SeamCarvingError, InvalidRequestError, DegenerateGridError,
                     ImageFormatError)
from .filters import grayscale, gaussian_blur, sobel, apply_filters, intensity_map
from .grid import EnergyGrid
from .seam import accumulate_costs, select_seam_end, backtrack_seam, find_seam, remove_seam
from .carving import carve_seams, resize_width
from .io import load_image, save_image, output_path

__all__ = [
    'SeamCarvingError',
    'InvalidRequestError',
    'DegenerateGridError',
    'ImageFormatError',
    'grayscale',
    'gaussian_blur',
    'sobel',
    'apply_filters',
    'intensity_map',
    'EnergyGrid',
    'accumulate_costs',
    'select_seam_end',
    'backtrack_seam',
    'find_seam',
    'remove_seam',
    'carve_seams',
    'resize_width',
    'load_image',
    'save_image',
    'output_path',
]
