"""
High-level carving functions that orchestrate the seam removal loop.

    Init -> FilterOnce -> {ResetCosts -> FindSeam -> RemoveSeam} x columns -> Flatten

Energy is computed once from the original image; later iterations reuse
the (compacted) intensities instead of re-filtering the shrunken image.
"""

import logging
from typing import Callable, List, Optional, Tuple

import torch

from .errors import DegenerateGridError, InvalidRequestError
from .grid import EnergyGrid
from .seam import find_seam

logger = logging.getLogger(__name__)


def _validate_request(image: torch.Tensor, columns: int):
    if image.dim() != 3 or image.shape[0] != 3:
        raise ValueError(f"Expected an RGB image tensor (3, H, W), got {tuple(image.shape)}")

    _, H, W = image.shape
    if H == 0 or W == 0:
        raise DegenerateGridError(f"Cannot carve an image of size {W}x{H}")
    if columns < 0:
        raise InvalidRequestError(f"Column count must be non-negative, got {columns}")
    if columns >= W:
        raise InvalidRequestError(
            f"Cannot remove {columns} columns from an image {W} pixels wide"
        )


def carve_seams(image: torch.Tensor, columns: int,
                callback: Optional[Callable[[int, torch.Tensor], None]] = None
                ) -> Tuple[torch.Tensor, List[torch.Tensor]]:
    """
    Remove `columns` vertical seams and report which ones were removed.

    Args:
        image: RGB image tensor (3, H, W) with values in [0, 1]
        columns: Number of seams to remove, 0 <= columns < W
        callback: Optional hook called as callback(step, seam) after each
                  removal; seam columns are relative to the grid before
                  that removal

    Returns:
        (carved image (3, H, W - columns), list of removed seams)
    """
    _validate_request(image, columns)

    if columns == 0:
        return image.clone(), []

    _, H, W = image.shape
    logger.info("Removing %d of %d columns from a %dx%d image", columns, W, W, H)

    grid = EnergyGrid.from_image(image)
    seams = []

    for step in range(columns):
        seam = find_seam(grid)
        grid.remove_seam(seam)
        seams.append(seam)

        logger.debug("Seam %d/%d removed, grid now %dx%d",
                     step + 1, columns, grid.width, grid.height)
        if callback is not None:
            callback(step, seam)

    return grid.to_image(), seams


def resize_width(image: torch.Tensor, columns: int,
                 callback: Optional[Callable[[int, torch.Tensor], None]] = None
                 ) -> torch.Tensor:
    """
    Content-aware width reduction.

    Args:
        image: RGB image tensor (3, H, W) with values in [0, 1]
        columns: Number of columns to remove

    Returns:
        Carved image (3, H, W - columns)

    Raises:
        DegenerateGridError: the image has zero height or width
        InvalidRequestError: columns is negative or >= the image width
    """
    carved, _ = carve_seams(image, columns, callback=callback)
    return carved
