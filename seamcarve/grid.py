"""
Energy grid: per-cell state for iterative seam removal.

Cells are index-addressed. For a grid of shape (H, W) the grid keeps:
- colors:    original RGB values (3, H, W), never modified
- intensity: importance computed once from the filtered image (H, W)
- cost:      accumulated path cost for the current iteration (H, W)
- parent:    column of the predecessor in row y - 1 (H, W)

Only `cost` and `parent` change between iterations; everything is
compacted by one column whenever a seam is removed.
"""

import torch

from .errors import DegenerateGridError, InvalidRequestError
from .filters import apply_filters, intensity_map
from .seam import remove_seam as _remove_columns


class EnergyGrid:
    """
    Rectangular grid of energy cells, shrinking by one column per seam.

    The height is fixed for the lifetime of the grid.
    """

    def __init__(
        self,
        colors: torch.Tensor,     # Shape: (3, H, W)
        intensity: torch.Tensor,  # Shape: (H, W)
    ):
        """
        Build a grid from original colors and precomputed intensities.

        Args:
            colors: Original RGB image (3, H, W)
            intensity: Integer importance per cell (H, W)
        """
        if colors.dim() != 3 or colors.shape[0] != 3:
            raise ValueError(f"Expected colors of shape (3, H, W), got {tuple(colors.shape)}")
        if intensity.shape != colors.shape[1:]:
            raise ValueError(
                f"Intensity shape {tuple(intensity.shape)} does not match "
                f"image shape {tuple(colors.shape[1:])}"
            )

        H, W = intensity.shape
        if H == 0 or W == 0:
            raise DegenerateGridError(f"Cannot build an energy grid of size {H}x{W}")

        self.colors = colors.clone()
        self.intensity = intensity.to(torch.int64).clone()
        self.cost = torch.empty_like(self.intensity)
        self.parent = torch.empty_like(self.intensity)
        self.reset_costs()

    @classmethod
    def from_image(cls, image: torch.Tensor):
        """
        Run the filter pipeline once and build a grid from the result.

        Args:
            image: RGB image tensor (3, H, W) with values in [0, 1]

        Returns:
            EnergyGrid holding the original colors and fixed intensities
        """
        if image.dim() != 3 or image.shape[0] != 3:
            raise ValueError(f"Expected an RGB image tensor (3, H, W), got {tuple(image.shape)}")
        H, W = image.shape[1:]
        if H == 0 or W == 0:
            raise DegenerateGridError(f"Cannot build an energy grid of size {H}x{W}")

        return cls(image, intensity_map(apply_filters(image)))

    @property
    def height(self) -> int:
        return self.intensity.shape[0]

    @property
    def width(self) -> int:
        return self.intensity.shape[1]

    @property
    def shape(self):
        return self.height, self.width

    @property
    def device(self):
        return self.intensity.device

    def reset_costs(self):
        """Cost back to intensity, every parent back to the cell itself."""
        self.cost.copy_(self.intensity)
        cols = torch.arange(self.width, dtype=torch.int64, device=self.device)
        self.parent.copy_(cols.unsqueeze(0).expand(self.height, -1))

    def remove_seam(self, seam: torch.Tensor):
        """
        Delete one cell per row and compact every row to the left.

        Args:
            seam: Column index per row (H,)
        """
        if self.width <= 1:
            raise InvalidRequestError("Cannot remove the last remaining column of the grid")

        self.colors = _remove_columns(self.colors, seam)
        self.intensity = _remove_columns(self.intensity, seam)
        self.cost = _remove_columns(self.cost, seam)
        self.parent = _remove_columns(self.parent, seam)

    def to_image(self) -> torch.Tensor:
        """Flatten the grid back to an RGB image (3, H, W)."""
        return self.colors.clone()
