"""
Seam computation and removal.

The seam finder is a top-to-bottom dynamic program over an EnergyGrid:
each cell's accumulated cost is its own intensity plus the cheapest of
its (up to) three predecessors in the row above. The seam is recovered
by walking parent pointers up from the cheapest bottom cell.
"""

import torch

# Cost of a predecessor that lies outside the grid. Only ever compared,
# never added, so it cannot overflow.
MISSING = torch.iinfo(torch.int64).max


def accumulate_costs(grid):
    """
    Forward pass: fill grid.cost and grid.parent for rows 1..H-1.

    Predecessor choice for cell (y, x), with L, C, R the accumulated costs
    of (y-1, x-1), (y-1, x), (y-1, x+1):

        if L < R:   L if L < C else C
        elif R < C: R
        else:       C

    So on a three-way tie the centre wins, and top-left beats top-right
    only when strictly cheaper.

    Args:
        grid: EnergyGrid whose costs have just been reset
    """
    H, W = grid.shape
    cols = torch.arange(W, dtype=torch.int64, device=grid.device)

    for y in range(1, H):
        prev = grid.cost[y - 1]

        top_left = torch.full((W,), MISSING, dtype=torch.int64, device=grid.device)
        top_left[1:] = prev[:-1]
        top_right = torch.full((W,), MISSING, dtype=torch.int64, device=grid.device)
        top_right[:-1] = prev[1:]
        top_center = prev

        left_beats_right = top_left < top_right
        take_left = left_beats_right & (top_left < top_center)
        take_right = ~left_beats_right & (top_right < top_center)

        parent = torch.where(take_left, cols - 1, torch.where(take_right, cols + 1, cols))
        grid.parent[y] = parent
        grid.cost[y] = grid.intensity[y] + prev[parent]


def select_seam_end(grid) -> int:
    """
    Column of the cheapest cell in the bottom row.

    Ties go to the lowest column index.
    """
    return int(torch.argmin(grid.cost[-1]).item())


def backtrack_seam(grid, end_col: int) -> torch.Tensor:
    """
    Follow parent pointers from (H-1, end_col) up to row 0.

    Returns:
        Seam indices (H,) with the column index per row
    """
    H, W = grid.shape
    if not 0 <= end_col < W:
        raise IndexError(f"Seam end column {end_col} out of range for width {W}")

    seam = torch.zeros(H, dtype=torch.long, device=grid.device)
    col = end_col
    for y in range(H - 1, -1, -1):
        seam[y] = col
        col = grid.parent[y, col].item()

    return seam


def find_seam(grid) -> torch.Tensor:
    """
    Compute the minimum-cost vertical seam of the grid.

    Resets the per-iteration state first, so it is safe to call once per
    removal on a grid that has been compacted in between.

    Args:
        grid: EnergyGrid

    Returns:
        Seam indices (H,) - one column index per row
    """
    grid.reset_costs()
    accumulate_costs(grid)
    return backtrack_seam(grid, select_seam_end(grid))


def remove_seam(image: torch.Tensor, seam: torch.Tensor) -> torch.Tensor:
    """
    Remove a vertical seam from an image.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        seam: Seam indices (H,)

    Returns:
        Carved image with one column removed
    """
    if image.dim() == 2:
        # Grayscale / per-cell scalar map
        image = image.unsqueeze(0)
        squeeze_output = True
    else:
        squeeze_output = False

    C, H, W = image.shape

    if seam.shape != (H,):
        raise ValueError(f"Seam of shape {tuple(seam.shape)} does not match image height {H}")
    if W == 0:
        raise ValueError("Cannot remove a seam from an empty image")
    if seam.min() < 0 or seam.max() >= W:
        raise IndexError(f"Seam indices must lie in [0, {W - 1}]")
    if H > 1 and (seam[1:] - seam[:-1]).abs().max() > 1:
        raise ValueError("Seam is not connected: adjacent rows differ by more than one column")

    # Remove one pixel from each row
    carved = torch.zeros(C, H, W - 1, dtype=image.dtype, device=image.device)

    for i in range(H):
        col = seam[i].item()
        carved[:, i, :col] = image[:, i, :col]
        carved[:, i, col:] = image[:, i, col + 1:]

    if squeeze_output:
        carved = carved.squeeze(0)

    return carved
