"""
forces.py — Source Injection (Density and Velocity Brushes)
============================================================
User input reaches the fluid through a circular brush:

  cells selected = { (i, j) in [x-r, x+r) x [y-r, y+r)  :  |(i,j) - (x,y)| <= r }

The box is half-open on the high side, so a brush of radius r covers
slightly more to the upper-left.

The box is clamped to [0, size) before we touch anything. A brush
near (or past) the edge just paints fewer cells; no coordinate ever
wraps around or reads outside the grid.
"""

import numpy as np

from .grid import Grid


def brush_box(size: int, x: int, y: int, radius: int) -> tuple[int, int, int, int]:
    """
    Clamped bounding box of a brush.

    Returns (x0, x1, y0, y1), half-open; empty when x0 >= x1 or y0 >= y1.
    """
    if radius < 0:
        raise ValueError(f"Brush radius must be non-negative, got {radius}")
    x0, x1 = max(0, x - radius), min(size, x + radius)
    y0, y1 = max(0, y - radius), min(size, y + radius)
    return x0, x1, y0, y1


def brush_mask(size: int, x: int, y: int, radius: int) -> np.ndarray:
    """
    Boolean (size, size) mask, indexed [row, col], of the cells a brush
    at (x, y) touches.
    """
    mask = np.zeros((size, size), dtype=bool)
    x0, x1, y0, y1 = brush_box(size, x, y, radius)
    if x0 >= x1 or y0 >= y1:
        return mask

    rows, cols = np.meshgrid(np.arange(y0, y1), np.arange(x0, x1), indexing="ij")
    dist = np.sqrt((cols - x) ** 2 + (rows - y) ** 2)
    mask[y0:y1, x0:x1] = dist <= radius
    return mask


def inject_density(density: Grid, x: int, y: int, radius: int, amount: float):
    """
    Add `amount` of dye to every cell under the brush.

    Args:
        density : Density grid, modified in-place
        x, y    : Brush centre (column, row)
        radius  : Brush radius in cells
        amount  : Density added per cell
    """
    mask = brush_mask(density.size, x, y, radius)
    density.data[mask] += amount


def inject_velocity(vx: Grid, vy: Grid, x: int, y: int, radius: int,
                    amount_x: float, amount_y: float):
    """
    Push the fluid: add (amount_x, amount_y) to the velocity under the brush.

    Args:
        vx, vy             : Velocity grids, modified in-place
        x, y               : Brush centre (column, row)
        radius             : Brush radius in cells
        amount_x, amount_y : Velocity added per cell
    """
    mask = brush_mask(vx.size, x, y, radius)
    vx.data[mask] += amount_x
    vy.data[mask] += amount_y
