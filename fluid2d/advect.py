"""
advect.py — Semi-Lagrangian Advection
======================================
This is what makes the fluid actually flow.

Per interior cell (i, j):
  1. Trace BACKWARD along the velocity by one timestep:
       x = i - dt*(N-2)*vx[i,j],   y = j - dt*(N-2)*vy[i,j]
  2. Clamp (x, y) to [0.5, N-1.5] so the 2x2 sample footprint stays
     inside the grid (floor(x)+1 is at most N-1).
  3. Bilinearly interpolate the source field at (x, y).

The result is a convex blend of four samples, so advection never
creates new extremes. That is why it's unconditionally stable.

Key reference: Jos Stam, "Stable Fluids" (SIGGRAPH 1999)
"""

import numpy as np

from .boundary import Boundary, set_boundary
from .grid import Grid


def _bilinear_interpolate(field: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """
    Sample `field[row, col]` at fractional (x=col, y=row) positions.

    Positions must already be clamped so that floor()+1 is a valid index.
    """
    i0 = np.floor(x).astype(np.intp)
    j0 = np.floor(y).astype(np.intp)
    i1 = i0 + 1
    j1 = j0 + 1

    s1 = x - i0
    s0 = 1.0 - s1
    t1 = y - j0
    t0 = 1.0 - t1

    return (s0 * (t0 * field[j0, i0] + t1 * field[j1, i0]) +
            s1 * (t0 * field[j0, i1] + t1 * field[j1, i1]))


def advect(kind: Boundary, d: Grid, d0: Grid, vx: Grid, vy: Grid, dt: float):
    """
    Move `d0` along the velocity field (vx, vy) and store it in `d`.

    `d` and `d0` must be distinct grids; `d0` may be one of vx/vy
    (self-advection traces through the field being moved).

    Args:
        kind   : Boundary kind of the advected field
        d      : Destination grid (interior overwritten, then walls)
        d0     : Source grid
        vx, vy : Velocity to trace through
        dt     : Timestep
    """
    n = d.size
    dt0 = dt * (n - 2)

    # Interior cell coordinates: jj = row, ii = column
    jj, ii = np.meshgrid(
        np.arange(1, n - 1, dtype=np.float32),
        np.arange(1, n - 1, dtype=np.float32),
        indexing="ij",
    )

    x = ii - dt0 * vx.data[1:-1, 1:-1]
    y = jj - dt0 * vy.data[1:-1, 1:-1]
    np.clip(x, 0.5, (n - 2) + 0.5, out=x)
    np.clip(y, 0.5, (n - 2) + 0.5, out=y)

    d.data[1:-1, 1:-1] = _bilinear_interpolate(d0.data, x, y)
    set_boundary(kind, d)
