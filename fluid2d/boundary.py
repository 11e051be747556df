"""
boundary.py — Wall Conditions
==============================
The box has solid walls. Every operator that writes a field finishes
by calling `set_boundary` so the border cells mean something:

  - Density   : copy the neighbouring interior cell (nothing leaks out)
  - Velocity X: copy, but NEGATE at the left/right walls
  - Velocity Y: copy, but NEGATE at the top/bottom walls

Negating the wall-normal component makes the velocity at the wall
average to zero, so fluid can't pass through it.
Corners take the mean of their two border neighbours.
"""

from enum import IntEnum

from .grid import Grid


class Boundary(IntEnum):
    """Which kind of field a wall condition is applied to."""
    DENSITY = 0
    VELOCITY_X = 1
    VELOCITY_Y = 2


def set_boundary(kind: Boundary, grid: Grid):
    """
    Overwrite the border cells of `grid` from its interior.

    Args:
        kind : Boundary kind (plain ints 0/1/2 are coerced)
        grid : Field to fix up, modified in-place
    """
    kind = Boundary(kind)
    x = grid.data   # x[row, col]

    # ── Top / bottom walls (rows 0 and N-1) ───────────────────────────────
    sign = -1.0 if kind == Boundary.VELOCITY_Y else 1.0
    x[0, 1:-1] = sign * x[1, 1:-1]
    x[-1, 1:-1] = sign * x[-2, 1:-1]

    # ── Left / right walls (columns 0 and N-1) ────────────────────────────
    sign = -1.0 if kind == Boundary.VELOCITY_X else 1.0
    x[1:-1, 0] = sign * x[1:-1, 1]
    x[1:-1, -1] = sign * x[1:-1, -2]

    # ── Corners ───────────────────────────────────────────────────────────
    x[0, 0] = 0.5 * (x[0, 1] + x[1, 0])
    x[-1, 0] = 0.5 * (x[-1, 1] + x[-2, 0])
    x[0, -1] = 0.5 * (x[0, -2] + x[1, -1])
    x[-1, -1] = 0.5 * (x[-1, -2] + x[-2, -1])
