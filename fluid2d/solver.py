"""
solver.py — Relaxation Solver + Pressure Projection
=====================================================
Two things live here because projection is the solver's main customer.

1. `lin_solve`: iterative solve of the 5-point stencil system

       x[i,j] = (x0[i,j] + a * (sum of 4 neighbours)) / c

   Diffusion calls it with its own (a, c); projection calls it with
   a=1, c=6 to find pressure. Default method is Gauss-Seidel: each cell
   uses the neighbour values already updated earlier in the same sweep.

2. `project`: make velocity (approximately) divergence-free.
     1. Compute divergence of the velocity field
     2. Relax the pressure equation with `lin_solve`
     3. Subtract the pressure gradient from velocity

Vectorising Gauss-Seidel
------------------------
A row-major sweep updates (row, col) after (row-1, col) and (row, col-1)
and before (row+1, col) and (row, col+1). Cells on one anti-diagonal
(row + col == k) never depend on each other, and a cell on diagonal k
reads its up/left neighbours from diagonal k-1 (fresh) and its
down/right neighbours from k+1 (stale), which is exactly what the
sequential sweep sees. So we walk the diagonals in order and update
each one as a single numpy expression. Same numbers, far fewer
Python-level iterations.

Stencil constant
----------------
The denominator uses 6 (c = 1 + 6a for diffusion, c = 6 for pressure)
where the textbook 2D Laplacian uses 4. Kept as the default for
compatibility with existing output; pass center_weight=4.0 to get the
textbook constant.
"""

import time
from functools import lru_cache

import numpy as np

from .boundary import Boundary, set_boundary
from .grid import Grid


# ── Relaxation methods ────────────────────────────────────────────────────────
METHOD_GAUSS_SEIDEL = "gauss-seidel"
METHOD_JACOBI       = "jacobi"

DEFAULT_CENTER_WEIGHT = 6.0
MIN_CENTER_WEIGHT     = 4.0   # below this the pressure sweep stops being diagonally dominant


@lru_cache(maxsize=None)
def _diagonals(n: int) -> tuple:
    """
    Interior cells of an n x n grid grouped by anti-diagonal.

    Returns a tuple of (rows, cols) index-array pairs, ordered by
    row + col ascending, i.e. the order a row-major sweep finishes them.
    """
    rows, cols = np.meshgrid(np.arange(1, n - 1), np.arange(1, n - 1), indexing="ij")
    k = rows + cols
    return tuple(
        (rows[k == d], cols[k == d])
        for d in range(2, 2 * (n - 2) + 1)
    )


def _gauss_seidel_sweep(x: np.ndarray, x0: np.ndarray, a: float, c_recip: float):
    for r, c in _diagonals(x.shape[0]):
        x[r, c] = (x0[r, c] + a * (x[r, c + 1] + x[r, c - 1] + x[r + 1, c] + x[r - 1, c])) * c_recip


def _jacobi_sweep(x: np.ndarray, x0: np.ndarray, a: float, c_recip: float):
    neighbors = x[1:-1, 2:] + x[1:-1, :-2] + x[2:, 1:-1] + x[:-2, 1:-1]
    x[1:-1, 1:-1] = (x0[1:-1, 1:-1] + a * neighbors) * c_recip


_SWEEPS = {
    METHOD_GAUSS_SEIDEL: _gauss_seidel_sweep,
    METHOD_JACOBI: _jacobi_sweep,
}
METHODS = tuple(_SWEEPS)


def lin_solve(kind: Boundary, x: Grid, x0: Grid, a: float, c: float,
              iterations: int, method: str = METHOD_GAUSS_SEIDEL):
    """
    Relax (c*x - a*neighbours(x)) = x0 for `iterations` sweeps.

    The current contents of `x` are the initial guess. Wall conditions
    of `kind` are applied to `x` after every sweep, and once more even
    when iterations == 0.

    Args:
        kind       : Boundary kind of the field being solved
        x          : Unknown field, refined in-place
        x0         : Right-hand side
        a, c       : Neighbour weight and diagonal term
        iterations : Number of full sweeps over the interior
        method     : METHOD_GAUSS_SEIDEL (default) or METHOD_JACOBI
    """
    try:
        sweep = _SWEEPS[method]
    except KeyError:
        raise ValueError(
            f"Unknown relaxation method: {method}. "
            f"Use '{METHOD_GAUSS_SEIDEL}' or '{METHOD_JACOBI}'."
        ) from None

    if iterations < 0:
        raise ValueError(f"iterations must be non-negative, got {iterations}")

    c_recip = 1.0 / c
    for _ in range(iterations):
        sweep(x.data, x0.data, a, c_recip)
        set_boundary(kind, x)

    if iterations == 0:
        set_boundary(kind, x)


def compute_divergence(vx: Grid, vy: Grid) -> np.ndarray:
    """
    Central-difference divergence over interior cells.

        div = 0.5 * ((vx[i+1] - vx[i-1]) + (vy[j+1] - vy[j-1])) / N

    Returns: (N-2, N-2) array, row-major like the grids.
    """
    u = vx.data
    v = vy.data
    n = vx.size
    return 0.5 * ((u[1:-1, 2:] - u[1:-1, :-2]) + (v[2:, 1:-1] - v[:-2, 1:-1])) / n


def project(vx: Grid, vy: Grid, p: Grid, div: Grid, iterations: int,
            center_weight: float = DEFAULT_CENTER_WEIGHT,
            method: str = METHOD_GAUSS_SEIDEL) -> dict:
    """
    Pressure projection: remove the divergent part of (vx, vy).

    `p` and `div` are scratch buffers; their previous contents are
    discarded. The step orchestrator hands in whichever velocity pair
    is not being projected.

    Args:
        vx, vy        : Velocity components, modified in-place
        p, div        : Scratch grids for pressure and divergence
        iterations    : Relaxation sweeps for the pressure solve
        center_weight : Stencil denominator (6 by default, 4 = textbook)
        method        : Relaxation method passed to lin_solve

    Returns:
        dict with timing and divergence metrics
    """
    t_start = time.perf_counter()
    n = vx.size

    # Step 1: divergence, pressure initial guess of zero
    divergence = compute_divergence(vx, vy)
    div.data[1:-1, 1:-1] = -divergence
    p.data[1:-1, 1:-1] = 0.0
    set_boundary(Boundary.DENSITY, div)
    set_boundary(Boundary.DENSITY, p)

    # Step 2: relax the pressure equation
    lin_solve(Boundary.DENSITY, p, div, 1.0, center_weight, iterations, method)

    # Step 3: subtract the pressure gradient
    q = p.data
    vx.data[1:-1, 1:-1] -= 0.5 * (q[1:-1, 2:] - q[1:-1, :-2]) * n
    vy.data[1:-1, 1:-1] -= 0.5 * (q[2:, 1:-1] - q[:-2, 1:-1]) * n
    set_boundary(Boundary.VELOCITY_X, vx)
    set_boundary(Boundary.VELOCITY_Y, vy)

    div_after = np.abs(compute_divergence(vx, vy))

    return {
        "time_ms"               : (time.perf_counter() - t_start) * 1000,
        "iterations"            : iterations,
        "divergence_before_max" : float(np.abs(divergence).max()),
        "divergence_after_max"  : float(div_after.max()),
        "divergence_after_mean" : float(div_after.mean()),
    }
