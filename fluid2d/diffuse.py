"""
diffuse.py — Implicit Diffusion
================================
Diffusion makes things spread out over time.
  - Density uses the diffusion rate (how fast dye bleeds)
  - Velocity uses the viscosity (how thick the fluid is)

The math: solve the implicit heat equation
  (I - a·∇²) x_new = x_old,     a = dt * rate * (N-2)²

Implicit means stable for any dt: large steps smear the field
instead of blowing it up. We never solve it exactly; `lin_solve`
relaxes toward the answer and more iterations get closer.
"""

from .boundary import Boundary
from .grid import Grid
from .solver import DEFAULT_CENTER_WEIGHT, METHOD_GAUSS_SEIDEL, lin_solve


def diffusion_coefficient(dt: float, rate: float, n: int) -> float:
    """a = dt * rate * (N-2)², the neighbour weight for one diffusion solve."""
    return dt * rate * (n - 2) * (n - 2)


def diffuse(kind: Boundary, x: Grid, x0: Grid, rate: float, dt: float,
            iterations: int, center_weight: float = DEFAULT_CENTER_WEIGHT,
            method: str = METHOD_GAUSS_SEIDEL):
    """
    Diffuse `x0` into `x`.

    With rate == 0 or dt == 0 the solve reduces to copying x0's interior
    into x (plus the wall pass), so there is no early exit here.

    Args:
        kind          : Boundary kind of the field
        x             : Destination, its current contents seed the solve
        x0            : Field before diffusion
        rate          : Diffusion rate or viscosity
        dt            : Timestep
        iterations    : Relaxation sweeps
        center_weight : Stencil denominator constant
        method        : Relaxation method
    """
    a = diffusion_coefficient(dt, rate, x.size)
    lin_solve(kind, x, x0, a, 1.0 + center_weight * a, iterations, method)
