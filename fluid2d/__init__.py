"""
fluid2d/ — Real-time 2D Stable Fluids
======================================
Exports the interfaces the viewer and the CLI use.

Viewer imports   : FluidSimulation, density_to_rgb
Solver internals : FluidState, Grid, Boundary (plus the operator modules)
"""

from .boundary import Boundary
from .grid import Grid
from .render import density_to_rgb
from .simulation import FluidSimulation
from .solver import METHOD_GAUSS_SEIDEL, METHOD_JACOBI
from .state import FluidState

__all__ = [
    "Boundary",
    "FluidSimulation",
    "FluidState",
    "Grid",
    "METHOD_GAUSS_SEIDEL",
    "METHOD_JACOBI",
    "density_to_rgb",
]
