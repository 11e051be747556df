"""
state.py — Fluid State and the Step Orchestrator
=================================================
The single source of truth passed between all physics steps.

Six grids, all size x size:
  density, s   → dye and its scratch buffer
  vx, vy       → live velocity
  vx0, vy0     → velocity scratch buffers

One call to `step()` runs the stable-fluids pipeline:
  1. Diffuse vx  (viscosity)  → vx0
  2. Diffuse vy  (viscosity)  → vy0
  3. Project (vx0, vy0), using vx/vy as pressure/divergence scratch
  4. Advect vx0 through (vx0, vy0) → vx
  5. Advect vy0 through (vx0, vy0) → vy
  6. Project (vx, vy), using vx0/vy0 as scratch
  7. Diffuse density (diffusion rate) → s
  8. Advect s through (vx, vy) → density

The order matters. Diffusion is implicit so it goes before advection,
projection brackets advection because advection bends the field out of
shape, and dye always moves last through the corrected velocity.
"""

import math

import numpy as np

from .advect import advect
from .boundary import Boundary
from .diffuse import diffuse
from .forces import inject_density, inject_velocity
from .grid import Grid
from .solver import (
    DEFAULT_CENTER_WEIGHT,
    METHOD_GAUSS_SEIDEL,
    METHODS,
    MIN_CENTER_WEIGHT,
    project,
)


class FluidState:
    """
    Square 2D fluid: six grids plus the four scalars that configure them.

    Usage:
        fluid = FluidState(size=128, dt=0.001, diff=0.00001, visc=0.000001)
        fluid.add_density(64, 64, 2, 100.0)
        fluid.add_velocity(64, 64, 2, 1.0, 0.0)
        fluid.step(iterations=4)
        fluid.density.data          # hand to the renderer
    """

    GRID_NAMES = ("density", "s", "vx", "vy", "vx0", "vy0")

    def __init__(self, size: int, dt: float, diff: float, visc: float,
                 center_weight: float = DEFAULT_CENTER_WEIGHT,
                 method: str = METHOD_GAUSS_SEIDEL):
        """
        Args:
            size          : Grid edge length (size x size cells, border included)
            dt            : Timestep
            diff          : Density diffusion rate
            visc          : Viscosity (momentum diffusion rate)
            center_weight : Stencil denominator, at least 4; 6 by default,
                            4 is the textbook Laplacian
            method        : Relaxation method for every linear solve
        """
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
            raise ValueError(f"size must be an integer, got {size!r}")
        for name, value in (("dt", dt), ("diff", diff), ("visc", visc)):
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be finite and non-negative, got {value}")
        if not math.isfinite(center_weight) or center_weight < MIN_CENTER_WEIGHT:
            raise ValueError(
                f"center_weight must be finite and at least {MIN_CENTER_WEIGHT}, got {center_weight}"
            )
        if method not in METHODS:
            raise ValueError(f"Unknown relaxation method: {method}. Use one of {METHODS}.")

        self.size = int(size)
        self.dt = dt
        self.diff = diff
        self.visc = visc
        self.center_weight = center_weight
        self.method = method

        # Grid() rejects size < 3
        self.density = Grid(self.size, self.size)
        self.s       = Grid(self.size, self.size)
        self.vx      = Grid(self.size, self.size)
        self.vy      = Grid(self.size, self.size)
        self.vx0     = Grid(self.size, self.size)
        self.vy0     = Grid(self.size, self.size)

        self._check_grids()

    def _check_grids(self):
        """All six grids share one shape and none share storage."""
        grids = self.grids()
        for name, g in grids.items():
            if g.shape != (self.size, self.size):
                raise ValueError(
                    f"grid '{name}' is {g.shape}, expected {(self.size, self.size)}"
                )
        arrays = list(grids.items())
        for k, (name_a, a) in enumerate(arrays):
            for name_b, b in arrays[k + 1:]:
                if np.shares_memory(a.data, b.data):
                    raise ValueError(f"grids '{name_a}' and '{name_b}' share storage")

    def grids(self) -> dict:
        return {name: getattr(self, name) for name in self.GRID_NAMES}

    # ── Sources ───────────────────────────────────────────────────────────────

    def add_density(self, x: int, y: int, radius: int, amount: float):
        """Add `amount` of dye within `radius` cells of (x, y)."""
        inject_density(self.density, x, y, radius, amount)

    def add_velocity(self, x: int, y: int, radius: int, amount_x: float, amount_y: float):
        """Add (amount_x, amount_y) to the velocity within `radius` cells of (x, y)."""
        inject_velocity(self.vx, self.vy, x, y, radius, amount_x, amount_y)

    # ── Time stepping ─────────────────────────────────────────────────────────

    def step(self, iterations: int) -> dict:
        """
        Advance the fluid by one timestep.

        Args:
            iterations : Relaxation sweeps for every diffusion and pressure
                         solve. More = more accurate, slower.

        Returns:
            dict with the metrics of the two projections
        """
        if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)) \
                or iterations < 0:
            raise ValueError(f"iterations must be a non-negative integer, got {iterations!r}")

        w, m = self.center_weight, self.method

        diffuse(Boundary.VELOCITY_X, self.vx0, self.vx, self.visc, self.dt, iterations, w, m)
        diffuse(Boundary.VELOCITY_Y, self.vy0, self.vy, self.visc, self.dt, iterations, w, m)

        first = project(self.vx0, self.vy0, self.vx, self.vy, iterations, w, m)

        advect(Boundary.VELOCITY_X, self.vx, self.vx0, self.vx0, self.vy0, self.dt)
        advect(Boundary.VELOCITY_Y, self.vy, self.vy0, self.vx0, self.vy0, self.dt)

        second = project(self.vx, self.vy, self.vx0, self.vy0, iterations, w, m)

        diffuse(Boundary.DENSITY, self.s, self.density, self.diff, self.dt, iterations, w, m)
        advect(Boundary.DENSITY, self.density, self.s, self.vx, self.vy, self.dt)

        return {"project1": first, "project2": second}

    # ── Helpers ───────────────────────────────────────────────────────────────

    def reset(self):
        """Zero out all fields."""
        for g in self.grids().values():
            g.fill(0.0)

    def total_density(self) -> float:
        return float(self.density.data.sum())

    def max_speed(self) -> float:
        return float(np.sqrt(self.vx.data ** 2 + self.vy.data ** 2).max())

    def __repr__(self):
        return (
            f"FluidState(size={self.size}, dt={self.dt}, diff={self.diff}, visc={self.visc})\n"
            f"  density : max={self.density.data.max():.4f}, sum={self.total_density():.2f}\n"
            f"  velocity: max_speed={self.max_speed():.4f}"
        )
