"""
simulation.py — Frame Loop Driver
==================================
Wraps a FluidState with everything a render loop needs:
  - Pointer tracking: turns "mouse held at (x, y)" samples into
    density + velocity injections, using the drag since the last sample
  - Per-stage timing and divergence metrics for every frame
  - Status printing

The physics itself lives in FluidState.step(); nothing here changes it.
"""

import time

import numpy as np

from .solver import compute_divergence, METHODS
from .state import FluidState


# ── Defaults of the interactive demo ──────────────────────────────────────────
DEFAULT_SIZE       = 128
DEFAULT_DT         = 0.001
DEFAULT_DIFFUSION  = 0.00001
DEFAULT_VISCOSITY  = 0.000001
DEFAULT_ITERATIONS = 1

# ── Brush ─────────────────────────────────────────────────────────────────────
BRUSH_RADIUS   = 2
BRUSH_DENSITY  = 100.0
VELOCITY_SCALE = 1.0


class FluidSimulation:
    """
    The interactive 2D fluid.

    Usage:
        sim = FluidSimulation()
        sim.pointer_held(60, 60)      # first sample only records position
        sim.pointer_held(64, 62)      # paints dye, pushes by (4, 2)
        sim.pointer_released()
        sim.step()
        density = sim.fluid.density.data
    """

    def __init__(self, size: int = DEFAULT_SIZE, dt: float = DEFAULT_DT,
                 diffusion: float = DEFAULT_DIFFUSION, viscosity: float = DEFAULT_VISCOSITY,
                 **kwargs):
        """
        Args:
            size      : Grid edge length
            dt        : Timestep
            diffusion : Dye spreading rate
            viscosity : Fluid thickness
            kwargs    : Forwarded to FluidState (center_weight, method)
        """
        self.fluid = FluidState(size, dt, diffusion, viscosity, **kwargs)
        self.frame = 0
        self.last_pointer = None   # None = pointer up, no drag in progress
        self.perf_log = []

    @property
    def size(self) -> int:
        return self.fluid.size

    def set_method(self, method: str):
        """Switch the relaxation method used by every solve."""
        if method not in METHODS:
            raise ValueError(f"Unknown relaxation method: {method}. Use one of {METHODS}.")
        self.fluid.method = method
        print(f"[Simulation] Relaxation method switched to: {method}")

    # ── Input ─────────────────────────────────────────────────────────────────

    def pointer_held(self, x: int, y: int):
        """
        Pointer is down at (x, y).

        The first sample of a drag only records the position. Every later
        sample paints dye and pushes the fluid by the displacement since
        the previous sample.
        """
        x, y = int(x), int(y)
        if self.last_pointer is None:
            self.last_pointer = (x, y)
            return

        px, py = self.last_pointer
        self.fluid.add_density(x, y, BRUSH_RADIUS, BRUSH_DENSITY)
        self.fluid.add_velocity(x, y, BRUSH_RADIUS,
                                (x - px) * VELOCITY_SCALE,
                                (y - py) * VELOCITY_SCALE)
        self.last_pointer = (x, y)

    def pointer_released(self):
        """Pointer is up: the next press starts a fresh drag."""
        self.last_pointer = None

    # ── Time stepping ─────────────────────────────────────────────────────────

    def step(self, iterations: int = DEFAULT_ITERATIONS) -> dict:
        """
        Advance by one frame.

        Returns a metrics dict (timing, divergence, total dye).
        """
        t0 = time.perf_counter()
        proj = self.fluid.step(iterations)
        total_ms = (time.perf_counter() - t0) * 1000

        self.frame += 1
        metrics = {
            "frame"           : self.frame,
            "method"          : self.fluid.method,
            "iterations"      : iterations,
            "total_ms"        : total_ms,
            "fps"             : 1000.0 / total_ms if total_ms > 0 else 0,
            "project1_ms"     : proj["project1"]["time_ms"],
            "project2_ms"     : proj["project2"]["time_ms"],
            "divergence_max"  : proj["project2"]["divergence_after_max"],
            "divergence_mean" : proj["project2"]["divergence_after_mean"],
            "density_total"   : self.fluid.total_density(),
        }
        self.perf_log.append(metrics)
        return metrics

    def reset(self):
        """Clear every field and the pointer, keep the configuration."""
        self.fluid.reset()
        self.frame = 0
        self.last_pointer = None
        self.perf_log = []

    def print_status(self):
        """Pretty-print current simulation state."""
        f = self.fluid
        div = np.abs(compute_divergence(f.vx, f.vy))
        print(f"\n{'='*50}")
        print(f"  Frame: {self.frame}  |  Method: {f.method}")
        print(f"  Density   : max={f.density.data.max():.4f}, total={f.total_density():.2f}")
        print(f"  Velocity  : max_speed={f.max_speed():.4f}")
        print(f"  Divergence: max={div.max():.6f}, mean={div.mean():.8f}")
        if self.perf_log:
            last = self.perf_log[-1]
            print(f"  Perf      : {last['total_ms']:.1f}ms/frame ({last['fps']:.1f} FPS)")
        print(f"{'='*50}")
