"""
main.py — Entry Point
======================
Runs the 2D fluid interactively or headless.

Usage:
    python main.py                          # Live window, drag to paint (default)
    python main.py --mode headless          # Scripted strokes, prints stats
    python main.py --mode benchmark         # Per-frame timing breakdown
    python main.py --mode gif --output a.gif
"""

import argparse

import numpy as np

from fluid2d import FluidSimulation, METHOD_GAUSS_SEIDEL, METHOD_JACOBI
from fluid2d.simulation import (
    DEFAULT_DIFFUSION,
    DEFAULT_DT,
    DEFAULT_ITERATIONS,
    DEFAULT_SIZE,
    DEFAULT_VISCOSITY,
)


def _make_simulation(args) -> FluidSimulation:
    return FluidSimulation(size=args.size, dt=args.dt,
                           diffusion=args.diffusion, viscosity=args.viscosity,
                           method=args.method)


def _stroke(sim: FluidSimulation, frame: int):
    """Scripted pointer: a horizontal back-and-forth drag through the centre."""
    N = sim.size
    period = 60
    phase = frame % period
    if phase == period - 1:
        sim.pointer_released()
        return
    x = N // 4 + (N // 2) * phase // (period - 1)
    sim.pointer_held(x, N // 2)


def run_live(args):
    """Live interactive visualization."""
    from visualizer import FluidVisualizer

    print(f"Starting live simulation (size={args.size})...")
    print("Drag with the left mouse button to paint. Close the window to exit.\n")

    sim = _make_simulation(args)
    viz = FluidVisualizer(sim, iterations=args.iterations, scale=args.scale)
    viz.run()


def run_headless(args):
    """Run simulation without display — prints stats every 10 frames."""
    print(f"\nHeadless simulation | size={args.size} | {args.frames} frames")
    print(f"{'─'*60}")

    sim = _make_simulation(args)
    total_times = []

    for f in range(args.frames):
        _stroke(sim, f)
        metrics = sim.step(args.iterations)
        total_times.append(metrics["total_ms"])

        if f % 10 == 0:
            print(f"  Frame {f:03d} | {metrics['total_ms']:6.1f}ms "
                  f"({metrics['fps']:.1f} FPS) | "
                  f"div_max={metrics['divergence_max']:.5f} | "
                  f"density={metrics['density_total']:.1f}")

    print(f"\n{'─'*60}")
    print(f"  Average: {np.mean(total_times):.1f}ms/frame ({1000/np.mean(total_times):.1f} FPS)")
    print(f"  Min:     {np.min(total_times):.1f}ms")
    print(f"  Max:     {np.max(total_times):.1f}ms")
    sim.print_status()


def run_benchmark(args):
    """
    Detailed performance breakdown.
    Compares both relaxation methods at the requested iteration count.
    """
    print(f"\n{'='*60}")
    print(f"  BENCHMARK | size={args.size} | {args.frames} frames | "
          f"{args.iterations} iterations")
    print(f"{'='*60}")

    keys = ["project1_ms", "project2_ms", "total_ms"]

    for method in (METHOD_GAUSS_SEIDEL, METHOD_JACOBI):
        sim = _make_simulation(args)
        sim.set_method(method)

        # Warm up
        for f in range(5):
            _stroke(sim, f)
            sim.step(args.iterations)

        logs = []
        for f in range(args.frames):
            _stroke(sim, f)
            logs.append(sim.step(args.iterations))

        print(f"\n{'Step':<20} {'Mean':>8} {'Min':>8} {'Max':>8}")
        print(f"{'─'*50}")
        for k in keys:
            vals = [m[k] for m in logs]
            print(f"  {k:<18} {np.mean(vals):>7.1f}ms {np.min(vals):>7.1f}ms {np.max(vals):>7.1f}ms")
        div = [m["divergence_max"] for m in logs]
        print(f"  {'divergence_max':<18} {np.mean(div):>9.5f}")


def run_gif(args):
    """Render a scripted stroke to a GIF."""
    from visualizer import FluidVisualizer

    sim = _make_simulation(args)
    viz = FluidVisualizer(sim, iterations=args.iterations, scale=args.scale)
    viz.save_gif(args.output, frames=args.frames)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="2D Stable Fluids")
    parser.add_argument(
        "--mode", choices=["live", "headless", "benchmark", "gif"],
        default="live",
        help="Run mode (default: live)"
    )
    parser.add_argument("--size",       type=int,   default=DEFAULT_SIZE, help="Grid edge length (default: 128)")
    parser.add_argument("--frames",     type=int,   default=100, help="Number of frames")
    parser.add_argument("--iterations", type=int,   default=DEFAULT_ITERATIONS, help="Relaxation sweeps per solve")
    parser.add_argument("--dt",         type=float, default=DEFAULT_DT, help="Timestep")
    parser.add_argument("--diffusion",  type=float, default=DEFAULT_DIFFUSION, help="Dye diffusion rate")
    parser.add_argument("--viscosity",  type=float, default=DEFAULT_VISCOSITY, help="Viscosity")
    parser.add_argument("--method", choices=[METHOD_GAUSS_SEIDEL, METHOD_JACOBI],
                        default=METHOD_GAUSS_SEIDEL, help="Relaxation method")
    parser.add_argument("--scale",      type=int,   default=7, help="Screen pixels per cell")
    parser.add_argument("--output",     default="fluid2d.gif", help="GIF path for --mode gif")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.mode == "live":
        run_live(args)
    elif args.mode == "headless":
        run_headless(args)
    elif args.mode == "benchmark":
        run_benchmark(args)
    elif args.mode == "gif":
        run_gif(args)


if __name__ == "__main__":
    main()
