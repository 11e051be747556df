import math

import numpy as np
import pytest

from fluid2d import FluidSimulation, METHOD_JACOBI, density_to_rgb
from fluid2d.simulation import BRUSH_DENSITY


@pytest.fixture
def sim():
    return FluidSimulation(size=32, dt=0.01, diffusion=0.0001, viscosity=0.0001)


# ── Pointer tracking ──────────────────────────────────────────────────────────

def test_first_sample_only_records_position(sim):
    sim.pointer_held(10, 12)
    assert sim.last_pointer == (10, 12)
    assert not sim.fluid.density.data.any()
    assert not sim.fluid.vx.data.any()


def test_drag_paints_and_pushes(sim):
    sim.pointer_held(10, 12)
    sim.pointer_held(13, 11)

    assert sim.last_pointer == (13, 11)
    assert sim.fluid.density[13, 11] == BRUSH_DENSITY
    assert sim.fluid.vx[13, 11] == 3.0
    assert sim.fluid.vy[13, 11] == -1.0
    assert sim.fluid.density[10, 12] == 0.0


def test_release_resets_the_drag(sim):
    sim.pointer_held(10, 12)
    sim.pointer_held(11, 12)
    sim.pointer_released()
    assert sim.last_pointer is None

    painted = sim.fluid.density.data.copy()
    sim.pointer_held(20, 20)
    np.testing.assert_array_equal(sim.fluid.density.data, painted)


def test_float_pointer_positions_are_truncated(sim):
    sim.pointer_held(10.7, 12.2)
    assert sim.last_pointer == (10, 12)


# ── Frames ────────────────────────────────────────────────────────────────────

def test_step_reports_metrics(sim):
    sim.pointer_held(10, 10)
    sim.pointer_held(14, 10)
    metrics = sim.step(4)

    assert metrics["frame"] == 1
    assert metrics["iterations"] == 4
    assert metrics["density_total"] > 0.0
    assert metrics["divergence_max"] >= 0.0
    assert sim.perf_log == [metrics]


def test_reset(sim):
    sim.pointer_held(10, 10)
    sim.pointer_held(12, 10)
    sim.step()
    sim.reset()
    assert sim.frame == 0
    assert sim.last_pointer is None
    assert sim.perf_log == []
    assert not sim.fluid.density.data.any()


def test_set_method(sim, capsys):
    sim.set_method(METHOD_JACOBI)
    assert sim.fluid.method == METHOD_JACOBI
    assert METHOD_JACOBI in capsys.readouterr().out
    with pytest.raises(ValueError):
        sim.set_method("conjugate-gradient")


def test_print_status(sim, capsys):
    sim.step()
    sim.print_status()
    out = capsys.readouterr().out
    assert "Frame: 1" in out


# ── Colour map ────────────────────────────────────────────────────────────────

def _channel(value, max_value, phase):
    return round(math.sin(0.024 * (value / max_value) + phase) * 127 + 128)


@pytest.mark.parametrize("value", [0.0, 1.0, 3.0, 250.0, -40.0])
def test_density_to_rgb_matches_sine_waves(value):
    rgb = density_to_rgb(value, 3)
    assert rgb.shape == (3,)
    assert rgb.dtype == np.uint8
    assert tuple(int(c) for c in rgb) == tuple(_channel(value, 3, p) for p in (0, 2, 4))


def test_density_to_rgb_of_zero():
    assert tuple(int(c) for c in density_to_rgb(0.0)) == (128, 243, 32)


def test_density_to_rgb_image_shape():
    img = density_to_rgb(np.zeros((5, 5), dtype=np.float32))
    assert img.shape == (5, 5, 3)
    assert img.dtype == np.uint8


# ── CLI ───────────────────────────────────────────────────────────────────────

def test_cli_defaults():
    from main import build_parser
    args = build_parser().parse_args([])
    assert args.mode == "live"
    assert args.size == 128
    assert args.dt == 0.001
    assert args.iterations == 1


def test_cli_headless_run(capsys):
    from main import main
    main(["--mode", "headless", "--size", "16", "--frames", "3", "--iterations", "2"])
    out = capsys.readouterr().out
    assert "Headless simulation" in out
    assert "Frame 000" in out
