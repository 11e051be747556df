import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest
from types import SimpleNamespace

from fluid2d import FluidSimulation, density_to_rgb
from visualizer import FluidVisualizer


@pytest.fixture
def viz():
    sim = FluidSimulation(size=24, dt=0.01, diffusion=0.0001, viscosity=0.0001)
    v = FluidVisualizer(sim, iterations=2, scale=2)
    yield v
    plt.close(v.fig)


def _event(v, x, y, button=1):
    return SimpleNamespace(inaxes=v.ax, xdata=x, ydata=y, button=button)


def test_drag_paints_into_the_next_frame(viz):
    viz._on_press(_event(viz, 10.2, 8.4))
    viz.update(0)                       # records the start of the drag
    viz._on_motion(_event(viz, 13.0, 8.0))
    viz.update(1)                       # paints at (13, 8)

    assert viz.sim.frame == 2
    assert viz.sim.fluid.total_density() > 0.0
    np.testing.assert_array_equal(
        viz.img.get_array(), density_to_rgb(viz.sim.fluid.density.data)
    )


def test_release_ends_the_drag(viz):
    viz._on_press(_event(viz, 5.0, 5.0))
    viz.update(0)
    viz._on_release(_event(viz, 5.0, 5.0))
    viz.update(1)
    assert viz.sim.last_pointer is None
    assert not viz.released


def test_other_buttons_ignored(viz):
    viz._on_press(_event(viz, 5.0, 5.0, button=3))
    assert not viz.held


def test_events_outside_the_image_ignored(viz):
    viz._on_motion(SimpleNamespace(inaxes=None, xdata=None, ydata=None, button=None))
    assert viz.mouse is None


def test_save_gif(viz, tmp_path):
    path = tmp_path / "stroke.gif"
    viz.save_gif(str(path), fps=10, frames=6)
    assert path.exists()
    assert viz.script is None
