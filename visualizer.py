"""
visualizer.py — Interactive Density Viewer
===========================================
Shows the dye field as an RGB image and lets you paint with the mouse:
  - Press and drag  → inject dye + push the fluid along the drag
  - Release         → stop painting (the next press starts a new drag)

One animation frame = read input, step the physics once, redraw.
Uses matplotlib FuncAnimation for real-time updates.
"""

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation

from fluid2d import density_to_rgb
from fluid2d.simulation import DEFAULT_ITERATIONS


class FluidVisualizer:
    """
    Real-time viewer of a FluidSimulation.

    Usage (standalone):
        from fluid2d import FluidSimulation
        from visualizer import FluidVisualizer

        sim = FluidSimulation(size=128)
        viz = FluidVisualizer(sim)
        viz.run()  # Opens live window, drag with the left button
    """

    def __init__(self, simulation, iterations: int = DEFAULT_ITERATIONS,
                 scale: int = 7, max_value: float = 3):
        """
        Args:
            simulation : FluidSimulation instance
            iterations : Relaxation sweeps per frame
            scale      : Screen pixels per grid cell
            max_value  : Colour map normaliser
        """
        self.sim = simulation
        self.N = simulation.size
        self.iterations = iterations
        self.scale = scale
        self.max_value = max_value

        self.mouse = None        # last (col, row) seen over the image
        self.held = False
        self.released = False
        self.script = None       # callable(frame) -> (col, row) | None

        self._setup_figure()

    def _setup_figure(self):
        """Initialize the matplotlib figure: one axis, one image, no chrome."""
        dpi = 100
        side = self.N * self.scale / dpi
        self.fig = plt.figure(figsize=(side, side), dpi=dpi)
        self.fig.patch.set_facecolor('#000000')
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.ax.set_axis_off()

        self.img = self.ax.imshow(
            self._frame_rgb(),
            interpolation='nearest',
            origin='upper',
            aspect='equal',
        )

        self.fig.canvas.mpl_connect('button_press_event', self._on_press)
        self.fig.canvas.mpl_connect('motion_notify_event', self._on_motion)
        self.fig.canvas.mpl_connect('button_release_event', self._on_release)

    def _frame_rgb(self) -> np.ndarray:
        return density_to_rgb(self.sim.fluid.density.data, self.max_value)

    # ── Mouse ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _cell(event):
        if event.inaxes is None or event.xdata is None or event.ydata is None:
            return None
        # pixel centres sit on integer coordinates
        return int(np.floor(event.xdata + 0.5)), int(np.floor(event.ydata + 0.5))

    def _on_press(self, event):
        if event.button != 1:
            return
        self.held = True
        self.mouse = self._cell(event)

    def _on_motion(self, event):
        cell = self._cell(event)
        if cell is not None:
            self.mouse = cell

    def _on_release(self, event):
        if event.button != 1:
            return
        self.held = False
        self.released = True

    # ── Frame loop ────────────────────────────────────────────────────────────

    def update(self, frame_num):
        """Called by FuncAnimation each frame. Feeds input, steps, redraws."""
        if self.script is not None:
            target = self.script(frame_num)
            if target is None:
                self.sim.pointer_released()
            else:
                self.sim.pointer_held(*target)
        else:
            if self.held and self.mouse is not None:
                self.sim.pointer_held(*self.mouse)
            if self.released:
                self.sim.pointer_released()
                self.released = False

        self.sim.step(self.iterations)
        self.img.set_data(self._frame_rgb())
        return [self.img]

    def run(self, fps: int = 60, frames: int = None):
        """
        Start the live animation window.

        Args:
            fps    : Target animation frame rate
            frames : Total frames to render (None = until the window closes)
        """
        self.anim = animation.FuncAnimation(
            self.fig,
            self.update,
            frames=frames,
            interval=1000 // fps,
            blit=True,
            cache_frame_data=False,
        )
        plt.show()

    def save_gif(self, path: str = "fluid2d.gif", fps: int = 30, frames: int = 120):
        """
        Save a GIF of a scripted stroke (for reports and demos).

        The pointer circles the centre for the first two thirds of the
        clip, then lifts so the dye keeps swirling on its own.
        """
        N = self.N
        radius = N / 4
        stroke_frames = 2 * frames // 3

        def circle(frame):
            if frame >= stroke_frames:
                return None
            angle = 2 * np.pi * frame / max(stroke_frames, 1)
            return (int(N / 2 + radius * np.cos(angle)),
                    int(N / 2 + radius * np.sin(angle)))

        self.script = circle
        print(f"Rendering {frames} frames to {path}...")
        self.anim = animation.FuncAnimation(
            self.fig, self.update, frames=frames, interval=1000 // fps, blit=True
        )
        writer = animation.PillowWriter(fps=fps)
        self.anim.save(path, writer=writer)
        self.script = None
        print(f"Saved: {path}")
