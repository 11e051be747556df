import numpy as np
import pytest

from fluid2d import Grid


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def grid_from():
    """Build a Grid holding a copy of a square [row, col] array."""
    def _make(values, dtype=np.float64):
        values = np.asarray(values, dtype=dtype)
        g = Grid(values.shape[0], values.shape[1], dtype=dtype)
        np.copyto(g.data, values)
        return g
    return _make


@pytest.fixture
def radial_outflow(grid_from):
    """Gaussian-weighted source flow centred in an n x n grid, ~0 at the walls."""
    def _make(n, sigma=3.0):
        rows, cols = np.meshgrid(np.arange(n), np.arange(n), indexing="ij")
        X = cols - (n - 1) / 2
        Y = rows - (n - 1) / 2
        g = np.exp(-(X ** 2 + Y ** 2) / (2 * sigma ** 2))
        return grid_from(X * g), grid_from(Y * g)
    return _make
