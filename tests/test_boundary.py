import numpy as np
import pytest

from fluid2d import Boundary
from fluid2d.boundary import set_boundary


N = 7


@pytest.fixture
def field(rng, grid_from):
    return grid_from(rng.standard_normal((N, N)))


def test_velocity_x_negates_left_and_right_walls(field):
    set_boundary(Boundary.VELOCITY_X, field)
    x = field.data
    j = slice(1, N - 1)
    np.testing.assert_array_equal(x[j, 0], -x[j, 1])
    np.testing.assert_array_equal(x[j, N - 1], -x[j, N - 2])
    # top/bottom are plain copies
    np.testing.assert_array_equal(x[0, j], x[1, j])
    np.testing.assert_array_equal(x[N - 1, j], x[N - 2, j])


def test_velocity_y_negates_top_and_bottom_walls(field):
    set_boundary(Boundary.VELOCITY_Y, field)
    x = field.data
    i = slice(1, N - 1)
    np.testing.assert_array_equal(x[0, i], -x[1, i])
    np.testing.assert_array_equal(x[N - 1, i], -x[N - 2, i])
    np.testing.assert_array_equal(x[i, 0], x[i, 1])
    np.testing.assert_array_equal(x[i, N - 1], x[i, N - 2])


def test_density_copies_without_sign_flip(field):
    set_boundary(Boundary.DENSITY, field)
    x = field.data
    k = slice(1, N - 1)
    np.testing.assert_array_equal(x[0, k], x[1, k])
    np.testing.assert_array_equal(x[N - 1, k], x[N - 2, k])
    np.testing.assert_array_equal(x[k, 0], x[k, 1])
    np.testing.assert_array_equal(x[k, N - 1], x[k, N - 2])


@pytest.mark.parametrize("kind", list(Boundary))
def test_corners_average_their_neighbours(field, kind):
    set_boundary(kind, field)
    x = field.data
    assert x[0, 0] == pytest.approx(0.5 * (x[0, 1] + x[1, 0]))
    assert x[0, -1] == pytest.approx(0.5 * (x[0, -2] + x[1, -1]))
    assert x[-1, 0] == pytest.approx(0.5 * (x[-1, 1] + x[-2, 0]))
    assert x[-1, -1] == pytest.approx(0.5 * (x[-1, -2] + x[-2, -1]))


@pytest.mark.parametrize("kind", list(Boundary))
def test_interior_untouched(field, kind):
    before = field.data[1:-1, 1:-1].copy()
    set_boundary(kind, field)
    np.testing.assert_array_equal(field.data[1:-1, 1:-1], before)


def test_integer_codes_are_coerced(field):
    other = field.copy()
    set_boundary(1, field)
    set_boundary(Boundary.VELOCITY_X, other)
    np.testing.assert_array_equal(field.data, other.data)


def test_unknown_code_rejected(field):
    with pytest.raises(ValueError):
        set_boundary(3, field)
