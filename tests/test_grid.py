import numpy as np
import pytest

from lobster import GridError, MissingKeywordError, RectilinearGrid


def test_uniform_grid():
    grid = RectilinearGrid(size=(2, 3, 4), extent=(10, 30, 100))
    assert grid.shape == (2, 3, 4)
    assert grid.bottom == -100.0
    assert grid.surface == 0.0
    assert np.allclose(grid.znodes, [-87.5, -62.5, -37.5, -12.5])
    assert np.allclose(grid.dz, 25.0)
    assert np.allclose(grid.xnodes, [2.5, 7.5])
    assert grid.face_shape("z") == (2, 3, 5)
    assert grid.face_shape("x") == (3, 3, 4)
    assert grid.volumes().sum() == pytest.approx(10 * 30 * 100)


def test_stretched_grid():
    grid = RectilinearGrid(size=(1, 1, 3), extent=(1, 1), z=[-100, -30, -10, 0])
    assert grid.Lz == 100.0
    assert np.allclose(grid.dz, [70, 20, 10])
    assert np.allclose(grid.znodes, [-65, -20, -5])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"size": (1, 1)},
        {"size": (1, 0, 3)},
        {"size": (1, 1, 2), "extent": (1, 1)},
        {"size": (1, 1, 2), "extent": (1, 1, -5)},
        {"size": (1, 1, 2), "extent": (1, 1), "z": [0, -10, -20]},
        {"size": (1, 1, 2), "extent": (1, 1), "z": [-20, 0]},
    ],
)
def test_malformed_grids(kwargs):
    with pytest.raises(GridError):
        RectilinearGrid(**kwargs)


def test_size_is_required():
    with pytest.raises(MissingKeywordError):
        RectilinearGrid(extent=(1, 1, 1))


def test_unknown_direction():
    grid = RectilinearGrid(size=(1, 1, 1))
    with pytest.raises(GridError):
        grid.face_shape("t")
