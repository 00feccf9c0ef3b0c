import numpy as np
import pytest

from lobster import (
    LOBSTER,
    GridError,
    RectilinearGrid,
    SimulationState,
    TwoBandPhotosyntheticallyActiveRadiation,
)
from lobster.model import default_surface_PAR, hours


@pytest.fixture
def light():
    return TwoBandPhotosyntheticallyActiveRadiation()


def test_required_fields(light, grid):
    assert light.required_fields == ("PAR", "PAR¹", "PAR²")
    fields = light.allocate_auxiliary_fields(grid)
    assert set(fields) == {"PAR", "PAR¹", "PAR²"}
    assert all(f.shape == grid.shape for f in fields.values())


def test_clear_water_is_beer_lambert(light, grid):
    PAR0 = np.full((grid.Nx, grid.Ny), 100.0)
    fields = light.attenuate(PAR0, np.zeros(grid.shape), grid.znodes)
    z = grid.znodes
    expected = 50.0 * (np.exp(0.225 * z) + np.exp(0.0232 * z))
    assert np.allclose(fields["PAR"], np.broadcast_to(expected, grid.shape))
    assert np.allclose(fields["PAR"], fields["PAR¹"] + fields["PAR²"])


def test_phytoplankton_shades_the_water_column(light, grid):
    PAR0 = np.full((grid.Nx, grid.Ny), 100.0)
    clear = light.attenuate(PAR0, np.zeros(grid.shape), grid.znodes)["PAR"]
    green = light.attenuate(PAR0, np.full(grid.shape, 1.0), grid.znodes)["PAR"]
    assert np.all(green < clear)


def test_par_decreases_with_depth(light, grid):
    rng = np.random.default_rng(1)
    PAR0 = rng.uniform(0, 200, (grid.Nx, grid.Ny))
    P = rng.uniform(0, 2, grid.shape)
    PAR = light.attenuate(PAR0, P, grid.znodes)["PAR"]
    # index 0 is the bottom cell
    assert np.all(np.diff(PAR, axis=-1) >= 0)
    assert np.all(PAR <= PAR0[..., np.newaxis])


def test_thin_top_layer_sees_surface_light(light):
    grid = RectilinearGrid(size=(1, 1, 3), extent=(1, 1), z=[-100.0, -10.0, -1e-6, 0.0])
    PAR0 = np.full((1, 1), 80.0)
    PAR = light.attenuate(PAR0, np.full(grid.shape, 0.5), grid.znodes)["PAR"]
    assert PAR[0, 0, -1] == pytest.approx(80.0, rel=1e-5)


def test_mismatched_fields_raise(light, grid):
    with pytest.raises(GridError):
        light.attenuate(np.ones((grid.Nx, grid.Ny)), np.zeros((grid.Nx, grid.Ny, 3)), grid.znodes)


def test_update_writes_in_place(grid):
    model = LOBSTER(grid=grid)
    state = SimulationState.for_model(grid, model)
    state.set(**{"P": 0.2, "NO₃": 5.0})
    PAR = state.auxiliary_fields["PAR"]
    P_before = state.tracers["P"].copy()

    model.update_biogeochemical_state(state)

    assert state.auxiliary_fields["PAR"] is PAR
    assert PAR.max() > 0
    assert np.array_equal(state.tracers["P"], P_before)


def test_darkness_at_night(grid):
    model = LOBSTER(grid=grid)
    state = SimulationState.for_model(grid, model, time=12 * hours)
    state.set(P=0.2)
    model.update_biogeochemical_state(state)
    assert default_surface_PAR(0.0, 0.0, 12 * hours) == 0.0
    assert np.all(state.auxiliary_fields["PAR"] == 0.0)


def test_surface_forcing_can_vary_in_space(grid):
    model = LOBSTER(
        grid=grid,
        surface_photosynthetically_active_radiation=lambda x, y, t: 10.0 * x,
    )
    state = SimulationState.for_model(grid, model)
    model.update_biogeochemical_state(state)
    top = state.auxiliary_fields["PAR"][:, 0, -1]
    assert top[1] > top[0] > 0
