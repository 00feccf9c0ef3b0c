import numpy as np
import pytest

from lobster import (
    LOBSTER,
    AbstractContinuousFormBiogeochemistry,
    GridError,
    SimulationState,
    TracerError,
)


def test_interface_is_abstract():
    with pytest.raises(TypeError):
        AbstractContinuousFormBiogeochemistry()


def test_state_for_model(grid):
    model = LOBSTER(grid=grid, carbonates=True)
    state = SimulationState.for_model(grid, model, time=3600.0)

    assert tuple(state.tracers) == model.required_biogeochemical_tracers()
    assert tuple(state.auxiliary_fields) == model.required_biogeochemical_auxiliary_fields()
    assert state.tracers["DIC"].shape == grid.shape
    assert state.clock.time == 3600.0
    assert state.clock.iteration == 0


def test_set_tracers(grid, model):
    state = SimulationState.for_model(grid, model)
    profile = np.linspace(0, 1, grid.Nz)
    state.set(**{"NO₃": 5.0, "P": lambda x, y, z: 0.1 * np.exp(z / 50), "Z": profile})

    assert np.all(state.tracers["NO₃"] == 5.0)
    assert state.tracers["P"][0, 0, -1] == pytest.approx(0.1 * np.exp(-5 / 50))
    assert state.tracers["P"][1, 2, 0] < state.tracers["P"][1, 2, -1]
    assert np.array_equal(state.tracers["Z"][1, 1], profile)
    assert np.all(state.tracers["DOM"] == 0.0)


def test_set_rejects_unknown_tracers_and_bad_shapes(grid, model):
    state = SimulationState.for_model(grid, model)
    with pytest.raises(TracerError):
        state.set(OXY=250.0)
    with pytest.raises(GridError):
        state.set(P=np.ones(5))


def test_update_fills_PAR(grid, model):
    state = SimulationState.for_model(grid, model)
    state.set(P=0.5)
    model.update_biogeochemical_state(state)

    PAR = state.auxiliary_fields["PAR"]
    # noon at t = 0 for the default diurnal cycle
    assert PAR[0, 0, -1] > PAR[0, 0, 0] > 0
    assert np.allclose(
        PAR, state.auxiliary_fields["PAR¹"] + state.auxiliary_fields["PAR²"]
    )
