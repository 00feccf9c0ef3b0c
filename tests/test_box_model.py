import numpy as np
import pytest

from lobster import LOBSTER, BoxModel, InputError, SolverError

days = 86400.0


@pytest.fixture
def box(model, surface_ocean):
    return BoxModel(model=model, initial_conditions=surface_ocean, PAR=50, stop="30 days")


def test_nitrogen_is_conserved(box, surface_ocean):
    df = box.run()

    assert df.index[-1] == pytest.approx(30 * days)
    total = box.total_nitrogen()
    assert np.allclose(total, sum(surface_ocean[n] for n in ("NO₃", "NH₄", "P", "Z")), rtol=1e-6)
    assert df.min().min() >= -1e-8


def test_bloom_draws_down_nitrate(box):
    df = box.run()
    assert df["NO₃"].iloc[-1] < df["NO₃"].iloc[0]
    assert df["P"].max() > df["P"].iloc[0]
    assert df["D"].iloc[-1] > 0
    assert df["Dᶜ"].iloc[-1] > 0


def test_darkness(model, surface_ocean):
    box = BoxModel(
        model=model, initial_conditions=surface_ocean, PAR=lambda t: 0.0, stop="5 days"
    )
    df = box.run()
    assert df["P"].iloc[-1] < df["P"].iloc[0]
    assert df["NO₃"].iloc[-1] >= df["NO₃"].iloc[0]


def test_chemistry_tracers(grid, surface_ocean):
    model = LOBSTER(grid=grid, carbonates=True, oxygen=True)
    initial = dict(surface_ocean, DIC=2000.0, ALK=2300.0, OXY=250.0)
    box = BoxModel(model=model, initial_conditions=initial, PAR=50, stop="10 days")
    df = box.run(t_eval=np.array([0.0, 10 * days]))

    assert list(df.columns) == list(model.required_biogeochemical_tracers())
    assert len(df) == 2
    assert df["DIC"].iloc[-1] < 2000.0
    assert df["OXY"].iloc[-1] > 250.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"initial_conditions": {"OXY": 250.0}},
        {"initial_conditions": {}, "stop": -1.0},
        {"initial_conditions": {}, "max_timestep": "1 meter"},
    ],
)
def test_invalid_input(model, kwargs):
    with pytest.raises(InputError):
        BoxModel(model=model, **kwargs)


def test_results_need_a_run(box):
    with pytest.raises(SolverError):
        box.total_nitrogen()


def test_run_shorter_than_max_timestep(model, surface_ocean):
    box = BoxModel(model=model, initial_conditions=surface_ocean, PAR=50, stop="12 hours")
    df = box.run()

    assert len(df) >= 2
    assert df.index[0] == 0.0
    assert df.index[-1] == pytest.approx(12 * 3600)
    assert df["P"].iloc[-1] != df["P"].iloc[0]
