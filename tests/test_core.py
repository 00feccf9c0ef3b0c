import numpy as np
import pytest

from lobster import LobsterParameters
from lobster.core import (
    NITROGEN_CYCLE,
    NITROGEN_POOLS,
    light_limitation,
    nitrate_limitation,
    phytoplankton_growth_rate,
    phytoplankton_production,
    zooplankton_grazing,
)

KERNEL_ORDER = tuple(NITROGEN_CYCLE)


def rates(concentrations, PAR, p):
    args = [float(concentrations[n]) for n in KERNEL_ORDER]
    return {n: f(*args, float(PAR), p) for n, f in NITROGEN_CYCLE.items()}


@pytest.fixture
def p():
    return LobsterParameters().as_namedtuple()


def test_light_limitation_vanishes_in_the_dark():
    assert light_limitation(0.0, 33.0) == 0.0
    assert light_limitation(-5.0, 33.0) == 0.0
    assert light_limitation(33.0, 33.0) == pytest.approx(0.5)


@pytest.mark.parametrize("NO3, NH4", [(0.0, 0.0), (5.0, 0.1), (30.0, 2.0), (0.0, 1.0)])
def test_no_growth_without_light(p, NO3, NH4):
    assert phytoplankton_growth_rate(NO3, NH4, 0.0, p) == 0.0
    production, nitrate_uptake, ammonia_uptake = phytoplankton_production(
        NO3, NH4, 0.5, 0.0, p
    )
    assert production == nitrate_uptake == ammonia_uptake == 0.0


@pytest.mark.parametrize("NO3, NH4", [(0.01, 0.0), (5.0, 0.1), (0.3, 0.02)])
def test_growth_increases_with_light(p, NO3, NH4):
    growth = [phytoplankton_growth_rate(NO3, NH4, PAR, p) for PAR in np.linspace(0, 300, 61)]
    assert np.all(np.diff(growth) >= 0)
    assert growth[-1] > 0


@pytest.mark.parametrize("NH4, PAR", [(0.0, 50.0), (0.1, 50.0), (0.05, 500.0)])
def test_growth_increases_with_nitrate(p, NH4, PAR):
    growth = [phytoplankton_growth_rate(NO3, NH4, PAR, p) for NO3 in np.linspace(0, 20, 81)]
    assert np.all(np.diff(growth) >= 0)


@pytest.mark.parametrize("NO3, PAR", [(0.0, 50.0), (0.0, 500.0), (5.0, 50.0)])
def test_growth_increases_with_ammonia(p, NO3, PAR):
    growth = [phytoplankton_growth_rate(NO3, NH4, PAR, p) for NH4 in np.linspace(0, 2, 81)]
    assert np.all(np.diff(growth) >= -1e-20)


def test_ammonia_inhibits_nitrate_uptake(p):
    without = nitrate_limitation(5.0, 0.0, p.nitrate_ammonia_inhibition, p.nitrate_half_saturation)
    with_nh4 = nitrate_limitation(5.0, 0.5, p.nitrate_ammonia_inhibition, p.nitrate_half_saturation)
    assert with_nh4 < without


def test_uptake_adds_up_to_production(p):
    production, nitrate_uptake, ammonia_uptake = phytoplankton_production(3.0, 0.2, 0.4, 80.0, p)
    assert production > 0
    assert nitrate_uptake + ammonia_uptake == pytest.approx(production, rel=1e-12)


def test_grazing_saturates(p):
    low, _, _ = zooplankton_grazing(0.1, 0.0, 0.0, 1.0, p)
    high, _, _ = zooplankton_grazing(100.0, 0.0, 0.0, 1.0, p)
    # Holling type II: linear at low food, approaching g Z at high food
    assert high < p.maximum_grazing_rate
    assert high == pytest.approx(p.maximum_grazing_rate, rel=0.05)
    assert low < high


def test_grazing_splits_by_preference(p):
    on_P, on_D, on_Dc = zooplankton_grazing(1.0, 1.0, 6.56, 0.5, p)
    assert on_P == pytest.approx(on_D)  # preference 0.5
    assert on_Dc == pytest.approx(6.56 * on_D)


def test_scenario_uptake(p, surface_ocean):
    r = rates(surface_ocean, 50.0, p)
    assert r["P"] > 0
    assert r["NO₃"] < 0


@pytest.mark.parametrize(
    "overrides",
    [
        {},
        {"ammonia_fraction_of_detritus": 0.3, "ammonia_fraction_of_excrement": 0.9},
        {"slow_sinking_mortality_fraction": 0.2, "fast_sinking_mortality_fraction": 0.3},
        {"phytoplankton_preference": 0.9, "phytoplankton_exudation_fraction": 0.2},
    ],
)
@pytest.mark.parametrize("PAR", [0.0, 20.0, 250.0])
def test_nitrogen_is_conserved(mixed_layer, overrides, PAR):
    p = LobsterParameters(**overrides).as_namedtuple()
    r = rates(mixed_layer, PAR, p)
    total = sum(r[n] for n in NITROGEN_POOLS)
    scale = max(abs(r[n]) for n in NITROGEN_POOLS)
    assert scale > 0
    assert abs(total) <= 1e-12 * scale


def test_nitrogen_is_conserved_for_random_states(p):
    rng = np.random.default_rng(42)
    for _ in range(50):
        c = dict(zip(KERNEL_ORDER, rng.uniform(0, 5, len(KERNEL_ORDER))))
        r = rates(c, rng.uniform(0, 300), p)
        scale = max(abs(r[n]) for n in NITROGEN_POOLS)
        assert abs(sum(r[n] for n in NITROGEN_POOLS)) <= 1e-12 * scale


@pytest.mark.parametrize("empty", KERNEL_ORDER)
def test_empty_pools_are_not_drained(p, mixed_layer, empty):
    c = dict(mixed_layer)
    c[empty] = 0.0
    assert rates(c, 100.0, p)[empty] >= 0.0


def test_negative_concentrations_are_treated_as_zero(p, mixed_layer):
    c = dict(mixed_layer)
    c["P"] = -0.01
    negative = rates(c, 100.0, p)
    c["P"] = 0.0
    zero = rates(c, 100.0, p)
    for name in KERNEL_ORDER:
        assert np.isfinite(negative[name])
        assert negative[name] == pytest.approx(zero[name], rel=1e-12, abs=1e-30)


def test_carbon_companions_follow_redfield(p):
    # detritus made from phytoplankton only, at Redfield ratio
    c = dict(zip(KERNEL_ORDER, (0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)))
    r = rates(c, 0.0, p)
    assert r["Dᶜ"] == pytest.approx(p.phytoplankton_redfield * r["D"])
    assert r["DDᶜ"] == pytest.approx(p.phytoplankton_redfield * r["DD"])
