import pytest


@pytest.fixture
def grid():
    from lobster import RectilinearGrid

    return RectilinearGrid(size=(2, 3, 20), extent=(10.0, 10.0, 200.0))


@pytest.fixture
def model(grid):
    from lobster import LOBSTER

    return LOBSTER(grid=grid)


@pytest.fixture
def surface_ocean():
    """Nutrient replete surface water with a small standing stock"""
    return {
        "NO₃": 5.0,
        "NH₄": 0.1,
        "P": 0.1,
        "Z": 0.05,
        "D": 0.0,
        "DD": 0.0,
        "Dᶜ": 0.0,
        "DDᶜ": 0.0,
        "DOM": 0.0,
    }


@pytest.fixture
def mixed_layer():
    """Every pool populated, so that every flux is active"""
    return {
        "NO₃": 2.3,
        "NH₄": 0.4,
        "P": 0.8,
        "Z": 0.6,
        "D": 0.3,
        "DD": 0.2,
        "Dᶜ": 1.9,
        "DDᶜ": 1.4,
        "DOM": 0.7,
        "DIC": 2100.0,
        "ALK": 2300.0,
        "OXY": 240.0,
    }
