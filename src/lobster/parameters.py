"""lobster: The LOBSTER ocean biogeochemistry model.

Copyright (C), 2024 The lobster developers

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""
from __future__ import annotations

import logging
import typing as tp
from collections import namedtuple

from .lobster_base import InputError, lobsterBase
from .utility_functions import to_si

# name: (default, unit). A unit of None marks a dimensionless number.
PARAMETER_DEFAULTS: dict[str, tuple[float, str | None]] = {
    "phytoplankton_preference": (0.5, None),
    "maximum_grazing_rate": (9.26e-6, "1/s"),
    "grazing_half_saturation": (1.0, "mmol/m**3"),
    "light_half_saturation": (33.0, "W/m**2"),
    "nitrate_ammonia_inhibition": (3.0, "m**3/mmol"),
    "nitrate_half_saturation": (0.7, "mmol/m**3"),
    "ammonia_half_saturation": (0.001, "mmol/m**3"),
    "maximum_phytoplankton_growthrate": (1.21e-5, "1/s"),
    "zooplankton_assimilation_fraction": (0.7, None),
    "zooplankton_mortality": (2.31e-6, "m**3/mmol/s"),
    "zooplankton_excretion_rate": (5.8e-7, "1/s"),
    "phytoplankton_mortality": (5.8e-7, "1/s"),
    "small_detritus_remineralisation_rate": (5.88e-7, "1/s"),
    "large_detritus_remineralisation_rate": (5.88e-7, "1/s"),
    "phytoplankton_exudation_fraction": (0.05, None),
    "nitrification_rate": (5.8e-7, "1/s"),
    "ammonia_fraction_of_exudate": (0.75, None),
    "ammonia_fraction_of_excrement": (0.5, None),
    "ammonia_fraction_of_detritus": (0.0, None),
    "phytoplankton_redfield": (6.56, None),  # mol C/mol N
    "dissolved_organic_redfield": (6.56, None),  # mol C/mol N
    "phytoplankton_chlorophyll_ratio": (1.31, "mg/mmol"),  # mg Chl/mmol N
    "organic_carbon_calcite_ratio": (0.1, None),  # mol CaCO3/mol N
    "respiration_oxygen_nitrogen_ratio": (10.75, None),  # mol O/mol N
    "nitrification_oxygen_nitrogen_ratio": (2.0, None),  # mol O/mol N
    "slow_sinking_mortality_fraction": (0.5, None),
    "fast_sinking_mortality_fraction": (0.5, None),
    "dissolved_organic_breakdown_rate": (3.86e-7, "1/s"),
}

PARAMETER_NAMES: tuple[str, ...] = tuple(PARAMETER_DEFAULTS)

# numba treats this as a record with attribute access
RateConstants = namedtuple("RateConstants", PARAMETER_NAMES)

FRACTIONS = (
    "phytoplankton_preference",
    "zooplankton_assimilation_fraction",
    "phytoplankton_exudation_fraction",
    "ammonia_fraction_of_exudate",
    "ammonia_fraction_of_excrement",
    "ammonia_fraction_of_detritus",
    "slow_sinking_mortality_fraction",
    "fast_sinking_mortality_fraction",
)


class LobsterParameters(lobsterBase):
    """The immutable set of LOBSTER rate constants and ratios.

    Every parameter has a default (Lévy et al. 2005, Resplandy et al.
    2009). Values are given either as plain numbers in SI units, or as
    strings or pint quantities that can be converted to them, e.g.,

    Example::

        LobsterParameters(maximum_phytoplankton_growthrate="1.05 1/day",
                          light_half_saturation=33.0)

    After initialization all values are floats in SI units. Assigning
    to a parameter raises AttributeError. The kernels in core.py read the
    values through the RateConstants namedtuple returned by
    as_namedtuple().
    """

    def __init__(self, **kwargs) -> None:
        from lobster import Q_

        self.defaults: dict[str, list[tp.Any, tuple]] = {
            name: [default, (int, float, str, Q_)]
            for name, (default, _) in PARAMETER_DEFAULTS.items()
        }
        self.lrk: list = []
        self.__initialize_keyword_variables__(kwargs)

        for name, (_, unit) in PARAMETER_DEFAULTS.items():
            value = to_si(getattr(self, name), unit)
            self.__check_range__(name, value)
            setattr(self, name, value)
            self.defaults[name][0] = value

        sinking = self.slow_sinking_mortality_fraction + self.fast_sinking_mortality_fraction
        if sinking > 1:
            raise InputError(
                "slow and fast sinking mortality fractions add up to "
                f"{sinking}, they must not exceed 1"
            )

        self._constants = RateConstants(*(getattr(self, n) for n in PARAMETER_NAMES))
        self._frozen = True
        logging.debug(f"initialized LOBSTER parameters {self._constants}")

    def __setattr__(self, name, value):
        if self.__dict__.get("_frozen", False):
            raise AttributeError(f"LOBSTER parameters are immutable, cannot set '{name}'")
        super().__setattr__(name, value)

    def __check_range__(self, name: str, value: float) -> None:
        if value < 0:
            raise InputError(f"'{name}' must not be negative, got {value}")
        if name in FRACTIONS and value > 1:
            raise InputError(f"'{name}' is a fraction and must not exceed 1, got {value}")

    def as_namedtuple(self) -> RateConstants:
        """Return the parameters as a RateConstants namedtuple."""
        return self._constants

    def as_dict(self) -> dict[str, float]:
        return self._constants._asdict()

    def __getitem__(self, name: str) -> float:
        return getattr(self._constants, name)

    def __iter__(self):
        return iter(PARAMETER_NAMES)

    def __len__(self) -> int:
        return len(PARAMETER_NAMES)
