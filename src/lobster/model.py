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
import warnings
from collections.abc import Callable, Mapping
from math import cos, pi

import numpy as np
import numpy.typing as npt
from numba import njit

from .advection import AdvectionScheme, CenteredSecondOrder
from .biogeochemistry import AbstractContinuousFormBiogeochemistry
from .core import CARBON_COMPANIONS, NITROGEN_POOLS, phytoplankton_growth_rate, phytoplankton_production
from .light import TwoBandPhotosyntheticallyActiveRadiation
from .lobster_base import InputError, TracerError, lobsterBase
from .options import ChemistryOptions
from .parameters import PARAMETER_DEFAULTS, LobsterParameters
from .sinking import DEFAULT_SINKING_VELOCITIES, setup_velocity_fields

if tp.TYPE_CHECKING:
    from .biogeochemistry import SimulationState
    from .sinking import VelocityField

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]

# the nine tracers every rate kernel reads, in kernel argument order
KERNEL_TRACERS = ("NO₃", "NH₄", "P", "Z", "D", "DD", "Dᶜ", "DDᶜ", "DOM")

hours = 3600.0


def default_surface_PAR(x, y, t):
    """A diurnal cycle peaking at 100 W/m**2, dark for half the day."""
    return 100 * max(0.0, cos(t * pi / (12 * hours)))


@njit
def _evaluate(rate, NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p, out):
    for i in range(out.size):
        out[i] = rate(
            NO3[i], NH4[i], P[i], Z[i], D[i], DD[i], Dc[i], DDc[i], DOM[i], PAR[i], p
        )


class LOBSTER(AbstractContinuousFormBiogeochemistry, lobsterBase):
    """The Lodyc Ocean Biogeochemical Simulation Tools for Ecosystem and
    Resources (LOBSTER) model (Lévy et al. 2005).

    Tracers
    -------
    * Nitrate: NO₃ (mmol N/m³)
    * Ammonia: NH₄ (mmol N/m³)
    * Phytoplankton: P (mmol N/m³)
    * Zooplankton: Z (mmol N/m³)
    * Small (slow sinking) detritus: D (mmol N/m³)
    * Large (fast sinking) detritus: DD (mmol N/m³)
    * Small detritus carbon content: Dᶜ (mmol C/m³)
    * Large detritus carbon content: DDᶜ (mmol C/m³)
    * Dissolved organic matter: DOM (mmol N/m³)

    Optional tracers
    ----------------
    * Dissolved inorganic carbon: DIC (mmol C/m³), with carbonates=True
    * Alkalinity: ALK (meq/m³), with carbonates=True
    * Oxygen: OXY (mmol O/m³), with oxygen=True

    Required forcing
    ----------------
    * Photosynthetically available radiation: PAR (W/m²), computed by
      the light attenuation model from the surface PAR

    Example::

        grid = RectilinearGrid(size=(1, 1, 50), extent=(1, 1, 200))
        bgc = LOBSTER(grid=grid,
                      carbonates=True,
                      maximum_phytoplankton_growthrate="1.05 1/day",
                      sinking_velocities={"D": (0, 0, "-3 m/day"),
                                          "DD": (0, 0, "-200 m/day")},
                      )

    Required keywords:
        grid: the host grid, used to build the sinking velocity fields

    Optional keywords:
        phytoplankton_preference, ..., dissolved_organic_breakdown_rate:
            rate constants and ratios, see lobster.parameters
        light_attenuation_model: defaults to
            TwoBandPhotosyntheticallyActiveRadiation()
        surface_photosynthetically_active_radiation: f(x, y, t) in W/m²
        carbonates, oxygen: add the carbonate and/or oxygen tracers
        sinking_velocities: tracer name -> (u, v, w) or three fields
        open_bottom: taper constant sinking velocities to zero at the floor
        advection_schemes: tracer name -> AdvectionScheme, defaults to
            CenteredSecondOrder() for every sinking tracer
    """

    def __init__(self, **kwargs) -> None:
        parameter_kwargs = {k: kwargs.pop(k) for k in list(kwargs) if k in PARAMETER_DEFAULTS}

        self.defaults: dict[str, list[tp.Any, tuple]] = {
            "grid": ["None", (object,)],
            "light_attenuation_model": ["None", (TwoBandPhotosyntheticallyActiveRadiation,)],
            "surface_photosynthetically_active_radiation": [default_surface_PAR, (Callable,)],
            "carbonates": [False, (bool,)],
            "oxygen": [False, (bool,)],
            "sinking_velocities": [dict(DEFAULT_SINKING_VELOCITIES), (Mapping,)],
            "open_bottom": [True, (bool,)],
            "advection_schemes": ["None", (Mapping,)],
        }
        self.lrk: list = ["grid"]
        self.__initialize_keyword_variables__(kwargs)
        self.kwargs.update(parameter_kwargs)

        self.parameters = LobsterParameters(**parameter_kwargs)
        self.constants = self.parameters.as_namedtuple()

        chlorophyll_ratio = self.parameters.phytoplankton_chlorophyll_ratio
        if isinstance(self.light_attenuation_model, str):
            self.light_attenuation_model = TwoBandPhotosyntheticallyActiveRadiation(
                phytoplankton_chlorophyll_ratio=chlorophyll_ratio
            )
        elif (
            "phytoplankton_chlorophyll_ratio" in parameter_kwargs
            and self.light_attenuation_model.phytoplankton_chlorophyll_ratio
            != chlorophyll_ratio
        ):
            warnings.warn(
                f"phytoplankton_chlorophyll_ratio = {chlorophyll_ratio} differs from "
                f"the {self.light_attenuation_model.phytoplankton_chlorophyll_ratio} "
                "of the light attenuation model, which keeps its own",
                stacklevel=2,
            )

        # resolve the tracer set and its kernels once
        self.options = ChemistryOptions.from_flags(self.carbonates, self.oxygen)
        self.tracers: tuple[str, ...] = self.options.tracers
        self._rates: dict[str, tp.Callable] = self.options.rate_functions()

        unknown = [name for name in self.sinking_velocities if name not in self.tracers]
        if unknown:
            raise InputError(f"sinking velocities given for unknown tracers {unknown}")
        self.sinking_velocities: dict[str, VelocityField] = setup_velocity_fields(
            self.sinking_velocities, self.grid, self.open_bottom
        )
        self.advection_schemes = self.__setup_advection_schemes__()

        logging.info(
            f"LOBSTER with {len(self.tracers)} tracers ({self.options.name}), "
            f"sinking: {list(self.sinking_velocities)}"
        )
        self._frozen = True

    def __setattr__(self, name, value):
        if self.__dict__.get("_frozen", False):
            raise AttributeError(
                f"LOBSTER is immutable after construction, cannot set '{name}'"
            )
        super().__setattr__(name, value)

    def __setup_advection_schemes__(self) -> dict[str, AdvectionScheme]:
        schemes = {} if isinstance(self.advection_schemes, str) else dict(self.advection_schemes)
        for name, scheme in schemes.items():
            if name not in self.sinking_velocities:
                raise InputError(f"advection scheme given for non-sinking tracer {name}")
            if not isinstance(scheme, AdvectionScheme):
                raise InputError(f"{scheme} for {name} is not an AdvectionScheme")
        for name in self.sinking_velocities:
            schemes.setdefault(name, CenteredSecondOrder())
        return schemes

    def _validate_value(self, key, value):
        if key == "grid" and isinstance(value, str):
            raise ValueError("grid must be a grid object")

    # --- the host interface ---

    def required_biogeochemical_tracers(self) -> tuple[str, ...]:
        return self.tracers

    def required_biogeochemical_auxiliary_fields(self) -> tuple[str, ...]:
        return self.light_attenuation_model.required_fields

    def biogeochemical_drift_velocity(self, tracer_name: str) -> VelocityField | None:
        tracer_name = CARBON_COMPANIONS.get(tracer_name, tracer_name)
        return self.sinking_velocities.get(tracer_name)

    def biogeochemical_advection_scheme(self, tracer_name: str) -> AdvectionScheme | None:
        tracer_name = CARBON_COMPANIONS.get(tracer_name, tracer_name)
        if tracer_name in self.sinking_velocities:
            return self.advection_schemes[tracer_name]
        return None

    def update_biogeochemical_state(self, state: SimulationState) -> None:
        self.light_attenuation_model.update_PAR(
            state, self.surface_photosynthetically_active_radiation
        )

    def __call__(self, tracer_name: str, x, y, z, t, *args) -> float:
        """Return the rate of change of tracer_name in mmol/m³/s.

        args are the tracer values in the order of
        required_biogeochemical_tracers(), followed by the auxiliary
        fields in the order of required_biogeochemical_auxiliary_fields().
        """
        rate = self.rate_function(tracer_name)
        n_tracers = len(self.tracers)
        if len(args) != n_tracers + len(self.required_biogeochemical_auxiliary_fields()):
            raise InputError(
                f"expected {n_tracers} tracers and the auxiliary fields "
                f"{self.required_biogeochemical_auxiliary_fields()}, got {len(args)} values"
            )
        PAR = args[n_tracers]
        return rate(*(float(c) for c in args[:9]), float(PAR), self.constants)

    def rate_function(self, tracer_name: str) -> tp.Callable:
        try:
            return self._rates[tracer_name]
        except KeyError as err:
            raise TracerError(
                f"'{tracer_name}' is not a tracer of this model, use one of {self.tracers}"
            ) from err

    # --- vectorised evaluation and diagnostics ---

    def tendencies(
        self, tracers: Mapping[str, tp.Any], PAR, names: tp.Iterable[str] | None = None
    ) -> dict[str, NDArrayFloat]:
        """Evaluate the rates of all (or the named) tracers on arrays.

        Parameters
        ----------
        tracers : Mapping
            tracer name -> concentration, scalar or array. All nine
            nitrogen cycle tracers must be present.
        PAR : float or array
            PAR in W/m², broadcast against the tracers
        names : iterable of str, optional
            tracers to evaluate, defaults to all tracers of the model

        Returns
        -------
        dict
            tracer name -> rate, with the broadcast shape of the input
        """
        missing = [n for n in KERNEL_TRACERS if n not in tracers]
        if missing:
            raise TracerError(f"tendencies need values for {missing}")

        arrays = np.broadcast_arrays(
            *(np.asarray(tracers[n], dtype=float) for n in KERNEL_TRACERS),
            np.asarray(PAR, dtype=float),
        )
        shape = arrays[0].shape
        flat = [np.ascontiguousarray(a).ravel() for a in arrays]

        result: dict[str, NDArrayFloat] = {}
        for name in self.tracers if names is None else names:
            out = np.empty(flat[0].size)
            _evaluate(self.rate_function(name), *flat, self.constants, out)
            result[name] = out.reshape(shape)

        return result

    def phytoplankton_growth_rate(self, NO3: float, NH4: float, PAR: float) -> float:
        """Specific growth rate of phytoplankton in 1/s."""
        return phytoplankton_growth_rate(float(NO3), float(NH4), float(PAR), self.constants)

    def primary_production(self, NO3: float, NH4: float, P: float, PAR: float) -> float:
        """Gross primary production in mmol N/m³/s."""
        production, _, _ = phytoplankton_production(
            float(NO3), float(NH4), float(P), float(PAR), self.constants
        )
        return production

    def chlorophyll(self, P):
        """Chlorophyll in mg/m³ for phytoplankton P in mmol N/m³."""
        return self.light_attenuation_model.chlorophyll(P)

    def conserved_tracers(self) -> tuple[str, ...]:
        """The nitrogen pools, whose sum is conserved by the rates."""
        return NITROGEN_POOLS

    def total_nitrogen(self, tracers: Mapping[str, tp.Any]):
        """Sum of the nitrogen pools in mmol N/m³."""
        return sum(np.asarray(tracers[n], dtype=float) for n in NITROGEN_POOLS)
