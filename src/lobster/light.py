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

import numpy as np
import numpy.typing as npt

from .lobster_base import GridError, InputError, lobsterBase

if tp.TYPE_CHECKING:
    from .biogeochemistry import SimulationState

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]


class TwoBandPhotosyntheticallyActiveRadiation(lobsterBase):
    """Light attenuation in a red and a blue band.

    Surface PAR is split equally between the two bands. Each band is
    attenuated by water and by chlorophyll, where the chlorophyll
    attenuation coefficient scales as chi * Chl**e (Morel 1988,
    Lévy et al. 2001). Chlorophyll is derived from phytoplankton
    nitrogen via the chlorophyll ratio and the pigment ratio.

    Example::

        light = TwoBandPhotosyntheticallyActiveRadiation(water_red_attenuation=0.2)

    Optional keywords (attenuation coefficients in 1/m):
        water_red_attenuation: 0.225
        water_blue_attenuation: 0.0232
        chlorophyll_red_attenuation: 0.037
        chlorophyll_blue_attenuation: 0.074
        chlorophyll_red_exponent: 0.629
        chlorophyll_blue_exponent: 0.674
        pigment_ratio: 0.7
        phytoplankton_chlorophyll_ratio: 1.31 mg Chl/mmol N

    The light model owns the auxiliary fields PAR, PAR¹ (red) and
    PAR² (blue). update_PAR() overwrites them in place once per host
    time step.
    """

    required_fields: tuple[str, ...] = ("PAR", "PAR¹", "PAR²")

    def __init__(self, **kwargs) -> None:
        self.defaults: dict[str, list[tp.Any, tuple]] = {
            "water_red_attenuation": [0.225, (int, float)],
            "water_blue_attenuation": [0.0232, (int, float)],
            "chlorophyll_red_attenuation": [0.037, (int, float)],
            "chlorophyll_blue_attenuation": [0.074, (int, float)],
            "chlorophyll_red_exponent": [0.629, (int, float)],
            "chlorophyll_blue_exponent": [0.674, (int, float)],
            "pigment_ratio": [0.7, (int, float)],
            "phytoplankton_chlorophyll_ratio": [1.31, (int, float)],
        }
        self.lrk: list = []
        self.__initialize_keyword_variables__(kwargs)

        # band field name, water attenuation, chlorophyll attenuation, exponent
        self.bands: tuple = (
            (
                "PAR¹",
                self.water_red_attenuation,
                self.chlorophyll_red_attenuation,
                self.chlorophyll_red_exponent,
            ),
            (
                "PAR²",
                self.water_blue_attenuation,
                self.chlorophyll_blue_attenuation,
                self.chlorophyll_blue_exponent,
            ),
        )

    def _validate_value(self, key, value):
        if value < 0:
            raise ValueError(f"must not be negative, got {value}")
        if key == "pigment_ratio" and value == 0:
            raise ValueError("pigment ratio must be positive")

    def allocate_auxiliary_fields(self, grid) -> dict[str, NDArrayFloat]:
        """Return zeroed PAR fields on the cell centres of grid."""
        return {name: np.zeros(grid.shape) for name in self.required_fields}

    def chlorophyll(self, P) -> NDArrayFloat:
        """Chlorophyll in mg/m**3 from phytoplankton nitrogen."""
        return (
            np.maximum(P, 0.0) * self.phytoplankton_chlorophyll_ratio / self.pigment_ratio
        )

    def surface_PAR(self, grid, surface_forcing: tp.Callable, t: float) -> NDArrayFloat:
        """Evaluate surface_forcing(x, y, t) on every column, shape (Nx, Ny)."""
        x, y = np.meshgrid(grid.xnodes, grid.ynodes, indexing="ij")
        PAR0 = np.vectorize(surface_forcing, otypes=[float])(x, y, t)
        return np.maximum(PAR0, 0.0)

    def attenuate(
        self,
        PAR0: NDArrayFloat,
        P: NDArrayFloat,
        znodes: NDArrayFloat,
        surface: float = 0.0,
    ) -> dict[str, NDArrayFloat]:
        """Return the band and total PAR for columns of phytoplankton P.

        Parameters
        ----------
        PAR0 : array of shape (Nx, Ny)
            surface PAR in W/m**2
        P : array of shape (Nx, Ny, Nz)
            phytoplankton in mmol N/m**3, index Nz - 1 at the top
        znodes : array of shape (Nz,)
            height of the cell centres
        surface : float
            height of the sea surface

        The chlorophyll attenuation is integrated from the surface down
        with the trapezoidal rule, taking the top half cell at the top
        cell's value.
        """
        if P.shape[-1] != znodes.shape[0] or P.shape[:2] != PAR0.shape:
            raise GridError(
                f"phytoplankton field {P.shape} does not match the grid "
                f"({PAR0.shape}, {znodes.shape})"
            )

        chl = self.chlorophyll(P)[..., ::-1]  # top first
        z = znodes[::-1]
        fields: dict[str, NDArrayFloat] = {}
        total = np.zeros(P.shape)

        for name, k_water, chi, exponent in self.bands:
            attenuation = chi * chl**exponent
            top = attenuation[..., :1] * (surface - z[0])
            layers = 0.5 * (attenuation[..., 1:] + attenuation[..., :-1]) * (z[:-1] - z[1:])
            integral = np.cumsum(np.concatenate((top, layers), axis=-1), axis=-1)[..., ::-1]
            band = 0.5 * PAR0[..., np.newaxis] * np.exp(k_water * (znodes - surface) - integral)
            fields[name] = band
            total += band

        fields["PAR"] = total
        return fields

    def update_PAR(self, state: SimulationState, surface_forcing: tp.Callable) -> None:
        """Recompute the PAR fields of state in place.

        Parameters
        ----------
        state : SimulationState
            needs grid, clock.time, tracers["P"] and the auxiliary
            fields listed in required_fields
        surface_forcing : callable
            f(x, y, t) returning surface PAR in W/m**2
        """
        missing = [n for n in self.required_fields if n not in state.auxiliary_fields]
        if missing:
            raise InputError(f"state lacks the auxiliary fields {missing}")

        grid = state.grid
        PAR0 = self.surface_PAR(grid, surface_forcing, state.clock.time)
        fields = self.attenuate(
            PAR0, np.asarray(state.tracers["P"], dtype=float), grid.znodes, grid.surface
        )
        for name, values in fields.items():
            state.auxiliary_fields[name][...] = values

        logging.debug(
            f"updated PAR at t = {state.clock.time}, surface max = {PAR0.max():.2f} W/m**2"
        )
