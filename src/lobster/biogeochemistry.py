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

import typing as tp
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from .lobster_base import GridError, TracerError

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]


class AbstractContinuousFormBiogeochemistry(ABC):
    """The contract between a biogeochemical model and its host.

    A host simulation asks the model which tracers and auxiliary fields
    it needs, how each tracer sinks, and calls
    update_biogeochemical_state() once per time step before it
    evaluates any rate. Rates are obtained by calling the model with
    the tracer name, the position, the time, the tracer values in
    required order, and the auxiliary fields.
    """

    @abstractmethod
    def required_biogeochemical_tracers(self) -> tuple[str, ...]:
        """Names of the tracers the host has to carry."""

    @abstractmethod
    def required_biogeochemical_auxiliary_fields(self) -> tuple[str, ...]:
        """Names of the derived fields the host has to allocate."""

    @abstractmethod
    def biogeochemical_drift_velocity(self, tracer_name: str):
        """Velocity field by which tracer_name drifts, or None."""

    @abstractmethod
    def biogeochemical_advection_scheme(self, tracer_name: str):
        """Advection scheme for the drift of tracer_name, or None."""

    @abstractmethod
    def update_biogeochemical_state(self, state: SimulationState) -> None:
        """Update auxiliary fields before the rates of this step are evaluated."""

    @abstractmethod
    def __call__(self, tracer_name: str, x, y, z, t, *args) -> float:
        """Rate of change of tracer_name at one point."""


@dataclass
class Clock:
    time: float = 0.0
    iteration: int = 0


@dataclass
class SimulationState:
    """The part of a host simulation that a biogeochemical model sees.

    Holds the grid, the clock, and one array per tracer and per
    auxiliary field, all on cell centres.
    """

    grid: tp.Any
    tracers: dict[str, NDArrayFloat] = field(default_factory=dict)
    auxiliary_fields: dict[str, NDArrayFloat] = field(default_factory=dict)
    clock: Clock = field(default_factory=Clock)

    @classmethod
    def for_model(cls, grid, biogeochemistry, time: float = 0.0) -> SimulationState:
        """Allocate zeroed tracer and auxiliary fields for biogeochemistry."""
        return cls(
            grid=grid,
            tracers={
                name: np.zeros(grid.shape)
                for name in biogeochemistry.required_biogeochemical_tracers()
            },
            auxiliary_fields={
                name: np.zeros(grid.shape)
                for name in biogeochemistry.required_biogeochemical_auxiliary_fields()
            },
            clock=Clock(time=time),
        )

    def set(self, **values) -> None:
        """Set tracers from scalars, arrays, or functions f(x, y, z).

        Example::

            state.set(**{"NO₃": 5.0, "P": lambda x, y, z: 0.1 * np.exp(z / 50)})
        """
        x, y, z = np.meshgrid(
            self.grid.xnodes, self.grid.ynodes, self.grid.znodes, indexing="ij"
        )
        for name, value in values.items():
            if name not in self.tracers:
                raise TracerError(f"'{name}' is not a tracer of this simulation")
            if callable(value):
                value = value(x, y, z)
            value = np.asarray(value, dtype=float)
            try:
                self.tracers[name][...] = value
            except ValueError as err:
                raise GridError(
                    f"cannot set {name} of shape {self.grid.shape} from {value.shape}"
                ) from err
