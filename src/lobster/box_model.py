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
import time
import typing as tp
from collections.abc import Callable, Mapping
from math import ceil
from time import process_time

import numpy as np
import numpy.typing as npt
import pandas as pd
from scipy.integrate import solve_ivp

from .lobster_base import InputError, SolverError, lobsterBase
from .model import LOBSTER
from .utility_functions import to_si

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]


def box_equations(t, C, rates: tuple, PAR: Callable, p) -> NDArrayFloat:
    """Right hand side for solve_ivp: the rates of all tracers of one cell.

    The first nine entries of C are the nitrogen cycle tracers in kernel
    order, the optional chemistry tracers follow.
    """
    light = float(PAR(t))
    return np.array([rate(*C[:9], light, p) for rate in rates])


class BoxModel(lobsterBase):
    """Integrate LOBSTER in a single, well mixed cell.

    There is no transport and no sinking, so the only thing that changes
    the tracers is the biology. This is useful to spin up initial
    conditions, and to check conservation and positivity of the rates.

    Example::

        box = BoxModel(model=LOBSTER(grid=grid),
                       initial_conditions={"NO₃": 5, "NH₄": 0.1, "P": 0.1, "Z": 0.05},
                       PAR=50,
                       stop="30 days",
                       )
        df = box.run()

    Required keywords:
        model: a LOBSTER instance
        initial_conditions: tracer name -> concentration, missing tracers start at 0

    Optional keywords:
        PAR: constant PAR in W/m² or a function f(t), defaults to 0
        stop: run time, number in s or a quantity string, defaults to "30 days"
        max_timestep: defaults to "1 day"
        method: any solve_ivp method, defaults to "LSODA"
        rtol: defaults to 1e-8
        atol: defaults to 1e-10

    After run(), the results are in self.results as a DataFrame with the
    time in seconds as index and one column per tracer.
    """

    def __init__(self, **kwargs) -> None:
        self.defaults: dict[str, list[tp.Any, tuple]] = {
            "model": ["None", (LOBSTER,)],
            "initial_conditions": [{}, (Mapping,)],
            "PAR": [0.0, (int, float, Callable)],
            "stop": ["30 days", (int, float, str)],
            "max_timestep": ["1 day", (int, float, str)],
            "method": ["LSODA", (str,)],
            "rtol": [1e-8, (float,)],
            "atol": [1e-10, (float,)],
        }
        self.lrk: list = ["model", "initial_conditions"]
        self.__initialize_keyword_variables__(kwargs)

        self.names: tuple[str, ...] = self.model.required_biogeochemical_tracers()
        unknown = [n for n in self.initial_conditions if n not in self.names]
        if unknown:
            raise InputError(f"initial conditions for unknown tracers {unknown}")

        self.stop = to_si(self.stop, "s")
        self.max_timestep = to_si(self.max_timestep, "s")
        if self.stop <= 0 or self.max_timestep <= 0:
            raise InputError("stop and max_timestep must be positive")

        if callable(self.PAR):
            self.PAR_function: Callable = self.PAR
        else:
            PAR = float(self.PAR)
            self.PAR_function = lambda t: PAR

        self.results: pd.DataFrame | None = None

    def initial_state(self) -> NDArrayFloat:
        return np.array([float(self.initial_conditions.get(n, 0.0)) for n in self.names])

    def run(self, t_eval: NDArrayFloat | None = None) -> pd.DataFrame:
        """Integrate from 0 to stop and return the results.

        Raises
        ------
        SolverError
            If solve_ivp does not find a solution
        """
        wall_clock_start = time.time()
        cpu_start = process_time()

        if t_eval is None:
            t_eval = np.linspace(0.0, self.stop, max(2, ceil(self.stop / self.max_timestep) + 1))

        solution = solve_ivp(
            box_equations,
            (0.0, self.stop),
            self.initial_state(),
            args=(
                tuple(self.model.rate_function(n) for n in self.names),
                self.PAR_function,
                self.model.constants,
            ),
            method=self.method,
            rtol=self.rtol,
            atol=self.atol,
            t_eval=t_eval,
            max_step=self.max_timestep,
        )

        if solution.status != 0:
            raise SolverError(
                f"No solution was obtained: {solution.message}\n"
                f"try a smaller max_timestep or a different method"
            )

        self.results = pd.DataFrame(solution.y.T, index=solution.t, columns=list(self.names))
        self.results.index.name = "time [s]"

        logging.info(
            f"box model: nfev={solution.nfev}, "
            f"cpu = {process_time() - cpu_start:.2f} s, "
            f"wall = {time.time() - wall_clock_start:.2f} s"
        )
        return self.results

    def total_nitrogen(self) -> pd.Series:
        """Total nitrogen over time, needs run() first."""
        if self.results is None:
            raise SolverError("run() the box model first")
        return self.results[list(self.model.conserved_tracers())].sum(axis=1)
