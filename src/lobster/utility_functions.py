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

import numpy as np
import numpy.typing as npt

from .lobster_base import InputError

# declare numpy types
NDArrayFloat = npt.NDArray[np.float64]


def check_for_quantity(quantity, unit):
    r"""Check if keyword is quantity or string an convert as necessary.

    - If input is a string, convert string into a quantity
    - If input is a quantity, do nothing
    - if input is a number, convert to default quantity

    Parameters
    ----------
    quantity : str | quantity | float | int
        e.g., "12 m/s", or 12,
    unit : str
        desired unit for keyword, e.g., "m/s"

    Returns
    -------
    Q\_
        Returns a Quantity

    Raises
    ------
    InputError
        if keywword is neither number, str or quantity

    """
    from lobster import Q_

    if isinstance(quantity, str):
        quantity = Q_(quantity)
    elif isinstance(quantity, bool):
        raise InputError(f"{quantity} is not a valid quantity")
    elif isinstance(quantity, float | int | np.floating | np.integer):
        quantity = Q_(float(quantity), unit)
    elif not isinstance(quantity, Q_):
        raise InputError("kw must be string, number or Quantity")

    return quantity


def to_si(value, unit: str | None) -> float:
    """Return the magnitude of value expressed in unit.

    Plain numbers are taken to be in unit already. Strings and
    quantities are converted, so "0.8 1/day" becomes 9.26e-6 for
    unit="1/s". unit=None marks a dimensionless number.
    """
    from pint.errors import PintError

    unit = "dimensionless" if unit is None else unit
    try:
        q = check_for_quantity(value, unit)
        return float(q.to(unit).magnitude)
    except (PintError, SyntaxError, ValueError) as err:
        raise InputError(f"'{value}' cannot be expressed in {unit}") from err
