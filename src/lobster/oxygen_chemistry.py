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

from numba import njit

from .core import ammonia_regeneration, phytoplankton_production, positive


@njit(fastmath=True)
def oxygen_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    """Dissolved oxygen (OXY, mmol O/m**3).

    Photosynthesis releases oxygen at the respiration O:N ratio, and
    nitrate-fuelled production releases the oxygen bound in nitrate on
    top of that. Respiration consumes oxygen at the respiration ratio
    and nitrification at the nitrification ratio.
    """
    production, nitrate_uptake, _ = phytoplankton_production(NO3, NH4, P, PAR, p)
    regeneration = ammonia_regeneration(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p)
    nitrification = p.nitrification_rate * positive(NH4)

    return p.respiration_oxygen_nitrogen_ratio * (
        production - regeneration
    ) + p.nitrification_oxygen_nitrogen_ratio * (nitrate_uptake - nitrification)


OXYGEN_CHEMISTRY = {
    "OXY": oxygen_rate,
}
