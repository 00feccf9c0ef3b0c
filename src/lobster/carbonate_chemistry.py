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

from .core import (
    ammonia_rate,
    nitrate_rate,
    phytoplankton_production,
    positive,
    zooplankton_grazing,
)

"""
Carbonate chemistry adds dissolved inorganic carbon (DIC, mmol C/m**3)
and alkalinity (ALK, meq/m**3). Both follow the nitrogen cycle: DIC is
taken up by primary production and calcification, and released wherever
organic matter is respired. Calcite is produced in proportion to net
primary production and is assumed to leave the water column, so there is
no dissolution term.
"""


@njit(fastmath=True)
def calcification(NO3, NH4, P, PAR, p) -> float:
    """CaCO3 formation in mmol/m**3/s."""
    production, _, _ = phytoplankton_production(NO3, NH4, P, PAR, p)
    return (
        p.organic_carbon_calcite_ratio
        * (1.0 - p.phytoplankton_exudation_fraction)
        * production
    )


@njit(fastmath=True)
def dissolved_inorganic_carbon_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    production, _, _ = phytoplankton_production(NO3, NH4, P, PAR, p)
    grazing_P, _, grazing_Dc = zooplankton_grazing(P, D, Dc, Z, p)
    excreted = (1.0 - p.zooplankton_assimilation_fraction) * p.ammonia_fraction_of_excrement

    # carbon released alongside the ammonia sources of the nitrogen cycle
    respired_plankton = p.phytoplankton_redfield * (
        p.ammonia_fraction_of_exudate * p.phytoplankton_exudation_fraction * production
        + p.zooplankton_excretion_rate * positive(Z)
        + excreted * grazing_P
    )
    respired_detritus = excreted * grazing_Dc + p.ammonia_fraction_of_detritus * (
        p.small_detritus_remineralisation_rate * positive(Dc)
        + p.large_detritus_remineralisation_rate * positive(DDc)
    )
    respired_dom = (
        p.dissolved_organic_redfield * p.dissolved_organic_breakdown_rate * positive(DOM)
    )

    return (
        respired_plankton
        + respired_detritus
        + respired_dom
        - p.phytoplankton_redfield * production
        - calcification(NO3, NH4, P, PAR, p)
    )


@njit(fastmath=True)
def alkalinity_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p) -> float:
    """Alkalinity follows NH4 - NO3, and loses two equivalents per CaCO3."""
    return (
        ammonia_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p)
        - nitrate_rate(NO3, NH4, P, Z, D, DD, Dc, DDc, DOM, PAR, p)
        - 2.0 * calcification(NO3, NH4, P, PAR, p)
    )


CARBONATE_SYSTEM = {
    "DIC": dissolved_inorganic_carbon_rate,
    "ALK": alkalinity_rate,
}
